"""
CSGOEmpire 어댑터

CSGOEmpire 트레이딩 API 연동을 담당.
REST API와 Socket.IO 실시간 피드(identify 핸드셰이크) 지원.
"""

from adapters.csgoempire.client import CSGOEmpire
from adapters.csgoempire.rest_client import EmpireRestClient
from adapters.csgoempire.ws_client import EmpireWsClient, SocketView
from adapters.csgoempire.errors import (
    EmpireError,
    EmpireApiError,
    ResponseDecodeError,
    SocketUnavailableError,
    InvalidEventPayload,
)
from adapters.csgoempire.models import (
    InitEvent,
    build_identify_payload,
    coins_to_cents,
)

__all__ = [
    "CSGOEmpire",
    "EmpireRestClient",
    "EmpireWsClient",
    "SocketView",
    "EmpireError",
    "EmpireApiError",
    "ResponseDecodeError",
    "SocketUnavailableError",
    "InvalidEventPayload",
    "InitEvent",
    "build_identify_payload",
    "coins_to_cents",
]
