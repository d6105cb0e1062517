"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

import json
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest

from adapters.csgoempire.ws_client import EmpireWsClient
from adapters.mock.empire_client import MockEmpireRestClient, MockSocketIOClient


# -------------------------------------------------------------------------
# 공통 데이터 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def sample_user() -> dict[str, Any]:
    """샘플 사용자 객체"""
    return {
        "id": 303119,
        "steam_id": "76561198106192114",
        "steam_name": "Artemis",
        "balance": 10001,
    }


@pytest.fixture
def metadata_response(sample_user: dict[str, Any]) -> dict[str, Any]:
    """GET /metadata/socket 응답"""
    return {
        "user": sample_user,
        "socket_token": "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1NiJ9.token",
        "socket_signature": "2f6a7c9d1e",
    }


# -------------------------------------------------------------------------
# HTTP 응답 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """httpx.Response 모킹 (본문은 JSON 문자열)"""

    def _make(status_code: int = 200, body: Any = None, text: str | None = None) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        if text is None:
            text = json.dumps(body) if body is not None else ""
        response.text = text
        response.headers = {}
        return response

    return _make


# -------------------------------------------------------------------------
# Mock 클라이언트 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def mock_rest_client() -> MockEmpireRestClient:
    """Mock REST 클라이언트"""
    return MockEmpireRestClient()


@pytest.fixture
def mock_sio() -> MockSocketIOClient:
    """Mock Socket.IO 클라이언트"""
    return MockSocketIOClient()


@pytest.fixture
def ws_client(
    mock_rest_client: MockEmpireRestClient,
    mock_sio: MockSocketIOClient,
) -> EmpireWsClient:
    """Mock 소켓을 사용하는 실시간 세션 매니저"""
    return EmpireWsClient(
        rest_client=mock_rest_client,
        socket_factory=lambda: mock_sio,
    )
