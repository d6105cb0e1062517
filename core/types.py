"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class SessionState(str, Enum):
    """실시간 세션 상태

    DISCONNECTED → (start) → CONNECTING → (connect) → AUTHENTICATING → (identify 전송) → IDENTIFIED
    """

    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    AUTHENTICATING = "AUTHENTICATING"
    IDENTIFIED = "IDENTIFIED"


class HttpMethod(str, Enum):
    """HTTP 메서드"""

    GET = "GET"
    POST = "POST"
