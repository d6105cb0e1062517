"""
CSGOEmpire 에러 정의

HTTP 상태 코드는 해석하지 않고 그대로 전달.
전송 계층 에러(httpx, socketio)는 감싸지 않고 그대로 전파.
"""

from typing import Any


class EmpireError(Exception):
    """CSGOEmpire 클라이언트 에러 기본 클래스"""
    pass


class EmpireApiError(EmpireError):
    """CSGOEmpire API 에러

    2xx 이외의 응답을 받았을 때 발생.
    """

    def __init__(self, status_code: int, message: str, body: Any = None):
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"CSGOEmpire API Error [{status_code}]: {message}")


class ResponseDecodeError(EmpireApiError):
    """응답 본문이 JSON이 아닐 때 발생"""
    pass


class SocketUnavailableError(EmpireError):
    """소켓 생성 전에 소켓 뷰에 접근했을 때 발생"""

    def __init__(self, message: str = "Socket is not available"):
        super().__init__(message)


class InvalidEventPayload(EmpireError):
    """수신 이벤트 payload 형식 오류"""

    def __init__(self, event: str, payload: Any):
        self.event = event
        self.payload = payload
        super().__init__(f"Invalid '{event}' payload: {payload!r}")
