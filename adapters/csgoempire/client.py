"""
CSGOEmpire 클라이언트 (REST + Socket.IO 조합)

REST 클라이언트는 항상 생성, 실시간 세션은 websocket_enabled일 때만 생성.
"""

from pathlib import Path
from typing import Any

from adapters.csgoempire.errors import SocketUnavailableError
from adapters.csgoempire.rest_client import EmpireRestClient
from adapters.csgoempire.ws_client import EmpireWsClient, SocketView, StateChangeCallback
from core.config.loader import EmpireConfig, get_empire_config, load_secrets
from core.constants import Defaults, EmpireEndpoints


class CSGOEmpire:
    """CSGOEmpire API 클라이언트

    REST 엔드포인트는 api 속성으로, 실시간 이벤트 구독은 socket 속성으로 사용.

    Args:
        api_key: API 키 (None이면 인증 없이 요청)
        websocket_enabled: 실시간 세션 사용 여부
        verify_ssl: Socket.IO TLS 인증서 검증 여부
        on_state_change: 세션 상태 변경 콜백
        ws_namespace: Socket.IO namespace
        ws_path: Socket.IO 경로

    사용 예시:
    ```python
    async with CSGOEmpire(api_key="xxx") as empire:
        empire.socket.on("new_item", handle_new_item)
        auctions = await empire.api.get_active_auctions()
        await empire.wait()
    ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        websocket_enabled: bool = Defaults.WEBSOCKET_ENABLED,
        verify_ssl: bool = Defaults.VERIFY_SSL,
        on_state_change: StateChangeCallback | None = None,
        rest_url: str = EmpireEndpoints.REST_URL,
        ws_url: str = EmpireEndpoints.WS_URL,
        ws_namespace: str = EmpireEndpoints.WS_NAMESPACE,
        ws_path: str = EmpireEndpoints.WS_PATH,
    ):
        self.api = EmpireRestClient(api_key=api_key, base_url=rest_url)
        self.realtime: EmpireWsClient | None = None

        if websocket_enabled:
            self.realtime = EmpireWsClient(
                rest_client=self.api,
                ws_url=ws_url,
                namespace=ws_namespace,
                path=ws_path,
                verify_ssl=verify_ssl,
                on_state_change=on_state_change,
            )

    @classmethod
    def from_config(cls, config: EmpireConfig) -> "CSGOEmpire":
        """EmpireConfig에서 생성"""
        return cls(
            api_key=config.api_key,
            websocket_enabled=config.websocket_enabled,
            verify_ssl=config.verify_ssl,
            rest_url=config.rest_url,
            ws_url=config.ws_url,
            ws_namespace=config.ws_namespace,
            ws_path=config.ws_path,
        )

    @classmethod
    def from_secrets(cls, path: Path | None = None) -> "CSGOEmpire":
        """secrets.yaml에서 생성

        Args:
            path: secrets.yaml 경로 (None이면 기본 경로)
        """
        return cls.from_config(get_empire_config(load_secrets(path)))

    @property
    def socket(self) -> SocketView:
        """구독 전용 소켓 뷰

        Raises:
            SocketUnavailableError: 실시간 세션 비활성화 또는 start() 호출 전
        """
        if self.realtime is None:
            raise SocketUnavailableError()
        return self.realtime.socket

    async def start(self) -> None:
        """실시간 세션 연결 시작 (비활성화 상태면 아무것도 하지 않음)"""
        if self.realtime is not None:
            await self.realtime.start()

    async def wait(self) -> None:
        """실시간 세션이 종료될 때까지 대기"""
        if self.realtime is None:
            raise SocketUnavailableError()
        await self.realtime.wait()

    async def close(self) -> None:
        """실시간 세션 및 HTTP 클라이언트 종료"""
        try:
            if self.realtime is not None:
                await self.realtime.stop()
        finally:
            await self.api.close()

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "CSGOEmpire":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
