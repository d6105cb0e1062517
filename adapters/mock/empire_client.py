"""
Mock CSGOEmpire 클라이언트

테스트용 Mock REST 클라이언트와 Mock Socket.IO 소켓.
MockEmpireRestClient는 IEmpireRestClient Protocol 준수.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable

from adapters.csgoempire.errors import EmpireApiError


@dataclass
class MockEmpireState:
    """Mock 상태 (메모리 내 저장)"""

    # metadata 응답
    user: dict[str, Any] = field(
        default_factory=lambda: {"id": 303119, "steam_name": "mock_user"}
    )
    socket_token: str = "mock_socket_token"
    socket_signature: str = "mock_socket_signature"

    # 엔드포인트별 응답 (메서드 이름 -> 응답)
    responses: dict[str, Any] = field(default_factory=dict)

    # 호출 기록 (메서드 이름, 인자)
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    # 시뮬레이션 옵션
    fail_next_metadata: bool = False
    # set되기 전까지 get_metadata 응답 보류 (None이면 즉시 응답)
    metadata_gate: asyncio.Event | None = None

    # metadata 응답 카운터 (매 응답마다 토큰이 달라짐)
    metadata_counter: int = 0


class MockEmpireRestClient:
    """Mock REST 클라이언트

    IEmpireRestClient Protocol 구현.
    모든 호출을 state.calls에 기록.

    사용 예시:
    ```python
    client = MockEmpireRestClient()
    client.set_response("get_active_trades", {"data": []})
    trades = await client.get_active_trades()
    ```
    """

    def __init__(self, state: MockEmpireState | None = None):
        self.state = state or MockEmpireState()
        self.closed = False

    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------

    def set_response(self, method: str, response: Any) -> None:
        """엔드포인트 응답 설정"""
        self.state.responses[method] = response

    def set_fail_next_metadata(self) -> None:
        """다음 metadata 조회 실패 설정"""
        self.state.fail_next_metadata = True

    def hold_metadata(self) -> asyncio.Event:
        """metadata 응답 보류 (반환된 Event를 set하면 응답)"""
        self.state.metadata_gate = asyncio.Event()
        return self.state.metadata_gate

    def call_count(self, method: str) -> int:
        """메서드 호출 횟수"""
        return sum(1 for name, _ in self.state.calls if name == method)

    def _record(self, method: str, *args: Any) -> Any:
        self.state.calls.append((method, args))
        return self.state.responses.get(method, {"success": True})

    # -------------------------------------------------------------------------
    # 세션 메타데이터
    # -------------------------------------------------------------------------

    async def get_metadata(self) -> dict[str, Any]:
        """metadata 조회 (호출마다 새 토큰 발급)"""
        self.state.calls.append(("get_metadata", ()))

        if self.state.metadata_gate is not None:
            await self.state.metadata_gate.wait()

        if self.state.fail_next_metadata:
            self.state.fail_next_metadata = False
            raise EmpireApiError(status_code=401, message="Unauthenticated")

        self.state.metadata_counter += 1
        n = self.state.metadata_counter
        return {
            "user": self.state.user,
            "socket_token": f"{self.state.socket_token}_{n}",
            "socket_signature": f"{self.state.socket_signature}_{n}",
        }

    # -------------------------------------------------------------------------
    # 엔드포인트
    # -------------------------------------------------------------------------

    async def get_active_trades(self) -> Any:
        return self._record("get_active_trades")

    async def get_active_auctions(self) -> Any:
        return self._record("get_active_auctions")

    async def update_settings(self, data: Any) -> Any:
        return self._record("update_settings", data)

    async def get_csgo_inventory(self, invalid: bool = False) -> Any:
        return self._record("get_csgo_inventory", invalid)

    async def get_unique_info(self) -> Any:
        return self._record("get_unique_info")

    async def create_deposit(self, data: Any) -> Any:
        return self._record("create_deposit", data)

    async def cancel_deposit(self, deposit_id: int) -> Any:
        return self._record("cancel_deposit", deposit_id)

    async def sell_now(self, deposit_id: int) -> Any:
        return self._record("sell_now", deposit_id)

    async def get_listed_items(
        self,
        page: int,
        per_page: int,
        options: Any = None,
    ) -> Any:
        return self._record("get_listed_items", page, per_page, options)

    async def get_depositor_stats(self, deposit_id: int) -> Any:
        return self._record("get_depositor_stats", deposit_id)

    async def create_withdrawal(self, deposit_id: int) -> Any:
        return self._record("create_withdrawal", deposit_id)

    async def place_bid(self, deposit_id: int, bid_value: int | None = None) -> Any:
        return self._record("place_bid", deposit_id, bid_value)

    async def close(self) -> None:
        self.closed = True


class MockSocketIOClient:
    """Mock Socket.IO AsyncClient

    socketio.AsyncClient의 on/connect/emit/disconnect/wait만 흉내냄.
    서버 이벤트는 trigger()로 주입.
    """

    def __init__(self) -> None:
        # (namespace, event) -> handler
        self.handlers: dict[tuple[str, str], Callable[..., Any]] = {}
        self.emitted: list[tuple[str, Any, str | None]] = []
        self.connect_kwargs: dict[str, Any] | None = None
        self.connected = False
        self.fail_connect: Exception | None = None

    def on(
        self,
        event: str,
        handler: Callable[..., Any] | None = None,
        namespace: str | None = None,
    ) -> Any:
        # socketio와 동일하게 이벤트당 핸들러 1개 (덮어씀)
        self.handlers[(namespace or "/", event)] = handler  # type: ignore[assignment]

    async def connect(self, url: str, **kwargs: Any) -> None:
        if self.fail_connect is not None:
            raise self.fail_connect
        self.connect_kwargs = {"url": url, **kwargs}
        self.connected = True

    async def emit(self, event: str, data: Any = None, namespace: str | None = None) -> None:
        self.emitted.append((event, data, namespace))

    async def disconnect(self) -> None:
        self.connected = False

    async def wait(self) -> None:
        return None

    async def trigger(self, event: str, *args: Any, namespace: str = "/trade") -> None:
        """서버 이벤트 주입 (등록된 핸들러 호출)"""
        handler = self.handlers.get((namespace, event))
        if handler is None:
            return
        result = handler(*args)
        if asyncio.iscoroutine(result):
            await result

    def emitted_events(self, event: str) -> list[Any]:
        """특정 이벤트로 emit된 payload 목록"""
        return [data for name, data, _ in self.emitted if name == event]
