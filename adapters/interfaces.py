"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Any, Callable, Protocol, runtime_checkable

from core.types import SessionState


@runtime_checkable
class IEmpireRestClient(Protocol):
    """CSGOEmpire REST API 클라이언트 인터페이스

    모든 메서드는 서버 JSON을 해석 없이 반환.
    2xx 이외 응답은 EmpireApiError로 전파.
    """

    # -------------------------------------------------------------------------
    # 세션 메타데이터
    # -------------------------------------------------------------------------

    async def get_metadata(self) -> Any:
        """소켓 인증용 메타데이터 조회

        Returns:
            {"user": {...}, "socket_token": str, "socket_signature": str}
        """
        ...

    # -------------------------------------------------------------------------
    # 계정
    # -------------------------------------------------------------------------

    async def get_active_trades(self) -> Any:
        """현재 입금/출금 중인 아이템 목록"""
        ...

    async def get_active_auctions(self) -> Any:
        """현재 입찰 중인 경매 목록"""
        ...

    async def update_settings(self, data: Any) -> Any:
        """tradelink / Steam API 키 변경"""
        ...

    async def get_csgo_inventory(self, invalid: bool = False) -> Any:
        """Steam 인벤토리 조회

        Args:
            invalid: 거래 불가 아이템 포함 여부
        """
        ...

    async def get_unique_info(self) -> Any:
        """인벤토리 아이템 검사 정보"""
        ...

    # -------------------------------------------------------------------------
    # Deposit / Withdraw
    # -------------------------------------------------------------------------

    async def create_deposit(self, data: Any) -> Any:
        """아이템 입금 생성 (coin_value는 coin cents)"""
        ...

    async def cancel_deposit(self, deposit_id: int) -> Any:
        """입금 취소"""
        ...

    async def sell_now(self, deposit_id: int) -> Any:
        """최고 입찰자에게 즉시 판매"""
        ...

    async def get_listed_items(
        self,
        page: int,
        per_page: int,
        options: Any = None,
    ) -> Any:
        """출금 페이지 아이템 목록

        Args:
            page: 페이지 번호
            per_page: 페이지당 개수
            options: 필터 (검증 없이 쿼리 스트링에 추가)
        """
        ...

    async def get_depositor_stats(self, deposit_id: int) -> Any:
        """입금자 통계"""
        ...

    async def create_withdrawal(self, deposit_id: int) -> Any:
        """만료된 경매 아이템 출금"""
        ...

    async def place_bid(self, deposit_id: int, bid_value: int | None = None) -> Any:
        """경매 입찰"""
        ...

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        ...


@runtime_checkable
class ISocketView(Protocol):
    """구독 전용 소켓 인터페이스 (emit 없음)"""

    def on(self, event: str, handler: Callable[..., Any]) -> Callable[..., Any]:
        """이벤트 핸들러 등록"""
        ...

    @property
    def connected(self) -> bool:
        """전송 계층 연결 여부"""
        ...


@runtime_checkable
class IEmpireWsClient(Protocol):
    """실시간 세션 매니저 인터페이스"""

    @property
    def state(self) -> SessionState:
        """현재 세션 상태"""
        ...

    @property
    def socket(self) -> ISocketView:
        """구독 전용 소켓 뷰

        Raises:
            SocketUnavailableError: 소켓 생성 전
        """
        ...

    async def start(self) -> None:
        """연결 시작"""
        ...

    async def stop(self) -> None:
        """연결 종료"""
        ...
