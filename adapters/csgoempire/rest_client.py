"""
CSGOEmpire REST API 클라이언트

Bearer 토큰 인증, 응답 본문 JSON 변환.
IEmpireRestClient Protocol 준수.

재시도/캐싱/검증 없음: 요청 → 응답 JSON 반환이 전부.
"""

import json
import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from adapters.csgoempire.errors import EmpireApiError, ResponseDecodeError
from adapters.csgoempire.models import (
    ActiveAuctionsResponse,
    ActiveTradesResponse,
    CancelDepositResponse,
    CreateDepositData,
    CreateDepositResponse,
    CreateWithdrawalResponse,
    CSGOInventoryResponse,
    DepositorStatsResponse,
    ListedItemsFilter,
    ListedItemsResponse,
    MetadataResponse,
    PlaceBidResponse,
    SellNowResponse,
    UniqueInfoResponse,
    UpdateSettingsData,
    UpdateSettingsResponse,
    encode_query_value,
)
from core.constants import Defaults, EmpireEndpoints
from core.types import HttpMethod

logger = logging.getLogger(__name__)


def decode_body(response: httpx.Response) -> Any:
    """응답 본문 -> JSON 객체

    Content-Type과 무관하게 텍스트 본문을 JSON으로 파싱.
    빈 본문은 None.

    Raises:
        ResponseDecodeError: JSON이 아닌 본문
    """
    text = response.text
    if not text or not text.strip():
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseDecodeError(
            status_code=response.status_code,
            message=f"Invalid JSON body: {e.msg}",
            body=text[:200],
        ) from e


class EmpireRestClient:
    """CSGOEmpire REST API 클라이언트

    IEmpireRestClient Protocol 구현.
    모든 엔드포인트는 서버 JSON을 해석 없이 그대로 반환.

    Args:
        api_key: API 키 (None이면 빈 Authorization 헤더로 요청)
        base_url: REST API 베이스 URL
        timeout: 요청 타임아웃 (초)
        transport: httpx 전송 계층 (테스트용 주입)

    사용 예시:
    ```python
    async with EmpireRestClient(api_key="xxx") as client:
        trades = await client.get_active_trades()
    ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = EmpireEndpoints.REST_URL,
        timeout: float = Defaults.HTTP_TIMEOUT_SEC,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        """공통 요청 헤더"""
        return {
            "Authorization": f"Bearer {self.api_key}" if self.api_key else "",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)

        쿠키는 AsyncClient 쿠키 저장소에 유지됨.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _request(
        self,
        method: HttpMethod,
        path: str,
        body: Any = None,
    ) -> Any:
        """API 요청 실행

        모든 엔드포인트가 이 경로를 거치므로 응답 JSON 변환이 일괄 적용됨.

        Args:
            method: HTTP 메서드
            path: API 경로 (쿼리 스트링 포함 가능, 예: /trading/items?page=1)
            body: JSON 요청 본문 (None이면 본문 없음)

        Returns:
            JSON 응답

        Raises:
            EmpireApiError: 2xx 이외의 응답
            ResponseDecodeError: JSON이 아닌 응답 본문
            httpx.RequestError: 전송 계층 에러 (그대로 전파)
        """
        url = f"{self.base_url}{path}"
        client = await self._get_client()

        kwargs: dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = body

        try:
            response = await client.request(method.value, url, **kwargs)
        except httpx.RequestError as e:
            logger.error(
                "Request error",
                extra={"method": method.value, "path": path, "error": str(e)},
            )
            raise

        if not 200 <= response.status_code < 300:
            try:
                error_body = decode_body(response)
            except ResponseDecodeError:
                error_body = response.text

            if isinstance(error_body, dict) and error_body.get("message"):
                message = str(error_body["message"])
            else:
                message = response.text or f"HTTP {response.status_code}"

            logger.warning(
                "API 에러 응답",
                extra={
                    "method": method.value,
                    "path": path,
                    "status_code": response.status_code,
                },
            )
            raise EmpireApiError(
                status_code=response.status_code,
                message=message,
                body=error_body,
            )

        return decode_body(response)

    # -------------------------------------------------------------------------
    # 세션 메타데이터
    # -------------------------------------------------------------------------

    async def get_metadata(self) -> MetadataResponse:
        """소켓 인증용 메타데이터 조회

        Returns:
            user 객체 (identify에 사용)와 socket_token(authorizationToken),
            socket_signature(signature)
        """
        return await self._request(HttpMethod.GET, "/metadata/socket")

    # -------------------------------------------------------------------------
    # 계정
    # -------------------------------------------------------------------------

    async def get_active_trades(self) -> ActiveTradesResponse:
        """현재 입금/출금 중인 아이템 목록

        경매가 끝나기 전까지 입찰 중인 아이템은 포함되지 않음.
        """
        return await self._request(HttpMethod.GET, "/trading/user/trades")

    async def get_active_auctions(self) -> ActiveAuctionsResponse:
        """현재 입찰 중인 경매 목록"""
        return await self._request(HttpMethod.GET, "/trading/user/auctions")

    async def update_settings(self, data: UpdateSettingsData) -> UpdateSettingsResponse:
        """tradelink / Steam API 키 변경"""
        return await self._request(
            HttpMethod.POST, "/trading/user/settings", body=data
        )

    async def get_csgo_inventory(self, invalid: bool = False) -> CSGOInventoryResponse:
        """Steam 인벤토리 조회 (서버에서 1시간 캐시)

        Args:
            invalid: 거래 불가 아이템 포함 여부 (yes/no로 전송)
        """
        query = urlencode({"invalid": "yes" if invalid else "no"})
        return await self._request(
            HttpMethod.GET, f"/trading/user/inventory?{query}"
        )

    async def get_unique_info(self) -> UniqueInfoResponse:
        """인벤토리 아이템의 검사 정보 (float, sticker 등)"""
        return await self._request(
            HttpMethod.GET, "/trading/user/inventory/unique-info"
        )

    # -------------------------------------------------------------------------
    # Deposit
    # -------------------------------------------------------------------------

    async def create_deposit(self, data: CreateDepositData) -> CreateDepositResponse:
        """아이템 입금 생성

        주의: coin_value는 coin cents (100.01 코인 → 10001)
        """
        return await self._request(HttpMethod.POST, "/trading/deposit", body=data)

    async def cancel_deposit(self, deposit_id: int) -> CancelDepositResponse:
        """입찰이 없는 처리 중 입금 취소

        입찰이 들어온 뒤에는 서버에서 거부됨.
        """
        return await self._request(
            HttpMethod.POST, f"/trading/deposit/{deposit_id}/cancel"
        )

    async def sell_now(self, deposit_id: int) -> SellNowResponse:
        """진행 중인 경매를 현재 최고 입찰자에게 즉시 판매"""
        return await self._request(
            HttpMethod.POST, f"/trading/deposit/{deposit_id}/sell"
        )

    async def get_depositor_stats(self, deposit_id: int) -> DepositorStatsResponse:
        """입금자 통계 조회"""
        return await self._request(
            HttpMethod.GET, f"/trading/deposit/{deposit_id}/stats"
        )

    # -------------------------------------------------------------------------
    # Withdraw
    # -------------------------------------------------------------------------

    async def get_listed_items(
        self,
        page: int,
        per_page: int,
        options: ListedItemsFilter | None = None,
    ) -> ListedItemsResponse:
        """출금 페이지 아이템 목록 조회

        Args:
            page: 페이지 번호
            per_page: 페이지당 아이템 수
            options: 필터 (키 검증 없이 순서대로 쿼리 스트링에 추가)
        """
        params: list[tuple[str, str]] = [
            ("page", str(page)),
            ("per_page", str(per_page)),
        ]
        if options:
            params.extend(
                (key, encode_query_value(value)) for key, value in options.items()
            )

        return await self._request(
            HttpMethod.GET, f"/trading/items?{urlencode(params)}"
        )

    async def create_withdrawal(self, deposit_id: int) -> CreateWithdrawalResponse:
        """낙찰자 없이 만료된 경매 아이템 즉시 출금"""
        return await self._request(
            HttpMethod.POST, f"/trading/deposit/{deposit_id}/withdraw"
        )

    async def place_bid(
        self,
        deposit_id: int,
        bid_value: int | None = None,
    ) -> PlaceBidResponse:
        """경매 입찰

        Args:
            deposit_id: 입금 아이템 ID
            bid_value: 입찰 금액 (coin cents, None이면 본문 없이 요청)
        """
        body = {"bid_value": bid_value} if bid_value is not None else None
        return await self._request(
            HttpMethod.POST, f"/trading/deposit/{deposit_id}/bid", body=body
        )

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "EmpireRestClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
