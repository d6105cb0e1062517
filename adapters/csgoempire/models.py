"""
CSGOEmpire API 요청/응답 모델

REST 응답은 서버 JSON 구조 그대로 반환하므로 TypedDict로 타입만 부여.
Socket 이벤트 payload는 경계에서 검증 후 데이터클래스로 변환.
금액(coin_value, bid_value)은 모두 coin cents 정수 (100.01 코인 → 10001).
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, TypedDict, Union

from adapters.csgoempire.errors import InvalidEventPayload


# -------------------------------------------------------------------------
# 요청 본문
# -------------------------------------------------------------------------

class UpdateSettingsData(TypedDict, total=False):
    """POST /trading/user/settings 요청 본문"""

    trade_url: str
    steam_api_key: str


class DepositItem(TypedDict, total=False):
    """Deposit 대상 아이템"""

    id: int
    coin_value: int  # coin cents
    custom_price_percentage: float


class CreateDepositData(TypedDict):
    """POST /trading/deposit 요청 본문"""

    items: list[DepositItem]


# 목록 조회 필터 (검증 없이 그대로 쿼리 스트링에 추가)
FilterValue = Union[str, int, float, bool]
ListedItemsFilter = Mapping[str, FilterValue]


# -------------------------------------------------------------------------
# 응답
# -------------------------------------------------------------------------

class UserModel(TypedDict, total=False):
    """사용자 객체 (id 외 필드는 해석하지 않고 그대로 전달)"""

    id: int
    steam_name: str
    balance: int


class MetadataResponse(TypedDict):
    """GET /metadata/socket 응답

    identify 핸드셰이크에 필요한 사용자 정보와 소켓 자격 증명.
    """

    user: UserModel
    socket_token: str
    socket_signature: str


class IdentifyPayload(TypedDict):
    """identify 이벤트 payload (outbound)"""

    uid: int
    model: UserModel
    authorizationToken: str
    signature: str


# 나머지 엔드포인트 응답은 서버 JSON 그대로
ActiveTradesResponse = dict[str, Any]
ActiveAuctionsResponse = dict[str, Any]
UpdateSettingsResponse = dict[str, Any]
CSGOInventoryResponse = dict[str, Any]
UniqueInfoResponse = dict[str, Any]
CreateDepositResponse = dict[str, Any]
CancelDepositResponse = dict[str, Any]
SellNowResponse = dict[str, Any]
ListedItemsResponse = dict[str, Any]
DepositorStatsResponse = dict[str, Any]
CreateWithdrawalResponse = dict[str, Any]
PlaceBidResponse = dict[str, Any]


@dataclass(frozen=True)
class InitEvent:
    """init 이벤트 (inbound)

    서버가 identify 결과를 알려주는 이벤트.

    Attributes:
        authenticated: 인증 성공 여부
        name: 인증된 사용자 이름 (인증 실패 시 없음)
    """

    authenticated: bool
    name: str | None = None

    @classmethod
    def from_payload(cls, data: Any) -> "InitEvent":
        """이벤트 payload에서 생성

        Raises:
            InvalidEventPayload: 매핑이 아니거나 authenticated가 bool이 아닌 경우
        """
        if not isinstance(data, Mapping):
            raise InvalidEventPayload("init", data)

        authenticated = data.get("authenticated")
        if not isinstance(authenticated, bool):
            raise InvalidEventPayload("init", data)

        name = data.get("name")
        return cls(
            authenticated=authenticated,
            name=str(name) if name is not None else None,
        )


def build_identify_payload(metadata: MetadataResponse) -> IdentifyPayload:
    """metadata 응답 -> identify payload

    GET /metadata/socket 응답 예시:
    {
        "user": {"id": 303119, "steam_name": "...", ...},
        "socket_token": "eyJ0eXAi...",
        "socket_signature": "2f6a7c..."
    }
    """
    user = metadata["user"]
    return IdentifyPayload(
        uid=user["id"],
        model=user,
        authorizationToken=metadata["socket_token"],
        signature=metadata["socket_signature"],
    )


def coins_to_cents(coins: Decimal | str | int) -> int:
    """코인 금액 -> coin cents 변환

    float 오차를 피하기 위해 Decimal/문자열 입력 권장.
    예: Decimal("100.01") -> 10001
    """
    cents = (Decimal(str(coins)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


def encode_query_value(value: FilterValue) -> str:
    """쿼리 스트링 값 인코딩 (bool은 true/false 소문자)"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
