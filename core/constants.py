"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class EmpireEndpoints:
    """CSGOEmpire 엔드포인트 (고정값)

    공식 문서: https://docs.csgoempire.com/reference
    """

    REST_URL: str = "https://csgoempire.com/api/v2"

    # Socket.IO (namespace /trade, path /s/)
    WS_URL: str = "wss://trade.csgoempire.com"
    WS_NAMESPACE: str = "/trade"
    WS_PATH: str = "/s/"
    WS_USER_AGENT: str = "API Bot"


class SocketEvents:
    """Socket.IO 이벤트 이름"""

    CONNECT: str = "connect"
    DISCONNECT: str = "disconnect"
    IDENTIFY: str = "identify"  # outbound
    INIT: str = "init"  # inbound


class Defaults:
    """기본값 상수"""

    HTTP_TIMEOUT_SEC: float = 30.0
    WEBSOCKET_ENABLED: bool = True
    # 원본 클라이언트와 동일하게 인증서 검증 비활성화
    VERIFY_SSL: bool = False
    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"
