"""
설정 로더

secrets.yaml 로드 및 CSGOEmpire 연결 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, EmpireEndpoints, Paths


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지.
    api_key가 None이면 인증 없이 요청.
    """

    api_key: str | None
    websocket_enabled: bool = Defaults.WEBSOCKET_ENABLED
    verify_ssl: bool = Defaults.VERIFY_SSL


@dataclass(frozen=True)
class EmpireConfig:
    """CSGOEmpire 연결 설정

    API 키와 엔드포인트 정보를 포함
    """

    rest_url: str
    ws_url: str
    ws_namespace: str
    ws_path: str
    api_key: str | None
    websocket_enabled: bool = Defaults.WEBSOCKET_ENABLED
    verify_ssl: bool = Defaults.VERIFY_SSL


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def _read_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    """bool 플래그 읽기 (bool 이외 타입은 거부)"""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(
            f"'{key}' 값은 true/false 이어야 합니다: {value!r}"
        )
    return value


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: bool 플래그 값이 잘못된 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 매핑이어야 합니다")

    # 빈 문자열은 키 없음으로 취급
    api_key = data.get("api_key") or None
    if api_key is not None:
        api_key = str(api_key)

    return Secrets(
        api_key=api_key,
        websocket_enabled=_read_bool(
            data, "websocket_enabled", Defaults.WEBSOCKET_ENABLED
        ),
        verify_ssl=_read_bool(data, "verify_ssl", Defaults.VERIFY_SSL),
    )


def get_empire_config(secrets: Secrets) -> EmpireConfig:
    """Secrets와 고정 엔드포인트를 합쳐 연결 설정 반환

    Args:
        secrets: Secrets 인스턴스

    Returns:
        EmpireConfig 인스턴스
    """
    return EmpireConfig(
        rest_url=EmpireEndpoints.REST_URL,
        ws_url=EmpireEndpoints.WS_URL,
        ws_namespace=EmpireEndpoints.WS_NAMESPACE,
        ws_path=EmpireEndpoints.WS_PATH,
        api_key=secrets.api_key,
        websocket_enabled=secrets.websocket_enabled,
        verify_ssl=secrets.verify_ssl,
    )
