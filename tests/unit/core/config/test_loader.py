"""
core/config/loader.py 테스트

secrets.yaml 로드, 검증, 연결 설정 생성 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    Secrets,
    EmpireConfig,
    SecretsLoadError,
    load_secrets,
    get_empire_config,
)
from core.constants import EmpireEndpoints


class TestSecrets:
    """Secrets 데이터클래스 테스트"""

    def test_creation_defaults(self) -> None:
        """기본값 생성"""
        secrets = Secrets(api_key="key")

        assert secrets.api_key == "key"
        assert secrets.websocket_enabled is True
        assert secrets.verify_ssl is False

    def test_frozen(self) -> None:
        """불변성 확인"""
        secrets = Secrets(api_key="key")

        with pytest.raises(AttributeError):
            secrets.api_key = "new_key"  # type: ignore


class TestEmpireConfig:
    """EmpireConfig 데이터클래스 테스트"""

    def test_frozen(self) -> None:
        """불변성 확인"""
        config = EmpireConfig(
            rest_url="https://api.example.com",
            ws_url="wss://ws.example.com",
            ws_namespace="/trade",
            ws_path="/s/",
            api_key=None,
        )

        with pytest.raises(AttributeError):
            config.rest_url = "new_url"  # type: ignore


class TestLoadSecrets:
    """load_secrets 함수 테스트"""

    def test_load(self, temp_secrets_file: Path) -> None:
        """정상 로드"""
        secrets = load_secrets(temp_secrets_file)

        assert secrets.api_key == "empire_api_key_12345"
        assert secrets.websocket_enabled is True
        assert secrets.verify_ssl is False

    def test_empty_api_key_is_none(self, temp_secrets_file_no_key: Path) -> None:
        """빈 api_key는 None (인증 없이 사용)"""
        secrets = load_secrets(temp_secrets_file_no_key)

        assert secrets.api_key is None
        assert secrets.websocket_enabled is False

    def test_defaults_when_flags_missing(self, temp_dir: Path) -> None:
        """플래그 누락 시 기본값"""
        file = temp_dir / "minimal.yaml"
        file.write_text('api_key: "abc"\n', encoding="utf-8")

        secrets = load_secrets(file)

        assert secrets.api_key == "abc"
        assert secrets.websocket_enabled is True
        assert secrets.verify_ssl is False

    def test_numeric_api_key_becomes_string(self, temp_dir: Path) -> None:
        """숫자로 파싱된 api_key는 문자열로 변환"""
        file = temp_dir / "numeric.yaml"
        file.write_text("api_key: 123456\n", encoding="utf-8")

        assert load_secrets(file).api_key == "123456"

    def test_file_not_found(self, temp_dir: Path) -> None:
        """파일 없음"""
        non_existent = temp_dir / "nonexistent.yaml"

        with pytest.raises(SecretsLoadError, match="찾을 수 없습니다"):
            load_secrets(non_existent)

    def test_empty_file(self, temp_dir: Path) -> None:
        """빈 파일"""
        empty_file = temp_dir / "empty.yaml"
        empty_file.write_text("", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="비어 있습니다"):
            load_secrets(empty_file)

    def test_not_a_mapping(self, temp_dir: Path) -> None:
        """최상위가 리스트인 경우"""
        file = temp_dir / "list.yaml"
        file.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="매핑"):
            load_secrets(file)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """잘못된 YAML 형식"""
        file = temp_dir / "invalid.yaml"
        file.write_text("invalid: yaml: content:", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="파싱 실패"):
            load_secrets(file)

    def test_invalid_bool_flag(self, temp_dir: Path) -> None:
        """bool이 아닌 플래그"""
        file = temp_dir / "bad_flag.yaml"
        file.write_text('api_key: "k"\nwebsocket_enabled: "maybe"\n', encoding="utf-8")

        with pytest.raises(ValueError, match="websocket_enabled"):
            load_secrets(file)


class TestGetEmpireConfig:
    """get_empire_config 함수 테스트"""

    def test_config_uses_fixed_endpoints(self) -> None:
        """고정 엔드포인트 사용"""
        config = get_empire_config(Secrets(api_key="key", verify_ssl=True))

        assert config.rest_url == EmpireEndpoints.REST_URL
        assert config.ws_url == EmpireEndpoints.WS_URL
        assert config.ws_namespace == "/trade"
        assert config.ws_path == "/s/"
        assert config.api_key == "key"
        assert config.websocket_enabled is True
        assert config.verify_ssl is True
