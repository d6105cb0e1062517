"""
pytest 공통 fixture 정의

설정/로깅 테스트용 임시 파일 fixture
"""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    secrets_content = """# 테스트용 secrets.yaml
api_key: "empire_api_key_12345"
websocket_enabled: true
verify_ssl: false
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_no_key(temp_dir: Path) -> Path:
    """API 키 없이 REST만 사용하는 secrets.yaml 파일 생성"""
    secrets_content = """api_key: ""
websocket_enabled: false
"""
    secrets_path = temp_dir / "secrets_no_key.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path
