"""
로깅 설정

stdout + logs/<process_name>/<process_name>.log (자정마다 롤링, 7일 보관).
Socket.IO/HTTP 라이브러리 로그는 WARNING 이상만 남김.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# 패킷/요청 단위로 로그를 남기는 라이브러리
NOISY_LOGGERS = ["httpcore", "httpx", "socketio", "engineio", "aiohttp", "asyncio"]


def setup_logging(
    process_name: str,
    level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거에 콘솔/파일 핸들러 설정 (재호출 시 기존 핸들러 교체)

    Args:
        process_name: 로그 디렉토리/파일 이름
        level: 콘솔과 파일 공통 로그 레벨
        log_dir: 로그 디렉토리 (None이면 logs/<process_name>)
    """
    log_file = (log_dir or get_log_file_path(process_name).parent) / f"{process_name}.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in (logging.StreamHandler(sys.stdout), file_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.debug("로깅 초기화", extra={"log_file": str(log_file)})
    return root_logger


def get_log_file_path(process_name: str) -> Path:
    """logs/<process_name>/<process_name>.log"""
    return Paths.LOGS_DIR / process_name / f"{process_name}.log"
