"""로깅 설정 모듈.

Logging configuration. Called once at application startup; JSON lines via
python-json-logger when ``LOG_JSON`` is enabled, plain text otherwise.
"""

import logging.config
import sys
from typing import Any

from app.config import settings


def get_logging_config(level: str = "INFO", json_format: bool = False) -> dict[str, Any]:
    """dictConfig 형식의 로깅 설정을 반환합니다.

    Args:
        level: 루트 로거 레벨 (Root logger level)
        json_format: JSON 포맷 사용 여부 (Use the JSON formatter)

    Returns:
        dict[str, Any]: logging.config.dictConfig 입력 (dictConfig payload)
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "plain": {
                "format": "{asctime} {levelname} [{name}] {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_format else "plain",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level.upper(),
        },
        "loggers": {
            # SQL 로그는 DEBUG 설정의 echo 가 담당 — SQL echo is driven by settings.DEBUG
            "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
        },
    }


def setup_logging() -> None:
    """설정값으로 로깅을 구성합니다 (Apply logging config from settings)."""
    logging.config.dictConfig(get_logging_config(settings.LOG_LEVEL, settings.LOG_JSON))
