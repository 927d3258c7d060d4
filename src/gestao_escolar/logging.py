"""Structured logging for the API.

Every event is a structlog event rendered by the stdlib handler, so
uvicorn and SQLAlchemy records come out in the same shape as ours. Set
LOG_JSON=false for a plain console renderer while developing.

Context bound with structlog.contextvars (request_id by the middleware,
profile_id and role once the session profile resolves) ends up on every
event of the request.
"""

import logging
import logging.config
import sys
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger

SERVICE_NAME = "gestao-escolar"

EventDict = dict[str, Any]


class LoggingSettings(BaseSettings):
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")
    # INFO prints every statement SQLAlchemy emits
    sql_log_level: str = Field(default="WARNING", alias="SQL_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def _stamp(_logger: object, _method_name: str, event_dict: EventDict) -> EventDict:
    """UTC ISO 8601 timestamp plus the service name."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors shared by structlog loggers and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _stamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _dict_config(config: LoggingSettings, renderer: Any) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": renderer,
                "foreign_pre_chain": _pre_chain(),
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
                "stream": sys.stdout,
            },
        },
        "root": {"handlers": ["stdout"], "level": config.log_level},
        "loggers": {
            "sqlalchemy.engine": {"level": config.sql_log_level},
            # request_completed from the middleware replaces the access log
            "uvicorn.access": {"level": "WARNING"},
        },
    }


def configure_logging(config: LoggingSettings) -> None:
    """Route structlog through stdlib logging with one renderer for both."""
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if config.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(_dict_config(config, renderer))


configure_logging(LoggingSettings())


def get_logger(name: str) -> BoundLogger:
    """Structured logger for ``name``.

    Example:
        logger = get_logger(__name__)
        logger.info("student_created", student_id=42)
        # {"event": "student_created", "student_id": 42, "level": "info", ...}
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
