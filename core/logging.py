"""
Logging configuration with JSON formatter for structured logging.

Pricing modules get their own level (``PRICING_LOG_LEVEL``) so resolver
traces can be switched on without turning up the whole service.
"""
import logging
import sys
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from core.settings import settings


PRICING_LOGGERS = (
    "services.pricing_resolver",
    "services.pricing_service",
    "services.rule_validation",
    "db.gateway",
)


def price_source(log_record: Dict[str, Any]) -> str | None:
    """Name what set the pre-discount price in a resolver trace."""
    if "override_id" not in log_record and "rule_id" not in log_record:
        return None
    if log_record.get("override_id"):
        return "override"
    if log_record.get("rule_id"):
        return "rule"
    return "base"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps every line with the hall pricing context."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any]
    ) -> None:
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = self.formatTime(record, self.datefmt)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        log_record['app_name'] = settings.app_name
        log_record['environment'] = settings.app_env
        log_record['hall_timezone'] = settings.hall_timezone
        log_record['currency'] = settings.currency

        source = price_source(log_record)
        if source is not None:
            log_record['price_source'] = source

        if record.exc_info:
            log_record['exc_info'] = self.formatException(record.exc_info)


def pricing_log_level() -> int:
    """Level for pricing loggers: explicit setting, else DEBUG in development."""
    if settings.pricing_log_level:
        return getattr(logging, settings.pricing_log_level)
    if settings.is_development:
        return logging.DEBUG
    return getattr(logging, settings.log_level)


def setup_logging() -> None:
    """
    Configure application logging.

    Structured JSON logging for staging and production, human-readable
    lines for development.
    """
    use_json = settings.app_env in ["production", "staging"]

    if use_json:
        formatter = CustomJsonFormatter(
            fmt='%(timestamp)s %(level)s %(name)s %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )

    level = pricing_log_level()
    for name in PRICING_LOGGERS:
        logging.getLogger(name).setLevel(level)

    logging.info(
        "Logging configured",
        extra={
            "log_level": settings.log_level,
            "pricing_log_level": logging.getLevelName(level),
            "environment": settings.app_env,
            "json_logging": use_json
        }
    )
