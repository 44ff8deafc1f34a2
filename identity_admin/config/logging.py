"""Structured logging (structlog поверх stdlib logging).

Модулі пишуть через ``logging.getLogger(__name__)`` з dotted event name і
``extra={...}``; transport layer використовує ``get_logger`` (structlog
BoundLogger). Обидва шляхи проходять через один ProcessorFormatter, тому
output однаковий: JSON у production, console у development.

Кожен запис отримує:
- ``request_id`` / ``path`` / ``method`` (middleware)
- ``operator_id`` / ``operator_roles`` (коли request автентифікований)
- ``service`` / ``environment`` / ``version``

Usage:
    from identity_admin.config import setup_logging, get_logger

    setup_logging()  # once, при import main.py
    logger = get_logger(__name__)
    logger.info("api.validation_failed", code=exc.code_value)
"""

import logging
import sys
from typing import Any, Iterable

import structlog
from structlog.typing import EventDict, Processor

from identity_admin import __version__

from .settings import Settings, get_settings

REDACTED = "[REDACTED]"

# Ключі, значення яких ніколи не потрапляють в логи (паролі, provider / access tokens)
SENSITIVE_KEYS = frozenset({
    "password",
    "secret_key",
    "id_token",
    "sign_in_token",
    "token",
    "authorization",
})

# Бібліотеки, які шумлять на INFO
_LIBRARY_LEVELS = {
    "uvicorn.access": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "asyncio": logging.WARNING,
}


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in SENSITIVE_KEYS else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_redact(item) for item in value)
    return value


def redact_sensitive(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Processor: замінює паролі / tokens на ``[REDACTED]`` (також у nested dicts)."""
    return _redact(event_dict)


def _service_context(settings: Settings) -> Processor:
    static = {
        "service": settings.app_code,
        "environment": settings.environment,
        "version": __version__,
    }

    def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in static.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_service_context


def _renderer(settings: Settings) -> Processor:
    if settings.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog + stdlib root logger. Idempotent."""
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        # ExtraAdder переносить ``extra={...}`` stdlib записів в event dict
        foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *shared_processors],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            _renderer(settings),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(settings.log_level)

    _set_library_levels(settings)


def _set_library_levels(settings: Settings) -> None:
    for name, level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
    # SQL statements тільки коли явно увімкнено db_echo
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# ============================================================================
# REQUEST CONTEXT
# ============================================================================


def bind_request_context(request_id: str, **extra: Any) -> None:
    """Start a fresh per-request context (middleware)."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **extra)


def bind_operator_context(operator_id: str, roles: Iterable[str] = ()) -> None:
    """Attach authenticated caller до всіх наступних записів цього request."""
    structlog.contextvars.bind_contextvars(
        operator_id=operator_id, operator_roles=sorted(roles)
    )


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
