"""Logs structurés (structlog) du service.

Les modules obtiennent un logger par `structlog.get_logger(__name__)` et journalisent un nom
d'évènement suivi de paires clé/valeur. Le `request_id` lié par le middleware est fusionné dans
chaque évènement émis pendant la requête.
"""

import logging
import sys

import structlog


def _level(name: str) -> int:
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO") -> None:
    """Configure structlog; les évènements sous `level` sont ignorés."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
