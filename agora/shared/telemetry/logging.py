"""Logging setup: one stdout stream for the process plus the decision trail logger."""

import logging
import sys

from agora.core.config import Settings, get_settings

# One INFO line per authorization gate evaluation (see LoggingDecisionLog).
DECISION_LOGGER_NAME = "agora.decisions"

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings (DEBUG when settings.debug).

    The decision logger stays at INFO whatever the root level, and is
    silenced entirely when decision_log_enabled is False.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=_LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    decisions = logging.getLogger(DECISION_LOGGER_NAME)
    decisions.setLevel(logging.INFO)
    decisions.disabled = not settings.decision_log_enabled
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the module logger (pass __name__)."""
    return logging.getLogger(name)
