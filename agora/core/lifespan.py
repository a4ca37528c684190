"""Process lifespan for whatever host embeds the core (worker, API, CLI).

Startup wires logging and tracing; shutdown flushes spans and releases the
SQL pool. No business logic here.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from agora.core.config import Settings, get_settings
from agora.shared.telemetry.logging import setup_logging
from agora.shared.telemetry.telemetry import configure_telemetry, get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(settings: Settings | None = None) -> AsyncIterator[Settings]:
    """Yield the active settings between startup and shutdown."""
    settings = settings or get_settings()
    setup_logging(settings)
    if settings.telemetry_enabled:
        configure_telemetry(settings)
    logger.info(
        "%s %s starting (backend=%s, identity_fallback_on_delete=%s)",
        settings.app_name,
        settings.app_version,
        settings.database_backend,
        settings.identity_fallback_on_delete,
    )
    try:
        yield settings
    finally:
        telemetry = get_telemetry()
        if telemetry is not None:
            telemetry.shutdown()
            set_telemetry(None)
        if settings.database_backend == "postgres":
            from agora.infrastructure.persistence.database import dispose_engine

            await dispose_engine()
        logger.info("%s stopped", settings.app_name)
