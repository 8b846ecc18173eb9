#!/usr/bin/env python3
"""Start the SkillSwap API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from skillswap.config import Settings
from skillswap.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting SkillSwap API",
            environment=settings.environment,
            live_backend=settings.live.backend,
            port=settings.port,
        )
        if settings.live.backend == "memory" and settings.environment == "production":
            # Pushes only reach subscribers held by the same worker
            logfire.warn("In-memory live transport in production, run one worker")

        # The app module configures Logfire again on import (no-op)
        uvicorn.run(
            "skillswap.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
