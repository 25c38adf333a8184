#!/usr/bin/env python3
"""Run visit log migrations with Logfire error tracking."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from margin.config import Settings
from margin.util.observability import configure_logfire


def main() -> int:
    """Run migrations and log any errors to Logfire.

    Nothing to do when the visit log is disabled.
    """
    settings = Settings()

    # Configure Logfire
    configure_logfire(settings)

    if not settings.visits.enabled:
        logfire.info("Visit log disabled, skipping migrations")
        return 0

    try:
        logfire.info("Starting visit log migrations")

        # Create Alembic config
        alembic_cfg = Config("alembic.ini")

        # Run migrations
        command.upgrade(alembic_cfg, "head")

        logfire.info("Visit log migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Visit log migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
