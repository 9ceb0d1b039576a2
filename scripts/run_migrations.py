#!/usr/bin/env python3
"""Upgrade the accounts schema, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c1f5a9d2e47
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from authlink.config import Settings
from authlink.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"

    with logfire.span("run_migrations", target=target):
        try:
            command.upgrade(Config("alembic.ini"), target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The app must not start against a half-migrated schema
            raise

    logfire.info("Accounts schema is at {target}", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
