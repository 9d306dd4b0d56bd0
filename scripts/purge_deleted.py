#!/usr/bin/env python3
"""Hard-delete old soft-deleted comments once, e.g. from cron.

Usage:
    python scripts/purge_deleted.py [OLDER_THAN_DAYS]

Defaults to MAINTENANCE__PURGE_AFTER_DAYS.
"""

import asyncio
import sys
from typing import Optional

import logfire

from arbor.application.usecase.maintenance import (
    PurgeDeletedRequest,
    PurgeDeletedUseCase,
)
from arbor.config import Settings
from arbor.domain.error import DomainError
from arbor.util.di.container import create_container
from arbor.util.observability import configure_logfire

USAGE = "usage: purge_deleted.py [OLDER_THAN_DAYS]"


async def purge(settings: Settings, older_than_days: int) -> int:
    container = create_container(settings)
    try:
        async with container() as request_container:
            use_case = await request_container.get(PurgeDeletedUseCase)
            result = await use_case.execute(
                PurgeDeletedRequest(older_than_days=older_than_days)
            )
        return result.purged
    finally:
        await container.close()


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    settings = Settings()

    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2
    try:
        days = int(args[0]) if args else settings.maintenance.purge_after_days
    except ValueError:
        print(f"OLDER_THAN_DAYS must be an integer, got {args[0]!r}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    configure_logfire(settings)
    try:
        purged = asyncio.run(purge(settings, days))
    except DomainError as e:
        logfire.error("Purge failed", kind=e.kind, error=e.message)
        return 1

    logfire.info("Purge finished", purged=purged, older_than_days=days)
    return 0


if __name__ == "__main__":
    sys.exit(main())
