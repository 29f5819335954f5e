#!/usr/bin/env python3
"""Admin script to inspect derived tasks.

Usage:
    python scripts/list_tasks.py --staff <staff_id>
    python scripts/list_tasks.py --event <event_id>
"""

import asyncio
import logging
import sys

from boothdesk.core import db_client
from boothdesk.domain.task import AssignedTask
from boothdesk.services import task_service


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def print_tasks(tasks: list[AssignedTask]) -> None:
    """Print one line per task."""
    if not tasks:
        logger.info("No tasks")
        return

    for task in tasks:
        booth = task.booth_code or "-"
        owner = task.staff_name or task.staff_id
        logger.info(
            f"{task.id} [{task.status}] {task.timestamp:%Y-%m-%d %H:%M} {owner}: "
            f"{task.action_label} @ {task.company_name} ({booth})"
        )


def print_usage() -> None:
    """Print usage information."""
    logger.info(__doc__)


async def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]

    if len(args) != 2 or args[0] not in ("--staff", "--event"):
        print_usage()
        sys.exit(1)

    try:
        if args[0] == "--staff":
            print_tasks(await task_service.get_pending_tasks_for_staff(staff_id=args[1]))
        else:
            print_tasks(await task_service.get_assigned_tasks_by_event(event_id=args[1]))
    finally:
        await db_client.close_connection()


if __name__ == "__main__":
    asyncio.run(main())
