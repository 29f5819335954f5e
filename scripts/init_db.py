#!/usr/bin/env python3
"""Create the SQLite schema without starting the API.

Usage:
    python scripts/init_db.py [db_path]
"""

import asyncio
import logging
import sys

from boothdesk.core import db_client
from boothdesk.core.db_client import get_db_path


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


async def main() -> None:
    db_path = sys.argv[1] if len(sys.argv) > 1 else None

    await db_client.init_db(db_path=db_path)
    logger.info(f"Schema ready at {get_db_path(db_path)}")

    await db_client.close_connection(db_path=db_path)


if __name__ == "__main__":
    asyncio.run(main())
