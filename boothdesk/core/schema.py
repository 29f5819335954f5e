"""SQLite schema management (code-first approach)."""

import logging

from boothdesk.core import db_client


logger = logging.getLogger(__name__)


# Central list of all collections in the schema, in dependency order
COLLECTIONS = [
    "events",
    "staff",
    "participant_companies",
    "staff_activities",
    "reports",
]


def _get_collection_schema(*, collection_name: str) -> list[str]:
    """Get the DDL statements (table plus indexes) for a collection."""
    schemas = {
        "events": [
            """
            CREATE TABLE IF NOT EXISTS events (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                date TEXT NOT NULL DEFAULT '',
                details TEXT NOT NULL DEFAULT '',
                organizer_company_id INTEGER NOT NULL,
                is_active INTEGER NOT NULL DEFAULT 1
            )
            """,
        ],
        "staff": [
            """
            CREATE TABLE IF NOT EXISTS staff (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                personal_code TEXT NOT NULL,
                organizer_company_id INTEGER NOT NULL,
                phone TEXT,
                department_id INTEGER,
                role TEXT
            )
            """,
            "CREATE UNIQUE INDEX IF NOT EXISTS idx_staff_personal_code ON staff (personal_code)",
            "CREATE INDEX IF NOT EXISTS idx_staff_organizer ON staff (organizer_company_id)",
        ],
        "participant_companies": [
            """
            CREATE TABLE IF NOT EXISTS participant_companies (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                booth_code TEXT NOT NULL,
                event_id INTEGER NOT NULL REFERENCES events (id),
                responsible TEXT NOT NULL DEFAULT '',
                contact TEXT NOT NULL DEFAULT ''
            )
            """,
            "CREATE UNIQUE INDEX IF NOT EXISTS idx_company_booth_code ON participant_companies (booth_code)",
        ],
        # Append-only: the service layer never updates or deletes activities
        "staff_activities": [
            """
            CREATE TABLE IF NOT EXISTS staff_activities (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                staff_id INTEGER NOT NULL,
                description TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
            """,
            "CREATE INDEX IF NOT EXISTS idx_activities_staff_ts ON staff_activities (staff_id, timestamp)",
        ],
        "reports": [
            """
            CREATE TABLE IF NOT EXISTS reports (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                event_id INTEGER NOT NULL,
                booth_code TEXT NOT NULL,
                staff_name TEXT NOT NULL,
                report_label TEXT NOT NULL,
                response TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
            """,
            "CREATE INDEX IF NOT EXISTS idx_reports_event ON reports (event_id)",
        ],
    }
    return schemas[collection_name]


async def init_db(*, db_path: str | None = None) -> None:
    """Create all tables and indexes (idempotent)."""
    logger.info("Starting SQLite schema sync...")

    conn = await db_client.get_connection(db_path=db_path)
    for collection_name in COLLECTIONS:
        for statement in _get_collection_schema(collection_name=collection_name):
            await conn.execute(statement)
        logger.debug("Ensured collection: %s", collection_name)
    await conn.commit()

    logger.info("SQLite schema sync complete")
