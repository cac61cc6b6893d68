"""
SQLite database layer for the inspection API.

Stores:
- inspections: one row per vehicle inspection, structured form data kept as JSON text
- inspection_photos: photos belonging to an inspection
- inspection_change_logs: append-only log of field edits made during review

Uses aiosqlite for async SQLite access. The database file location comes from
settings.database_path and is auto-created on first startup. Rows are written by
the ingestion/review workflow (or import_inspections.py); the API only reads them.
"""

import json
import logging
import uuid
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from inspection_api.config import settings
from inspection_api.schemas.inspection import InspectionStatus

logger = logging.getLogger(__name__)

DB_PATH = settings.database_path

_db: aiosqlite.Connection | None = None

# Columns holding untyped JSON documents from the inspection form
JSON_COLUMNS = (
    "identity_details",
    "vehicle_data",
    "equipment_checklist",
    "inspection_summary",
    "detailed_assessment",
    "body_paint_thickness",
    "notes_font_sizes",
)

PHOTO_FLAG_COLUMNS = ("is_mandatory", "need_attention", "display_in_pdf")

# Optional timestamp columns of inspections, stored normalized like created_at
INSPECTION_TIMESTAMP_COLUMNS = ("inspection_date", "archived_at", "deactivated_at")

# Optional inspection columns accepted by insert_inspection()
INSPECTION_OPTIONAL_COLUMNS = (
    "submitted_by_user_id",
    "reviewer_id",
    "inspector_id",
    "vehicle_plate_number",
    "inspection_date",
    "overall_rating",
    *JSON_COLUMNS,
    "url_pdf",
    "nft_asset_id",
    "blockchain_tx_hash",
    "pdf_file_hash",
    "archived_at",
    "deactivated_at",
)


async def get_db() -> aiosqlite.Connection:
    """Get or create the database connection."""
    global _db
    if _db is None:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        _db = await aiosqlite.connect(str(DB_PATH))
        _db.row_factory = aiosqlite.Row
        await _db.execute("PRAGMA journal_mode=WAL")
        await _db.execute("PRAGMA foreign_keys=ON")
        await _init_tables(_db)
        logger.info(f"SQLite database initialized at {DB_PATH}")
    return _db


async def close_db():
    """Close the database connection."""
    global _db
    if _db:
        await _db.close()
        _db = None
        logger.info("SQLite database connection closed")


async def _init_tables(db: aiosqlite.Connection):
    """Create tables if they don't exist."""
    await db.executescript("""
        CREATE TABLE IF NOT EXISTS inspections (
            id TEXT PRIMARY KEY,
            pretty_id TEXT NOT NULL UNIQUE,
            status TEXT NOT NULL DEFAULT 'NEED_REVIEW',
            submitted_by_user_id TEXT,
            reviewer_id TEXT,
            inspector_id TEXT,
            vehicle_plate_number TEXT,
            inspection_date TEXT,
            overall_rating TEXT,
            identity_details TEXT,
            vehicle_data TEXT,
            equipment_checklist TEXT,
            inspection_summary TEXT,
            detailed_assessment TEXT,
            body_paint_thickness TEXT,
            notes_font_sizes TEXT,
            url_pdf TEXT,
            nft_asset_id TEXT,
            blockchain_tx_hash TEXT,
            pdf_file_hash TEXT,
            archived_at TEXT,
            deactivated_at TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_inspections_status
            ON inspections(status);

        CREATE TABLE IF NOT EXISTS inspection_photos (
            id TEXT PRIMARY KEY,
            inspection_id TEXT NOT NULL REFERENCES inspections(id) ON DELETE CASCADE,
            path TEXT NOT NULL,
            label TEXT,
            category TEXT,
            original_label TEXT,
            is_mandatory INTEGER,
            need_attention INTEGER,
            display_in_pdf INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_photos_inspection
            ON inspection_photos(inspection_id);

        CREATE TABLE IF NOT EXISTS inspection_change_logs (
            id TEXT PRIMARY KEY,
            inspection_id TEXT NOT NULL REFERENCES inspections(id) ON DELETE CASCADE,
            field_name TEXT NOT NULL,
            sub_field_name TEXT,
            sub_sub_field_name TEXT,
            old_value TEXT,
            new_value TEXT,
            changed_at TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_change_logs_inspection
            ON inspection_change_logs(inspection_id, changed_at);
    """)
    await db.commit()


def _timestamp(value: datetime | str | None) -> str:
    """Normalize a timestamp to fixed-width UTC ISO text so columns sort chronologically.

    Naive values are taken as UTC. "Z" suffixes and any offset are accepted.
    """
    if value is None:
        value = datetime.now(UTC)
    elif isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def _dump_json(value: Any) -> str | None:
    return None if value is None else json.dumps(value)


def _inspection_from_row(row: aiosqlite.Row) -> dict:
    inspection = dict(row)
    for column in JSON_COLUMNS:
        raw = inspection.get(column)
        inspection[column] = json.loads(raw) if raw is not None else None
    return inspection


def _photo_from_row(row: aiosqlite.Row) -> dict:
    photo = dict(row)
    for column in PHOTO_FLAG_COLUMNS:
        if photo[column] is not None:
            photo[column] = bool(photo[column])
    return photo


# ─── Inspections ─────────────────────────────────────────────────────


async def insert_inspection(
    pretty_id: str,
    status: str = InspectionStatus.NEED_REVIEW.value,
    inspection_id: str | None = None,
    created_at: datetime | str | None = None,
    updated_at: datetime | str | None = None,
    **fields: Any,
) -> str:
    """Insert an inspection row. Extra keyword fields map onto columns. Returns the ID."""
    inspection_id = inspection_id or str(uuid.uuid4())
    created = _timestamp(created_at)
    row = {
        "id": inspection_id,
        "pretty_id": pretty_id,
        "status": status,
        "created_at": created,
        "updated_at": _timestamp(updated_at) if updated_at else created,
    }
    unknown = set(fields) - set(INSPECTION_OPTIONAL_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown inspection columns: {sorted(unknown)}")
    for column, value in fields.items():
        if column in JSON_COLUMNS:
            value = _dump_json(value)
        elif column in INSPECTION_TIMESTAMP_COLUMNS and value is not None:
            value = _timestamp(value)
        row[column] = value

    columns = ", ".join(row)
    placeholders = ", ".join("?" for _ in row)
    db = await get_db()
    await db.execute(
        f"INSERT INTO inspections ({columns}) VALUES ({placeholders})",
        tuple(row.values()),
    )
    await db.commit()
    return inspection_id


async def inspection_exists(inspection_id: str) -> bool:
    """Check whether an inspection row exists, without loading it."""
    db = await get_db()
    cursor = await db.execute("SELECT 1 FROM inspections WHERE id = ?", (inspection_id,))
    return await cursor.fetchone() is not None


async def find_inspection_by_id(inspection_id: str) -> dict | None:
    """Get an inspection with its photos attached under "photos", or None."""
    db = await get_db()
    cursor = await db.execute("SELECT * FROM inspections WHERE id = ?", (inspection_id,))
    row = await cursor.fetchone()
    if row is None:
        return None

    inspection = _inspection_from_row(row)
    inspection["photos"] = await find_photos(inspection_id)
    return inspection


async def delete_inspection(inspection_id: str) -> bool:
    """Delete an inspection; its photos and change logs cascade. Used to undo partial imports."""
    db = await get_db()
    cursor = await db.execute("DELETE FROM inspections WHERE id = ?", (inspection_id,))
    await db.commit()
    return cursor.rowcount > 0


# ─── Photos ──────────────────────────────────────────────────────────


async def insert_photo(
    inspection_id: str,
    path: str,
    label: str | None = None,
    category: str | None = None,
    original_label: str | None = None,
    is_mandatory: bool | None = None,
    need_attention: bool | None = None,
    display_in_pdf: bool = True,
    photo_id: str | None = None,
    created_at: datetime | str | None = None,
    updated_at: datetime | str | None = None,
) -> str:
    """Attach a photo to an inspection. Returns the photo ID."""
    photo_id = photo_id or str(uuid.uuid4())
    created = _timestamp(created_at)
    db = await get_db()
    await db.execute(
        """INSERT INTO inspection_photos
           (id, inspection_id, path, label, category, original_label,
            is_mandatory, need_attention, display_in_pdf, created_at, updated_at)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            photo_id,
            inspection_id,
            path,
            label,
            category,
            original_label,
            None if is_mandatory is None else int(is_mandatory),
            None if need_attention is None else int(need_attention),
            int(display_in_pdf),
            created,
            _timestamp(updated_at) if updated_at else created,
        ),
    )
    await db.commit()
    return photo_id


async def find_photos(inspection_id: str) -> list[dict]:
    """Get all photos of an inspection, oldest first."""
    db = await get_db()
    cursor = await db.execute(
        "SELECT * FROM inspection_photos WHERE inspection_id = ? ORDER BY created_at ASC, rowid ASC",
        (inspection_id,),
    )
    rows = await cursor.fetchall()
    return [_photo_from_row(row) for row in rows]


# ─── Change Logs ─────────────────────────────────────────────────────


async def insert_change_log(
    inspection_id: str,
    field_name: str,
    old_value: str | None,
    new_value: str | None,
    sub_field_name: str | None = None,
    sub_sub_field_name: str | None = None,
    changed_at: datetime | str | None = None,
    change_id: str | None = None,
) -> str:
    """Append a change log entry. Entries are never updated. Returns the entry ID."""
    change_id = change_id or str(uuid.uuid4())
    db = await get_db()
    await db.execute(
        """INSERT INTO inspection_change_logs
           (id, inspection_id, field_name, sub_field_name, sub_sub_field_name,
            old_value, new_value, changed_at)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            change_id,
            inspection_id,
            field_name,
            sub_field_name,
            sub_sub_field_name,
            old_value,
            new_value,
            _timestamp(changed_at),
        ),
    )
    await db.commit()
    return change_id


async def find_change_logs(inspection_id: str) -> list[dict]:
    """Get all change log entries of an inspection, newest first.

    Entries sharing a timestamp come back in reverse insertion order, so the
    later write still counts as the newer one.
    """
    db = await get_db()
    cursor = await db.execute(
        """SELECT * FROM inspection_change_logs
           WHERE inspection_id = ?
           ORDER BY changed_at DESC, rowid DESC""",
        (inspection_id,),
    )
    rows = await cursor.fetchall()
    return [dict(row) for row in rows]


# ─── Maintenance ─────────────────────────────────────────────────────


async def clean_database() -> bool:
    """Delete every inspection, photo and change log. Refuses to run in production."""
    if settings.environment == "production":
        logger.warning("clean_database() called in production, ignoring")
        return False

    db = await get_db()
    await db.execute("DELETE FROM inspection_change_logs")
    await db.execute("DELETE FROM inspection_photos")
    await db.execute("DELETE FROM inspections")
    await db.commit()
    logger.info("Database cleaned")
    return True
