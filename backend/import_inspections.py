#!/usr/bin/env python3
"""
Import inspections (with photos and change logs) from JSON.

The file holds a list of inspection objects using the API field names, each with
optional "photos" and "change_logs" lists. Every record is validated before
anything is written; a record that still fails mid-insert is removed again.

Usage:
    python import_inspections.py --file data/inspections.json
    python import_inspections.py --file data/inspections.json --clean
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import aiosqlite

sys.path.insert(0, str(Path(__file__).parent))

from inspection_api.db import (
    INSPECTION_OPTIONAL_COLUMNS,
    clean_database,
    close_db,
    delete_inspection,
    get_db,
    insert_change_log,
    insert_inspection,
    insert_photo,
)

INSPECTION_KEYS = {"id", "pretty_id", "status", "created_at", "updated_at", "photos", "change_logs",
                   *INSPECTION_OPTIONAL_COLUMNS}
PHOTO_KEYS = {"id", "inspection_id", "path", "label", "category", "original_label", "is_mandatory",
              "need_attention", "display_in_pdf", "created_at", "updated_at"}
CHANGE_LOG_KEYS = {"id", "inspection_id", "field_name", "sub_field_name", "sub_sub_field_name",
                   "old_value", "new_value", "changed_at"}


def validate_record(record: dict) -> list[str]:
    """Return the problems found in one inspection record (empty if it can be imported)."""
    if not isinstance(record, dict):
        return ["record is not an object"]
    errors = []
    unknown = set(record) - INSPECTION_KEYS
    if unknown:
        errors.append(f"unknown inspection fields {sorted(unknown)}")
    if not record.get("pretty_id"):
        errors.append("missing pretty_id")
    for i, photo in enumerate(record.get("photos") or []):
        unknown = set(photo) - PHOTO_KEYS
        if unknown:
            errors.append(f"photo {i}: unknown fields {sorted(unknown)}")
        if not photo.get("path"):
            errors.append(f"photo {i}: missing path")
    for i, change in enumerate(record.get("change_logs") or []):
        unknown = set(change) - CHANGE_LOG_KEYS
        if unknown:
            errors.append(f"change log {i}: unknown fields {sorted(unknown)}")
        if not change.get("field_name"):
            errors.append(f"change log {i}: missing field_name")
    return errors


async def import_record(record: dict) -> str:
    """Insert one inspection with its photos and change logs. Returns the inspection ID."""
    photos = record.pop("photos", None) or []
    change_logs = record.pop("change_logs", None) or []
    record["inspection_id"] = record.pop("id", None)
    inspection_id = await insert_inspection(**record)
    try:
        for photo in photos:
            photo.pop("inspection_id", None)
            photo["photo_id"] = photo.pop("id", None)
            await insert_photo(inspection_id, **photo)
        for change in change_logs:
            change.pop("inspection_id", None)
            change["change_id"] = change.pop("id", None)
            await insert_change_log(inspection_id, **change)
    except (aiosqlite.Error, ValueError):
        await delete_inspection(inspection_id)
        raise
    print(f"  + {record['pretty_id']} ({inspection_id}): {len(photos)} photos, {len(change_logs)} changes")
    return inspection_id


async def run(filepath: str, clean: bool) -> int:
    path = Path(filepath)
    if not path.exists():
        print(f"Error: file not found: {path}")
        return 0

    with open(path, encoding="utf-8") as f:
        records = json.load(f)

    invalid = False
    for i, record in enumerate(records):
        for error in validate_record(record):
            print(f"Error: record {i}: {error}")
            invalid = True
    if invalid:
        return 0

    await get_db()
    try:
        if clean and not await clean_database():
            print("Error: refusing to clean the database in production")
            return 0
        count = 0
        for record in records:
            await import_record(record)
            count += 1
        return count
    finally:
        await close_db()


def main():
    parser = argparse.ArgumentParser(description="Import inspections from JSON")
    parser.add_argument("--file", required=True, help="Path to JSON list of inspections")
    parser.add_argument("--clean", action="store_true", help="Delete existing inspections first (not in production)")
    args = parser.parse_args()
    n = asyncio.run(run(args.file, args.clean))
    print(f"Imported {n} inspections.")


if __name__ == "__main__":
    main()
