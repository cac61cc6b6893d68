"""
Change log reduction: collapse an inspection's edit history to the latest
change per field path.
"""

from collections.abc import Iterable, Mapping

FieldPath = tuple[str, str, str]


def field_path_key(entry: Mapping) -> FieldPath:
    """(field, sub-field, sub-sub-field) key for a change log entry.

    Missing components count as empty strings. A tuple is used rather than a
    joined string so components containing a separator cannot collide.
    """
    return (
        entry.get("field_name") or "",
        entry.get("sub_field_name") or "",
        entry.get("sub_sub_field_name") or "",
    )


def latest_changes_per_field(entries: Iterable[Mapping]) -> list[Mapping]:
    """Keep only the most recent entry for each field path.

    Expects entries ordered newest first (as returned by db.find_change_logs);
    the first entry seen for a path wins and the output keeps first-seen order.
    Entries are returned as-is, never copied or modified.
    """
    latest: dict[FieldPath, Mapping] = {}
    for entry in entries:
        key = field_path_key(entry)
        if key not in latest:
            latest[key] = entry
    return list(latest.values())
