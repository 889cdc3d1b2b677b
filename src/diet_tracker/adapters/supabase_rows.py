"""Row conversion helpers shared by the Supabase repositories."""

from datetime import datetime
from uuid import UUID


def parse_datetime(value: object) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    # Postgres may send a trailing Z, which older parsers reject.
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def parse_uuid(value: object) -> UUID | None:
    if value is None or value == "":
        return None
    if isinstance(value, UUID):
        return value
    return UUID(str(value))


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def to_str(value: object | None) -> str | None:
    return str(value) if value is not None else None


def response_total(response: object, rows: list[dict[str, object]]) -> int:
    """Return the exact count requested with the select, or the row count."""
    count = getattr(response, "count", None)
    return count if isinstance(count, int) else len(rows)
