# core/utils.py

from datetime import datetime, timezone


def sanitize(data: dict) -> dict:
    """
    Sanitize a payload before it is written:
    - Empty / whitespace-only strings → None
    - Other strings are stripped
    - Everything else is kept as-is

    Numeric-looking strings are left alone (phone numbers, invite codes).
    """
    clean = {}
    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped else None
        else:
            clean[k] = v
    return clean


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO timestamp as stored by PostgREST ("...Z" or "+00:00")."""
    if value is None or isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
