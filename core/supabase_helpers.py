# core/supabase_helpers.py

from typing import Optional

from fastapi import HTTPException

from core.utils import sanitize
from core.errors import handle_supabase_error, not_found
from core.supabase_client import get_supabase_client


# =================================================================
#  SAFE SELECT / INSERT / UPDATE / DELETE / UPSERT
# =================================================================
# Every router and service reads and writes through these helpers;
# nothing else talks to the PostgREST query builder directly.
# =================================================================

def _client():
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def _apply_filters(query, filters: Optional[dict]):
    for key, val in (filters or {}).items():
        query = query.eq(key, val)
    return query


def safe_select(
    table: str,
    filters: dict = None,
    *,
    single: bool = False,
    in_filters: dict = None,
    null_fields: list = None,
    order_by: str = None,
    desc: bool = False,
    limit: int = None,
):
    """
    Table SELECT with equality, IN and IS NULL filters.
    With single=True returns the first row or None.
    """
    client = _client()

    try:
        query = _apply_filters(client.table(table).select("*"), filters)
        for key, values in (in_filters or {}).items():
            query = query.in_(key, list(values))
        for key in null_fields or []:
            query = query.is_(key, "null")
        if order_by:
            query = query.order(order_by, desc=desc)
        if single:
            query = query.limit(1)
        elif limit:
            query = query.limit(limit)

        rows = query.execute().data or []

    except Exception as e:
        raise handle_supabase_error(e, f"Failed to fetch from {table}")

    if single:
        return rows[0] if rows else None
    return rows


def safe_insert(table: str, data: dict) -> dict:
    """INSERT one row and return its stored representation."""
    client = _client()
    cleaned = sanitize(data)

    try:
        result = client.table(table).insert(cleaned).execute()
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to insert into {table}")

    if not result.data:
        raise HTTPException(500, f"Insert into {table} returned no row")
    return result.data[0]


def safe_update(table: str, filters: dict, data: dict) -> Optional[dict]:
    """
    UPDATE rows matching every filter.
    Returns the first updated row, or None when nothing matched.
    """
    client = _client()
    cleaned = sanitize(data)

    try:
        query = _apply_filters(client.table(table).update(cleaned), filters)
        result = query.execute()
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to update {table}")

    return result.data[0] if result.data else None


def safe_delete(table: str, filters: dict) -> Optional[dict]:
    """DELETE rows matching every filter. Returns the first deleted row or None."""
    client = _client()

    try:
        query = _apply_filters(client.table(table).delete(), filters)
        result = query.execute()
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to delete from {table}")

    return result.data[0] if result.data else None


def safe_upsert(table: str, data: dict, on_conflict: str) -> dict:
    """INSERT … ON CONFLICT (on_conflict) DO UPDATE, returning the row."""
    client = _client()
    cleaned = sanitize(data)

    try:
        result = client.table(table).upsert(cleaned, on_conflict=on_conflict).execute()
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to upsert into {table}")

    if not result.data:
        raise HTTPException(500, f"Upsert into {table} returned no row")
    return result.data[0]


# =================================================================
#  RECORD HELPERS
# =================================================================

def get_record_or_404(table: str, record_id: str, label: str) -> dict:
    row = safe_select(table, {"id": record_id}, single=True)
    if not row:
        raise not_found(label)
    return row


def update_record_or_404(table: str, record_id: str, data: dict, label: str) -> dict:
    if not data:
        return get_record_or_404(table, record_id, label)
    row = safe_update(table, {"id": record_id}, data)
    if not row:
        raise not_found(label)
    return row


def delete_record_or_404(table: str, record_id: str, label: str) -> dict:
    row = safe_delete(table, {"id": record_id})
    if not row:
        raise not_found(label)
    return row


def compare_and_set(table: str, record_id: str, expected_version: int, data: dict) -> Optional[dict]:
    """
    Conditional update: writes `data` and bumps `version` only if the row
    still carries `expected_version`. Returns None when another writer won.
    """
    payload = dict(data)
    payload["version"] = (expected_version or 0) + 1
    return safe_update(table, {"id": record_id, "version": expected_version or 0}, payload)


def select_ids(table: str, filters: dict) -> list:
    return [row["id"] for row in safe_select(table, filters)]
