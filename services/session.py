# services/session.py

"""
Session bootstrap: merge a user profile with its role record.

Profiles may come from older imports, so the id can arrive as `_id`, `uid`
or `id`, and the name as `name` or `displayName`. A user without a role row
is granted the default role on first login and the row is persisted, so the
next lookup finds it.
"""

from typing import Optional

from fastapi import HTTPException

from core.config import settings
from core.logging_config import logger
from core.supabase_helpers import safe_select, safe_upsert, safe_update
from core.utils import now_iso
from models.user import SessionUser


def normalize_user_id(raw: dict) -> str:
    for key in ("_id", "uid", "id"):
        value = raw.get(key)
        if value:
            return str(value)
    return ""


def get_role_record(user_id: str) -> Optional[dict]:
    return safe_select("user_roles", {"user_id": user_id}, single=True)


def assign_role(user_id: str, role: str, assigned_by: str = "system") -> dict:
    """Upsert the single role row for a user. Never touches the users table."""
    return safe_upsert(
        "user_roles",
        {
            "user_id": user_id,
            "role": role,
            "assigned_at": now_iso(),
            "assigned_by": assigned_by,
        },
        on_conflict="user_id",
    )


def resolve_role(user_id: str) -> str:
    """
    Return the user's role, provisioning the default one when missing.
    """
    record = get_role_record(user_id)
    if record:
        return record["role"]

    if not settings.AUTO_PROVISION_ROLES:
        logger.warning(f"No role found for user {user_id}; auto-provisioning disabled")
        raise HTTPException(403, "No role assigned to this account")

    logger.info(f"No role found for user {user_id}; provisioning '{settings.DEFAULT_ROLE}'")
    created = assign_role(user_id, settings.DEFAULT_ROLE, assigned_by="system")
    return created["role"]


def reconcile_session_user(raw: dict, *, last_login: Optional[str] = None) -> SessionUser:
    uid = normalize_user_id(raw)
    if not uid:
        raise HTTPException(500, "User record has no id")

    role = resolve_role(uid)

    return SessionUser(
        uid=uid,
        name=raw.get("name") or raw.get("displayName") or "",
        email=raw.get("email") or "",
        role=role,
        phone=raw.get("phone"),
        address=raw.get("address"),
        created_at=raw.get("created_at") or raw.get("createdAt"),
        last_login=last_login or raw.get("last_login") or raw.get("lastLogin"),
    )


def open_session(raw: dict, operation: str) -> SessionUser:
    """
    Reconcile the profile and stamp last_login.
    Unexpected failures surface as "<operation> failed: ..." without retry.
    """
    try:
        stamp = now_iso()
        session_user = reconcile_session_user(raw, last_login=stamp)
        safe_update("users", {"id": session_user.uid}, {"last_login": stamp})
        return session_user
    except HTTPException as e:
        if e.status_code < 500:
            raise
        logger.error(f"{operation} failed: {e.detail}")
        raise HTTPException(500, f"{operation} failed: {e.detail}")
    except Exception as e:
        logger.error(f"{operation} failed: {e}", exc_info=True)
        raise HTTPException(500, f"{operation} failed: {e}")
