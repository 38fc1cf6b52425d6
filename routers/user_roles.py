# routers/user_roles.py

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from core.logging_config import logger
from core.permission_helpers import is_admin
from core.supabase_helpers import safe_select
from dependencies.auth import CurrentUser, get_optional_auth, requires_admin
from models.user_role import RoleMigrationResult, UserRoleRead, UserRoleUpsert
from services.role_migration import migrate_user_roles
from services.session import assign_role, get_role_record

router = APIRouter(
    prefix="/api/user-roles",
    tags=["User Roles"],
)


@router.get("", response_model=List[UserRoleRead], summary="List role assignments")
def list_roles():
    return safe_select("user_roles", order_by="assigned_at", desc=True)


@router.get("/{user_id}", response_model=UserRoleRead, summary="Get a user's role")
def get_role(user_id: str):
    record = get_role_record(user_id)
    if not record:
        raise HTTPException(404, "Role not found")
    return record


@router.post("", response_model=UserRoleRead, summary="Assign or change a role (upsert)")
def upsert_role(
    payload: UserRoleUpsert,
    current_user: Optional[CurrentUser] = Depends(get_optional_auth),
):
    # With a session, only admins may change roles
    if current_user and not is_admin(current_user):
        raise HTTPException(403, "Admin role required")

    assigned_by = current_user.id if current_user else (payload.assigned_by or "admin")
    record = assign_role(payload.user_id, payload.role.value, assigned_by=assigned_by)
    logger.info(f"Role for {payload.user_id} set to {payload.role} by {assigned_by}")
    return record


@router.post(
    "/migrate",
    response_model=RoleMigrationResult,
    summary="Copy legacy users.role values into user_roles",
)
def migrate_roles(
    remove_from_users: bool = Query(True, description="Clear the legacy column after copying"),
    current_user: CurrentUser = Depends(requires_admin),
):
    logger.info(f"Role migration started by {current_user.id}")
    return migrate_user_roles(remove_from_users=remove_from_users)
