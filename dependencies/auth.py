from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import BaseModel

from core.config import settings
from core.logging_config import logger
from core.permissions import ROLE_PERMISSIONS
from core.permission_helpers import has_permission, is_admin
from core.security import decode_access_token


bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# Current User Model (identity carried by the session token)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    role: str


def _unauthorized(detail: str = "Invalid or expired authentication token") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode(credentials: HTTPAuthorizationCredentials) -> CurrentUser:
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise _unauthorized()

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or role not in ROLE_PERMISSIONS:
        raise _unauthorized()

    return CurrentUser(id=user_id, role=role)


# ============================================================
# STRICT AUTH: token required
# ============================================================
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    if not credentials:
        raise _unauthorized("Not authenticated")
    return _decode(credentials)


# ============================================================
# OPTIONAL AUTH: legacy open endpoints
# ============================================================
def get_optional_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CurrentUser]:
    """
    Returns CurrentUser if a token was sent, None otherwise.
    A token that is sent must be valid. With REQUIRE_AUTH the token is mandatory.
    """
    if not credentials:
        if settings.REQUIRE_AUTH:
            raise _unauthorized("Not authenticated")
        return None
    return _decode(credentials)


# ============================================================
# PERMISSION CHECK
# ============================================================
def requires_permission(permission: str):
    """
    Usage:
        @router.post("", dependencies=[Depends(requires_permission("polls:write"))])

    Anonymous callers pass only while REQUIRE_AUTH is off.
    """

    def dependency(current_user: Optional[CurrentUser] = Depends(get_optional_auth)):
        if current_user and not has_permission(current_user.role, permission):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{permission}' required"
            )
        return current_user

    return dependency


def requires_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Admin-only routes always require a token."""
    if not is_admin(current_user):
        raise HTTPException(status_code=403, detail="Admin role required")
    return current_user


# ============================================================
# ACTING USER: reconcile a body-asserted uid with the token
# ============================================================
def resolve_acting_user(asserted_id: Optional[str], current_user: Optional[CurrentUser]) -> str:
    """
    Decide which uid an action is performed as.

    - token present: the asserted uid must match it (admins may act for others)
    - no token: the asserted uid is trusted (legacy open API)
    """
    if current_user:
        if asserted_id and asserted_id != current_user.id and not is_admin(current_user):
            logger.warning(f"User {current_user.id} tried to act as {asserted_id}")
            raise HTTPException(403, "Cannot act on behalf of another user")
        return asserted_id or current_user.id

    if not asserted_id:
        raise HTTPException(400, "userId is required")
    return asserted_id
