# routers/users.py

from fastapi import APIRouter, Depends, HTTPException, Request
from typing import List, Optional

from core.config import settings
from core.logging_config import logger
from core.rate_limiter import get_rate_limit_identifier, require_rate_limit
from core.security import create_access_token, hash_password, verify_password
from core.supabase_helpers import (
    delete_record_or_404,
    get_record_or_404,
    safe_delete,
    safe_insert,
    safe_select,
    update_record_or_404,
)
from dependencies.auth import CurrentUser, get_optional_auth, resolve_acting_user
from models.enums import Role
from models.user import (
    LoginRequest,
    SessionResponse,
    SignupRequest,
    UserCreate,
    UserRead,
    UserUpdate,
)
from services.session import assign_role, open_session

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
)


def _with_roles(users: list) -> list:
    """Attach each user's role from user_roles (no provisioning)."""
    if not users:
        return users
    roles = {
        r["user_id"]: r["role"]
        for r in safe_select("user_roles", in_filters={"user_id": [u["id"] for u in users]})
    }
    return [{**u, "role": roles.get(u["id"])} for u in users]


def _insert_user(payload: UserCreate) -> dict:
    if safe_select("users", {"email": payload.email}, single=True):
        raise HTTPException(400, "Email already registered")

    data = payload.model_dump(mode="json", exclude={"password", "role"})
    data["password"] = hash_password(payload.password)
    return safe_insert("users", data)


# -----------------------------------------------------
# LIST USERS
# -----------------------------------------------------
@router.get("", response_model=List[UserRead], summary="List users")
def list_users(email: Optional[str] = None):
    filters = {"email": email.strip().lower()} if email else None
    users = safe_select("users", filters, order_by="created_at", desc=True)
    return _with_roles(users)


@router.get("/{user_id}", response_model=UserRead, summary="Get user")
def get_user(user_id: str):
    return _with_roles([get_record_or_404("users", user_id, "User")])[0]


# -----------------------------------------------------
# CREATE USER (admin / back-office)
# -----------------------------------------------------
@router.post("", response_model=UserRead, status_code=201, summary="Create user")
def create_user(payload: UserCreate):
    user = _insert_user(payload)
    logger.info(f"User {user['id']} created")
    return user


# -----------------------------------------------------
# SIGNUP: profile + role row + session
# -----------------------------------------------------
@router.post("/signup", response_model=SessionResponse, status_code=201, summary="Sign up")
def signup(payload: SignupRequest):
    if payload.role == Role.admin and not settings.ALLOW_ADMIN_SIGNUP:
        raise HTTPException(403, "Admin accounts cannot be self-registered")

    user = _insert_user(payload)
    try:
        assign_role(user["id"], payload.role.value, assigned_by="signup")
    except HTTPException as e:
        logger.error(f"Signup failed for {payload.email}: {e.detail}")
        raise HTTPException(500, f"Signup failed: {e.detail}")

    session_user = open_session(user, "Signup")
    logger.info(f"User {session_user.uid} signed up as {session_user.role}")
    return SessionResponse(
        user=session_user,
        access_token=create_access_token(session_user.uid, session_user.role.value),
    )


# -----------------------------------------------------
# LOGIN
# -----------------------------------------------------
@router.post("/login", response_model=SessionResponse, summary="Authenticate user")
def login(payload: LoginRequest, request: Request):
    email = payload.email.strip().lower()

    identifier = get_rate_limit_identifier(request, user_key=email)
    require_rate_limit(request, identifier=identifier, max_requests=10, window_seconds=300)

    user = safe_select("users", {"email": email}, single=True)
    if not user or not verify_password(payload.password, user.get("password")):
        logger.warning(f"Login attempt failed for {email}")
        raise HTTPException(401, "Invalid credentials")

    session_user = open_session(user, "Login")
    return SessionResponse(
        user=session_user,
        access_token=create_access_token(session_user.uid, session_user.role.value),
    )


# -----------------------------------------------------
# UPDATE USER
# -----------------------------------------------------
@router.put("/{user_id}", response_model=UserRead, summary="Update user")
def update_user(
    user_id: str,
    payload: UserUpdate,
    current_user: Optional[CurrentUser] = Depends(get_optional_auth),
):
    resolve_acting_user(user_id, current_user)

    update_data = payload.model_dump(mode="json", exclude_unset=True)
    if update_data.get("password"):
        update_data["password"] = hash_password(update_data["password"])
    if update_data.get("email"):
        existing = safe_select("users", {"email": update_data["email"]}, single=True)
        if existing and existing["id"] != user_id:
            raise HTTPException(400, "Email already registered")

    user = update_record_or_404("users", user_id, update_data, "User")
    return _with_roles([user])[0]


# -----------------------------------------------------
# DELETE USER (role row goes with it)
# -----------------------------------------------------
@router.delete("/{user_id}", summary="Delete user")
def delete_user(user_id: str, current_user: Optional[CurrentUser] = Depends(get_optional_auth)):
    resolve_acting_user(user_id, current_user)

    delete_record_or_404("users", user_id, "User")
    safe_delete("user_roles", {"user_id": user_id})
    logger.info(f"User {user_id} deleted")
    return {"message": "User deleted"}
