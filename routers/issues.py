# routers/issues.py

from fastapi import APIRouter, Depends
from typing import List, Optional

from core.logging_config import logger
from core.supabase_helpers import (
    delete_record_or_404,
    get_record_or_404,
    safe_insert,
    update_record_or_404,
)
from core.utils import now_iso
from dependencies.auth import CurrentUser, requires_permission, resolve_acting_user
from models.enums import IssueStatus
from models.issue import IssueCreate, IssueRead, IssueUpdate
from services.bookings import list_scoped

router = APIRouter(
    prefix="/api/issues",
    tags=["Issues"],
)


@router.get("", response_model=List[IssueRead], summary="List maintenance issues")
def list_issues(
    tenant_id: Optional[str] = None,
    property_id: Optional[str] = None,
    owner_id: Optional[str] = None,
    status: Optional[IssueStatus] = None,
):
    return list_scoped("issues", tenant_id, property_id, owner_id, status=status.value if status else None)


@router.get("/{issue_id}", response_model=IssueRead, summary="Get issue")
def get_issue(issue_id: str):
    return get_record_or_404("issues", issue_id, "Issue")


@router.post("", response_model=IssueRead, status_code=201, summary="Report an issue")
def create_issue(
    payload: IssueCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("issues:write")),
):
    resolve_acting_user(payload.tenant_id, current_user)

    issue = safe_insert("issues", payload.model_dump(mode="json"))
    logger.info(f"Issue {issue['id']} reported on property {payload.property_id} ({payload.priority})")
    return issue


@router.put("/{issue_id}", response_model=IssueRead, summary="Update issue")
def update_issue(
    issue_id: str,
    payload: IssueUpdate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("issues:write")),
):
    update_data = payload.model_dump(mode="json", exclude_unset=True)
    if update_data:
        update_data["updated_at"] = now_iso()
    return update_record_or_404("issues", issue_id, update_data, "Issue")


@router.delete("/{issue_id}", summary="Delete issue")
def delete_issue(
    issue_id: str,
    current_user: Optional[CurrentUser] = Depends(requires_permission("issues:write")),
):
    delete_record_or_404("issues", issue_id, "Issue")
    return {"message": "Issue deleted"}
