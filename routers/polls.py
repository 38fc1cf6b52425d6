# routers/polls.py

from fastapi import APIRouter, Depends
from typing import List, Optional

from core.logging_config import logger
from core.supabase_helpers import delete_record_or_404, safe_select
from dependencies.auth import CurrentUser, get_optional_auth, requires_permission, resolve_acting_user
from models.poll import PollCreate, PollRead, VoteRequest
from services.polls import cast_vote, create_poll

router = APIRouter(
    prefix="/api/polls",
    tags=["Polls"],
)


@router.get("", response_model=List[PollRead], summary="List polls (newest first)")
def list_polls():
    return safe_select("polls", order_by="created_at", desc=True)


@router.post("", response_model=PollRead, status_code=201, summary="Create a poll")
def create_poll_route(
    payload: PollCreate,
    current_user: Optional[CurrentUser] = Depends(requires_permission("polls:write")),
):
    poll = create_poll(payload, created_by=current_user.id if current_user else None)
    logger.info(f"Poll {poll['id']} created with {len(payload.options)} options")
    return poll


@router.post("/{poll_id}/vote", response_model=PollRead, summary="Vote on a poll (once per user)")
def vote(
    poll_id: str,
    payload: VoteRequest,
    current_user: Optional[CurrentUser] = Depends(get_optional_auth),
):
    user_id = resolve_acting_user(payload.user_id, current_user)
    return cast_vote(poll_id, payload.option_index, user_id)


@router.delete("/{poll_id}", summary="Delete a poll")
def delete_poll(
    poll_id: str,
    current_user: Optional[CurrentUser] = Depends(requires_permission("polls:write")),
):
    delete_record_or_404("polls", poll_id, "Poll")
    return {"message": "Poll deleted"}
