# services/polls.py

from fastapi import HTTPException

from core.config import settings
from core.logging_config import logger
from core.supabase_helpers import compare_and_set, get_record_or_404, safe_insert
from models.poll import PollCreate


def create_poll(payload: PollCreate, created_by: str = None) -> dict:
    return safe_insert(
        "polls",
        {
            "question": payload.question,
            "options": payload.options,
            "votes": [0] * len(payload.options),
            "voters": [],
            "created_by": created_by,
            "version": 0,
        },
    )


def cast_vote(poll_id: str, option_index: int, user_id: str) -> dict:
    """
    Count one vote for `user_id`.

    The counter increment and the voters append are written in one update
    guarded by the poll's version, so a user racing themselves cannot be
    counted twice. A lost race re-reads the poll and tries again.
    """
    for attempt in range(1, settings.CONFLICT_RETRY_ATTEMPTS + 1):
        poll = get_record_or_404("polls", poll_id, "Poll")

        voters = list(poll.get("voters") or [])
        if user_id in voters:
            raise HTTPException(400, "User already voted")

        votes = list(poll.get("votes") or [])
        if not 0 <= option_index < len(votes):
            raise HTTPException(400, f"Invalid option index {option_index}")

        votes[option_index] += 1
        voters.append(user_id)

        updated = compare_and_set(
            "polls",
            poll_id,
            poll.get("version") or 0,
            {"votes": votes, "voters": voters},
        )
        if updated:
            logger.info(f"User {user_id} voted option {option_index} on poll {poll_id}")
            return updated

        logger.info(f"Poll {poll_id} changed during vote (attempt {attempt}); retrying")

    raise HTTPException(409, "Poll is busy, please try again")
