# core/rate_limiter.py

from typing import Dict, Tuple, Optional
from threading import Lock
import time

from fastapi import HTTPException, Request

from core.logging_config import logger


# In-memory sliding window, per process. Identifiers whose newest attempt
# has left its window are swept at most once per SWEEP_INTERVAL_SECONDS.
SWEEP_INTERVAL_SECONDS = 60

_rate_limit_store: Dict[str, list] = {}
_expires_at: Dict[str, float] = {}
_next_sweep = 0.0
_lock = Lock()


def _sweep_expired(now: float):
    global _next_sweep
    if now < _next_sweep:
        return
    for identifier in [k for k, expiry in _expires_at.items() if expiry <= now]:
        _expires_at.pop(identifier, None)
        _rate_limit_store.pop(identifier, None)
    _next_sweep = now + SWEEP_INTERVAL_SECONDS


def check_rate_limit(identifier: str, max_requests: int = 10, window_seconds: int = 60) -> Tuple[bool, int]:
    """
    Record one attempt for `identifier` and report whether it is allowed.

    Returns:
        Tuple of (allowed, remaining)
    """
    now = time.time()
    window_start = now - window_seconds

    with _lock:
        _sweep_expired(now)
        attempts = [ts for ts in _rate_limit_store.get(identifier, ()) if ts > window_start]

        if len(attempts) >= max_requests:
            _rate_limit_store[identifier] = attempts
            _expires_at[identifier] = (attempts[-1] if attempts else now) + window_seconds
            return False, 0

        attempts.append(now)
        _rate_limit_store[identifier] = attempts
        _expires_at[identifier] = now + window_seconds
        return True, max_requests - len(attempts)


def get_rate_limit_identifier(request: Request, user_key: Optional[str] = None) -> str:
    """
    Prefer an explicit key (e.g. login email); otherwise the client IP,
    honouring X-Forwarded-For behind a proxy.
    """
    if user_key:
        return f"user:{user_key}"

    client_ip = request.client.host if request.client else "unknown"
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()

    return f"ip:{client_ip}"


def require_rate_limit(
    request: Request,
    identifier: Optional[str] = None,
    max_requests: int = 10,
    window_seconds: int = 60,
) -> int:
    """
    Raises HTTPException 429 when the limit is exceeded; returns remaining attempts.
    """
    if identifier is None:
        identifier = get_rate_limit_identifier(request)

    allowed, remaining = check_rate_limit(identifier, max_requests, window_seconds)

    if not allowed:
        logger.warning(f"Rate limit exceeded for {identifier}")
        raise HTTPException(
            status_code=429,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds.",
            headers={
                "X-RateLimit-Limit": str(max_requests),
                "X-RateLimit-Window": str(window_seconds),
                "Retry-After": str(window_seconds),
            }
        )

    return remaining


def reset_rate_limits():
    global _next_sweep
    with _lock:
        _rate_limit_store.clear()
        _expires_at.clear()
        _next_sweep = 0.0
