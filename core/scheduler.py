# core/scheduler.py
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from core.config import settings
from core.logging_config import logger
from services.chat_rooms import evict_idle_rooms

_scheduler = None


def run_room_sweep():
    """Deletes empty chat rooms that have been idle past the TTL."""
    try:
        evicted = evict_idle_rooms()
        if evicted:
            logger.info(f"[SCHEDULER] Room sweep evicted {evicted} room(s)")
    except Exception as e:
        logger.error(f"[SCHEDULER] Room sweep failed: {e}", exc_info=True)


def start_scheduler():
    """
    Initialize the APScheduler background process.
    Runs the chat room sweep every CHAT_ROOM_SWEEP_MINUTES.
    """
    global _scheduler
    if _scheduler is not None:
        return _scheduler

    scheduler = BackgroundScheduler(timezone="UTC")

    scheduler.add_job(
        run_room_sweep,
        trigger=IntervalTrigger(minutes=settings.CHAT_ROOM_SWEEP_MINUTES),
        id="chat_room_sweep",
        replace_existing=True,
    )

    scheduler.start()
    _scheduler = scheduler
    logger.info(f"Scheduler started. Room sweep every {settings.CHAT_ROOM_SWEEP_MINUTES} min.")
    return scheduler


def shutdown_scheduler():
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
