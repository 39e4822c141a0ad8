import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from woodshed.api.dependencies import get_practice_log, require_bearer_token
from woodshed.practice.stats import StatsSnapshot
from woodshed.practice.tracker import MissingFieldError, PracticeLog
from woodshed.sheets.client import SheetError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/practice-log", tags=["practice log"])


class LogEntryRequest(BaseModel):
    category: str | None = None
    minutes: int | float | str | None = None
    notes: str | None = ""
    type: str | None = None
    venue: str | None = ""


class LogEntryResponse(BaseModel):
    ok: bool
    timestamp: datetime
    category: str
    minutes: int
    type: str


def _server_error(error: SheetError) -> HTTPException:
    logger.error(f"Practice log error: {error}")
    return HTTPException(status_code=500, detail={"error": "server error", "details": str(error)})


@router.get("", response_model=StatsSnapshot)
def get_practice_stats(
    tz: int = Query(default=0, ge=-840, le=840, description="Minutes west of UTC"),
    practice_log: PracticeLog = Depends(get_practice_log),
) -> StatsSnapshot:
    """Return totals, streak and calendar grid for the practice log."""
    try:
        return practice_log.get_stats(tz_offset=tz)
    except SheetError as e:
        raise _server_error(e)


@router.post("", dependencies=[Depends(require_bearer_token)])
def log_practice(
    payload: LogEntryRequest,
    practice_log: PracticeLog = Depends(get_practice_log),
) -> LogEntryResponse:
    """Append a practice session or gig to the log."""
    try:
        entry = practice_log.log_entry(
            category=payload.category,
            minutes=payload.minutes,
            notes=payload.notes,
            entry_type=payload.type,
            venue=payload.venue,
        )
    except MissingFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SheetError as e:
        raise _server_error(e)

    return LogEntryResponse(
        ok=True,
        timestamp=entry.timestamp,
        category=entry.category,
        minutes=entry.minutes,
        type=entry.type.value,
    )
