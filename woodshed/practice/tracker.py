import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional

from ..sheets.client import GoogleSheetsClient
from ..sheets.models import EntryType
from .models import Entry, parse_minutes, parse_rows
from .stats import StatsSnapshot, compute_stats

logger = logging.getLogger(__name__)


class MissingFieldError(ValueError):
    """Raised when a new log entry lacks a category or minutes"""

    pass


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PracticeLog:
    """Reads and appends practice log entries kept in a Google Sheet"""

    def __init__(
        self,
        sheets_client: GoogleSheetsClient,
        sheet_name: str = "Log",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.sheets_client = sheets_client
        self.sheet_name = sheet_name
        self.clock = clock or utc_now

    def get_entries(self) -> list[Entry]:
        """Read every valid entry from the sheet in sheet order"""
        rows = self.sheets_client.get_log_rows(self.sheet_name)
        entries = parse_rows(rows)
        logger.info(f"Read {len(entries)} entries from {len(rows)} rows in {self.sheet_name}")
        return entries

    def get_stats(self, tz_offset: int = 0, now: Optional[datetime] = None) -> StatsSnapshot:
        """Compute the dashboard snapshot for a caller at the given offset"""
        return compute_stats(self.get_entries(), tz_offset, now or self.clock())

    def log_entry(
        self,
        category: Optional[str],
        minutes: Optional[int | float | str],
        notes: Optional[str] = "",
        entry_type: Optional[str] = None,
        venue: Optional[str] = "",
        now: Optional[datetime] = None,
    ) -> Entry:
        """Validate a new session or gig and append it to the sheet"""
        category = (category or "").strip().lower()
        duration = parse_minutes(minutes) if minutes is not None else 0
        if not category or duration <= 0:
            raise MissingFieldError("category and minutes required")

        entry = Entry(
            timestamp=now or self.clock(),
            category=category,
            minutes=duration,
            notes=notes or "",
            type=EntryType.parse(entry_type),
            venue=(venue or "").strip(),
        )

        logger.info(f"Logging {entry.type.value} entry: {entry.category} - {entry.minutes} minutes")
        self.sheets_client.append_log_row(self.sheet_name, entry.to_row())
        return entry
