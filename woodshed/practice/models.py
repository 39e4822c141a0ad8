# woodshed/practice/models.py
import logging
import math
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from ..sheets.models import HEADER_CELL, LOG_COLUMNS, EntryType


logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Entry:
    """A single practice session or gig read from the log"""

    timestamp: datetime
    category: str
    minutes: int
    notes: str = ""
    type: EntryType = EntryType.PRACTICE
    venue: str = ""

    @property
    def is_gig(self) -> bool:
        return self.type is EntryType.GIG

    def to_row(self) -> list[str]:
        """Render the entry as a sheet row in column order"""
        return [
            format_timestamp(self.timestamp),
            self.category,
            str(self.minutes),
            self.notes,
            self.type.value,
            self.venue,
        ]


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z"""
    utc_value = value.astimezone(timezone.utc)
    return utc_value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str | None) -> datetime | None:
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_minutes(value: str | int | float | None) -> int:
    """Read the leading integer of a cell, coercing anything else to 0"""
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    match = _LEADING_INT.match(value or "")
    if not match:
        return 0
    return max(int(match.group(1)), 0)


def is_header_row(row: Sequence[str]) -> bool:
    return bool(row) and str(row[0]).strip().lower() == HEADER_CELL


def parse_row(row: Sequence[str]) -> Entry | None:
    """Parse one raw sheet row, returning None when the timestamp is unusable"""
    cells = [str(cell) for cell in row] + [""] * (len(LOG_COLUMNS) - len(row))
    timestamp = parse_timestamp(cells[0])
    if timestamp is None:
        return None

    return Entry(
        timestamp=timestamp,
        category=cells[1].strip().lower(),
        minutes=parse_minutes(cells[2]),
        notes=cells[3],
        type=EntryType.parse(cells[4]),
        venue=cells[5].strip(),
    )


def parse_rows(rows: Iterable[Sequence[str]]) -> list[Entry]:
    """Turn raw sheet rows into entries, skipping the header and malformed rows"""
    rows = list(rows)
    if rows and is_header_row(rows[0]):
        rows = rows[1:]

    entries = []
    for index, row in enumerate(rows):
        entry = parse_row(row)
        if entry is None:
            logger.debug(f"Skipping row {index} with unparseable timestamp: {row[:1]}")
            continue
        entries.append(entry)
    return entries
