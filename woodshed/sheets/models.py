# woodshed/sheets/models.py
from enum import Enum
from typing import List


LOG_COLUMNS: List[str] = ["timestamp", "category", "minutes", "notes", "type", "venue"]
HEADER_CELL = "timestamp"


class EntryType(Enum):
    """Kinds of rows that can appear in the practice log"""

    PRACTICE = "practice"
    GIG = "gig"

    @classmethod
    def parse(cls, value: str | None) -> "EntryType":
        """Map a raw cell value onto an entry type, defaulting to practice"""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.PRACTICE
