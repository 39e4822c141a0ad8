"""Statistics over the practice log.

Everything here is a pure function of the entries, the caller's timezone
offset and the current instant. The offset follows the browser's
``Date.getTimezoneOffset()`` convention: minutes *west* of UTC, so UTC+12 is
``-720``. Calendar arithmetic (midnight, Monday, first of month) is done on a
shifted "local" datetime and the resulting boundaries are shifted back to UTC
before being compared against stored timestamps.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .models import Entry


DAY_LABELS = "MTWTFSS"
GRID_WEEKS = 52
ROLLING_WEEKS = 4
RECENT_GIGS_LIMIT = 10
FUTURE_INTENSITY = -1


class SnapshotModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoggedEntry(SnapshotModel):
    timestamp: datetime
    category: str
    minutes: int
    notes: str
    type: str
    venue: str

    @classmethod
    def from_entry(cls, entry: Entry) -> "LoggedEntry":
        return cls(
            timestamp=entry.timestamp,
            category=entry.category,
            minutes=entry.minutes,
            notes=entry.notes,
            type=entry.type.value,
            venue=entry.venue,
        )


class TodaySummary(SnapshotModel):
    total_minutes: int
    practice_minutes: int
    entries: list[LoggedEntry]


class WeekDay(SnapshotModel):
    date: str
    label: str
    minutes: int
    intensity: int
    has_gig: bool
    is_future: bool
    is_today: bool


class WeekSummary(SnapshotModel):
    start: datetime
    total_minutes: int
    practice_minutes: int
    by_category: dict[str, int]
    top_category: str | None
    days: list[WeekDay]


class MonthSummary(SnapshotModel):
    start: datetime
    total_minutes: int
    practice_minutes: int
    by_category: dict[str, int]


class YearSummary(SnapshotModel):
    start: datetime
    total_minutes: int
    practice_minutes: int
    gig_count: int


class GridCell(SnapshotModel):
    date: str
    minutes: int
    intensity: int
    has_gig: bool


class StatsSnapshot(SnapshotModel):
    today: TodaySummary
    week: WeekSummary
    month: MonthSummary
    year: YearSummary
    weekly_average_hours: float
    streak: int
    grid: list[GridCell]
    by_category: dict[str, int]
    last_practice: LoggedEntry | None
    last_gig: LoggedEntry | None
    recent_gigs: list[LoggedEntry]
    total_gigs: int
    total_entries: int


@dataclass(frozen=True)
class Windows:
    """UTC instants at which each reporting window opens"""

    day_start: datetime
    week_start: datetime
    month_start: datetime
    year_start: datetime

    @property
    def rolling_start(self) -> datetime:
        return self.week_start - timedelta(weeks=ROLLING_WEEKS)


@dataclass
class _Tally:
    total_minutes: int = 0
    practice_minutes: int = 0
    gig_count: int = 0
    by_category: dict[str, int] = field(default_factory=dict)

    def add(self, entry: Entry) -> None:
        self.total_minutes += entry.minutes
        if entry.is_gig:
            self.gig_count += 1
            return
        self.practice_minutes += entry.minutes
        self.by_category[entry.category] = self.by_category.get(entry.category, 0) + entry.minutes


def get_intensity(minutes: int) -> int:
    """Band a day's total minutes into the 0-4 heatmap scale"""
    if minutes <= 0:
        return 0
    if minutes < 15:
        return 1
    if minutes < 30:
        return 2
    if minutes < 60:
        return 3
    return 4


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def to_local(instant: datetime, tz_offset: int) -> datetime:
    return _as_utc(instant) - timedelta(minutes=tz_offset)


def from_local(local: datetime, tz_offset: int) -> datetime:
    return local + timedelta(minutes=tz_offset)


def local_date(instant: datetime, tz_offset: int) -> date:
    return to_local(instant, tz_offset).date()


def window_starts(now: datetime, tz_offset: int) -> Windows:
    """Compute day/week/month/year boundaries for the caller's wall clock"""
    local_midnight = to_local(now, tz_offset).replace(hour=0, minute=0, second=0, microsecond=0)
    local_monday = local_midnight - timedelta(days=local_midnight.weekday())

    return Windows(
        day_start=from_local(local_midnight, tz_offset),
        week_start=from_local(local_monday, tz_offset),
        month_start=from_local(local_midnight.replace(day=1), tz_offset),
        year_start=from_local(local_midnight.replace(month=1, day=1), tz_offset),
    )


def compute_streak(entries: Iterable[Entry], tz_offset: int, now: datetime) -> int:
    """Count consecutive local days with at least one entry, ending today or yesterday"""
    now = _as_utc(now)
    days = sorted(
        {local_date(entry.timestamp, tz_offset) for entry in entries if entry.timestamp <= now},
        reverse=True,
    )
    if not days:
        return 0

    today = local_date(now, tz_offset)
    if days[0] not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    for previous, current in zip(days, days[1:]):
        if previous - current != timedelta(days=1):
            break
        streak += 1
    return streak


def _top_category(by_category: dict[str, int]) -> str | None:
    # Ties go to the alphabetically first category
    if not by_category:
        return None
    return min(by_category.items(), key=lambda item: (-item[1], item[0]))[0]


def _week_days(
    week_start: date, today: date, daily_minutes: dict[date, int], gig_days: set[date]
) -> list[WeekDay]:
    days = []
    for offset, label in enumerate(DAY_LABELS):
        day = week_start + timedelta(days=offset)
        minutes = daily_minutes.get(day, 0)
        days.append(
            WeekDay(
                date=day.isoformat(),
                label=label,
                minutes=minutes,
                intensity=get_intensity(minutes),
                has_gig=day in gig_days,
                is_future=day > today,
                is_today=day == today,
            )
        )
    return days


def _contribution_grid(today: date, daily_minutes: dict[date, int], gig_days: set[date]) -> list[GridCell]:
    new_year = date(today.year, 1, 1)
    grid_start = new_year - timedelta(days=new_year.weekday())

    cells = []
    for offset in range(GRID_WEEKS * 7):
        day = grid_start + timedelta(days=offset)
        if day > today:
            cells.append(GridCell(date=day.isoformat(), minutes=0, intensity=FUTURE_INTENSITY, has_gig=False))
            continue
        minutes = daily_minutes.get(day, 0)
        cells.append(
            GridCell(
                date=day.isoformat(),
                minutes=minutes,
                intensity=get_intensity(minutes),
                has_gig=day in gig_days,
            )
        )
    return cells


def compute_stats(entries: Iterable[Entry], tz_offset: int, now: datetime) -> StatsSnapshot:
    """Build the dashboard snapshot for the given entries as seen at ``now``"""
    now = _as_utc(now)
    windows = window_starts(now, tz_offset)
    today = local_date(now, tz_offset)

    # Entries stamped after now are ignored everywhere
    ordered = sorted(
        (entry for entry in entries if entry.timestamp <= now),
        key=lambda entry: entry.timestamp,
        reverse=True,
    )

    all_time, year, month, week, day, rolling = (_Tally() for _ in range(6))
    daily_minutes: dict[date, int] = {}
    gig_days: set[date] = set()

    for entry in ordered:
        entry_day = local_date(entry.timestamp, tz_offset)
        daily_minutes[entry_day] = daily_minutes.get(entry_day, 0) + entry.minutes
        if entry.is_gig:
            gig_days.add(entry_day)

        all_time.add(entry)
        if windows.rolling_start <= entry.timestamp < windows.week_start:
            rolling.add(entry)
        for tally, start in (
            (year, windows.year_start),
            (month, windows.month_start),
            (week, windows.week_start),
            (day, windows.day_start),
        ):
            if entry.timestamp >= start:
                tally.add(entry)

    gigs = [entry for entry in ordered if entry.is_gig]
    last_practice = next((entry for entry in ordered if not entry.is_gig), None)

    return StatsSnapshot(
        today=TodaySummary(
            total_minutes=day.total_minutes,
            practice_minutes=day.practice_minutes,
            entries=[LoggedEntry.from_entry(e) for e in ordered if e.timestamp >= windows.day_start],
        ),
        week=WeekSummary(
            start=windows.week_start,
            total_minutes=week.total_minutes,
            practice_minutes=week.practice_minutes,
            by_category=week.by_category,
            top_category=_top_category(week.by_category),
            days=_week_days(local_date(windows.week_start, tz_offset), today, daily_minutes, gig_days),
        ),
        month=MonthSummary(
            start=windows.month_start,
            total_minutes=month.total_minutes,
            practice_minutes=month.practice_minutes,
            by_category=month.by_category,
        ),
        year=YearSummary(
            start=windows.year_start,
            total_minutes=year.total_minutes,
            practice_minutes=year.practice_minutes,
            gig_count=year.gig_count,
        ),
        weekly_average_hours=round(rolling.total_minutes / ROLLING_WEEKS / 60, 1),
        streak=compute_streak(ordered, tz_offset, now),
        grid=_contribution_grid(today, daily_minutes, gig_days),
        by_category=all_time.by_category,
        last_practice=LoggedEntry.from_entry(last_practice) if last_practice else None,
        last_gig=LoggedEntry.from_entry(gigs[0]) if gigs else None,
        recent_gigs=[LoggedEntry.from_entry(gig) for gig in gigs[:RECENT_GIGS_LIMIT]],
        total_gigs=all_time.gig_count,
        total_entries=len(ordered),
    )
