"""Season windows: calendar boundaries, activity and progress.

All boundaries are UTC. A season runs from 00:00 on its first day to the
last microsecond of its last day, both ends inclusive.
"""

import calendar
from datetime import date, datetime, time, timezone

from src.fl_common.datetime_utils import as_utc, utc_now
from src.fl_common.enums import SeasonPeriod, SeasonStatus
from src.fl_social.domain.models import Season, SeasonDates

CUSTOM_SEASON_NAME = "Custom Season"

# Fixed English names; calendar.month_name follows the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _month_span(year: int, first_month: int, last_month: int) -> tuple[datetime, datetime]:
    last_day = calendar.monthrange(year, last_month)[1]
    start = datetime(year, first_month, 1, tzinfo=timezone.utc)
    end = datetime.combine(date(year, last_month, last_day), time.max, tzinfo=timezone.utc)
    return start, end


def get_season_dates(
    period: SeasonPeriod | str,
    reference_date: date | datetime | None = None,
) -> SeasonDates:
    """Calendar window of ``period`` containing ``reference_date`` (default: now).

    ``custom`` has no calendar meaning; it yields the reference month under
    a placeholder name, and callers are expected to supply real bounds.
    """
    period = SeasonPeriod(period)
    ref = as_utc(reference_date) if reference_date is not None else utc_now()
    year, month = ref.year, ref.month

    if period is SeasonPeriod.QUARTERLY:
        quarter = (month - 1) // 3
        start, end = _month_span(year, quarter * 3 + 1, quarter * 3 + 3)
        return SeasonDates(start=start, end=end, name=f"Q{quarter + 1} {year}")

    if period is SeasonPeriod.YEARLY:
        start, end = _month_span(year, 1, 12)
        return SeasonDates(start=start, end=end, name=str(year))

    start, end = _month_span(year, month, month)
    if period is SeasonPeriod.CUSTOM:
        return SeasonDates(start=start, end=end, name=CUSTOM_SEASON_NAME)
    return SeasonDates(start=start, end=end, name=f"{MONTH_NAMES[month - 1]} {year}")


def is_season_active(season: Season, now: datetime | None = None) -> bool:
    now = as_utc(now) if now is not None else utc_now()
    return (
        season.status == SeasonStatus.ACTIVE
        and season.start_date <= now <= season.end_date
    )


def get_season_progress(season: Season, now: datetime | None = None) -> float:
    """Elapsed share of the season as a percentage, clamped to [0, 100]."""
    now = as_utc(now) if now is not None else utc_now()
    total = (season.end_date - season.start_date).total_seconds()
    if total <= 0:
        return 100.0 if now >= season.end_date else 0.0
    elapsed = (now - season.start_date).total_seconds()
    return min(100.0, max(0.0, elapsed / total * 100))
