"""Unit tests for season window helpers."""

import calendar
from datetime import UTC, date, datetime, timedelta

import pytest

from src.fl_common.enums import SeasonPeriod, SeasonStatus
from src.fl_social.domain.models import Season
from src.fl_social.domain.seasons import get_season_dates, get_season_progress, is_season_active


def _season(
    start: datetime,
    end: datetime,
    status: SeasonStatus = SeasonStatus.ACTIVE,
) -> Season:
    return Season(
        id="s-1",
        group_id="g-1",
        name="Test",
        period=SeasonPeriod.CUSTOM,
        start_date=start,
        end_date=end,
        status=status,
    )


class TestMonthly:
    def test_leap_february(self) -> None:
        dates = get_season_dates(SeasonPeriod.MONTHLY, date(2024, 2, 15))
        assert dates.end.day == 29
        assert dates.name == "February 2024"

    def test_non_leap_february(self) -> None:
        assert get_season_dates("monthly", date(2023, 2, 15)).end.day == 28

    @pytest.mark.parametrize(("month", "last_day"), [(1, 31), (4, 30), (7, 31), (9, 30), (12, 31)])
    def test_month_lengths(self, month: int, last_day: int) -> None:
        assert get_season_dates("monthly", date(2025, month, 10)).end.day == last_day

    def test_bounds_cover_whole_days(self) -> None:
        dates = get_season_dates("monthly", date(2025, 6, 20))
        assert dates.start == datetime(2025, 6, 1, tzinfo=UTC)
        assert dates.end == datetime(2025, 6, 30, 23, 59, 59, 999999, tzinfo=UTC)

    def test_name_ignores_locale_month_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(calendar, "month_name", ["", *(f"mes{i}" for i in range(1, 13))])
        assert get_season_dates("monthly", date(2025, 6, 20)).name == "June 2025"


class TestQuarterly:
    def test_may_is_q2(self) -> None:
        dates = get_season_dates(SeasonPeriod.QUARTERLY, date(2025, 5, 9))
        assert dates.name == "Q2 2025"
        assert dates.start.month == 4
        assert dates.end.month == 6
        assert dates.end.day == 30

    def test_q4(self) -> None:
        dates = get_season_dates("quarterly", datetime(2025, 11, 1, 8, tzinfo=UTC))
        assert dates.name == "Q4 2025"
        assert (dates.start.month, dates.end.month, dates.end.day) == (10, 12, 31)


class TestYearlyAndCustom:
    def test_yearly(self) -> None:
        dates = get_season_dates(SeasonPeriod.YEARLY, date(2024, 7, 4))
        assert dates.name == "2024"
        assert dates.start == datetime(2024, 1, 1, tzinfo=UTC)
        assert (dates.end.month, dates.end.day) == (12, 31)

    def test_custom_placeholder(self) -> None:
        dates = get_season_dates(SeasonPeriod.CUSTOM, date(2024, 2, 15))
        assert dates.name == "Custom Season"
        assert dates.end.day == 29

    def test_unknown_period(self) -> None:
        with pytest.raises(ValueError):
            get_season_dates("weekly", date(2024, 1, 1))


class TestActivityAndProgress:
    START = datetime(2025, 6, 1, tzinfo=UTC)
    END = START + timedelta(days=30)

    def test_active_inside_window(self) -> None:
        assert is_season_active(_season(self.START, self.END), now=self.START + timedelta(days=3))

    def test_inclusive_bounds(self) -> None:
        season = _season(self.START, self.END)
        assert is_season_active(season, now=self.START)
        assert is_season_active(season, now=self.END)

    def test_outside_window(self) -> None:
        assert not is_season_active(_season(self.START, self.END), now=self.END + timedelta(seconds=1))

    def test_completed_never_active(self) -> None:
        season = _season(self.START, self.END, SeasonStatus.COMPLETED)
        assert not is_season_active(season, now=self.START + timedelta(days=1))

    def test_progress_midpoint(self) -> None:
        progress = get_season_progress(_season(self.START, self.END), now=self.START + timedelta(days=15))
        assert progress == pytest.approx(50.0)

    def test_progress_clamped(self) -> None:
        season = _season(self.START, self.END)
        assert get_season_progress(season, now=self.START - timedelta(days=2)) == 0.0
        assert get_season_progress(season, now=self.END + timedelta(days=2)) == 100.0
