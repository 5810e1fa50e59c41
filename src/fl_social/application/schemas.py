"""Pydantic schemas for fl_social API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.fl_common.cents import signed_display
from src.fl_common.enums import SeasonPeriod, SeasonStatus, TrendDirection
from src.fl_social.domain.leaderboard import format_rank_change, format_win_loss, get_rank_label
from src.fl_social.domain.models import Season, SeasonStanding
from src.fl_social.domain.seasons import get_season_progress, is_season_active

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateSeasonRequest(BaseModel):
    period: SeasonPeriod = SeasonPeriod.MONTHLY
    reference_date: datetime | None = Field(None, description="Anchor for calendar periods; default now")
    # custom periods only
    start_date: datetime | None = None
    end_date: datetime | None = None
    name: str | None = Field(None, min_length=1, max_length=100)


class CurrentSeasonRequest(BaseModel):
    period: SeasonPeriod = SeasonPeriod.MONTHLY


class RecomputeStandingsRequest(BaseModel):
    member_ids: list[str] = Field(..., min_length=1)
    display_names: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class SeasonStandingItem(BaseModel):
    player_id: str
    display_name: str
    rank: int
    rank_label: str
    net_amount_cents: int
    net_amount_display: str
    matches_played: int
    wins: int
    losses: int
    pushes: int
    record: str
    trend: TrendDirection
    trend_arrow: str

    @classmethod
    def from_domain(cls, s: SeasonStanding) -> "SeasonStandingItem":
        return cls(
            player_id=s.player_id,
            display_name=s.display_name,
            rank=s.rank,
            rank_label=get_rank_label(s.rank),
            net_amount_cents=s.net_amount,
            net_amount_display=signed_display(s.net_amount),
            matches_played=s.matches_played,
            wins=s.wins,
            losses=s.losses,
            pushes=s.pushes,
            record=format_win_loss(s),
            trend=s.trend,
            trend_arrow=format_rank_change(s),
        )


class SeasonResponse(BaseModel):
    id: str
    group_id: str
    name: str
    period: SeasonPeriod
    start_date: str          # ISO8601
    end_date: str
    status: SeasonStatus
    is_active: bool
    progress_pct: float
    standings: list[SeasonStandingItem]

    @classmethod
    def from_domain(cls, season: Season, now: datetime | None = None) -> "SeasonResponse":
        return cls(
            id=season.id,
            group_id=season.group_id,
            name=season.name,
            period=season.period,
            start_date=season.start_date.isoformat(),
            end_date=season.end_date.isoformat(),
            status=season.status,
            is_active=is_season_active(season, now),
            progress_pct=round(get_season_progress(season, now), 1),
            standings=[SeasonStandingItem.from_domain(s) for s in season.standings],
        )


class SeasonListResponse(BaseModel):
    group_id: str
    seasons: list[SeasonResponse]
