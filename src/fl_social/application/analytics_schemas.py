"""Pydantic schemas for the player analytics endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.fl_common.cents import signed_display
from src.fl_common.enums import MatchOutcome, StreakType
from src.fl_social.domain.analytics import get_streak_label, is_hot_streak
from src.fl_social.domain.models import (
    GameRecord,
    HeadToHeadRecord,
    HeadToHeadSummary,
    MatchResult,
    Streak,
    UserStats,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AnalyticsQuery(BaseModel):
    start_date: datetime | None = Field(None, description="Only entries created on or after")
    end_date: datetime | None = Field(None, description="Only entries created on or before")
    display_names: dict[str, str] = Field(default_factory=dict)
    # match_id -> tee time; matches not listed are dated by their first entry
    played_at: dict[str, datetime] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class StreakItem(BaseModel):
    type: StreakType
    count: int
    start_date: str | None
    label: str
    is_hot: bool

    @classmethod
    def from_domain(cls, s: Streak) -> "StreakItem":
        return cls(
            type=s.type,
            count=s.count,
            start_date=_iso(s.start_date),
            label=get_streak_label(s),
            is_hot=is_hot_streak(s),
        )


class UserStatsResponse(BaseModel):
    user_id: str
    total_matches: int
    wins: int
    losses: int
    pushes: int
    total_won_cents: int
    total_lost_cents: int
    net_lifetime_cents: int
    net_lifetime_display: str
    avg_payout_cents: float
    biggest_win_cents: int
    biggest_loss_cents: int
    win_rate: float
    current_streak: StreakItem
    longest_win_streak: int
    longest_loss_streak: int
    favorite_game: str | None
    matches_by_game: dict[str, int]
    first_match: str | None
    last_match: str | None
    active_days: int

    @classmethod
    def from_domain(cls, user_id: str, s: UserStats) -> "UserStatsResponse":
        return cls(
            user_id=user_id,
            total_matches=s.total_matches,
            wins=s.wins,
            losses=s.losses,
            pushes=s.pushes,
            total_won_cents=s.total_won,
            total_lost_cents=s.total_lost,
            net_lifetime_cents=s.net_lifetime,
            net_lifetime_display=signed_display(s.net_lifetime),
            avg_payout_cents=round(s.avg_payout, 2),
            biggest_win_cents=s.biggest_win,
            biggest_loss_cents=s.biggest_loss,
            win_rate=round(s.win_rate, 4),
            current_streak=StreakItem.from_domain(s.current_streak),
            longest_win_streak=s.longest_win_streak,
            longest_loss_streak=s.longest_loss_streak,
            favorite_game=s.favorite_game,
            matches_by_game=s.matches_by_game,
            first_match=_iso(s.first_match),
            last_match=_iso(s.last_match),
            active_days=s.active_days,
        )


class GameRecordItem(BaseModel):
    wins: int
    losses: int
    pushes: int
    net_cents: int

    @classmethod
    def from_domain(cls, g: GameRecord) -> "GameRecordItem":
        return cls(wins=g.wins, losses=g.losses, pushes=g.pushes, net_cents=g.net)


class HeadToHeadRecordItem(BaseModel):
    opponent_id: str
    opponent_name: str
    wins: int
    losses: int
    pushes: int
    total_matches: int
    net_amount_cents: int
    net_amount_display: str
    total_won_cents: int
    total_lost_cents: int
    last_played: str | None
    last_result: MatchOutcome | None
    current_streak: StreakItem
    results_by_game: dict[str, GameRecordItem]

    @classmethod
    def from_domain(cls, r: HeadToHeadRecord) -> "HeadToHeadRecordItem":
        return cls(
            opponent_id=r.opponent_id,
            opponent_name=r.opponent_name,
            wins=r.wins,
            losses=r.losses,
            pushes=r.pushes,
            total_matches=r.total_matches,
            net_amount_cents=r.net_amount,
            net_amount_display=signed_display(r.net_amount),
            total_won_cents=r.total_won,
            total_lost_cents=r.total_lost,
            last_played=_iso(r.last_played),
            last_result=r.last_result,
            current_streak=StreakItem.from_domain(r.current_streak),
            results_by_game={g: GameRecordItem.from_domain(rec) for g, rec in r.results_by_game.items()},
        )


def _item(record: HeadToHeadRecord | None) -> HeadToHeadRecordItem | None:
    return HeadToHeadRecordItem.from_domain(record) if record is not None else None


class HeadToHeadSummaryResponse(BaseModel):
    user_id: str
    records: list[HeadToHeadRecordItem]
    top_rival: HeadToHeadRecordItem | None
    biggest_debtor: HeadToHeadRecordItem | None
    biggest_creditor: HeadToHeadRecordItem | None

    @classmethod
    def from_domain(cls, user_id: str, s: HeadToHeadSummary) -> "HeadToHeadSummaryResponse":
        return cls(
            user_id=user_id,
            records=[HeadToHeadRecordItem.from_domain(r) for r in s.records],
            top_rival=_item(s.top_rival),
            biggest_debtor=_item(s.biggest_debtor),
            biggest_creditor=_item(s.biggest_creditor),
        )


class MatchResultItem(BaseModel):
    match_id: str
    played_at: str | None
    net_cents: int
    outcome: MatchOutcome
    games: list[str]

    @classmethod
    def from_domain(cls, r: MatchResult) -> "MatchResultItem":
        return cls(
            match_id=r.match_id,
            played_at=_iso(r.played_at),
            net_cents=r.net,
            outcome=r.outcome,
            games=list(r.games),
        )


class HeadToHeadDetailResponse(BaseModel):
    user_id: str
    opponent_id: str
    record: HeadToHeadRecordItem | None
    history: list[MatchResultItem]      # newest first
