"""Domain models for fl_social — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime

from src.fl_common.enums import MatchOutcome, SeasonPeriod, SeasonStatus, StreakType, TrendDirection


@dataclass(frozen=True)
class SeasonDates:
    start: datetime                  # UTC, 00:00:00 on the first day
    end: datetime                    # UTC, 23:59:59.999999 on the last day
    name: str


@dataclass
class SeasonStanding:
    player_id: str
    display_name: str
    net_amount: int = 0              # cents
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    rank: int = 0
    trend: TrendDirection = TrendDirection.NEUTRAL


@dataclass
class Season:
    """A date-bounded window over which group standings are computed.

    Standings are a cached derivation of the ledger, rewritten on every
    recompute.
    """

    id: str
    group_id: str
    name: str
    period: SeasonPeriod
    start_date: datetime
    end_date: datetime
    status: SeasonStatus = SeasonStatus.ACTIVE
    standings: list[SeasonStanding] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Analytics (derived on demand from ledger entries, never stored)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MatchResult:
    """One player's net outcome in one match."""

    match_id: str
    played_at: datetime | None
    net: int                         # cents; > 0 won, < 0 lost, 0 push
    games: tuple[str, ...] = ()      # bet types that produced entries
    opponent_ids: tuple[str, ...] = ()

    @property
    def outcome(self) -> MatchOutcome:
        if self.net > 0:
            return MatchOutcome.WIN
        if self.net < 0:
            return MatchOutcome.LOSS
        return MatchOutcome.PUSH


@dataclass(frozen=True)
class Streak:
    type: StreakType = StreakType.NONE
    count: int = 0
    start_date: datetime | None = None


@dataclass(frozen=True)
class StreakSummary:
    current: Streak
    longest_win: int
    longest_loss: int


@dataclass
class UserStats:
    total_matches: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    total_won: int = 0               # cents, sum of winning match nets
    total_lost: int = 0              # cents, magnitude of losing match nets
    net_lifetime: int = 0
    avg_payout: float = 0.0          # cents per match
    biggest_win: int = 0
    biggest_loss: int = 0
    win_rate: float = 0.0            # wins / (wins + losses); pushes excluded
    current_streak: Streak = field(default_factory=Streak)
    longest_win_streak: int = 0
    longest_loss_streak: int = 0
    favorite_game: str | None = None
    matches_by_game: dict[str, int] = field(default_factory=dict)
    first_match: datetime | None = None
    last_match: datetime | None = None
    active_days: int = 0


@dataclass
class GameRecord:
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    net: int = 0


@dataclass
class HeadToHeadRecord:
    opponent_id: str
    opponent_name: str
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    total_matches: int = 0
    net_amount: int = 0              # cents; positive = opponent owes the player overall
    total_won: int = 0
    total_lost: int = 0
    last_played: datetime | None = None
    last_result: MatchOutcome | None = None
    current_streak: Streak = field(default_factory=Streak)
    results_by_game: dict[str, GameRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class HeadToHeadSummary:
    records: list[HeadToHeadRecord]
    top_rival: HeadToHeadRecord | None
    biggest_debtor: HeadToHeadRecord | None
    biggest_creditor: HeadToHeadRecord | None
