"""Domain models for fl_bets — pure dataclasses, no business logic.

All money fields are int cents.
"""

from dataclasses import dataclass, field

from src.fl_common.enums import SideBetType


@dataclass(frozen=True)
class SideBetConfig:
    type: SideBetType
    amount: int              # cents, per occurrence (greenie/sandy) or per point (BBB)
    enabled: bool


@dataclass(frozen=True)
class GreenieResult:
    hole_number: int
    winner_id: str | None    # None = no winner (missed green, tie, not par 3)
    par: int = 3


@dataclass(frozen=True)
class SandyResult:
    hole_number: int
    player_id: str
    success: bool                    # claimed AND score <= par
    score_relative_to_par: int = 0   # 0 when the score was not tracked


@dataclass(frozen=True)
class BBBHoleResult:
    """Bingo (first on green), bango (closest once all on), bongo (first in hole)."""

    hole_number: int
    bingo: str | None = None
    bango: str | None = None
    bongo: str | None = None


@dataclass
class BBBPoints:
    player_id: str
    bingo_count: int = 0
    bango_count: int = 0
    bongo_count: int = 0
    total_points: int = 0


@dataclass(frozen=True)
class HoleSideBets:
    """Raw side-bet data for one hole, as entered on the scorecard.

    greenie: manually selected winner; when None and proximities are given,
    the winner is derived from proximities.
    """

    hole_number: int
    par: int
    scores: dict[str, int] = field(default_factory=dict)
    greenie: str | None = None
    proximities: dict[str, float | None] | None = None
    sandy_claims: dict[str, bool] = field(default_factory=dict)
    bingo: str | None = None
    bango: str | None = None
    bongo: str | None = None


@dataclass(frozen=True)
class SideBetPlayerResult:
    player_id: str
    wins: int        # greenies / sandies won, or BBB points
    amount: int      # cents, net for this side bet


@dataclass(frozen=True)
class SideBetSettlement:
    type: SideBetType
    results: list[SideBetPlayerResult]
    total_pot: int   # cents


@dataclass(frozen=True)
class NassauConfig:
    front_amount: int
    back_amount: int
    overall_amount: int
    auto_press: bool = True
    press_trigger: int = 2    # press offered when 2 down
    max_presses: int = 3


@dataclass(frozen=True)
class SkinsConfig:
    skin_value: int
    carryover: bool = True    # tied holes carry the skin forward
    validation: bool = True
