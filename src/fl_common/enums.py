"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class SideBetType(str, Enum):
    GREENIE = "greenie"
    SANDY = "sandy"
    BINGO_BANGO_BONGO = "bingo_bango_bongo"


class BetType(str, Enum):
    """bet_type column of ledger_entries: main bets plus side bets."""
    NASSAU = "nassau"
    SKINS = "skins"
    MATCH_PLAY = "match_play"
    STROKE_PLAY = "stroke_play"
    GREENIE = "greenie"
    SANDY = "sandy"
    BINGO_BANGO_BONGO = "bingo_bango_bongo"


class SeasonPeriod(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class SeasonStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class MatchOutcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"


class StreakType(str, Enum):
    WIN = "win"
    LOSS = "loss"
    NONE = "none"
