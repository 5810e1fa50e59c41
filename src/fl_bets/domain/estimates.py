"""Nassau / Skins config builders and theoretical-maximum estimates.

Estimates drive UI previews only; they are never used for settlement.
"""

from dataclasses import replace
from typing import Any

from src.fl_bets.domain.models import NassauConfig, SkinsConfig
from src.fl_bets.domain.validation import validate_bet_amount


def create_nassau_config(unit_value: int, **overrides: Any) -> NassauConfig:
    """Front, back and overall all at ``unit_value`` cents; auto-press at 2 down, max 3."""
    validate_bet_amount(unit_value)
    config = NassauConfig(
        front_amount=unit_value,
        back_amount=unit_value,
        overall_amount=unit_value,
    )
    return replace(config, **overrides)


def create_skins_config(unit_value: int, **overrides: Any) -> SkinsConfig:
    validate_bet_amount(unit_value)
    return replace(SkinsConfig(skin_value=unit_value), **overrides)


# Unit values in cents
PRESET_UNITS: dict[str, int] = {
    "quarter": 25,
    "half": 50,
    "dollar": 100,
    "five_dollar": 500,
    "ten_dollar": 1000,
}


def nassau_preset(name: str, **overrides: Any) -> NassauConfig:
    return create_nassau_config(PRESET_UNITS[name], **overrides)


def skins_preset(name: str, **overrides: Any) -> SkinsConfig:
    return create_skins_config(PRESET_UNITS[name], **overrides)


def estimate_nassau_total(config: NassauConfig, num_participants: int) -> int:
    """Most one player can win: all three segments against every opponent.

    (front + back + overall) * (participants - 1); presses not included.
    """
    per_opponent = config.front_amount + config.back_amount + config.overall_amount
    return per_opponent * max(0, num_participants - 1)


def estimate_skins_total(config: SkinsConfig, num_participants: int, total_holes: int) -> int:
    """Most one player can win: every skin, each paid by every opponent."""
    return config.skin_value * total_holes * max(0, num_participants - 1)
