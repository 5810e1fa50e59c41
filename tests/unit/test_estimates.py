"""Unit tests for Nassau / Skins config builders and payout estimates."""

import pytest

from src.fl_bets.domain.estimates import (
    PRESET_UNITS,
    create_nassau_config,
    create_skins_config,
    estimate_nassau_total,
    estimate_skins_total,
    nassau_preset,
    skins_preset,
)
from src.fl_common.errors import InvalidBetAmountError


class TestNassauConfig:
    def test_defaults(self) -> None:
        config = create_nassau_config(500)
        assert (config.front_amount, config.back_amount, config.overall_amount) == (500, 500, 500)
        assert config.auto_press is True
        assert config.press_trigger == 2
        assert config.max_presses == 3

    def test_overrides(self) -> None:
        config = create_nassau_config(500, overall_amount=1000, auto_press=False)
        assert config.overall_amount == 1000
        assert config.auto_press is False

    def test_rejects_zero(self) -> None:
        with pytest.raises(InvalidBetAmountError):
            create_nassau_config(0)

    def test_preset(self) -> None:
        assert nassau_preset("dollar").front_amount == PRESET_UNITS["dollar"] == 100


class TestSkinsConfig:
    def test_defaults(self) -> None:
        config = create_skins_config(100)
        assert config.skin_value == 100
        assert config.carryover is True
        assert config.validation is True

    def test_preset_with_override(self) -> None:
        config = skins_preset("quarter", carryover=False)
        assert config.skin_value == 25
        assert config.carryover is False

    def test_unknown_preset(self) -> None:
        with pytest.raises(KeyError):
            skins_preset("million")


class TestEstimates:
    def test_nassau_four_players(self) -> None:
        assert estimate_nassau_total(create_nassau_config(500), 4) == 4500

    def test_skins_eighteen_holes(self) -> None:
        assert estimate_skins_total(create_skins_config(100), 4, 18) == 5400

    def test_skins_nine_holes(self) -> None:
        assert estimate_skins_total(create_skins_config(100), 2, 9) == 900

    def test_solo_round_pays_nothing(self) -> None:
        assert estimate_nassau_total(create_nassau_config(500), 1) == 0
        assert estimate_skins_total(create_skins_config(100), 1, 18) == 0
