"""Unit tests for bet input validation helpers."""

import pytest

from src.fl_bets.domain.validation import (
    validate_bet_amount,
    validate_hole_number,
    validate_par,
    validate_participant,
    validate_roster,
)
from src.fl_common.errors import (
    InvalidBetAmountError,
    InvalidHoleNumberError,
    InvalidParError,
    InvalidRosterError,
    UnknownParticipantError,
)


class TestBetAmount:
    def test_positive_int_ok(self) -> None:
        validate_bet_amount(500)

    @pytest.mark.parametrize("amount", [0, -100, 2.5, "500", None, True])
    def test_rejects(self, amount: object) -> None:
        with pytest.raises(InvalidBetAmountError):
            validate_bet_amount(amount)


class TestHoleNumber:
    @pytest.mark.parametrize("hole", [1, 9, 18])
    def test_in_range(self, hole: int) -> None:
        validate_hole_number(hole)

    @pytest.mark.parametrize("hole", [0, 19, -1, 3.0, False])
    def test_out_of_range(self, hole: object) -> None:
        with pytest.raises(InvalidHoleNumberError):
            validate_hole_number(hole)

    def test_nine_hole_round(self) -> None:
        with pytest.raises(InvalidHoleNumberError):
            validate_hole_number(10, total_holes=9)


class TestPar:
    @pytest.mark.parametrize("par", [3, 4, 5])
    def test_valid(self, par: int) -> None:
        validate_par(par)

    @pytest.mark.parametrize("par", [2, 6, 0, True])
    def test_invalid(self, par: object) -> None:
        with pytest.raises(InvalidParError):
            validate_par(par)


class TestRoster:
    def test_empty(self) -> None:
        with pytest.raises(InvalidRosterError):
            validate_roster([])

    def test_duplicates(self) -> None:
        with pytest.raises(InvalidRosterError):
            validate_roster(["a", "b", "a"])

    def test_single_player_ok(self) -> None:
        validate_roster(["a"])

    def test_unknown_participant(self) -> None:
        with pytest.raises(UnknownParticipantError):
            validate_participant("z", ["a", "b"])
