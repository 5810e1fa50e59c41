"""Input validation for bet computations.

Every check raises a typed AppError (1xxx) so callers can surface it
synchronously; none of these are retried.
"""

from collections.abc import Sequence

from src.fl_common.errors import (
    InvalidBetAmountError,
    InvalidHoleNumberError,
    InvalidParError,
    InvalidRosterError,
    UnknownParticipantError,
)

VALID_PARS = (3, 4, 5)
MAX_HOLES = 18


def validate_bet_amount(amount: object) -> None:
    """Amounts are positive int cents; bool is rejected even though it is an int."""
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidBetAmountError(amount)


def validate_hole_number(hole_number: object, total_holes: int = MAX_HOLES) -> None:
    if (
        isinstance(hole_number, bool)
        or not isinstance(hole_number, int)
        or not 1 <= hole_number <= total_holes
    ):
        raise InvalidHoleNumberError(hole_number, total_holes)


def validate_par(par: object) -> None:
    if isinstance(par, bool) or par not in VALID_PARS:
        raise InvalidParError(par)


def validate_roster(roster: Sequence[str]) -> None:
    """Roster must hold at least one participant and no duplicates."""
    if len(roster) == 0:
        raise InvalidRosterError("at least one participant required")
    if len(set(roster)) != len(roster):
        raise InvalidRosterError("duplicate participant ids")


def validate_participant(player_id: str, roster: Sequence[str]) -> None:
    if player_id not in roster:
        raise UnknownParticipantError(player_id)
