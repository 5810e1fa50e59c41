"""Greenie — closest to the pin on a par 3.

Rules:
  1. Only par 3s are eligible.
  2. The player whose tee shot finishes closest to the pin wins.
  3. Nobody on the green (no valid proximity) → no winner.
  4. Two or more players tied at the minimum distance → no winner.
"""

from collections.abc import Mapping, Sequence

from src.fl_bets.domain.models import GreenieResult, SideBetConfig
from src.fl_bets.domain.payouts import fan_out
from src.fl_bets.domain.validation import (
    validate_bet_amount,
    validate_hole_number,
    validate_par,
    validate_participant,
    validate_roster,
)


def is_greenie_eligible(par: int) -> bool:
    return par == 3


def closest_to_pin(proximities: Mapping[str, float | None] | None) -> str | None:
    """Player with the strictly smallest distance, or None.

    A None or negative distance means the player missed the green.
    A tie at the minimum distance has no winner.
    """
    if not proximities:
        return None
    on_green = sorted(
        ((player_id, distance) for player_id, distance in proximities.items()
         if distance is not None and distance >= 0),
        key=lambda item: item[1],
    )
    if not on_green:
        return None
    if len(on_green) > 1 and on_green[0][1] == on_green[1][1]:
        return None
    return on_green[0][0]


def determine_greenie_winner(
    hole_number: int,
    par: int,
    proximities: Mapping[str, float | None] | None = None,
) -> GreenieResult:
    """Pick the greenie winner from tee-shot distances (feet from the pin)."""
    validate_hole_number(hole_number)
    validate_par(par)
    if not is_greenie_eligible(par):
        return GreenieResult(hole_number=hole_number, winner_id=None)
    return GreenieResult(hole_number=hole_number, winner_id=closest_to_pin(proximities))


def create_greenie_result(hole_number: int, winner_id: str | None) -> GreenieResult:
    """Manually selected winner. Only ever called for par-3 holes."""
    validate_hole_number(hole_number)
    return GreenieResult(hole_number=hole_number, winner_id=winner_id, par=3)


def settle_greenies(
    results: Sequence[GreenieResult],
    config: SideBetConfig,
    roster: Sequence[str],
) -> dict[str, int]:
    """Net payout per roster member (positive = won, negative = owes).

    4 players, $5 greenies: one greenie = +$15 for the winner, -$5 for each other.
    """
    validate_roster(roster)
    validate_bet_amount(config.amount)
    winners = [r.winner_id for r in results if r.winner_id is not None]
    for winner_id in winners:
        validate_participant(winner_id, roster)
    return fan_out(winners, config.amount, roster)


def get_par3_holes(pars: Sequence[int]) -> list[int]:
    """1-indexed hole numbers of the par 3s, in course order."""
    return [index + 1 for index, par in enumerate(pars) if par == 3]


def count_greenies(results: Sequence[GreenieResult], player_id: str) -> int:
    return sum(1 for r in results if r.winner_id == player_id)


def get_total_greenies(pars: Sequence[int]) -> int:
    """Greenies available in a round (one per par 3)."""
    return len(get_par3_holes(pars))
