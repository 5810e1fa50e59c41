"""Sandy — up and down from a bunker for par or better.

A sandy claim only counts when the player's score on the hole is at or
under par. Failed attempts are kept for history and skipped at settlement.
"""

from collections.abc import Sequence

from src.fl_bets.domain.models import SandyResult, SideBetConfig
from src.fl_bets.domain.payouts import fan_out
from src.fl_bets.domain.validation import (
    validate_bet_amount,
    validate_hole_number,
    validate_par,
    validate_participant,
    validate_roster,
)


def validate_sandy(claimed: bool, par: int, score: int) -> bool:
    return claimed is True and score <= par


def record_sandy(
    hole_number: int,
    player_id: str,
    claimed: bool,
    par: int,
    score: int,
) -> SandyResult:
    validate_hole_number(hole_number)
    validate_par(par)
    return SandyResult(
        hole_number=hole_number,
        player_id=player_id,
        success=validate_sandy(claimed, par, score),
        score_relative_to_par=score - par,
    )


def create_sandy_result(hole_number: int, player_id: str, success: bool) -> SandyResult:
    """Manual entry when the hole score is not tracked; delta defaults to 0."""
    validate_hole_number(hole_number)
    return SandyResult(hole_number=hole_number, player_id=player_id, success=success)


def settle_sandies(
    results: Sequence[SandyResult],
    config: SideBetConfig,
    roster: Sequence[str],
) -> dict[str, int]:
    """Same fan-out as greenies, counting successful sandies only."""
    validate_roster(roster)
    validate_bet_amount(config.amount)
    winners = [r.player_id for r in get_successful_sandies(results)]
    for player_id in winners:
        validate_participant(player_id, roster)
    return fan_out(winners, config.amount, roster)


def count_sandies(results: Sequence[SandyResult], player_id: str) -> int:
    return sum(1 for r in results if r.player_id == player_id and r.success)


def get_hole_sandies(results: Sequence[SandyResult], hole_number: int) -> list[SandyResult]:
    return [r for r in results if r.hole_number == hole_number]


def get_successful_sandies(results: Sequence[SandyResult]) -> list[SandyResult]:
    return [r for r in results if r.success]


def hole_sandy_made(results: Sequence[SandyResult], hole_number: int) -> bool:
    return any(r.hole_number == hole_number and r.success for r in results)
