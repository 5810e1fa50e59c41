"""Bingo Bango Bongo — three points available on every hole.

  BINGO: first ball on the green
  BANGO: closest to the pin once every ball is on the green
  BONGO: first ball in the hole

Each category awards one point to a single player or to nobody; a tied
category on a hole awards no point.

Settlement is pairwise on point differential: for every pair of players,
the one with fewer points pays ``|diff| * amount`` to the other.

    18 holes, $1/point — A: 22, B: 20, C: 12
    B pays A $2, C pays A $10, C pays B $8
    Net: A +$12, B +$6, C -$18
"""

from collections.abc import Mapping, Sequence

from src.fl_bets.domain.greenie import closest_to_pin
from src.fl_bets.domain.models import BBBHoleResult, BBBPoints, SideBetConfig
from src.fl_bets.domain.payouts import zero_balances
from src.fl_bets.domain.validation import (
    validate_bet_amount,
    validate_hole_number,
    validate_participant,
    validate_roster,
)

POINTS_PER_HOLE = 3


# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------


def record_bbb_hole(
    hole_number: int,
    bingo: str | None,
    bango: str | None,
    bongo: str | None,
) -> BBBHoleResult:
    validate_hole_number(hole_number)
    return BBBHoleResult(hole_number=hole_number, bingo=bingo, bango=bango, bongo=bongo)


def create_empty_bbb_result(hole_number: int) -> BBBHoleResult:
    validate_hole_number(hole_number)
    return BBBHoleResult(hole_number=hole_number)


def determine_bbb_category_winner(claimants: Sequence[str]) -> str | None:
    """Single distinct claimant wins the category; none or several → no point."""
    distinct = set(claimants)
    if len(distinct) != 1:
        return None
    return next(iter(distinct))


def determine_bango_winner(proximities: Mapping[str, float | None] | None) -> str | None:
    """Bango by measured distance once all balls are on; a tie awards nobody."""
    return closest_to_pin(proximities)


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------


def calculate_bbb_points(
    results: Sequence[BBBHoleResult],
    roster: Sequence[str],
) -> list[BBBPoints]:
    """Point totals per roster member, in roster order. Non-roster winners are ignored."""
    points = {player_id: BBBPoints(player_id=player_id) for player_id in roster}
    for result in results:
        if result.bingo in points:
            points[result.bingo].bingo_count += 1
            points[result.bingo].total_points += 1
        if result.bango in points:
            points[result.bango].bango_count += 1
            points[result.bango].total_points += 1
        if result.bongo in points:
            points[result.bongo].bongo_count += 1
            points[result.bongo].total_points += 1
    return list(points.values())


def get_player_bbb_points(results: Sequence[BBBHoleResult], player_id: str) -> BBBPoints:
    return calculate_bbb_points(results, [player_id])[0]


# ---------------------------------------------------------------------------
# Settlement
# ---------------------------------------------------------------------------


def settle_bbb(
    results: Sequence[BBBHoleResult],
    config: SideBetConfig,
    roster: Sequence[str],
) -> dict[str, int]:
    validate_roster(roster)
    validate_bet_amount(config.amount)
    for result in results:
        for winner_id in (result.bingo, result.bango, result.bongo):
            if winner_id is not None:
                validate_participant(winner_id, roster)

    balances = zero_balances(roster)
    if len(roster) < 2:
        return balances

    points = calculate_bbb_points(results, roster)
    for i, player_a in enumerate(points):
        for player_b in points[i + 1:]:
            diff = player_a.total_points - player_b.total_points
            # diff > 0: B pays A; diff < 0: A pays B; both legs cancel in the total
            balances[player_a.player_id] += diff * config.amount
            balances[player_b.player_id] -= diff * config.amount
    return balances


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_bbb_leader(
    results: Sequence[BBBHoleResult],
    roster: Sequence[str],
) -> tuple[str, int] | None:
    """(player_id, points) of the leader; None before anyone scores.

    Players level on points resolve to the earliest in roster order.
    """
    points = calculate_bbb_points(results, roster)
    if not points:
        return None
    leader = max(points, key=lambda p: p.total_points)
    if leader.total_points == 0:
        return None
    return leader.player_id, leader.total_points


def get_remaining_points(holes_played: int, total_holes: int = 18) -> int:
    return max(0, total_holes - holes_played) * POINTS_PER_HOLE


def can_still_win(player_points: int, leader_points: int, holes_remaining: int) -> bool:
    """True if sweeping every remaining point would put the player strictly ahead."""
    return player_points + holes_remaining * POINTS_PER_HOLE > leader_points


def get_total_points_awarded(results: Sequence[BBBHoleResult]) -> int:
    return sum(
        1
        for result in results
        for winner_id in (result.bingo, result.bango, result.bongo)
        if winner_id is not None
    )


def get_max_possible_points(total_holes: int = 18) -> int:
    return total_holes * POINTS_PER_HOLE
