"""Side-bet settlement aggregator.

Turns raw per-hole side-bet data into per-player net balances (cents) for
every enabled side bet, then merges them. A pure function of
(holes, configs, roster): no "already settled" state, every call
recomputes from scratch, and the same inputs always give the same map.
"""

import logging
from collections.abc import Callable, Mapping, Sequence

from src.fl_bets.domain.bingo_bango_bongo import calculate_bbb_points, settle_bbb
from src.fl_bets.domain.greenie import count_greenies, determine_greenie_winner, settle_greenies
from src.fl_bets.domain.models import (
    BBBHoleResult,
    GreenieResult,
    HoleSideBets,
    SandyResult,
    SideBetConfig,
    SideBetPlayerResult,
    SideBetSettlement,
)
from src.fl_bets.domain.payouts import zero_balances
from src.fl_bets.domain.sandy import count_sandies, create_sandy_result, record_sandy, settle_sandies
from src.fl_bets.domain.validation import validate_hole_number, validate_par, validate_roster
from src.fl_common.enums import SideBetType
from src.fl_common.errors import (
    DuplicateHoleError,
    DuplicateSideBetConfigError,
    ZeroSumViolationError,
)

logger = logging.getLogger(__name__)

ZERO_SUM_EPSILON = 1e-9

# ---------------------------------------------------------------------------
# Extraction: raw hole data -> per-bet results
# ---------------------------------------------------------------------------


def extract_greenie_results(holes: Sequence[HoleSideBets]) -> list[GreenieResult]:
    """One result per par 3.

    A manually entered winner takes precedence over proximities. A winner
    whose recorded score is over par loses the greenie.
    """
    results: list[GreenieResult] = []
    for hole in holes:
        if hole.par != 3:
            continue
        if hole.greenie is not None:
            winner_id: str | None = hole.greenie
        else:
            winner_id = determine_greenie_winner(hole.hole_number, hole.par, hole.proximities).winner_id
        if winner_id is not None and hole.scores.get(winner_id, hole.par) > hole.par:
            winner_id = None
        results.append(GreenieResult(hole_number=hole.hole_number, winner_id=winner_id))
    return results


def extract_sandy_results(holes: Sequence[HoleSideBets]) -> list[SandyResult]:
    """Claims are validated against the hole score when one was recorded."""
    results: list[SandyResult] = []
    for hole in holes:
        for player_id, claimed in hole.sandy_claims.items():
            if player_id in hole.scores:
                results.append(
                    record_sandy(hole.hole_number, player_id, claimed, hole.par, hole.scores[player_id])
                )
            else:
                results.append(create_sandy_result(hole.hole_number, player_id, claimed))
    return results


def extract_bbb_results(holes: Sequence[HoleSideBets]) -> list[BBBHoleResult]:
    return [
        BBBHoleResult(hole_number=h.hole_number, bingo=h.bingo, bango=h.bango, bongo=h.bongo)
        for h in holes
    ]


# ---------------------------------------------------------------------------
# Per-type settlement
# ---------------------------------------------------------------------------


def _total_pot(balances: Mapping[str, int]) -> int:
    """Money changing hands: the sum of everything credited to winners."""
    return sum(amount for amount in balances.values() if amount > 0)


def _settle_greenie(
    holes: Sequence[HoleSideBets], config: SideBetConfig, roster: Sequence[str]
) -> SideBetSettlement:
    results = extract_greenie_results(holes)
    payouts = settle_greenies(results, config, roster)
    return SideBetSettlement(
        type=SideBetType.GREENIE,
        results=[
            SideBetPlayerResult(player_id=pid, wins=count_greenies(results, pid), amount=payouts[pid])
            for pid in roster
        ],
        total_pot=_total_pot(payouts),
    )


def _settle_sandy(
    holes: Sequence[HoleSideBets], config: SideBetConfig, roster: Sequence[str]
) -> SideBetSettlement:
    results = extract_sandy_results(holes)
    payouts = settle_sandies(results, config, roster)
    return SideBetSettlement(
        type=SideBetType.SANDY,
        results=[
            SideBetPlayerResult(player_id=pid, wins=count_sandies(results, pid), amount=payouts[pid])
            for pid in roster
        ],
        total_pot=_total_pot(payouts),
    )


def _settle_bbb(
    holes: Sequence[HoleSideBets], config: SideBetConfig, roster: Sequence[str]
) -> SideBetSettlement:
    results = extract_bbb_results(holes)
    payouts = settle_bbb(results, config, roster)
    return SideBetSettlement(
        type=SideBetType.BINGO_BANGO_BONGO,
        results=[
            SideBetPlayerResult(player_id=p.player_id, wins=p.total_points, amount=payouts[p.player_id])
            for p in calculate_bbb_points(results, roster)
        ],
        total_pot=_total_pot(payouts),
    )


_SETTLERS: dict[
    SideBetType,
    Callable[[Sequence[HoleSideBets], SideBetConfig, Sequence[str]], SideBetSettlement],
] = {
    SideBetType.GREENIE: _settle_greenie,
    SideBetType.SANDY: _settle_sandy,
    SideBetType.BINGO_BANGO_BONGO: _settle_bbb,
}


def _validate_holes(holes: Sequence[HoleSideBets]) -> None:
    seen: set[int] = set()
    for hole in holes:
        validate_hole_number(hole.hole_number)
        validate_par(hole.par)
        if hole.hole_number in seen:
            raise DuplicateHoleError(hole.hole_number)
        seen.add(hole.hole_number)


def _validate_configs(configs: Sequence[SideBetConfig]) -> None:
    """At most one config per side-bet type per match."""
    seen: set[SideBetType] = set()
    for config in configs:
        if config.type in seen:
            raise DuplicateSideBetConfigError(config.type.value)
        seen.add(config.type)


# ---------------------------------------------------------------------------
# Zero-sum
# ---------------------------------------------------------------------------


def validate_zero_sum(balances: Mapping[str, float], epsilon: float = ZERO_SUM_EPSILON) -> bool:
    return abs(sum(balances.values())) <= epsilon


def assert_zero_sum(
    balances: Mapping[str, float],
    context: str,
    epsilon: float = ZERO_SUM_EPSILON,
) -> None:
    """Raise ZeroSumViolationError (and log at ERROR) if balances do not net to zero."""
    if not validate_zero_sum(balances, epsilon):
        total = sum(balances.values())
        logger.error(
            "Zero-sum invariant violated: context=%s total=%s balances=%s",
            context, total, dict(balances),
        )
        raise ZeroSumViolationError(total, context)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def get_detailed_settlement(
    holes: Sequence[HoleSideBets],
    configs: Sequence[SideBetConfig],
    roster: Sequence[str],
    epsilon: float = ZERO_SUM_EPSILON,
) -> list[SideBetSettlement]:
    """Per-type breakdown for every enabled side bet, in config order."""
    validate_roster(roster)
    _validate_holes(holes)
    _validate_configs(configs)

    settlements: list[SideBetSettlement] = []
    for config in configs:
        if not config.enabled:
            continue
        settlement = _SETTLERS[config.type](holes, config, roster)
        assert_zero_sum(
            {r.player_id: r.amount for r in settlement.results},
            context=f"side_bet:{config.type.value}",
            epsilon=epsilon,
        )
        settlements.append(settlement)
    return settlements


def settle_all_side_bets(
    holes: Sequence[HoleSideBets],
    configs: Sequence[SideBetConfig],
    roster: Sequence[str],
    epsilon: float = ZERO_SUM_EPSILON,
) -> dict[str, int]:
    """Combined net balance per roster member across all enabled side bets."""
    settlements = get_detailed_settlement(holes, configs, roster, epsilon)
    totals = merge_settlements(settlements, roster)
    assert_zero_sum(totals, context="side_bets:combined", epsilon=epsilon)
    logger.info(
        "Side bets settled: players=%d holes=%d bets=%s",
        len(roster), len(holes), [s.type.value for s in settlements],
    )
    return totals


def merge_settlements(
    settlements: Sequence[SideBetSettlement],
    roster: Sequence[str],
) -> dict[str, int]:
    totals = zero_balances(roster)
    for settlement in settlements:
        for result in settlement.results:
            totals[result.player_id] += result.amount
    return totals


# ---------------------------------------------------------------------------
# Config helpers
# ---------------------------------------------------------------------------


def create_default_side_bet_configs(amount: int = 0) -> list[SideBetConfig]:
    """Stock config set for a match with no side bets: every type disabled."""
    return [SideBetConfig(type=bet_type, amount=amount, enabled=False) for bet_type in SideBetType]


def has_side_bets_enabled(configs: Sequence[SideBetConfig]) -> bool:
    return any(c.enabled for c in configs)


def get_enabled_side_bets(configs: Sequence[SideBetConfig]) -> list[SideBetType]:
    return [c.type for c in configs if c.enabled]
