"""Zero-sum sweep over roster sizes and seeded result sets.

Every evaluator, alone or combined, must net to exactly 0 cents and return
one balance per roster member.
"""

import random

import pytest

from src.fl_bets.domain.bingo_bango_bongo import settle_bbb
from src.fl_bets.domain.greenie import settle_greenies
from src.fl_bets.domain.models import (
    BBBHoleResult,
    GreenieResult,
    HoleSideBets,
    SandyResult,
    SideBetConfig,
)
from src.fl_bets.domain.sandy import settle_sandies
from src.fl_bets.domain.settlement import get_detailed_settlement, settle_all_side_bets
from src.fl_common.enums import SideBetType

ROSTER_SIZES = range(1, 7)
SEEDS = range(10)
AMOUNTS = (1, 25, 500, 1337)


def _roster(size: int) -> list[str]:
    return [f"p{i}" for i in range(size)]


def _pick(rng: random.Random, roster: list[str]) -> str | None:
    return rng.choice([None, *roster])


def _config(bet_type: SideBetType, rng: random.Random) -> SideBetConfig:
    return SideBetConfig(type=bet_type, amount=rng.choice(AMOUNTS), enabled=True)


def _hole(number: int, rng: random.Random, roster: list[str]) -> HoleSideBets:
    par = rng.choice((3, 4, 5))
    scored = [p for p in roster if rng.random() < 0.7]
    claimants = [p for p in roster if rng.random() < 0.3]
    return HoleSideBets(
        hole_number=number,
        par=par,
        scores={p: rng.randint(par - 2, par + 3) for p in scored},
        greenie=_pick(rng, roster) if rng.random() < 0.3 else None,
        # coarse distances so exact ties (no winner) come up too
        proximities={p: rng.choice([None, 1.0, 2.5, 4.0, 10.0]) for p in roster},
        sandy_claims={p: rng.random() < 0.8 for p in claimants},
        bingo=_pick(rng, roster),
        bango=_pick(rng, roster),
        bongo=_pick(rng, roster),
    )


def _assert_balanced(balances: dict[str, int], roster: list[str]) -> None:
    assert set(balances) == set(roster)
    assert sum(balances.values()) == 0


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("size", ROSTER_SIZES)
class TestEvaluatorsNetToZero:
    def test_greenie(self, size: int, seed: int) -> None:
        rng = random.Random(seed)
        roster = _roster(size)
        results = [GreenieResult(hole_number=h, winner_id=_pick(rng, roster)) for h in range(1, 19)]

        _assert_balanced(settle_greenies(results, _config(SideBetType.GREENIE, rng), roster), roster)

    def test_sandy(self, size: int, seed: int) -> None:
        rng = random.Random(seed)
        roster = _roster(size)
        results = [
            SandyResult(hole_number=h, player_id=p, success=rng.random() < 0.5)
            for h in range(1, 19)
            for p in roster
            if rng.random() < 0.3
        ]

        _assert_balanced(settle_sandies(results, _config(SideBetType.SANDY, rng), roster), roster)

    def test_bbb(self, size: int, seed: int) -> None:
        rng = random.Random(seed)
        roster = _roster(size)
        results = [
            BBBHoleResult(
                hole_number=h,
                bingo=_pick(rng, roster),
                bango=_pick(rng, roster),
                bongo=_pick(rng, roster),
            )
            for h in range(1, 19)
        ]

        _assert_balanced(
            settle_bbb(results, _config(SideBetType.BINGO_BANGO_BONGO, rng), roster), roster
        )

    def test_combined(self, size: int, seed: int) -> None:
        rng = random.Random(seed)
        roster = _roster(size)
        holes = [_hole(h, rng, roster) for h in range(1, 19)]
        configs = [
            SideBetConfig(type=t, amount=rng.choice(AMOUNTS), enabled=rng.random() < 0.8)
            for t in SideBetType
        ]

        totals = settle_all_side_bets(holes, configs, roster)

        _assert_balanced(totals, roster)
        for settlement in get_detailed_settlement(holes, configs, roster):
            assert sum(r.amount for r in settlement.results) == 0
            assert settlement.total_pot == sum(r.amount for r in settlement.results if r.amount > 0)

    def test_recompute_is_stable(self, size: int, seed: int) -> None:
        roster = _roster(size)
        holes = [_hole(h, random.Random(seed * 100 + h), roster) for h in range(1, 10)]
        configs = [SideBetConfig(type=t, amount=100, enabled=True) for t in SideBetType]

        assert settle_all_side_bets(holes, configs, roster) == settle_all_side_bets(holes, configs, roster)
