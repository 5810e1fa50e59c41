"""Fan-out payout math shared by per-occurrence side bets (greenie, sandy).

Each occurrence pays ``amount`` from every other roster member to the
winner, so one win is worth ``amount * (n - 1)`` to the winner and costs
each opponent ``amount``. Balances are netted per player, not per hole.
"""

from collections import Counter
from collections.abc import Iterable, Sequence


def zero_balances(roster: Sequence[str]) -> dict[str, int]:
    """Every roster member starts at 0, in roster order."""
    return {player_id: 0 for player_id in roster}


def fan_out(
    winners: Iterable[str],
    amount: int,
    roster: Sequence[str],
) -> dict[str, int]:
    """Net balance per roster member for a list of occurrence winners.

    A roster of one yields all zeros: there is nobody to collect from.
    """
    balances = zero_balances(roster)
    num_players = len(roster)
    if num_players < 2:
        return balances

    for winner_id, wins in Counter(winners).items():
        balances[winner_id] += wins * amount * (num_players - 1)
        for player_id in roster:
            if player_id != winner_id:
                balances[player_id] -= wins * amount
    return balances
