"""Leaderboard aggregator: folds ledger entries into ranked season standings.

Only entries where both parties are group members count. A player's
record is kept per (match, opponent): the net of every entry between the
two in one match is a win when positive, a loss when negative and a push
when it nets to exactly zero.

Ranking is competition style (1, 1, 3): equal net amounts share a rank.
Within a shared rank, standings are listed by player_id.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime

from src.fl_common.datetime_utils import as_utc
from src.fl_common.enums import TrendDirection
from src.fl_ledger.domain.balances import calculate_match_balances
from src.fl_ledger.domain.models import LedgerEntry
from src.fl_social.domain.models import SeasonStanding

UNKNOWN_PLAYER = "Unknown"


def filter_ledger_by_date_range(
    entries: Iterable[LedgerEntry],
    start: date | datetime,
    end: date | datetime,
) -> list[LedgerEntry]:
    """Entries created within [start, end]. Entries without a timestamp are dropped."""
    lo, hi = as_utc(start), as_utc(end)
    return [
        e for e in entries
        if e.created_at is not None and lo <= as_utc(e.created_at) <= hi
    ]


def _pair_results(entries: Sequence[LedgerEntry]) -> dict[tuple[str, str, str], int]:
    """Net per (match_id, player, opponent); positive = player came out ahead."""
    nets: dict[tuple[str, str, str], int] = defaultdict(int)
    for e in entries:
        nets[(e.match_id, e.to_user_id, e.from_user_id)] += e.amount
        nets[(e.match_id, e.from_user_id, e.to_user_id)] -= e.amount
    return nets


def _trend(rank: int, prior_rank: int | None) -> TrendDirection:
    if prior_rank is None or prior_rank == rank:
        return TrendDirection.NEUTRAL
    return TrendDirection.UP if rank < prior_rank else TrendDirection.DOWN


def _rank(
    standings: Iterable[SeasonStanding],
    prior_standings: Sequence[SeasonStanding] | None,
) -> list[SeasonStanding]:
    ordered = sorted(standings, key=lambda s: (-s.net_amount, s.player_id))
    prior_ranks = {s.player_id: s.rank for s in prior_standings or ()}
    for i, standing in enumerate(ordered):
        if i > 0 and standing.net_amount == ordered[i - 1].net_amount:
            standing.rank = ordered[i - 1].rank
        else:
            standing.rank = i + 1
        standing.trend = _trend(standing.rank, prior_ranks.get(standing.player_id))
    return ordered


def calculate_standings(
    match_balances: Iterable[Mapping[str, int]],
    member_ids: Sequence[str],
    users: Mapping[str, str],
    prior_standings: Sequence[SeasonStanding] | None = None,
) -> list[SeasonStanding]:
    """Ranked standings from per-match balance maps (player_id -> cents).

    Each map is one match: a positive balance is a win, negative a loss and
    zero a push. Players outside ``member_ids`` are ignored.
    """
    standings: dict[str, SeasonStanding] = {
        pid: SeasonStanding(player_id=pid, display_name=users.get(pid, UNKNOWN_PLAYER))
        for pid in dict.fromkeys(member_ids)
    }
    for balances in match_balances:
        for pid, amount in balances.items():
            standing = standings.get(pid)
            if standing is None:
                continue
            standing.net_amount += amount
            standing.matches_played += 1
            if amount > 0:
                standing.wins += 1
            elif amount < 0:
                standing.losses += 1
            else:
                standing.pushes += 1
    return _rank(standings.values(), prior_standings)


def calculate_standings_from_ledger(
    entries: Iterable[LedgerEntry],
    member_ids: Sequence[str],
    users: Mapping[str, str],
    prior_standings: Sequence[SeasonStanding] | None = None,
) -> list[SeasonStanding]:
    """Ranked standings for every member, including those with no entries.

    ``entries`` are expected to be pre-filtered to the season window;
    ``users`` maps player_id to display name.
    """
    members = set(member_ids)
    relevant = [
        e for e in entries
        if e.from_user_id in members and e.to_user_id in members
        and e.from_user_id != e.to_user_id
    ]

    nets = calculate_match_balances(relevant)
    standings: dict[str, SeasonStanding] = {
        pid: SeasonStanding(
            player_id=pid,
            display_name=users.get(pid, UNKNOWN_PLAYER),
            net_amount=nets.get(pid, 0),
        )
        for pid in dict.fromkeys(member_ids)
    }

    matches: dict[str, set[str]] = defaultdict(set)
    for (match_id, player, _opponent), net in _pair_results(relevant).items():
        matches[player].add(match_id)
        standing = standings[player]
        if net > 0:
            standing.wins += 1
        elif net < 0:
            standing.losses += 1
        else:
            standing.pushes += 1
    for pid, played in matches.items():
        standings[pid].matches_played = len(played)

    return _rank(standings.values(), prior_standings)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

_TREND_ARROWS = {
    TrendDirection.UP: "↑",
    TrendDirection.DOWN: "↓",
    TrendDirection.NEUTRAL: "–",
}


def format_rank_change(standing: SeasonStanding) -> str:
    return _TREND_ARROWS[standing.trend]


def get_rank_label(rank: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 10 <= rank % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")
    return f"{rank}{suffix}"


def get_win_loss_ratio(standing: SeasonStanding) -> float:
    if standing.losses == 0:
        return float("inf") if standing.wins > 0 else 0.0
    return standing.wins / standing.losses


def format_win_loss(standing: SeasonStanding) -> str:
    """'W-L', or 'W-L-P' once a push has been recorded."""
    if standing.pushes:
        return f"{standing.wins}-{standing.losses}-{standing.pushes}"
    return f"{standing.wins}-{standing.losses}"
