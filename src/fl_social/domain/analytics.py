"""Player analytics: per-match results, streaks, lifetime stats, head-to-head.

Everything is folded on demand from ledger entries; nothing here is stored.
A player's result in a match is the net of every entry they are party to in
that match: positive is a win, negative a loss, exactly zero a push.

Matches are dated by ``played_at`` (match_id -> tee time) when the caller
has it, otherwise by the earliest entry of the match. Undated matches sort
first, ties by match_id.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone

from src.fl_common.datetime_utils import as_utc
from src.fl_common.enums import MatchOutcome, StreakType
from src.fl_ledger.domain.models import LedgerEntry
from src.fl_social.domain.leaderboard import UNKNOWN_PLAYER
from src.fl_social.domain.models import (
    GameRecord,
    HeadToHeadRecord,
    HeadToHeadSummary,
    MatchResult,
    Streak,
    StreakSummary,
    UserStats,
)

# Only main games can be a favorite; side bets ride along with them
MAIN_GAMES = frozenset({"nassau", "skins", "match_play", "stroke_play"})
HOT_STREAK_MIN = 3

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Per-match results
# ---------------------------------------------------------------------------


def group_entries_by_match(entries: Iterable[LedgerEntry]) -> dict[str, list[LedgerEntry]]:
    by_match: dict[str, list[LedgerEntry]] = defaultdict(list)
    for entry in entries:
        by_match[entry.match_id].append(entry)
    return dict(by_match)


def _participants(entries: Iterable[LedgerEntry]) -> set[str]:
    return {e.from_user_id for e in entries} | {e.to_user_id for e in entries}


def _games(entries: Iterable[LedgerEntry]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(e.bet_type for e in entries))


def _match_date(
    match_id: str,
    entries: Sequence[LedgerEntry],
    played_at: Mapping[str, datetime] | None,
) -> datetime | None:
    if played_at and match_id in played_at:
        return as_utc(played_at[match_id])
    stamps = [as_utc(e.created_at) for e in entries if e.created_at is not None]
    return min(stamps) if stamps else None


def _chronological(results: Iterable[MatchResult]) -> list[MatchResult]:
    return sorted(results, key=lambda r: (r.played_at or _EARLIEST, r.match_id))


def net_for_user(entries: Iterable[LedgerEntry], user_id: str) -> int:
    """Money received minus money owed, settled or not."""
    net = 0
    for e in entries:
        if e.from_user_id == e.to_user_id:
            continue
        if e.to_user_id == user_id:
            net += e.amount
        elif e.from_user_id == user_id:
            net -= e.amount
    return net


def net_against_opponent(entries: Iterable[LedgerEntry], user_id: str, opponent_id: str) -> int:
    """Net of entries between exactly these two players; positive = opponent owes user."""
    net = 0
    for e in entries:
        if e.from_user_id == opponent_id and e.to_user_id == user_id:
            net += e.amount
        elif e.from_user_id == user_id and e.to_user_id == opponent_id:
            net -= e.amount
    return net


def get_match_result(
    match_id: str,
    entries: Sequence[LedgerEntry],
    user_id: str,
    played_at: datetime | None = None,
) -> MatchResult:
    """``entries`` are all of the match's entries, not only the user's."""
    return MatchResult(
        match_id=match_id,
        played_at=as_utc(played_at) if played_at is not None else _match_date(match_id, entries, None),
        net=net_for_user(entries, user_id),
        games=_games(entries),
        opponent_ids=tuple(sorted(_participants(entries) - {user_id})),
    )


def user_match_results(
    entries: Iterable[LedgerEntry],
    user_id: str,
    played_at: Mapping[str, datetime] | None = None,
) -> list[MatchResult]:
    """One result per match the user is party to, oldest first."""
    results = [
        get_match_result(match_id, match_entries, user_id, _match_date(match_id, match_entries, played_at))
        for match_id, match_entries in group_entries_by_match(entries).items()
        if user_id in _participants(match_entries)
    ]
    return _chronological(results)


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------


def _trailing_run(results: Sequence[tuple[int, datetime | None]]) -> Streak:
    kind, count, start = StreakType.NONE, 0, None
    for net, when in reversed(results):
        if net == 0:
            # pushes neither extend nor break the current run
            continue
        this = StreakType.WIN if net > 0 else StreakType.LOSS
        if kind is StreakType.NONE:
            kind = this
        elif this is not kind:
            break
        count += 1
        start = when
    return Streak(type=kind, count=count, start_date=start)


def get_current_streak(results: Sequence[MatchResult]) -> Streak:
    """Run of same-sign results ending at the most recent one; ``results`` oldest first."""
    return _trailing_run([(r.net, r.played_at) for r in results])


def compute_streak_from_nets(nets: Sequence[int]) -> Streak:
    return _trailing_run([(net, None) for net in nets])


def compute_streaks(results: Sequence[MatchResult]) -> StreakSummary:
    """Current streak plus the longest win and loss runs; a push ends a longest run."""
    longest_win = longest_loss = run_win = run_loss = 0
    for r in results:
        if r.net > 0:
            run_win, run_loss = run_win + 1, 0
            longest_win = max(longest_win, run_win)
        elif r.net < 0:
            run_win, run_loss = 0, run_loss + 1
            longest_loss = max(longest_loss, run_loss)
        else:
            run_win = run_loss = 0
    return StreakSummary(
        current=get_current_streak(results),
        longest_win=longest_win,
        longest_loss=longest_loss,
    )


def is_hot_streak(streak: Streak) -> bool:
    return streak.count >= HOT_STREAK_MIN


def get_streak_label(streak: Streak) -> str:
    """'🔥 3W', '❄️ 2L' or 'No streak'."""
    if streak.type is StreakType.NONE or streak.count == 0:
        return "No streak"
    if streak.type is StreakType.WIN:
        return f"🔥 {streak.count}W"
    return f"❄️ {streak.count}L"


# ---------------------------------------------------------------------------
# Lifetime stats
# ---------------------------------------------------------------------------


def _favorite_game(counts: Mapping[str, int]) -> str | None:
    if not counts:
        return None
    top = max(counts, key=lambda game: counts[game])
    return top if top in MAIN_GAMES else None


def compute_user_stats(
    entries: Iterable[LedgerEntry],
    user_id: str,
    played_at: Mapping[str, datetime] | None = None,
) -> UserStats:
    results = user_match_results(entries, user_id, played_at)
    if not results:
        return UserStats()

    nets = [r.net for r in results]
    wins = sum(1 for n in nets if n > 0)
    losses = sum(1 for n in nets if n < 0)
    total_won = sum(n for n in nets if n > 0)
    total_lost = -sum(n for n in nets if n < 0)

    by_game: dict[str, int] = {}
    for r in results:
        for game in r.games:
            by_game[game] = by_game.get(game, 0) + 1

    streaks = compute_streaks(results)
    dated = [r.played_at for r in results if r.played_at is not None]
    return UserStats(
        total_matches=len(results),
        wins=wins,
        losses=losses,
        pushes=len(results) - wins - losses,
        total_won=total_won,
        total_lost=total_lost,
        net_lifetime=total_won - total_lost,
        avg_payout=(total_won - total_lost) / len(results),
        biggest_win=max(0, *nets),
        biggest_loss=-min(0, *nets),
        win_rate=wins / (wins + losses) if wins + losses else 0.0,
        current_streak=streaks.current,
        longest_win_streak=streaks.longest_win,
        longest_loss_streak=streaks.longest_loss,
        favorite_game=_favorite_game(by_game),
        matches_by_game=by_game,
        first_match=min(dated) if dated else None,
        last_match=max(dated) if dated else None,
        active_days=len({d.date() for d in dated}),
    )


# ---------------------------------------------------------------------------
# Head-to-head
# ---------------------------------------------------------------------------


def head_to_head_history(
    entries: Iterable[LedgerEntry],
    user_id: str,
    opponent_id: str,
    played_at: Mapping[str, datetime] | None = None,
) -> list[MatchResult]:
    """Matches both players took part in, oldest first.

    ``net`` counts only money between the two, so a shared match with no
    entry between them is a push.
    """
    results: list[MatchResult] = []
    for match_id, match_entries in group_entries_by_match(entries).items():
        parties = _participants(match_entries)
        if user_id not in parties or opponent_id not in parties:
            continue
        results.append(
            MatchResult(
                match_id=match_id,
                played_at=_match_date(match_id, match_entries, played_at),
                net=net_against_opponent(match_entries, user_id, opponent_id),
                games=_games(match_entries),
                opponent_ids=(opponent_id,),
            )
        )
    return _chronological(results)


def _fold_record(record: HeadToHeadRecord, history: Sequence[MatchResult]) -> HeadToHeadRecord:
    for r in history:
        record.total_matches += 1
        outcome = r.outcome
        if outcome is MatchOutcome.WIN:
            record.wins += 1
            record.total_won += r.net
        elif outcome is MatchOutcome.LOSS:
            record.losses += 1
            record.total_lost -= r.net
        else:
            record.pushes += 1
        for game in r.games:
            per_game = record.results_by_game.setdefault(game, GameRecord())
            if outcome is MatchOutcome.WIN:
                per_game.wins += 1
            elif outcome is MatchOutcome.LOSS:
                per_game.losses += 1
            else:
                per_game.pushes += 1
            per_game.net += r.net
    record.net_amount = record.total_won - record.total_lost
    if history:
        record.last_played = history[-1].played_at
        record.last_result = history[-1].outcome
    record.current_streak = compute_streak_from_nets([r.net for r in history])
    return record


def compute_opponent_record(
    entries: Iterable[LedgerEntry],
    user_id: str,
    opponent_id: str,
    opponent_name: str = UNKNOWN_PLAYER,
    played_at: Mapping[str, datetime] | None = None,
) -> HeadToHeadRecord:
    history = head_to_head_history(entries, user_id, opponent_id, played_at)
    return _fold_record(HeadToHeadRecord(opponent_id=opponent_id, opponent_name=opponent_name), history)


def compute_head_to_head(
    entries: Iterable[LedgerEntry],
    user_id: str,
    users: Mapping[str, str],
    played_at: Mapping[str, datetime] | None = None,
) -> HeadToHeadSummary:
    """A record against every player the user has shared a match with.

    Records are ordered by matches played (most first), then opponent id.
    ``users`` maps player_id to display name.
    """
    entries = list(entries)
    opponents: dict[str, None] = {}
    for match_entries in group_entries_by_match(entries).values():
        parties = _participants(match_entries)
        if user_id in parties:
            opponents.update(dict.fromkeys(sorted(parties - {user_id})))

    records = [
        compute_opponent_record(entries, user_id, opp, users.get(opp, UNKNOWN_PLAYER), played_at)
        for opp in opponents
    ]
    records.sort(key=lambda r: (-r.total_matches, r.opponent_id))

    debtors = [r for r in records if r.net_amount > 0]
    creditors = [r for r in records if r.net_amount < 0]
    return HeadToHeadSummary(
        records=records,
        top_rival=records[0] if records else None,
        biggest_debtor=max(debtors, key=lambda r: r.net_amount) if debtors else None,
        biggest_creditor=min(creditors, key=lambda r: r.net_amount) if creditors else None,
    )


def get_head_to_head_detail(
    entries: Iterable[LedgerEntry],
    user_id: str,
    opponent_id: str,
    opponent_name: str = UNKNOWN_PLAYER,
    played_at: Mapping[str, datetime] | None = None,
) -> tuple[HeadToHeadRecord | None, list[MatchResult]]:
    """Record against one opponent plus the shared match history, newest first."""
    history = head_to_head_history(entries, user_id, opponent_id, played_at)
    if not history:
        return None, []
    record = _fold_record(HeadToHeadRecord(opponent_id=opponent_id, opponent_name=opponent_name), history)
    return record, list(reversed(history))
