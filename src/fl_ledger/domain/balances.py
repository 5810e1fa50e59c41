"""Ledger balance calculator — folds directional entries into net balances.

Sign convention for per-user balances: positive = owed money (creditor),
negative = owes money (debtor). Every function is total (empty input gives
zero / empty results) and independent of entry order; sorting exists only
for display.
"""

from collections.abc import Iterable, Mapping, Sequence

from src.fl_ledger.domain.models import LedgerEntry, PairwiseBalance, UserBalance


def _unsettled(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    return [e for e in entries if not e.settled]


def calculate_user_balance(user_id: str, entries: Iterable[LedgerEntry]) -> int:
    balance = 0
    for entry in entries:
        if entry.to_user_id == user_id:
            balance += entry.amount
        if entry.from_user_id == user_id:
            balance -= entry.amount
    return balance


def calculate_match_balances(entries: Iterable[LedgerEntry]) -> dict[str, int]:
    """Balance for every party seen in any entry (parties netting to 0 included)."""
    balances: dict[str, int] = {}
    for entry in entries:
        balances[entry.from_user_id] = balances.get(entry.from_user_id, 0) - entry.amount
        balances[entry.to_user_id] = balances.get(entry.to_user_id, 0) + entry.amount
    return balances


def calculate_unsettled_balances(entries: Iterable[LedgerEntry]) -> dict[str, int]:
    return calculate_match_balances(_unsettled(entries))


def get_debtors(balances: Mapping[str, int]) -> list[UserBalance]:
    """Users who owe, largest debt first. Amounts are reported as positive."""
    debtors = [UserBalance(user_id=uid, amount=-amount) for uid, amount in balances.items() if amount < 0]
    return sorted(debtors, key=lambda b: (-b.amount, b.user_id))


def get_creditors(balances: Mapping[str, int]) -> list[UserBalance]:
    """Users who are owed, largest credit first."""
    creditors = [UserBalance(user_id=uid, amount=amount) for uid, amount in balances.items() if amount > 0]
    return sorted(creditors, key=lambda b: (-b.amount, b.user_id))


def calculate_pairwise_balance(
    user_id1: str,
    user_id2: str,
    entries: Iterable[LedgerEntry],
) -> int:
    """Net between two users. Positive = user_id1 owes user_id2."""
    balance = 0
    for entry in entries:
        if entry.from_user_id == user_id1 and entry.to_user_id == user_id2:
            balance += entry.amount
        elif entry.from_user_id == user_id2 and entry.to_user_id == user_id1:
            balance -= entry.amount
    return balance


def get_pairwise_balances(entries: Sequence[LedgerEntry]) -> list[PairwiseBalance]:
    """Unsettled net per unique pair, keyed smaller-id-first; zero pairs dropped.

    Sorted by magnitude, largest first.
    """
    pairs: dict[tuple[str, str], int] = {}
    for entry in _unsettled(entries):
        if entry.from_user_id == entry.to_user_id:
            continue
        first, second = sorted((entry.from_user_id, entry.to_user_id))
        signed = entry.amount if entry.from_user_id == first else -entry.amount
        pairs[(first, second)] = pairs.get((first, second), 0) + signed

    result = [
        PairwiseBalance(user_id=first, other_user_id=second, amount=amount)
        for (first, second), amount in pairs.items()
        if amount != 0
    ]
    return sorted(result, key=lambda p: (-abs(p.amount), p.user_id, p.other_user_id))


def user_has_unsettled_debts(user_id: str, entries: Iterable[LedgerEntry]) -> bool:
    return calculate_user_balance(user_id, _unsettled(entries)) < 0
