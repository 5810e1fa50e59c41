"""Debt simplification: net balances -> directional transfers.

Greedy match of the largest debtor against the largest creditor. For n
non-zero balances this emits at most n - 1 transfers, and every user's
net position is unchanged.
"""

from collections.abc import Mapping

from src.fl_common.errors import ZeroSumViolationError
from src.fl_ledger.domain.balances import get_creditors, get_debtors
from src.fl_ledger.domain.models import TransferDraft


def simplify_debts(balances: Mapping[str, int]) -> list[TransferDraft]:
    total = sum(balances.values())
    if total != 0:
        raise ZeroSumViolationError(total, "simplify_debts")

    debtors = [(b.user_id, b.amount) for b in get_debtors(balances)]
    creditors = [(b.user_id, b.amount) for b in get_creditors(balances)]

    transfers: list[TransferDraft] = []
    debtor_idx = 0
    creditor_idx = 0
    while debtor_idx < len(debtors) and creditor_idx < len(creditors):
        debtor_id, owed = debtors[debtor_idx]
        creditor_id, due = creditors[creditor_idx]

        amount = min(owed, due)
        transfers.append(TransferDraft(from_user_id=debtor_id, to_user_id=creditor_id, amount=amount))

        debtors[debtor_idx] = (debtor_id, owed - amount)
        creditors[creditor_idx] = (creditor_id, due - amount)
        if owed == amount:
            debtor_idx += 1
        if due == amount:
            creditor_idx += 1

    return transfers
