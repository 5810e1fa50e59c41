"""Pydantic schemas for fl_ledger API responses."""

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field

from src.fl_common.cents import cents_to_display, signed_display
from src.fl_ledger.domain.balances import (
    calculate_match_balances,
    calculate_unsettled_balances,
    get_creditors,
    get_debtors,
    get_pairwise_balances,
)
from src.fl_ledger.domain.models import LedgerEntry, PairwiseBalance, TransferDraft, UserBalance

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SettleEntryRequest(BaseModel):
    settled_by: str = Field(..., min_length=1, max_length=64)


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


class BalanceItem(BaseModel):
    user_id: str
    amount_cents: int
    amount_display: str

    @classmethod
    def from_pair(cls, user_id: str, amount: int) -> "BalanceItem":
        return cls(user_id=user_id, amount_cents=amount, amount_display=signed_display(amount))


class UserBalanceItem(BaseModel):
    user_id: str
    amount_cents: int
    amount_display: str

    @classmethod
    def from_domain(cls, b: UserBalance) -> "UserBalanceItem":
        return cls(user_id=b.user_id, amount_cents=b.amount, amount_display=cents_to_display(b.amount))


class PairwiseBalanceItem(BaseModel):
    """``from_user_id`` owes ``to_user_id``; direction resolved from the signed pair."""

    from_user_id: str
    to_user_id: str
    amount_cents: int
    amount_display: str

    @classmethod
    def from_domain(cls, p: PairwiseBalance) -> "PairwiseBalanceItem":
        if p.amount > 0:
            debtor, creditor = p.user_id, p.other_user_id
        else:
            debtor, creditor = p.other_user_id, p.user_id
        amount = abs(p.amount)
        return cls(
            from_user_id=debtor,
            to_user_id=creditor,
            amount_cents=amount,
            amount_display=cents_to_display(amount),
        )


class TransferItem(BaseModel):
    from_user_id: str
    to_user_id: str
    amount_cents: int
    amount_display: str

    @classmethod
    def from_domain(cls, t: TransferDraft) -> "TransferItem":
        return cls(
            from_user_id=t.from_user_id,
            to_user_id=t.to_user_id,
            amount_cents=t.amount,
            amount_display=cents_to_display(t.amount),
        )


class LedgerEntryItem(BaseModel):
    id: int
    match_id: str
    from_user_id: str
    to_user_id: str
    amount_cents: int
    amount_display: str
    bet_type: str
    bet_id: str
    description: str | None
    settled: bool
    settled_at: str | None
    settled_by: str | None
    created_at: str | None  # ISO8601

    @classmethod
    def from_domain(cls, e: LedgerEntry) -> "LedgerEntryItem":
        return cls(
            id=e.id,
            match_id=e.match_id,
            from_user_id=e.from_user_id,
            to_user_id=e.to_user_id,
            amount_cents=e.amount,
            amount_display=cents_to_display(e.amount),
            bet_type=e.bet_type,
            bet_id=e.bet_id,
            description=e.description,
            settled=e.settled,
            settled_at=e.settled_at.isoformat() if e.settled_at else None,
            settled_by=e.settled_by,
            created_at=e.created_at.isoformat() if e.created_at else None,
        )


def balance_items(balances: Mapping[str, int]) -> list[BalanceItem]:
    return [BalanceItem.from_pair(uid, amount) for uid, amount in sorted(balances.items())]


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MatchLedgerResponse(BaseModel):
    match_id: str
    entries: list[LedgerEntryItem]
    balances: list[BalanceItem]              # all entries
    unsettled_balances: list[BalanceItem]
    debtors: list[UserBalanceItem]           # unsettled, largest first
    creditors: list[UserBalanceItem]
    pairwise: list[PairwiseBalanceItem]      # unsettled

    @classmethod
    def from_entries(cls, match_id: str, entries: Sequence[LedgerEntry]) -> "MatchLedgerResponse":
        unsettled = calculate_unsettled_balances(entries)
        return cls(
            match_id=match_id,
            entries=[LedgerEntryItem.from_domain(e) for e in entries],
            balances=balance_items(calculate_match_balances(entries)),
            unsettled_balances=balance_items(unsettled),
            debtors=[UserBalanceItem.from_domain(b) for b in get_debtors(unsettled)],
            creditors=[UserBalanceItem.from_domain(b) for b in get_creditors(unsettled)],
            pairwise=[PairwiseBalanceItem.from_domain(p) for p in get_pairwise_balances(entries)],
        )


class UserLedgerResponse(BaseModel):
    match_id: str
    user_id: str
    balance_cents: int
    balance_display: str
    unsettled_balance_cents: int
    unsettled_balance_display: str
    has_unsettled_debts: bool
