"""Unit tests for the ledger balance calculator."""

from src.fl_ledger.domain.balances import (
    calculate_match_balances,
    calculate_pairwise_balance,
    calculate_unsettled_balances,
    calculate_user_balance,
    get_creditors,
    get_debtors,
    get_pairwise_balances,
    user_has_unsettled_debts,
)
from src.fl_ledger.domain.models import LedgerEntry, PairwiseBalance, UserBalance


def _entry(
    entry_id: int,
    from_user: str,
    to_user: str,
    amount: int,
    settled: bool = False,
) -> LedgerEntry:
    return LedgerEntry(
        id=entry_id,
        match_id="m-1",
        from_user_id=from_user,
        to_user_id=to_user,
        amount=amount,
        bet_type="greenie",
        bet_id="m-1:greenie",
        settled=settled,
    )


ENTRIES = [
    _entry(1, "B", "A", 1000),
    _entry(2, "C", "A", 500),
    _entry(3, "A", "B", 300),
    _entry(4, "C", "B", 200, settled=True),
]


class TestUserBalance:
    def test_credit_and_debit(self) -> None:
        assert calculate_user_balance("A", ENTRIES) == 1200
        assert calculate_user_balance("B", ENTRIES) == -500
        assert calculate_user_balance("C", ENTRIES) == -700

    def test_stranger_is_zero(self) -> None:
        assert calculate_user_balance("Z", ENTRIES) == 0

    def test_empty(self) -> None:
        assert calculate_user_balance("A", []) == 0


class TestMatchBalances:
    def test_all_entries(self) -> None:
        assert calculate_match_balances(ENTRIES) == {"A": 1200, "B": -500, "C": -700}

    def test_unsettled_only(self) -> None:
        assert calculate_unsettled_balances(ENTRIES) == {"A": 1200, "B": -700, "C": -500}

    def test_order_independent(self) -> None:
        assert calculate_match_balances(list(reversed(ENTRIES))) == calculate_match_balances(ENTRIES)

    def test_sum_is_zero(self) -> None:
        assert sum(calculate_match_balances(ENTRIES).values()) == 0

    def test_empty(self) -> None:
        assert calculate_match_balances([]) == {}


class TestDebtorsCreditors:
    def test_sorted_largest_first(self) -> None:
        balances = {"A": 1200, "B": -700, "C": -500, "D": 0}
        assert get_debtors(balances) == [UserBalance("B", 700), UserBalance("C", 500)]
        assert get_creditors(balances) == [UserBalance("A", 1200)]

    def test_ties_by_user_id(self) -> None:
        assert [b.user_id for b in get_debtors({"Y": -5, "X": -5})] == ["X", "Y"]


class TestPairwise:
    def test_pair_net(self) -> None:
        assert calculate_pairwise_balance("B", "A", ENTRIES) == 700
        assert calculate_pairwise_balance("A", "B", ENTRIES) == -700

    def test_unsettled_pairs(self) -> None:
        assert get_pairwise_balances(ENTRIES) == [
            PairwiseBalance(user_id="A", other_user_id="B", amount=-700),
            PairwiseBalance(user_id="A", other_user_id="C", amount=-500),
        ]

    def test_zero_pairs_dropped(self) -> None:
        entries = [_entry(1, "A", "B", 300), _entry(2, "B", "A", 300)]
        assert get_pairwise_balances(entries) == []

    def test_has_unsettled_debts(self) -> None:
        assert user_has_unsettled_debts("B", ENTRIES)
        assert not user_has_unsettled_debts("A", ENTRIES)
