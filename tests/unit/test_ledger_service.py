"""Unit tests for LedgerApplicationService using a mock repository."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from src.fl_common.errors import (
    BetAlreadySettledError,
    InvalidLedgerEntryError,
    LedgerEntryAlreadySettledError,
    LedgerEntryNotFoundError,
)
from src.fl_ledger.application.schemas import MatchLedgerResponse, UserLedgerResponse
from src.fl_ledger.application.service import LedgerApplicationService, validate_transfers
from src.fl_ledger.domain.models import LedgerEntry, TransferDraft


def _make_entry(
    entry_id: int = 1,
    from_user: str = "B",
    to_user: str = "A",
    amount: int = 500,
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
        settled_at=datetime.now(UTC) if settled else None,
        settled_by="A" if settled else None,
        created_at=datetime.now(UTC),
    )


class TestGetMatchLedger:
    async def test_builds_balances(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.list_match_entries.return_value = [
            _make_entry(1, "B", "A", 500),
            _make_entry(2, "C", "A", 300, settled=True),
        ]
        svc = LedgerApplicationService(repo=mock_repo)

        result = await svc.get_match_ledger(AsyncMock(), "m-1")

        assert isinstance(result, MatchLedgerResponse)
        assert len(result.entries) == 2
        assert {b.user_id: b.amount_cents for b in result.balances} == {"A": 800, "B": -500, "C": -300}
        assert {b.user_id: b.amount_cents for b in result.unsettled_balances} == {"A": 500, "B": -500}
        assert [d.user_id for d in result.debtors] == ["B"]
        assert result.pairwise[0].from_user_id == "B"
        assert result.pairwise[0].to_user_id == "A"
        assert result.pairwise[0].amount_display == "$5.00"

    async def test_empty_match(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.list_match_entries.return_value = []
        svc = LedgerApplicationService(repo=mock_repo)

        result = await svc.get_match_ledger(AsyncMock(), "m-404")

        assert result.entries == []
        assert result.balances == []
        assert result.pairwise == []


class TestGetUserBalance:
    async def test_debtor_view(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.list_match_entries.return_value = [
            _make_entry(1, "B", "A", 500),
            _make_entry(2, "B", "C", 200, settled=True),
        ]
        svc = LedgerApplicationService(repo=mock_repo)

        result = await svc.get_user_balance(AsyncMock(), "m-1", "B")

        assert isinstance(result, UserLedgerResponse)
        assert result.balance_cents == -700
        assert result.unsettled_balance_cents == -500
        assert result.unsettled_balance_display == "-$5.00"
        assert result.has_unsettled_debts is True


class TestSettleEntry:
    async def test_marks_settled_and_commits(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_entry.return_value = _make_entry(7)
        mock_repo.mark_settled.return_value = _make_entry(7, settled=True)
        db = AsyncMock()
        svc = LedgerApplicationService(repo=mock_repo)

        result = await svc.settle_entry(db, 7, "A")

        assert result.settled is True
        assert result.settled_by == "A"
        db.commit.assert_awaited_once()
        args = mock_repo.mark_settled.await_args.args
        assert args[1:3] == (7, "A")

    async def test_not_found(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_entry.return_value = None
        db = AsyncMock()
        svc = LedgerApplicationService(repo=mock_repo)

        with pytest.raises(LedgerEntryNotFoundError):
            await svc.settle_entry(db, 99, "A")
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    async def test_already_settled(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_entry.return_value = _make_entry(7, settled=True)
        svc = LedgerApplicationService(repo=mock_repo)

        with pytest.raises(LedgerEntryAlreadySettledError):
            await svc.settle_entry(AsyncMock(), 7, "A")
        mock_repo.mark_settled.assert_not_awaited()

    async def test_lost_race(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.get_entry.return_value = _make_entry(7)
        mock_repo.mark_settled.return_value = None
        svc = LedgerApplicationService(repo=mock_repo)

        with pytest.raises(LedgerEntryAlreadySettledError):
            await svc.settle_entry(AsyncMock(), 7, "A")


class TestRecordBetSettlement:
    async def test_replaces_with_simplified_transfers(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.list_bet_entries_for_update.return_value = []
        mock_repo.replace_bet_entries.return_value = [_make_entry(1, "B", "A", 500)]
        db = AsyncMock()
        svc = LedgerApplicationService(repo=mock_repo)

        entries = await svc.record_bet_settlement(
            db, "m-1", "greenie", "m-1:greenie", {"A": 500, "B": -500}
        )

        assert len(entries) == 1
        args = mock_repo.replace_bet_entries.await_args.args
        assert args[1:4] == ("m-1", "greenie", "m-1:greenie")
        assert args[4] == [TransferDraft(from_user_id="B", to_user_id="A", amount=500)]
        mock_repo.lock_match.assert_awaited_once()
        assert mock_repo.lock_match.await_args.args[1] == "m-1"
        db.commit.assert_not_awaited()

    async def test_all_zero_clears_entries(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.list_bet_entries_for_update.return_value = []
        mock_repo.replace_bet_entries.return_value = []
        svc = LedgerApplicationService(repo=mock_repo)

        await svc.record_bet_settlement(AsyncMock(), "m-1", "sandy", "m-1:sandy", {"A": 0, "B": 0})

        assert mock_repo.replace_bet_entries.await_args.args[4] == []

    async def test_paid_bet_is_frozen(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.list_bet_entries_for_update.return_value = [
            _make_entry(1, "B", "A", 500, settled=True),
            _make_entry(2, "C", "A", 500),
        ]
        svc = LedgerApplicationService(repo=mock_repo)

        with pytest.raises(BetAlreadySettledError) as exc_info:
            await svc.record_bet_settlement(
                AsyncMock(), "m-1", "greenie", "m-1:greenie", {"A": 1000, "B": -500, "C": -500}
            )
        assert exc_info.value.code == 2004
        mock_repo.replace_bet_entries.assert_not_awaited()

    async def test_lock_taken_before_reading_existing(self) -> None:
        calls: list[str] = []
        mock_repo = AsyncMock()
        mock_repo.lock_match.side_effect = lambda *a: calls.append("lock")
        mock_repo.list_bet_entries_for_update.side_effect = lambda *a: calls.append("read") or []
        mock_repo.replace_bet_entries.side_effect = lambda *a: calls.append("replace") or []
        svc = LedgerApplicationService(repo=mock_repo)

        await svc.record_bet_settlement(AsyncMock(), "m-1", "sandy", "m-1:sandy", {"A": 200, "B": -200})

        assert calls == ["lock", "read", "replace"]


class TestValidateTransfers:
    def test_valid(self) -> None:
        validate_transfers([TransferDraft(from_user_id="B", to_user_id="A", amount=1)])

    @pytest.mark.parametrize(
        "draft",
        [
            TransferDraft(from_user_id="A", to_user_id="A", amount=500),
            TransferDraft(from_user_id="", to_user_id="A", amount=500),
            TransferDraft(from_user_id="B", to_user_id="A", amount=0),
        ],
    )
    def test_rejects(self, draft: TransferDraft) -> None:
        with pytest.raises(InvalidLedgerEntryError):
            validate_transfers([draft])

    async def test_blank_roster_id_rejected_before_writing(self) -> None:
        mock_repo = AsyncMock()
        svc = LedgerApplicationService(repo=mock_repo)

        with pytest.raises(InvalidLedgerEntryError):
            await svc.record_bet_settlement(AsyncMock(), "m-1", "sandy", "m-1:sandy", {"": 200, "B": -200})
        mock_repo.lock_match.assert_not_awaited()
