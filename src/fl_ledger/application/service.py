"""LedgerApplicationService — thin composition layer.

Reads are plain repository calls folded through the pure balance
calculator. ``record_bet_settlement`` and ``settle_entry`` write, and
commit or roll back here.
"""

import logging
from collections.abc import Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_common.cents import signed_display
from src.fl_common.datetime_utils import utc_now
from src.fl_common.errors import (
    BetAlreadySettledError,
    InvalidLedgerEntryError,
    LedgerEntryAlreadySettledError,
    LedgerEntryNotFoundError,
)
from src.fl_ledger.application.schemas import (
    LedgerEntryItem,
    MatchLedgerResponse,
    UserLedgerResponse,
)
from src.fl_ledger.domain.balances import calculate_user_balance, user_has_unsettled_debts
from src.fl_ledger.domain.models import LedgerEntry, TransferDraft
from src.fl_ledger.domain.repository import LedgerRepositoryProtocol
from src.fl_ledger.domain.transfers import simplify_debts
from src.fl_ledger.infrastructure.persistence import LedgerRepository

logger = logging.getLogger(__name__)


def validate_transfers(transfers: Sequence[TransferDraft]) -> None:
    for t in transfers:
        if not t.from_user_id or not t.to_user_id:
            raise InvalidLedgerEntryError("blank user id")
        if t.from_user_id == t.to_user_id:
            raise InvalidLedgerEntryError(f"{t.from_user_id} cannot owe themselves")
        if t.amount <= 0:
            raise InvalidLedgerEntryError(f"amount must be positive, got {t.amount}")


class LedgerApplicationService:
    def __init__(self, repo: LedgerRepositoryProtocol | None = None) -> None:
        self._repo: LedgerRepositoryProtocol = repo or LedgerRepository()

    async def get_match_ledger(self, db: AsyncSession, match_id: str) -> MatchLedgerResponse:
        entries = await self._repo.list_match_entries(db, match_id)
        return MatchLedgerResponse.from_entries(match_id, entries)

    async def get_user_balance(
        self, db: AsyncSession, match_id: str, user_id: str
    ) -> UserLedgerResponse:
        entries = await self._repo.list_match_entries(db, match_id)
        balance = calculate_user_balance(user_id, entries)
        unsettled = calculate_user_balance(user_id, [e for e in entries if not e.settled])
        return UserLedgerResponse(
            match_id=match_id,
            user_id=user_id,
            balance_cents=balance,
            balance_display=signed_display(balance),
            unsettled_balance_cents=unsettled,
            unsettled_balance_display=signed_display(unsettled),
            has_unsettled_debts=user_has_unsettled_debts(user_id, entries),
        )

    async def settle_entry(
        self, db: AsyncSession, entry_id: int, settled_by: str
    ) -> LedgerEntryItem:
        try:
            existing = await self._repo.get_entry(db, entry_id)
            if existing is None:
                raise LedgerEntryNotFoundError(str(entry_id))
            if existing.settled:
                raise LedgerEntryAlreadySettledError(str(entry_id))
            entry = await self._repo.mark_settled(db, entry_id, settled_by, utc_now())
            if entry is None:
                # Lost a race with another settle of the same entry
                raise LedgerEntryAlreadySettledError(str(entry_id))
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Ledger entry settled: id=%d by=%s", entry_id, settled_by)
        return LedgerEntryItem.from_domain(entry)

    async def record_bet_settlement(
        self,
        db: AsyncSession,
        match_id: str,
        bet_type: str,
        bet_id: str,
        balances: Mapping[str, int],
        description: str | None = None,
        calculated_by: str = "system",
    ) -> list[LedgerEntry]:
        """Replace a bet's ledger entries with the minimal transfers for ``balances``.

        Runs in the caller's transaction; the caller commits. Writers on one
        match are serialized by a transaction-scoped lock. A bet with any paid
        entry is frozen: recalculating it would bill the payer a second time.
        """
        transfers = simplify_debts(balances)
        validate_transfers(transfers)
        await self._repo.lock_match(db, match_id)
        existing = await self._repo.list_bet_entries_for_update(db, match_id, bet_id)
        if any(e.settled for e in existing):
            raise BetAlreadySettledError(bet_id)
        entries = await self._repo.replace_bet_entries(
            db, match_id, bet_type, bet_id, transfers, description, calculated_by
        )
        logger.info(
            "Ledger entries replaced: match=%s bet=%s transfers=%d",
            match_id, bet_id, len(entries),
        )
        return entries
