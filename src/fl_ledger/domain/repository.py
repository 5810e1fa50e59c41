# src/fl_ledger/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_ledger.domain.models import LedgerEntry, TransferDraft


class LedgerRepositoryProtocol(Protocol):
    async def lock_match(self, db: AsyncSession, match_id: str) -> None: ...

    async def list_bet_entries_for_update(
        self, db: AsyncSession, match_id: str, bet_id: str
    ) -> list[LedgerEntry]: ...

    async def list_match_entries(
        self, db: AsyncSession, match_id: str
    ) -> list[LedgerEntry]: ...

    async def list_entries_among(
        self,
        db: AsyncSession,
        user_ids: Sequence[str],
        start: datetime,
        end: datetime,
    ) -> list[LedgerEntry]: ...

    async def list_user_match_entries(
        self, db: AsyncSession, user_id: str
    ) -> list[LedgerEntry]: ...

    async def get_entry(
        self, db: AsyncSession, entry_id: int
    ) -> LedgerEntry | None: ...

    async def replace_bet_entries(
        self,
        db: AsyncSession,
        match_id: str,
        bet_type: str,
        bet_id: str,
        transfers: Sequence[TransferDraft],
        description: str | None,
        calculated_by: str,
    ) -> list[LedgerEntry]: ...

    async def mark_settled(
        self,
        db: AsyncSession,
        entry_id: int,
        settled_by: str,
        settled_at: datetime,
    ) -> LedgerEntry | None: ...
