"""LedgerRepository — concrete implementation of LedgerRepositoryProtocol.

All queries use raw text() SQL (no ORM). Writes run inside the caller's
transaction; the application service commits or rolls back.
"""

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_common.database import advisory_xact_lock
from src.fl_ledger.domain.models import LedgerEntry, TransferDraft

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = """
    id, match_id, from_user_id, to_user_id, amount,
    bet_type, bet_id, description,
    settled, settled_at, settled_by,
    created_at, calculated_by
"""

_LIST_MATCH_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM ledger_entries
    WHERE match_id = :match_id
    ORDER BY created_at, id
""")

_LIST_AMONG_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM ledger_entries
    WHERE from_user_id = ANY(CAST(:user_ids AS TEXT[]))
      AND to_user_id = ANY(CAST(:user_ids AS TEXT[]))
      AND created_at >= :start
      AND created_at <= :end
    ORDER BY created_at, id
""")

_LIST_USER_MATCHES_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM ledger_entries
    WHERE match_id IN (
        SELECT match_id FROM ledger_entries
        WHERE from_user_id = :user_id OR to_user_id = :user_id
    )
    ORDER BY created_at, id
""")

_GET_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM ledger_entries
    WHERE id = :entry_id
""")

_LIST_BET_FOR_UPDATE_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM ledger_entries
    WHERE match_id = :match_id AND bet_id = :bet_id
    ORDER BY id
    FOR UPDATE
""")

_DELETE_BET_SQL = text("""
    DELETE FROM ledger_entries
    WHERE match_id = :match_id AND bet_id = :bet_id AND settled = FALSE
""")

_INSERT_SQL = text(f"""
    INSERT INTO ledger_entries
        (match_id, from_user_id, to_user_id, amount, bet_type, bet_id,
         description, calculated_by)
    VALUES (:match_id, :from_user_id, :to_user_id, :amount, :bet_type, :bet_id,
            :description, :calculated_by)
    RETURNING {_COLUMNS}
""")

_MARK_SETTLED_SQL = text(f"""
    UPDATE ledger_entries
    SET settled = TRUE,
        settled_at = :settled_at,
        settled_by = :settled_by
    WHERE id = :entry_id AND settled = FALSE
    RETURNING {_COLUMNS}
""")

# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_entry(row: object) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        match_id=row.match_id,  # type: ignore[attr-defined]
        from_user_id=row.from_user_id,  # type: ignore[attr-defined]
        to_user_id=row.to_user_id,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        bet_type=row.bet_type,  # type: ignore[attr-defined]
        bet_id=row.bet_id,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        settled=row.settled,  # type: ignore[attr-defined]
        settled_at=row.settled_at,  # type: ignore[attr-defined]
        settled_by=row.settled_by,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        calculated_by=row.calculated_by,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class LedgerRepository:
    async def lock_match(self, db: AsyncSession, match_id: str) -> None:
        await advisory_xact_lock(db, f"ledger:{match_id}")

    async def list_bet_entries_for_update(
        self, db: AsyncSession, match_id: str, bet_id: str
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LIST_BET_FOR_UPDATE_SQL, {"match_id": match_id, "bet_id": bet_id}
        )
        return [_row_to_entry(row) for row in result.fetchall()]

    async def list_match_entries(
        self, db: AsyncSession, match_id: str
    ) -> list[LedgerEntry]:
        result = await db.execute(_LIST_MATCH_SQL, {"match_id": match_id})
        return [_row_to_entry(row) for row in result.fetchall()]

    async def list_entries_among(
        self,
        db: AsyncSession,
        user_ids: Sequence[str],
        start: datetime,
        end: datetime,
    ) -> list[LedgerEntry]:
        """Entries where BOTH parties are in user_ids, created within [start, end]."""
        if not user_ids:
            return []
        result = await db.execute(
            _LIST_AMONG_SQL,
            {"user_ids": list(user_ids), "start": start, "end": end},
        )
        return [_row_to_entry(row) for row in result.fetchall()]

    async def list_user_match_entries(
        self, db: AsyncSession, user_id: str
    ) -> list[LedgerEntry]:
        """Every entry of every match the user is party to, including entries
        between other players in those matches."""
        result = await db.execute(_LIST_USER_MATCHES_SQL, {"user_id": user_id})
        return [_row_to_entry(row) for row in result.fetchall()]

    async def get_entry(
        self, db: AsyncSession, entry_id: int
    ) -> LedgerEntry | None:
        result = await db.execute(_GET_SQL, {"entry_id": entry_id})
        row = result.fetchone()
        return _row_to_entry(row) if row else None

    async def replace_bet_entries(
        self,
        db: AsyncSession,
        match_id: str,
        bet_type: str,
        bet_id: str,
        transfers: Sequence[TransferDraft],
        description: str | None,
        calculated_by: str,
    ) -> list[LedgerEntry]:
        """Delete the unsettled entries for (match_id, bet_id) and insert the new set.

        Settled rows are never deleted. Callers hold the match lock and refuse
        to replace a bet that has any, inside one transaction.
        """
        await db.execute(_DELETE_BET_SQL, {"match_id": match_id, "bet_id": bet_id})
        entries: list[LedgerEntry] = []
        for transfer in transfers:
            result = await db.execute(
                _INSERT_SQL,
                {
                    "match_id": match_id,
                    "from_user_id": transfer.from_user_id,
                    "to_user_id": transfer.to_user_id,
                    "amount": transfer.amount,
                    "bet_type": bet_type,
                    "bet_id": bet_id,
                    "description": description,
                    "calculated_by": calculated_by,
                },
            )
            entries.append(_row_to_entry(result.fetchone()))
        return entries

    async def mark_settled(
        self,
        db: AsyncSession,
        entry_id: int,
        settled_by: str,
        settled_at: datetime,
    ) -> LedgerEntry | None:
        """Flip an unsettled entry to settled. None if missing or already settled."""
        result = await db.execute(
            _MARK_SETTLED_SQL,
            {"entry_id": entry_id, "settled_by": settled_by, "settled_at": settled_at},
        )
        row = result.fetchone()
        return _row_to_entry(row) if row else None
