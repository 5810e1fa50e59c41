"""AnalyticsApplicationService: read-only player stats and head-to-head records.

Everything is computed from the ledger on each request; nothing is written.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_common.errors import InvalidSeasonRangeError
from src.fl_ledger.domain.models import LedgerEntry
from src.fl_ledger.domain.repository import LedgerRepositoryProtocol
from src.fl_ledger.infrastructure.persistence import LedgerRepository
from src.fl_social.application.analytics_schemas import (
    AnalyticsQuery,
    HeadToHeadDetailResponse,
    HeadToHeadRecordItem,
    HeadToHeadSummaryResponse,
    MatchResultItem,
    UserStatsResponse,
)
from src.fl_social.domain.analytics import (
    compute_head_to_head,
    compute_user_stats,
    get_head_to_head_detail,
)
from src.fl_social.domain.leaderboard import UNKNOWN_PLAYER, filter_ledger_by_date_range

logger = logging.getLogger(__name__)

_OPEN_START = datetime.min.replace(tzinfo=timezone.utc)
_OPEN_END = datetime.max.replace(tzinfo=timezone.utc)


class AnalyticsApplicationService:
    def __init__(self, ledger_repo: LedgerRepositoryProtocol | None = None) -> None:
        self._ledger_repo: LedgerRepositoryProtocol = ledger_repo or LedgerRepository()

    async def _entries(
        self, db: AsyncSession, user_id: str, query: AnalyticsQuery
    ) -> list[LedgerEntry]:
        entries = await self._ledger_repo.list_user_match_entries(db, user_id)
        if query.start_date is None and query.end_date is None:
            return entries
        start = query.start_date or _OPEN_START
        end = query.end_date or _OPEN_END
        if query.start_date is not None and query.end_date is not None and end < start:
            raise InvalidSeasonRangeError("end_date must not be before start_date")
        return filter_ledger_by_date_range(entries, start, end)

    async def get_user_stats(
        self, db: AsyncSession, user_id: str, query: AnalyticsQuery
    ) -> UserStatsResponse:
        entries = await self._entries(db, user_id, query)
        stats = compute_user_stats(entries, user_id, query.played_at)
        logger.debug("Stats computed: user=%s matches=%d", user_id, stats.total_matches)
        return UserStatsResponse.from_domain(user_id, stats)

    async def get_head_to_head(
        self, db: AsyncSession, user_id: str, query: AnalyticsQuery
    ) -> HeadToHeadSummaryResponse:
        entries = await self._entries(db, user_id, query)
        summary = compute_head_to_head(entries, user_id, query.display_names, query.played_at)
        return HeadToHeadSummaryResponse.from_domain(user_id, summary)

    async def get_head_to_head_detail(
        self, db: AsyncSession, user_id: str, opponent_id: str, query: AnalyticsQuery
    ) -> HeadToHeadDetailResponse:
        entries = await self._entries(db, user_id, query)
        record, history = get_head_to_head_detail(
            entries,
            user_id,
            opponent_id,
            query.display_names.get(opponent_id, UNKNOWN_PLAYER),
            query.played_at,
        )
        return HeadToHeadDetailResponse(
            user_id=user_id,
            opponent_id=opponent_id,
            record=HeadToHeadRecordItem.from_domain(record) if record is not None else None,
            history=[MatchResultItem.from_domain(r) for r in history],
        )
