"""SeasonApplicationService — season lifecycle and standings recompute.

A group has at most one active season; creating a new one completes the
previous active season in the same transaction.
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_common.datetime_utils import as_utc, utc_now
from src.fl_common.enums import SeasonPeriod, SeasonStatus
from src.fl_common.errors import InvalidSeasonRangeError, SeasonNotActiveError, SeasonNotFoundError
from src.fl_ledger.domain.repository import LedgerRepositoryProtocol
from src.fl_ledger.infrastructure.persistence import LedgerRepository
from src.fl_social.application.schemas import (
    CreateSeasonRequest,
    RecomputeStandingsRequest,
    SeasonListResponse,
    SeasonResponse,
)
from src.fl_social.domain.leaderboard import (
    calculate_standings_from_ledger,
    filter_ledger_by_date_range,
)
from src.fl_social.domain.models import Season, SeasonDates
from src.fl_social.domain.repository import SeasonRepositoryProtocol
from src.fl_social.domain.seasons import get_season_dates
from src.fl_social.infrastructure.persistence import SeasonRepository

logger = logging.getLogger(__name__)


def resolve_season_dates(request: CreateSeasonRequest) -> SeasonDates:
    """Window for a new season.

    Calendar periods derive their bounds from ``reference_date`` and may
    only override the name. ``custom`` must carry explicit bounds and a name.
    """
    if request.period is SeasonPeriod.CUSTOM:
        if request.start_date is None or request.end_date is None or not request.name:
            raise InvalidSeasonRangeError("custom seasons require start_date, end_date and name")
        start, end = as_utc(request.start_date), as_utc(request.end_date)
        if end <= start:
            raise InvalidSeasonRangeError("end_date must be after start_date")
        return SeasonDates(start=start, end=end, name=request.name)

    if request.start_date is not None or request.end_date is not None:
        raise InvalidSeasonRangeError(
            f"explicit dates are only accepted for custom seasons, not {request.period.value}"
        )
    dates = get_season_dates(request.period, request.reference_date)
    if request.name:
        return SeasonDates(start=dates.start, end=dates.end, name=request.name)
    return dates


def _covers(season: Season, now: datetime) -> bool:
    return season.start_date <= now <= season.end_date


class SeasonApplicationService:
    def __init__(
        self,
        repo: SeasonRepositoryProtocol | None = None,
        ledger_repo: LedgerRepositoryProtocol | None = None,
    ) -> None:
        self._repo: SeasonRepositoryProtocol = repo or SeasonRepository()
        self._ledger_repo: LedgerRepositoryProtocol = ledger_repo or LedgerRepository()

    async def _load(self, db: AsyncSession, season_id: str) -> Season:
        season = await self._repo.get(db, season_id)
        if season is None:
            raise SeasonNotFoundError(season_id)
        return season

    async def _create(
        self, db: AsyncSession, group_id: str, period: SeasonPeriod, dates: SeasonDates
    ) -> Season:
        """Caller holds the group lock, so the active-season read cannot go stale."""
        active = await self._repo.get_active_for_group(db, group_id)
        if active is not None:
            await self._repo.complete(db, active.id)
            logger.info("Season auto-completed: id=%s group=%s", active.id, group_id)
        return await self._repo.create(
            db,
            Season(
                id=str(uuid.uuid4()),
                group_id=group_id,
                name=dates.name,
                period=period,
                start_date=dates.start,
                end_date=dates.end,
            ),
        )

    async def create_season(
        self, db: AsyncSession, group_id: str, request: CreateSeasonRequest
    ) -> SeasonResponse:
        dates = resolve_season_dates(request)
        try:
            await self._repo.lock_group(db, group_id)
            season = await self._create(db, group_id, request.period, dates)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Season created: id=%s group=%s period=%s name=%r",
            season.id, group_id, request.period.value, season.name,
        )
        return SeasonResponse.from_domain(season)

    async def get_or_create_current(
        self,
        db: AsyncSession,
        group_id: str,
        period: SeasonPeriod = SeasonPeriod.MONTHLY,
        now: datetime | None = None,
    ) -> SeasonResponse:
        """Active season covering ``now``; otherwise roll over to a fresh calendar season."""
        now = as_utc(now) if now is not None else utc_now()
        if period is SeasonPeriod.CUSTOM:
            raise InvalidSeasonRangeError("custom seasons cannot be created automatically")
        try:
            active = await self._repo.get_active_for_group(db, group_id)
            if active is not None and _covers(active, now):
                return SeasonResponse.from_domain(active, now)
            await self._repo.lock_group(db, group_id)
            # Another request may have rolled over while we waited for the lock
            active = await self._repo.get_active_for_group(db, group_id)
            if active is not None and _covers(active, now):
                await db.commit()
                return SeasonResponse.from_domain(active, now)
            season = await self._create(db, group_id, period, get_season_dates(period, now))
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Season rolled over: id=%s group=%s name=%r", season.id, group_id, season.name)
        return SeasonResponse.from_domain(season, now)

    async def get_season(self, db: AsyncSession, season_id: str) -> SeasonResponse:
        return SeasonResponse.from_domain(await self._load(db, season_id))

    async def list_group_seasons(self, db: AsyncSession, group_id: str) -> SeasonListResponse:
        seasons = await self._repo.list_for_group(db, group_id)
        return SeasonListResponse(
            group_id=group_id,
            seasons=[SeasonResponse.from_domain(s) for s in seasons],
        )

    async def recompute_standings(
        self, db: AsyncSession, season_id: str, request: RecomputeStandingsRequest
    ) -> SeasonResponse:
        """Rebuild standings from ledger entries inside the season window and store them.

        The previous stored standings serve as the baseline for rank trends.
        """
        try:
            season = await self._load(db, season_id)
            if season.status != SeasonStatus.ACTIVE:
                raise SeasonNotActiveError(season_id)
            entries = await self._ledger_repo.list_entries_among(
                db, request.member_ids, season.start_date, season.end_date
            )
            entries = filter_ledger_by_date_range(entries, season.start_date, season.end_date)
            standings = calculate_standings_from_ledger(
                entries, request.member_ids, request.display_names, prior_standings=season.standings
            )
            updated = await self._repo.update_standings(db, season_id, standings)
            if updated is None:
                raise SeasonNotFoundError(season_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Standings recomputed: season=%s members=%d entries=%d",
            season_id, len(request.member_ids), len(entries),
        )
        return SeasonResponse.from_domain(updated)

    async def complete_season(self, db: AsyncSession, season_id: str) -> SeasonResponse:
        try:
            season = await self._load(db, season_id)
            if season.status != SeasonStatus.ACTIVE:
                raise SeasonNotActiveError(season_id)
            completed = await self._repo.complete(db, season_id)
            if completed is None:
                raise SeasonNotFoundError(season_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Season completed: id=%s", season_id)
        return SeasonResponse.from_domain(completed)
