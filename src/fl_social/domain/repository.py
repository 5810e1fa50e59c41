"""Repository Protocol for seasons.

Unit tests inject a mock that conforms to this Protocol.
"""

from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_social.domain.models import Season, SeasonStanding


class SeasonRepositoryProtocol(Protocol):
    async def lock_group(self, db: AsyncSession, group_id: str) -> None: ...

    async def create(self, db: AsyncSession, season: Season) -> Season: ...

    async def get(self, db: AsyncSession, season_id: str) -> Season | None: ...

    async def get_active_for_group(
        self, db: AsyncSession, group_id: str
    ) -> Season | None: ...

    async def list_for_group(self, db: AsyncSession, group_id: str) -> list[Season]: ...

    async def update_standings(
        self, db: AsyncSession, season_id: str, standings: Sequence[SeasonStanding]
    ) -> Season | None: ...

    async def complete(self, db: AsyncSession, season_id: str) -> Season | None: ...
