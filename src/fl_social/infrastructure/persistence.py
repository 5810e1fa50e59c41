"""SeasonRepository — concrete implementation of SeasonRepositoryProtocol.

Raw text() SQL. Standings live in a JSONB column; they are written with
json.dumps and read back through a ::text cast so decoding does not depend
on driver codecs.
"""

import json
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_common.database import advisory_xact_lock
from src.fl_common.enums import SeasonPeriod, SeasonStatus, TrendDirection
from src.fl_social.domain.models import Season, SeasonStanding

_COLUMNS = """
    id, group_id, name, period, start_date, end_date, status,
    standings::text AS standings, created_at, updated_at
"""

_INSERT_SQL = text(f"""
    INSERT INTO seasons
        (id, group_id, name, period, start_date, end_date, status, standings)
    VALUES (:id, :group_id, :name, :period, :start_date, :end_date, :status,
            CAST(:standings AS JSONB))
    RETURNING {_COLUMNS}
""")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM seasons WHERE id = :season_id")

_GET_ACTIVE_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM seasons
    WHERE group_id = :group_id AND status = 'active'
    LIMIT 1
""")

_LIST_GROUP_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM seasons
    WHERE group_id = :group_id
    ORDER BY start_date DESC
""")

_UPDATE_STANDINGS_SQL = text(f"""
    UPDATE seasons
    SET standings = CAST(:standings AS JSONB)
    WHERE id = :season_id
    RETURNING {_COLUMNS}
""")

_COMPLETE_SQL = text(f"""
    UPDATE seasons
    SET status = 'completed'
    WHERE id = :season_id
    RETURNING {_COLUMNS}
""")


def _standings_to_json(standings: Sequence[SeasonStanding]) -> str:
    return json.dumps([{**asdict(s), "trend": s.trend.value} for s in standings])


def _standing_from_dict(data: dict[str, Any]) -> SeasonStanding:
    return SeasonStanding(
        player_id=str(data["player_id"]),
        display_name=str(data["display_name"]),
        net_amount=int(data.get("net_amount", 0)),
        matches_played=int(data.get("matches_played", 0)),
        wins=int(data.get("wins", 0)),
        losses=int(data.get("losses", 0)),
        pushes=int(data.get("pushes", 0)),
        rank=int(data.get("rank", 0)),
        trend=TrendDirection(data.get("trend", TrendDirection.NEUTRAL.value)),
    )


def _row_to_season(row: object) -> Season:
    return Season(
        id=row.id,  # type: ignore[attr-defined]
        group_id=row.group_id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        period=SeasonPeriod(row.period),  # type: ignore[attr-defined]
        start_date=row.start_date,  # type: ignore[attr-defined]
        end_date=row.end_date,  # type: ignore[attr-defined]
        status=SeasonStatus(row.status),  # type: ignore[attr-defined]
        standings=[_standing_from_dict(d) for d in json.loads(row.standings or "[]")],  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class SeasonRepository:
    async def lock_group(self, db: AsyncSession, group_id: str) -> None:
        """Held until commit; serializes season creation and rollover per group."""
        await advisory_xact_lock(db, f"season:{group_id}")

    async def create(self, db: AsyncSession, season: Season) -> Season:
        result = await db.execute(
            _INSERT_SQL,
            {
                "id": season.id,
                "group_id": season.group_id,
                "name": season.name,
                "period": season.period.value,
                "start_date": season.start_date,
                "end_date": season.end_date,
                "status": season.status.value,
                "standings": _standings_to_json(season.standings),
            },
        )
        return _row_to_season(result.fetchone())

    async def get(self, db: AsyncSession, season_id: str) -> Season | None:
        result = await db.execute(_GET_SQL, {"season_id": season_id})
        row = result.fetchone()
        return _row_to_season(row) if row else None

    async def get_active_for_group(self, db: AsyncSession, group_id: str) -> Season | None:
        result = await db.execute(_GET_ACTIVE_SQL, {"group_id": group_id})
        row = result.fetchone()
        return _row_to_season(row) if row else None

    async def list_for_group(self, db: AsyncSession, group_id: str) -> list[Season]:
        result = await db.execute(_LIST_GROUP_SQL, {"group_id": group_id})
        return [_row_to_season(row) for row in result.fetchall()]

    async def update_standings(
        self, db: AsyncSession, season_id: str, standings: Sequence[SeasonStanding]
    ) -> Season | None:
        result = await db.execute(
            _UPDATE_STANDINGS_SQL,
            {"season_id": season_id, "standings": _standings_to_json(standings)},
        )
        row = result.fetchone()
        return _row_to_season(row) if row else None

    async def complete(self, db: AsyncSession, season_id: str) -> Season | None:
        result = await db.execute(_COMPLETE_SQL, {"season_id": season_id})
        row = result.fetchone()
        return _row_to_season(row) if row else None
