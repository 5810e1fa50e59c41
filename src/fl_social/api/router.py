"""fl_social REST endpoints.

POST /groups/{group_id}/seasons          — create a season (closes the active one)
GET  /groups/{group_id}/seasons          — list a group's seasons, newest first
POST /groups/{group_id}/seasons/current  — get or roll over the current season
GET  /seasons/{season_id}                — season with stored standings
POST /seasons/{season_id}/standings      — recompute standings from the ledger
POST /seasons/{season_id}/complete       — close a season
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_common.database import get_db_session
from src.fl_common.response import ApiResponse, success_response
from src.fl_social.application.schemas import (
    CreateSeasonRequest,
    CurrentSeasonRequest,
    RecomputeStandingsRequest,
)
from src.fl_social.application.service import SeasonApplicationService

router = APIRouter(tags=["seasons"])

_service = SeasonApplicationService()


@router.post("/groups/{group_id}/seasons", status_code=201)
async def create_season(
    group_id: str,
    body: CreateSeasonRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_season(db, group_id, body)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.get("/groups/{group_id}/seasons")
async def list_group_seasons(
    group_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.list_group_seasons(db, group_id)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.post("/groups/{group_id}/seasons/current")
async def get_or_create_current_season(
    group_id: str,
    body: CurrentSeasonRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_or_create_current(db, group_id, body.period)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.get("/seasons/{season_id}")
async def get_season(
    season_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_season(db, season_id)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.post("/seasons/{season_id}/standings")
async def recompute_standings(
    season_id: str,
    body: RecomputeStandingsRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.recompute_standings(db, season_id, body)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.post("/seasons/{season_id}/complete")
async def complete_season(
    season_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.complete_season(db, season_id)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))
