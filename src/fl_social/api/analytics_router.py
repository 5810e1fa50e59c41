"""Player analytics endpoints (read-only).

POST /users/{user_id}/stats                       lifetime stats and streaks
POST /users/{user_id}/head-to-head                records against every opponent
POST /users/{user_id}/head-to-head/{opponent_id}  one rivalry with match history

POST because the body carries display names and tee times; nothing is written.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_common.database import get_db_session
from src.fl_common.response import ApiResponse, success_response
from src.fl_social.application.analytics_schemas import AnalyticsQuery
from src.fl_social.application.analytics_service import AnalyticsApplicationService

router = APIRouter(tags=["analytics"])

_service = AnalyticsApplicationService()


@router.post("/users/{user_id}/stats")
async def get_user_stats(
    user_id: str,
    body: AnalyticsQuery,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_user_stats(db, user_id, body)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.post("/users/{user_id}/head-to-head")
async def get_head_to_head(
    user_id: str,
    body: AnalyticsQuery,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_head_to_head(db, user_id, body)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.post("/users/{user_id}/head-to-head/{opponent_id}")
async def get_head_to_head_detail(
    user_id: str,
    opponent_id: str,
    body: AnalyticsQuery,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_head_to_head_detail(db, user_id, opponent_id, body)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))
