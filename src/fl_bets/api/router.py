"""fl_bets REST endpoints.

POST /side-bets/preview                   — dry-run settlement, nothing persisted
POST /matches/{match_id}/side-bets/settle — recompute and write ledger entries
POST /bets/estimates                      — Nassau / Skins maximum payout
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_bets.application.schemas import EstimateRequest, SideBetSettleRequest
from src.fl_bets.application.service import SideBetApplicationService
from src.fl_common.database import get_db_session
from src.fl_common.response import ApiResponse, success_response

router = APIRouter(tags=["bets"])

_service = SideBetApplicationService()


@router.post("/side-bets/preview")
async def preview_side_bets(body: SideBetSettleRequest, request: Request) -> ApiResponse:
    result = _service.preview(body)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.post("/matches/{match_id}/side-bets/settle")
async def settle_match_side_bets(
    match_id: str,
    body: SideBetSettleRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.settle_match(db, match_id, body)
    return success_response(result.model_dump(mode="json"), getattr(request.state, "request_id", None))


@router.post("/bets/estimates")
async def estimate_bet(body: EstimateRequest, request: Request) -> ApiResponse:
    result = _service.estimate(body)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))
