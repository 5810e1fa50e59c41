"""fl_ledger REST endpoints.

GET  /matches/{match_id}/ledger                   — entries, balances, who owes whom
GET  /matches/{match_id}/ledger/users/{user_id}   — one user's balance in a match
POST /ledger/entries/{entry_id}/settle            — mark an entry paid
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fl_common.database import get_db_session
from src.fl_common.response import ApiResponse, success_response
from src.fl_ledger.application.schemas import SettleEntryRequest
from src.fl_ledger.application.service import LedgerApplicationService

router = APIRouter(tags=["ledger"])

_service = LedgerApplicationService()


@router.get("/matches/{match_id}/ledger")
async def get_match_ledger(
    match_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_match_ledger(db, match_id)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.get("/matches/{match_id}/ledger/users/{user_id}")
async def get_user_balance(
    match_id: str,
    user_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_user_balance(db, match_id, user_id)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.post("/ledger/entries/{entry_id}/settle")
async def settle_entry(
    entry_id: int,
    body: SettleEntryRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.settle_entry(db, entry_id, body.settled_by)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))
