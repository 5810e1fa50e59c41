"""SideBetApplicationService — composes the pure settlement engine with the ledger.

preview / estimate are pure and touch no database.
settle_match recomputes every side bet from scratch and replaces the
match's side-bet ledger entries in one transaction.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fl_bets.application.schemas import (
    EstimateRequest,
    EstimateResponse,
    SettleMatchResponse,
    SettlementPreviewResponse,
    SideBetSettlementOut,
    SideBetSettleRequest,
)
from src.fl_bets.domain.estimates import (
    create_nassau_config,
    create_skins_config,
    estimate_nassau_total,
    estimate_skins_total,
)
from src.fl_bets.domain.models import HoleSideBets, SideBetConfig, SideBetSettlement
from src.fl_bets.domain.settlement import (
    assert_zero_sum,
    get_detailed_settlement,
    merge_settlements,
)
from src.fl_common.cents import cents_to_display
from src.fl_common.enums import SideBetType
from src.fl_ledger.application.schemas import LedgerEntryItem, TransferItem, balance_items
from src.fl_ledger.application.service import LedgerApplicationService
from src.fl_ledger.domain.models import LedgerEntry
from src.fl_ledger.domain.transfers import simplify_debts

logger = logging.getLogger(__name__)


def side_bet_id(match_id: str, bet_type: SideBetType) -> str:
    """One ledger bet id per side-bet type per match."""
    return f"{match_id}:{bet_type.value}"


class SideBetApplicationService:
    def __init__(
        self,
        ledger: LedgerApplicationService | None = None,
        epsilon: float | None = None,
    ) -> None:
        self._ledger = ledger or LedgerApplicationService()
        self._epsilon = settings.ZERO_SUM_EPSILON if epsilon is None else epsilon

    def _compute(
        self, request: SideBetSettleRequest
    ) -> tuple[list[SideBetSettlement], dict[str, int]]:
        holes: list[HoleSideBets] = [h.to_domain() for h in request.holes]
        configs: list[SideBetConfig] = [c.to_domain() for c in request.configs]
        settlements = get_detailed_settlement(holes, configs, request.roster, self._epsilon)
        totals = merge_settlements(settlements, request.roster)
        assert_zero_sum(totals, context="side_bets:combined", epsilon=self._epsilon)
        return settlements, totals

    def preview(self, request: SideBetSettleRequest) -> SettlementPreviewResponse:
        settlements, totals = self._compute(request)
        return SettlementPreviewResponse(
            balances=balance_items(totals),
            breakdown=[SideBetSettlementOut.from_domain(s) for s in settlements],
            transfers=[TransferItem.from_domain(t) for t in simplify_debts(totals)],
        )

    async def settle_match(
        self,
        db: AsyncSession,
        match_id: str,
        request: SideBetSettleRequest,
        calculated_by: str = "system",
    ) -> SettleMatchResponse:
        settlements, totals = self._compute(request)
        by_type = {s.type: s for s in settlements}

        entries: list[LedgerEntry] = []
        try:
            # Disabled types are replaced with nothing so a bet switched off
            # after an earlier run leaves no stale entries behind.
            for bet_type in SideBetType:
                settlement = by_type.get(bet_type)
                balances = (
                    {r.player_id: r.amount for r in settlement.results} if settlement else {}
                )
                entries += await self._ledger.record_bet_settlement(
                    db,
                    match_id=match_id,
                    bet_type=bet_type.value,
                    bet_id=side_bet_id(match_id, bet_type),
                    balances=balances,
                    description=f"{bet_type.value.replace('_', ' ').title()} settlement",
                    calculated_by=calculated_by,
                )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Match side bets settled: match=%s players=%d entries=%d",
            match_id, len(request.roster), len(entries),
        )
        return SettleMatchResponse(
            match_id=match_id,
            balances=balance_items(totals),
            breakdown=[SideBetSettlementOut.from_domain(s) for s in settlements],
            entries=[LedgerEntryItem.from_domain(e) for e in entries],
        )

    def estimate(self, request: EstimateRequest) -> EstimateResponse:
        if request.bet_type == "nassau":
            nassau = create_nassau_config(request.unit_value_cents)
            total = estimate_nassau_total(nassau, request.num_participants)
        else:
            skins = create_skins_config(request.unit_value_cents)
            total = estimate_skins_total(skins, request.num_participants, request.total_holes)
        return EstimateResponse(
            bet_type=request.bet_type,
            max_payout_cents=total,
            max_payout_display=cents_to_display(total),
        )
