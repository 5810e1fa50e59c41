"""Pydantic schemas for fl_bets API requests and responses.

Hole numbers, pars and stake amounts are range-checked in the domain layer
so every rejection carries the same typed error codes whether it arrives
over HTTP or from an in-process caller.
"""

from typing import Literal

from pydantic import BaseModel, Field

from src.fl_bets.domain.models import HoleSideBets, SideBetConfig, SideBetSettlement
from src.fl_common.cents import cents_to_display
from src.fl_common.enums import SideBetType
from src.fl_ledger.application.schemas import BalanceItem, LedgerEntryItem, TransferItem

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SideBetConfigIn(BaseModel):
    type: SideBetType
    amount_cents: int = Field(0, ge=0, description="Per occurrence (greenie/sandy) or per point (BBB)")
    enabled: bool = False

    def to_domain(self) -> SideBetConfig:
        return SideBetConfig(type=self.type, amount=self.amount_cents, enabled=self.enabled)


class HoleSideBetsIn(BaseModel):
    hole_number: int
    par: int
    scores: dict[str, int] = Field(default_factory=dict, description="player_id -> strokes")
    greenie: str | None = Field(None, description="Manually selected greenie winner")
    proximities: dict[str, float | None] | None = Field(
        None, description="player_id -> feet from the pin; null = missed the green"
    )
    sandy_claims: dict[str, bool] = Field(default_factory=dict)
    bingo: str | None = None
    bango: str | None = None
    bongo: str | None = None

    def to_domain(self) -> HoleSideBets:
        return HoleSideBets(
            hole_number=self.hole_number,
            par=self.par,
            scores=dict(self.scores),
            greenie=self.greenie,
            proximities=dict(self.proximities) if self.proximities is not None else None,
            sandy_claims=dict(self.sandy_claims),
            bingo=self.bingo,
            bango=self.bango,
            bongo=self.bongo,
        )


class SideBetSettleRequest(BaseModel):
    roster: list[str] = Field(..., description="Participant ids, in display order")
    configs: list[SideBetConfigIn]
    holes: list[HoleSideBetsIn] = Field(default_factory=list)


class EstimateRequest(BaseModel):
    bet_type: Literal["nassau", "skins"]
    unit_value_cents: int
    num_participants: int = Field(..., ge=1)
    total_holes: Literal[9, 18] = 18


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class SideBetPlayerResultOut(BaseModel):
    player_id: str
    wins: int
    amount_cents: int
    amount_display: str


class SideBetSettlementOut(BaseModel):
    type: SideBetType
    results: list[SideBetPlayerResultOut]
    total_pot_cents: int
    total_pot_display: str

    @classmethod
    def from_domain(cls, s: SideBetSettlement) -> "SideBetSettlementOut":
        return cls(
            type=s.type,
            results=[
                SideBetPlayerResultOut(
                    player_id=r.player_id,
                    wins=r.wins,
                    amount_cents=r.amount,
                    amount_display=cents_to_display(r.amount),
                )
                for r in s.results
            ],
            total_pot_cents=s.total_pot,
            total_pot_display=cents_to_display(s.total_pot),
        )


class SettlementPreviewResponse(BaseModel):
    balances: list[BalanceItem]
    breakdown: list[SideBetSettlementOut]
    transfers: list[TransferItem]


class SettleMatchResponse(BaseModel):
    match_id: str
    balances: list[BalanceItem]
    breakdown: list[SideBetSettlementOut]
    entries: list[LedgerEntryItem]


class EstimateResponse(BaseModel):
    bet_type: str
    max_payout_cents: int
    max_payout_display: str
