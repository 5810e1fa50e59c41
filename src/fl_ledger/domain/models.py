"""Domain models for fl_ledger — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class LedgerEntry:
    """Directional debt: from_user_id owes to_user_id ``amount`` cents.

    Entries are never merged on write; aggregation happens at read time.
    Only ``settled``/``settled_at``/``settled_by`` change after creation.
    """

    id: int                          # BIGSERIAL
    match_id: str
    from_user_id: str
    to_user_id: str
    amount: int                      # cents, always > 0
    bet_type: str                    # BetType value
    bet_id: str
    description: str | None = None
    settled: bool = False
    settled_at: datetime | None = None
    settled_by: str | None = None
    created_at: datetime | None = None
    calculated_by: str = "system"


@dataclass(frozen=True)
class TransferDraft:
    """A transfer computed from net balances, not yet persisted."""

    from_user_id: str
    to_user_id: str
    amount: int                      # cents, > 0


@dataclass(frozen=True)
class UserBalance:
    user_id: str
    amount: int                      # cents, magnitude only (see get_debtors/get_creditors)


@dataclass(frozen=True)
class PairwiseBalance:
    user_id: str                     # alphabetically smaller id
    other_user_id: str
    amount: int                      # positive = user_id owes other_user_id
