"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Bet / side-bet input validation
  2xxx: Ledger
  3xxx: Season / standings
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Bet validation ---

class InvalidBetAmountError(AppError):
    def __init__(self, amount: object) -> None:
        super().__init__(1001, f"Bet amount must be greater than zero, got {amount}", 422)


class InvalidHoleNumberError(AppError):
    def __init__(self, hole_number: object, total_holes: int = 18) -> None:
        super().__init__(
            1002,
            f"Invalid hole number: {hole_number} (expected 1-{total_holes})",
            422,
        )


class InvalidParError(AppError):
    def __init__(self, par: object) -> None:
        super().__init__(1003, f"Invalid par: {par} (expected 3, 4 or 5)", 422)


class InvalidRosterError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1004, f"Invalid roster: {detail}", 422)


class UnknownParticipantError(AppError):
    def __init__(self, player_id: str) -> None:
        super().__init__(1005, f"Participant not found in match: {player_id}", 422)


class DuplicateHoleError(AppError):
    def __init__(self, hole_number: int) -> None:
        super().__init__(1007, f"Hole {hole_number} entered more than once", 422)


class DuplicateSideBetConfigError(AppError):
    def __init__(self, bet_type: str) -> None:
        super().__init__(1008, f"Side bet configured more than once: {bet_type}", 422)


# --- 2xxx: Ledger ---

class LedgerEntryNotFoundError(AppError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(2001, f"Ledger entry not found: {entry_id}", 404)


class InvalidLedgerEntryError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2002, f"Invalid ledger entry: {detail}", 422)


class LedgerEntryAlreadySettledError(AppError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(2003, f"Ledger entry already settled: {entry_id}", 409)


class BetAlreadySettledError(AppError):
    def __init__(self, bet_id: str) -> None:
        super().__init__(
            2004, f"Bet has paid ledger entries and cannot be recalculated: {bet_id}", 409
        )


# --- 3xxx: Season ---

class SeasonNotFoundError(AppError):
    def __init__(self, season_id: str) -> None:
        super().__init__(3001, f"Season not found: {season_id}", 404)


class InvalidSeasonRangeError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3002, f"Invalid season range: {detail}", 422)


class SeasonNotActiveError(AppError):
    def __init__(self, season_id: str) -> None:
        super().__init__(3003, f"Season is not active: {season_id}", 422)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class ZeroSumViolationError(AppError):
    """Settlement balances do not net to zero — always a logic bug, never user input."""

    def __init__(self, total: float, context: str) -> None:
        self.total = total
        super().__init__(
            9003,
            f"Zero-sum invariant violated ({context}): balances sum to {total}",
            500,
        )
