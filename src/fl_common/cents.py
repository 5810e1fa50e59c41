"""Integer arithmetic utilities for cents-based wager amounts.

All stakes, payouts, balances and ledger amounts use int (cents).
A $5 greenie is 500. No Decimal.
"""


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 6500 -> '$65.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"


def signed_display(cents: int) -> str:
    """Balance display with explicit sign: 1500 -> '+$15.00', 0 -> '$0.00'."""
    if cents > 0:
        return "+" + cents_to_display(cents)
    return cents_to_display(cents)
