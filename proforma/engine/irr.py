"""IRR / NPV computation using scipy.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

from proforma.config import settings

FOUR_PLACES = Decimal("0.0001")
TWO_PLACES = Decimal("0.01")


def npv(cash_flows: list[Decimal], rate: Decimal) -> Decimal:
    """Net present value; cash_flows[0] occurs today, undiscounted."""
    total = Decimal("0")
    for t, cf in enumerate(cash_flows):
        total += cf / (1 + rate) ** t
    return total.quantize(TWO_PLACES, ROUND_HALF_UP)


def compute_irr(cash_flows: list[Decimal]) -> Decimal | None:
    """Compute IRR from a vector of annual cash flows.

    cash_flows[0] should be negative (initial investment).
    cash_flows[-1] should include sale proceeds.

    Uses Brent's method on the NPV function. Returns None when no root
    exists inside the configured bracket.
    """
    if not cash_flows or len(cash_flows) < 2:
        return None

    # Convert to float for scipy
    cf_float = [float(cf) for cf in cash_flows]

    def _npv(rate: float) -> float:
        return sum(cf / (1 + rate) ** t for t, cf in enumerate(cf_float))

    try:
        irr = brentq(
            _npv,
            settings.irr_lower_bound,
            settings.irr_upper_bound,
            xtol=1e-8,
            maxiter=1000,
        )
    except ValueError:
        # No sign change in range (e.g., all-negative cash flows)
        return None
    return Decimal(str(irr)).quantize(FOUR_PLACES, ROUND_HALF_UP)


def compute_equity_multiple(
    total_cash_returned: Decimal, total_cash_invested: Decimal
) -> Decimal:
    """Equity multiple = total cash out / total cash in."""
    if total_cash_invested <= 0:
        return Decimal("0")
    return (total_cash_returned / total_cash_invested).quantize(FOUR_PLACES, ROUND_HALF_UP)
