"""Straight-line depreciation with the mid-month convention.

The original basis and each capital improvement run on their own
recovery schedule. Pure functions.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import PropertyAssumptions

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class YearlyDepreciation:
    year: int
    original_basis: Decimal
    improvements: Decimal
    total: Decimal


def mid_month_factor(placed_in_service_month: int) -> Decimal:
    """Share of a full year's depreciation allowed in the first year.

    Property is treated as placed in service mid-month:
    (12 - month + 0.5) / 12, e.g. February -> 10.5 / 12.
    """
    month = min(12, max(1, placed_in_service_month))
    return (Decimal("12") - month + Decimal("0.5")) / 12


def straight_line_depreciation(
    basis: Decimal,
    recovery_years: Decimal,
    year: int,
    placed_in_service_month: int = 1,
) -> Decimal:
    """Depreciation for ``year`` (1-indexed from placement) of one schedule."""
    if basis <= 0 or recovery_years <= 0 or year < 1 or year > recovery_years:
        return Decimal("0")

    annual = basis / recovery_years
    if year == 1:
        return annual * mid_month_factor(placed_in_service_month)
    return annual


def improvements_basis(assumptions: PropertyAssumptions, through_year: int) -> Decimal:
    """Cost of capital improvements placed in service by ``through_year``."""
    return sum(
        (ci.amount for ci in assumptions.capital_improvements if ci.year <= through_year),
        Decimal("0"),
    )


def compute_yearly_depreciation(assumptions: PropertyAssumptions, year: int) -> YearlyDepreciation:
    """Depreciation for hold year ``year`` (1-indexed)."""
    base = straight_line_depreciation(
        assumptions.depreciable_basis,
        assumptions.depreciation_years,
        year,
        assumptions.acquisition_month,
    )

    improvements = Decimal("0")
    for ci in assumptions.capital_improvements:
        recovery = ci.recovery_period or assumptions.depreciation_years
        # Improvements are assumed placed in service in January
        improvements += straight_line_depreciation(ci.amount, recovery, year - ci.year + 1, 1)

    base = base.quantize(TWO_PLACES, ROUND_HALF_UP)
    improvements = improvements.quantize(TWO_PLACES, ROUND_HALF_UP)
    return YearlyDepreciation(
        year=year,
        original_basis=base,
        improvements=improvements,
        total=base + improvements,
    )


def total_depreciation_taken(assumptions: PropertyAssumptions, through_year: int) -> Decimal:
    """Sum of all depreciation taken from year 1 through given year."""
    total = Decimal("0")
    for y in range(1, through_year + 1):
        total += compute_yearly_depreciation(assumptions, y).total
    return total
