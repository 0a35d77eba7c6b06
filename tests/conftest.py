"""Canonical test fixtures used across all engine and API tests.

Fixture: $1M residential rental, $100K/yr flat rent, 5% vacancy,
30% operating expenses (NOI $66,500), 5-year hold, 6.5% exit cap.
Leveraged variants: 75% LTV or 1.25x DSCR at 6.5%, 30yr amortization.
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from proforma.models.assumptions import (
    AmountType,
    DispositionPriceType,
    FinancingType,
    PropertyAssumptions,
    PropertyType,
)


@pytest.fixture
def simple_rental() -> PropertyAssumptions:
    """All-cash $1M property with a flat income schedule."""
    return PropertyAssumptions(
        purchase_price=Decimal("1000000"),
        acquisition_costs=Decimal("0"),
        acquisition_cost_type=AmountType.PERCENTAGE,
        property_type=PropertyType.RESIDENTIAL,
        land_percentage=Decimal("20"),
        improvements_percentage=Decimal("80"),
        depreciation_years=Decimal("27.5"),
        acquisition_month=1,
        hold_period_years=5,
        potential_rental_income=(Decimal("100000"),) * 5,
        vacancy_rates=(Decimal("0.05"),) * 5,
        operating_expenses=(Decimal("30"),) * 5,
        operating_expense_type=AmountType.PERCENTAGE,
        financing_type=FinancingType.CASH,
        ordinary_income_tax_rate=Decimal("0.35"),
        capital_gains_tax_rate=Decimal("0.20"),
        depreciation_recapture_rate=Decimal("0.25"),
        disposition_price_type=DispositionPriceType.CAP_RATE,
        disposition_cap_rate=Decimal("0.065"),
        cost_of_sale_type=AmountType.PERCENTAGE,
        cost_of_sale_percentage=Decimal("0.06"),
    )


@pytest.fixture
def leveraged_rental(simple_rental) -> PropertyAssumptions:
    """Same property at 75% LTV, loan already sized."""
    return replace(
        simple_rental,
        financing_type=FinancingType.LTV,
        target_ltv=Decimal("75"),
        interest_rate=Decimal("0.065"),
        amortization_years=30,
        loan_term_years=10,
        payments_per_year=12,
        loan_amount=Decimal("750000.00"),
        loan_costs=Decimal("2"),
        loan_cost_type=AmountType.PERCENTAGE,
    )


@pytest.fixture
def dscr_rental(simple_rental) -> PropertyAssumptions:
    """Same property sized to a 1.25x DSCR. Loan amount not yet computed."""
    return replace(
        simple_rental,
        financing_type=FinancingType.DSCR,
        target_dscr=Decimal("1.25"),
        interest_rate=Decimal("0.065"),
        amortization_years=30,
        loan_term_years=10,
        payments_per_year=12,
        loan_amount=Decimal("0"),
    )


@pytest.fixture
def growing_rental(simple_rental) -> PropertyAssumptions:
    """Rent grows 3% a year from $100K."""
    rents = tuple(
        (Decimal("100000") * Decimal("1.03") ** i).quantize(Decimal("0.01")) for i in range(5)
    )
    return replace(simple_rental, potential_rental_income=rents)
