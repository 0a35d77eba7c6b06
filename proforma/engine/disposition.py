"""Property disposition (sale) analysis.

Sale price from a fixed dollar amount or by capitalizing NOI at the exit
cap rate. Gain above adjusted basis is split into depreciation recapture
(up to accumulated depreciation) and capital gain.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from proforma.config import settings
from proforma.models.assumptions import (
    AmountType,
    DispositionPriceType,
    PropertyAssumptions,
    schedule_value,
)
from proforma.models.results import SaleProceeds
from proforma.engine.cashflow import noi, rental_income
from proforma.engine.depreciation import improvements_basis

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def sale_price(assumptions: PropertyAssumptions, sale_noi: Decimal) -> Decimal | None:
    """Gross sale price, or None when a cap-rate exit has no positive cap rate."""
    if assumptions.disposition_price_type == DispositionPriceType.DOLLAR:
        return assumptions.disposition_price

    cap = assumptions.disposition_cap_rate
    if cap <= 0:
        return None
    return (sale_noi / cap).quantize(TWO_PLACES, ROUND_HALF_UP)


def cost_of_sale(assumptions: PropertyAssumptions, price: Decimal) -> Decimal:
    if assumptions.cost_of_sale_type == AmountType.PERCENTAGE:
        return (price * assumptions.cost_of_sale_percentage).quantize(TWO_PLACES, ROUND_HALF_UP)
    return assumptions.cost_of_sale_amount


def year_after_hold_noi(assumptions: PropertyAssumptions) -> Decimal:
    """NOI for the year after the hold (year N+1), used for forward-NOI exits.

    Rent (and dollar expenses) grow at the last observed rent growth rate,
    or at the configured default when only one year is available.
    """
    hold = assumptions.hold_period_years
    if hold <= 0:
        return noi(assumptions, 0)

    last = hold - 1
    last_rent = rental_income(assumptions, last)
    if not assumptions.has_rent_schedule or last_rent <= 0:
        return (noi(assumptions, last) * (1 + assumptions.noi_growth_rate)).quantize(
            TWO_PLACES, ROUND_HALF_UP
        )

    prior_rent = rental_income(assumptions, last - 1) if hold > 1 else Decimal("0")
    if prior_rent > 0:
        growth = last_rent / prior_rent - 1
    else:
        growth = settings.default_exit_growth_rate

    rent = last_rent * (1 + growth)
    other = schedule_value(assumptions.other_income, last) * (1 + growth)
    egi = rent - rent * schedule_value(assumptions.vacancy_rates, last) + other

    opex_entry = schedule_value(assumptions.operating_expenses, last)
    if assumptions.operating_expense_type == AmountType.PERCENTAGE:
        opex = egi * opex_entry / 100
    else:
        opex = opex_entry * (1 + growth)

    return (egi - opex).quantize(TWO_PLACES, ROUND_HALF_UP)


def compute_sale_proceeds(
    assumptions: PropertyAssumptions,
    final_year_noi: Decimal,
    loan_balance: Decimal = Decimal("0"),
    accumulated_depreciation: Decimal = Decimal("0"),
) -> SaleProceeds:
    """Compute after-tax proceeds from property sale.

    Args:
        assumptions: Deal assumptions (exit pricing, basis, tax rates)
        final_year_noi: NOI capitalized by a cap-rate exit
        loan_balance: Remaining loan balance paid off at sale
        accumulated_depreciation: Sum of all depreciation claimed
    """
    price = sale_price(assumptions, final_year_noi)
    original_basis = assumptions.original_basis + improvements_basis(
        assumptions, assumptions.hold_period_years
    )
    adjusted_basis = original_basis - accumulated_depreciation

    if price is None:
        return SaleProceeds(
            sale_noi=final_year_noi,
            sale_price=None,
            determined=False,
            loan_balance=loan_balance,
            original_basis=original_basis,
            accumulated_depreciation=accumulated_depreciation,
            adjusted_basis=adjusted_basis,
        )

    if assumptions.disposition_price_type == DispositionPriceType.CAP_RATE:
        exit_cap_rate = assumptions.disposition_cap_rate
    elif price > 0:
        # Implied cap rate for a fixed-price exit
        exit_cap_rate = (final_year_noi / price).quantize(FOUR_PLACES, ROUND_HALF_UP)
    else:
        exit_cap_rate = Decimal("0")

    selling_costs = cost_of_sale(assumptions, price)
    net_sale_proceeds = price - selling_costs
    before_tax_proceeds = net_sale_proceeds - loan_balance

    total_gain = max(Decimal("0"), net_sale_proceeds - adjusted_basis)
    depreciation_recapture = min(max(Decimal("0"), accumulated_depreciation), total_gain)
    capital_gain = total_gain - depreciation_recapture

    recapture_tax = (depreciation_recapture * assumptions.depreciation_recapture_rate).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )
    capital_gains_tax = (capital_gain * assumptions.capital_gains_tax_rate).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )
    taxes_on_sale = recapture_tax + capital_gains_tax

    return SaleProceeds(
        sale_noi=final_year_noi,
        exit_cap_rate=exit_cap_rate,
        sale_price=price,
        determined=True,
        cost_of_sale=selling_costs,
        net_sale_proceeds=net_sale_proceeds,
        loan_balance=loan_balance,
        before_tax_sale_proceeds=before_tax_proceeds,
        original_basis=original_basis,
        accumulated_depreciation=accumulated_depreciation,
        adjusted_basis=adjusted_basis,
        total_gain=total_gain,
        depreciation_recapture=depreciation_recapture,
        capital_gain=capital_gain,
        depreciation_recapture_tax=recapture_tax,
        capital_gains_tax=capital_gains_tax,
        taxes_on_sale=taxes_on_sale,
        after_tax_proceeds=before_tax_proceeds - taxes_on_sale,
    )
