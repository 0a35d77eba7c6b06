"""Return metrics derived from a finished pro forma, and sensitivities.

Sensitivities re-run the full pro forma on shocked copies of the
assumptions; the input record is never modified.
"""

from dataclasses import replace
from decimal import Decimal

from proforma.models.assumptions import FinancingType, PropertyAssumptions
from proforma.models.results import ProFormaResults, SensitivityResult

from proforma.engine.cashflow import cap_rate, dscr
from proforma.engine.debt import annual_debt_service
from proforma.engine.irr import npv
from proforma.engine.proforma import run_proforma

EXIT_CAP_SHOCK = Decimal("0.005")  # 50 bps
RENT_GROWTH_SHOCK = Decimal("0.01")  # 100 bps
RATE_SHOCK = Decimal("0.005")  # 50 bps


def after_tax_npv(results: ProFormaResults, discount_rate: Decimal) -> Decimal:
    cfs = [-results.total_equity_invested] + [cf.cash_flow_after_tax for cf in results.annual_cashflows]
    if len(cfs) > 1:
        cfs[-1] += results.sale_proceeds.after_tax_proceeds
    return npv(cfs, discount_rate)


def before_tax_npv(results: ProFormaResults, discount_rate: Decimal) -> Decimal:
    cfs = [-results.total_equity_invested] + [cf.cash_flow_before_tax for cf in results.annual_cashflows]
    if len(cfs) > 1:
        cfs[-1] += results.sale_proceeds.before_tax_sale_proceeds
    return npv(cfs, discount_rate)


def unlevered(assumptions: PropertyAssumptions) -> PropertyAssumptions:
    """Same deal bought all cash."""
    return replace(
        assumptions,
        financing_type=FinancingType.CASH,
        loan_amount=Decimal("0"),
        loan_costs=Decimal("0"),
        target_ltv=None,
        target_dscr=None,
    )


def unlevered_irr(assumptions: PropertyAssumptions) -> Decimal | None:
    """After-tax IRR of the all-cash purchase."""
    return run_proforma(unlevered(assumptions)).irr


def unlevered_before_tax_irr(assumptions: PropertyAssumptions) -> Decimal | None:
    return run_proforma(unlevered(assumptions)).before_tax_irr


def purchase_cap_rate(results: ProFormaResults, purchase_price: Decimal) -> Decimal:
    """Going-in cap rate = year 1 NOI / purchase price."""
    if not results.annual_cashflows:
        return Decimal("0")
    return cap_rate(results.annual_cashflows[0].noi, purchase_price)


def sensitivity_analysis(
    assumptions: PropertyAssumptions,
    base_results: ProFormaResults,
) -> SensitivityResult:
    """IRR at exit cap +/-50 bps and rent growth +/-100 bps; DSCR at rate +/-50 bps."""
    result = SensitivityResult()

    if assumptions.disposition_cap_rate > 0:
        lower = replace(assumptions, disposition_cap_rate=assumptions.disposition_cap_rate - EXIT_CAP_SHOCK)
        higher = replace(assumptions, disposition_cap_rate=assumptions.disposition_cap_rate + EXIT_CAP_SHOCK)
        result.exit_cap_minus_50bps = run_proforma(lower).irr
        result.exit_cap_plus_50bps = run_proforma(higher).irr

    if assumptions.has_rent_schedule:
        for sign, attr in ((-1, "rent_growth_minus_100bps"), (1, "rent_growth_plus_100bps")):
            # Year t rent scaled by (1 +/- 1%)^t shifts compound growth by ~100 bps
            factor = 1 + sign * RENT_GROWTH_SHOCK
            shocked = tuple(
                rent * factor ** t for t, rent in enumerate(assumptions.potential_rental_income)
            )
            setattr(
                result,
                attr,
                run_proforma(replace(assumptions, potential_rental_income=shocked)).irr,
            )

    if (
        assumptions.financing_type != FinancingType.CASH
        and assumptions.interest_rate > 0
        and base_results.annual_cashflows
    ):
        year1_noi = base_results.annual_cashflows[0].noi
        for shock, attr in ((-RATE_SHOCK, "dscr_rate_minus_50bps"), (RATE_SHOCK, "dscr_rate_plus_50bps")):
            debt_service = annual_debt_service(
                base_results.loan_amount,
                assumptions.interest_rate + shock,
                assumptions.amortization_years,
                assumptions.payments_per_year,
            )
            setattr(result, attr, dscr(year1_noi, debt_service))

    return result
