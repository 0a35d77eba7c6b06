"""Assumption checks run before a pro forma.

``validate_assumptions`` returns human-readable messages (empty = valid)
and never raises. ``completion_state`` reports which input sections are
filled in enough to show results.
"""

from decimal import Decimal

from proforma.config import settings
from proforma.models.assumptions import (
    VALID_PAYMENTS_PER_YEAR,
    AmountType,
    DispositionPriceType,
    FinancingType,
    PropertyAssumptions,
    schedule_value,
)
from proforma.models.results import CompletionState
from proforma.engine.financing import size_loan

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
PERCENT_SUM_TOLERANCE = Decimal("0.01")


def _rate_in_range(value: Decimal) -> bool:
    return ZERO <= value <= ONE


def _financing_errors(a: PropertyAssumptions) -> list[str]:
    errors: list[str] = []
    financing = a.financing_type

    if financing is None:
        errors.append("Financing type must be selected")
        return errors
    if financing == FinancingType.CASH:
        return errors

    if financing == FinancingType.LTV:
        if a.target_ltv is None or a.target_ltv <= 0:
            errors.append("Target LTV is required for LTV financing")
        elif a.target_ltv > HUNDRED:
            errors.append("Target LTV must be between 0% and 100%")

    if financing == FinancingType.DSCR:
        if a.target_dscr is None or a.target_dscr <= 0:
            errors.append("Target DSCR is required for DSCR financing")
        elif a.target_dscr < ONE:
            errors.append("Target DSCR must be at least 1.00x")

    if not _rate_in_range(a.interest_rate):
        errors.append("Interest rate must be between 0% and 100%")
    if a.amortization_years <= 0:
        errors.append("Amortization period must be greater than 0 years")
    if a.loan_term_years <= 0:
        errors.append("Loan term must be greater than 0 years")
    if a.payments_per_year not in VALID_PAYMENTS_PER_YEAR:
        errors.append("Payments per year must be 1, 2, 4, or 12")
    if a.loan_costs < 0:
        errors.append("Loan costs must be 0 or greater")

    return errors


def _income_errors(a: PropertyAssumptions) -> list[str]:
    errors: list[str] = []

    if not a.has_rent_schedule and a.year1_noi <= 0:
        errors.append("Either detailed income structure or Year 1 NOI must be provided")
        return errors

    if a.has_rent_schedule:
        # Report only the first offending year for each schedule
        for i in range(max(0, a.hold_period_years)):
            if schedule_value(a.potential_rental_income, i) <= 0:
                errors.append(f"Year {i + 1} rental income must be greater than 0")
                break
        for i in range(max(0, a.hold_period_years)):
            if not _rate_in_range(schedule_value(a.vacancy_rates, i)):
                errors.append(f"Year {i + 1} vacancy rate must be between 0% and 100%")
                break
        for i in range(max(0, a.hold_period_years)):
            entry = schedule_value(a.operating_expenses, i)
            if a.operating_expense_type == AmountType.PERCENTAGE and not ZERO <= entry <= HUNDRED:
                errors.append(f"Year {i + 1} operating expenses must be between 0% and 100%")
                break
            if a.operating_expense_type == AmountType.DOLLAR and entry < 0:
                errors.append(f"Year {i + 1} operating expenses must be positive")
                break
        for i in range(max(0, a.hold_period_years)):
            if schedule_value(a.other_income, i) < 0:
                errors.append(f"Year {i + 1} other income must be 0 or greater")
                break

    if not Decimal("-0.5") <= a.noi_growth_rate <= ONE:
        errors.append("NOI growth rate must be between -50% and 100%")

    return errors


def validate_assumptions(
    assumptions: PropertyAssumptions,
    max_hold_period_years: int | None = None,
) -> list[str]:
    """Return a list of problems that block a pro forma run."""
    a = assumptions
    cap = settings.max_hold_period_years if max_hold_period_years is None else max_hold_period_years
    errors: list[str] = []

    if a.purchase_price <= 0:
        errors.append("Purchase price must be greater than 0")
    if a.acquisition_costs < 0:
        errors.append("Acquisition costs must be 0 or greater")

    if a.hold_period_years <= 0 or a.hold_period_years > cap:
        errors.append(f"Hold period must be between 1 and {cap} years")

    errors.extend(_income_errors(a))
    errors.extend(_financing_errors(a))

    # The run re-sizes the loan first, so check the sized amount
    loan = size_loan(a)
    if loan < 0:
        errors.append("Loan amount must be 0 or greater")
    if a.purchase_price > 0 and loan > a.purchase_price:
        errors.append("Loan amount cannot exceed purchase price")

    # Land / improvements
    if abs(a.land_percentage + a.improvements_percentage - HUNDRED) > PERCENT_SUM_TOLERANCE:
        errors.append("Land % and Improvements % must add up to 100%")
    if not ZERO <= a.land_percentage <= HUNDRED:
        errors.append("Land percentage must be between 0% and 100%")
    if not ZERO <= a.improvements_percentage <= HUNDRED:
        errors.append("Improvements percentage must be between 0% and 100%")
    if a.depreciation_years <= 0:
        errors.append("Depreciation period must be greater than 0 years")
    if not 1 <= a.acquisition_month <= 12:
        errors.append("Acquisition month must be between 1 and 12")

    # Tax rates
    for label, rate in (
        ("Ordinary income tax rate", a.ordinary_income_tax_rate),
        ("Capital gains tax rate", a.capital_gains_tax_rate),
        ("Depreciation recapture rate", a.depreciation_recapture_rate),
    ):
        if not _rate_in_range(rate):
            errors.append(f"{label} must be between 0% and 100%")

    # Exit
    if a.disposition_price_type == DispositionPriceType.CAP_RATE:
        if not ZERO < a.disposition_cap_rate <= ONE:
            errors.append("Exit cap rate must be between 0% and 100%")
    elif a.disposition_price < 0:
        errors.append("Disposition price must be 0 or greater")

    if a.cost_of_sale_type == AmountType.PERCENTAGE and not _rate_in_range(a.cost_of_sale_percentage):
        errors.append("Cost of sale must be between 0% and 100%")
    if a.cost_of_sale_type == AmountType.DOLLAR and a.cost_of_sale_amount < 0:
        errors.append("Cost of sale must be 0 or greater")

    return errors


def is_property_income_complete(a: PropertyAssumptions) -> bool:
    if a.purchase_price <= 0 or a.hold_period_years <= 0:
        return False
    return a.has_rent_schedule or a.year1_noi > 0


def is_financing_complete(a: PropertyAssumptions) -> bool:
    if a.financing_type is None:
        return False
    if a.financing_type == FinancingType.CASH:
        return True

    loan_terms = a.interest_rate > 0 and a.loan_term_years > 0 and a.amortization_years > 0
    if a.financing_type == FinancingType.DSCR:
        return loan_terms and (a.target_dscr or ZERO) > 0
    return loan_terms and (a.target_ltv or ZERO) > 0


def is_tax_exit_complete(a: PropertyAssumptions) -> bool:
    has_tax_rates = (
        a.ordinary_income_tax_rate >= 0
        and a.capital_gains_tax_rate >= 0
        and a.depreciation_recapture_rate >= 0
    )
    if a.disposition_price_type == DispositionPriceType.DOLLAR:
        has_exit = a.disposition_price > 0
    else:
        has_exit = a.disposition_cap_rate > 0
    if a.cost_of_sale_type == AmountType.DOLLAR:
        has_cost_of_sale = a.cost_of_sale_amount >= 0
    else:
        has_cost_of_sale = a.cost_of_sale_percentage >= 0
    return has_tax_rates and has_exit and has_cost_of_sale


def completion_state(assumptions: PropertyAssumptions) -> CompletionState:
    property_income = is_property_income_complete(assumptions)
    financing = is_financing_complete(assumptions)
    tax_exit = is_tax_exit_complete(assumptions)
    done = sum((property_income, financing, tax_exit))

    return CompletionState(
        property_income_complete=property_income,
        financing_complete=financing,
        tax_exit_complete=tax_exit,
        cashflows_ready=property_income and financing,
        sale_analysis_ready=property_income and financing and tax_exit,
        overall_progress=round(done / 3 * 100),
    )
