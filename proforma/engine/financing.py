"""Loan sizing by financing strategy: all cash, target LTV, or target DSCR.

The loan amount on ``PropertyAssumptions`` is a cache derived from the
inputs captured by ``loan_sizing_key``. ``resize_loan`` refreshes it, with
a small dead band so float noise in upstream edits does not churn it.
"""

import logging
from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP

from proforma.config import settings
from proforma.models.assumptions import FinancingType, PropertyAssumptions, schedule_value
from proforma.engine.cashflow import noi
from proforma.engine.debt import principal_for_payment

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def max_loan_for_dscr(
    year1_noi: Decimal,
    target_dscr: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_per_year: int = 12,
) -> Decimal:
    """Largest loan whose debt service keeps NOI / debt service at ``target_dscr``.

    Max annual debt service = NOI / DSCR, converted to a periodic payment and
    capitalized as the present value of an annuity.
    """
    max_annual_debt_service = year1_noi / target_dscr
    payment = max_annual_debt_service / payments_per_year
    return principal_for_payment(payment, annual_rate, amortization_years, payments_per_year)


def size_loan(assumptions: PropertyAssumptions) -> Decimal:
    """Loan amount implied by the selected financing strategy, in cents.

    Falls back to the cached ``loan_amount`` when the strategy's inputs are
    incomplete (or no strategy is selected).
    """
    financing = assumptions.financing_type

    if financing == FinancingType.CASH:
        return Decimal("0")

    if financing == FinancingType.LTV:
        if assumptions.target_ltv is None:
            return assumptions.loan_amount
        amount = assumptions.target_ltv / 100 * assumptions.purchase_price
        return amount.quantize(TWO_PLACES, ROUND_HALF_UP)

    if financing == FinancingType.DSCR:
        year1_noi = noi(assumptions, 0)
        target = assumptions.target_dscr
        if (
            year1_noi <= 0
            or target is None
            or target <= 0
            or assumptions.interest_rate < 0
            or assumptions.amortization_years <= 0
            or assumptions.payments_per_year <= 0
        ):
            logger.debug(
                "DSCR sizing inputs incomplete (noi=%s, dscr=%s, rate=%s); keeping cached loan %s",
                year1_noi, target, assumptions.interest_rate, assumptions.loan_amount,
            )
            return assumptions.loan_amount

        amount = max_loan_for_dscr(
            year1_noi,
            target,
            assumptions.interest_rate,
            assumptions.amortization_years,
            assumptions.payments_per_year,
        )
        return amount.quantize(TWO_PLACES, ROUND_HALF_UP)

    return assumptions.loan_amount


def loan_sizing_key(assumptions: PropertyAssumptions) -> tuple:
    """Every input ``size_loan`` reads. Equal keys mean an equal sized loan."""
    return (
        assumptions.financing_type,
        assumptions.target_ltv,
        assumptions.purchase_price,
        assumptions.target_dscr,
        assumptions.interest_rate,
        assumptions.amortization_years,
        assumptions.payments_per_year,
        schedule_value(assumptions.potential_rental_income, 0),
        schedule_value(assumptions.other_income, 0),
        schedule_value(assumptions.vacancy_rates, 0),
        schedule_value(assumptions.operating_expenses, 0),
        assumptions.operating_expense_type,
        assumptions.year1_noi,
    )


def needs_loan_update(
    cached: Decimal,
    computed: Decimal,
    threshold: Decimal | None = None,
) -> bool:
    """True when the re-sized loan differs from the cache by more than ``threshold``."""
    if threshold is None:
        threshold = settings.loan_update_threshold
    return abs(computed - cached) > threshold


def resize_loan(
    assumptions: PropertyAssumptions,
    threshold: Decimal | None = None,
) -> PropertyAssumptions:
    """Return assumptions with a refreshed loan amount.

    The same record comes back when the sized loan is within ``threshold``
    of the cached one.
    """
    computed = size_loan(assumptions)
    if financing_is_cash(assumptions) and assumptions.loan_amount != 0:
        return replace(assumptions, loan_amount=Decimal("0"))
    if not needs_loan_update(assumptions.loan_amount, computed, threshold):
        return assumptions

    logger.debug("Loan amount %s -> %s", assumptions.loan_amount, computed)
    return replace(assumptions, loan_amount=computed)


def financing_is_cash(assumptions: PropertyAssumptions) -> bool:
    return assumptions.financing_type == FinancingType.CASH
