"""Operating-year income tax: taxable income and tax (or shield).

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import PropertyAssumptions

TWO_PLACES = Decimal("0.01")


def loan_costs_amortization(assumptions: PropertyAssumptions, year: int) -> Decimal:
    """Loan costs are deducted straight-line over the loan term (1-indexed year)."""
    term = assumptions.loan_term_years
    if assumptions.loan_amount <= 0 or term <= 0 or year > term:
        return Decimal("0")
    return (assumptions.loan_costs_amount / term).quantize(TWO_PLACES, ROUND_HALF_UP)


def taxable_rental_income(
    noi: Decimal,
    interest_paid: Decimal,
    depreciation: Decimal,
    loan_costs_amortized: Decimal = Decimal("0"),
) -> Decimal:
    """Taxable income = NOI - interest - depreciation - amortized loan costs.

    Principal payments are NOT deductible.
    """
    return noi - interest_paid - depreciation - loan_costs_amortized


def income_tax(taxable_income: Decimal, ordinary_income_tax_rate: Decimal) -> Decimal:
    """Tax at the ordinary rate. A loss yields a negative tax (shield)."""
    return (taxable_income * ordinary_income_tax_rate).quantize(TWO_PLACES, ROUND_HALF_UP)
