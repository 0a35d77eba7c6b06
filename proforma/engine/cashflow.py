"""Income & expense waterfall, NOI, and annual cash flow projection.

Years passed to the waterfall functions are 0-based indexes into the
assumption schedules (0 = first year of the hold). Projected cash flows
are labelled with 1-based years.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import AmountType, PropertyAssumptions, schedule_value
from proforma.models.results import AnnualCashflow
from proforma.engine.debt import yearly_debt
from proforma.engine.depreciation import compute_yearly_depreciation
from proforma.engine.tax import income_tax, loan_costs_amortization, taxable_rental_income

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def rental_income(assumptions: PropertyAssumptions, year: int) -> Decimal:
    return schedule_value(assumptions.potential_rental_income, year)


def gross_income(assumptions: PropertyAssumptions, year: int) -> Decimal:
    """Potential rental income + other income."""
    return rental_income(assumptions, year) + schedule_value(assumptions.other_income, year)


def vacancy_loss(assumptions: PropertyAssumptions, year: int) -> Decimal:
    """Vacancy applies to rental income only, never to other income."""
    return rental_income(assumptions, year) * schedule_value(assumptions.vacancy_rates, year)


def effective_gross_income(assumptions: PropertyAssumptions, year: int) -> Decimal:
    """EGI = gross income - vacancy."""
    return gross_income(assumptions, year) - vacancy_loss(assumptions, year)


def operating_expense_amount(assumptions: PropertyAssumptions, year: int) -> Decimal:
    """Operating expenses in dollars.

    Percentage entries (0-100) apply to EGI, i.e. after vacancy.
    """
    entry = schedule_value(assumptions.operating_expenses, year)
    if assumptions.operating_expense_type == AmountType.PERCENTAGE:
        return effective_gross_income(assumptions, year) * entry / 100
    return entry


def noi(assumptions: PropertyAssumptions, year: int) -> Decimal:
    """Net Operating Income = EGI - operating expenses, rounded half-up to cents.

    Without a rent schedule (year-0 rent of 0) NOI falls back to the flat
    seed: year1_noi * (1 + noi_growth_rate) ** year.
    """
    if assumptions.has_rent_schedule:
        value = effective_gross_income(assumptions, year) - operating_expense_amount(assumptions, year)
    elif year <= 0:
        value = assumptions.year1_noi
    else:
        # A -100% growth rate gives a zero base; 0 ** year is fine for year >= 1
        value = assumptions.year1_noi * (1 + assumptions.noi_growth_rate) ** year
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def dscr(noi_amount: Decimal, annual_debt_service: Decimal) -> Decimal:
    """Debt Service Coverage Ratio = NOI / annual debt service."""
    if annual_debt_service == 0:
        return Decimal("0")
    return (noi_amount / annual_debt_service).quantize(FOUR_PLACES, ROUND_HALF_UP)


def cap_rate(noi_amount: Decimal, value: Decimal) -> Decimal:
    """Cap rate = NOI / property value."""
    if value == 0:
        return Decimal("0")
    return (noi_amount / value).quantize(FOUR_PLACES, ROUND_HALF_UP)


def cash_on_cash(cash_flow: Decimal, total_equity_invested: Decimal) -> Decimal:
    """Cash-on-cash return = annual cash flow / equity invested."""
    if total_equity_invested == 0:
        return Decimal("0")
    return (cash_flow / total_equity_invested).quantize(FOUR_PLACES, ROUND_HALF_UP)


def debt_yield(noi_amount: Decimal, loan_amount: Decimal) -> Decimal:
    """Debt yield = NOI / loan amount."""
    if loan_amount == 0:
        return Decimal("0")
    return (noi_amount / loan_amount).quantize(FOUR_PLACES, ROUND_HALF_UP)


def project_cashflows(assumptions: PropertyAssumptions) -> list[AnnualCashflow]:
    """Annual cash flows for each year of the hold.

    Debt service is the level payment on the cached ``loan_amount``.
    Taxes use the ordinary income rate; a negative tax is a shield.
    """
    cashflows: list[AnnualCashflow] = []

    for index in range(max(0, assumptions.hold_period_years)):
        year = index + 1

        year_noi = noi(assumptions, index)
        debt = yearly_debt(
            assumptions.loan_amount,
            assumptions.interest_rate,
            assumptions.amortization_years,
            year,
            assumptions.payments_per_year,
        )
        debt_service = debt.debt_service.quantize(TWO_PLACES, ROUND_HALF_UP)
        interest = debt.interest.quantize(TWO_PLACES, ROUND_HALF_UP)
        cfbt = year_noi - debt_service

        dep = compute_yearly_depreciation(assumptions, year)
        loan_costs = loan_costs_amortization(assumptions, year)
        taxable = taxable_rental_income(
            noi=year_noi,
            interest_paid=interest,
            depreciation=dep.total,
            loan_costs_amortized=loan_costs,
        )
        taxes = income_tax(taxable, assumptions.ordinary_income_tax_rate)

        cashflows.append(AnnualCashflow(
            year=year,
            gross_income=gross_income(assumptions, index).quantize(TWO_PLACES, ROUND_HALF_UP),
            vacancy_loss=vacancy_loss(assumptions, index).quantize(TWO_PLACES, ROUND_HALF_UP),
            effective_gross_income=effective_gross_income(assumptions, index).quantize(
                TWO_PLACES, ROUND_HALF_UP
            ),
            operating_expenses=operating_expense_amount(assumptions, index).quantize(
                TWO_PLACES, ROUND_HALF_UP
            ),
            noi=year_noi,
            debt_service=debt_service,
            interest_expense=interest,
            principal_payment=debt_service - interest,
            loan_balance=debt.ending_balance.quantize(TWO_PLACES, ROUND_HALF_UP),
            cash_flow_before_tax=cfbt,
            depreciation=dep.total,
            loan_costs_amortization=loan_costs,
            taxable_income=taxable,
            taxes=taxes,
            cash_flow_after_tax=cfbt - taxes,
            dscr=dscr(year_noi, debt_service),
        ))

    return cashflows
