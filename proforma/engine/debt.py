"""Loan payment, balance, and amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationPayment]
    periodic_payment: Decimal
    payments_per_year: int
    total_interest: Decimal
    total_principal: Decimal


@dataclass(frozen=True)
class YearlyDebt:
    year: int
    principal: Decimal
    interest: Decimal
    debt_service: Decimal
    ending_balance: Decimal


def periodic_payment(
    principal: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_per_year: int = 12,
) -> Decimal:
    """Level payment that fully amortizes ``principal``.

    Full precision; callers quantize for display. A zero rate amortizes
    straight-line (principal / number of payments).
    """
    n = amortization_years * payments_per_year
    if principal <= 0 or n <= 0:
        return Decimal("0")
    if annual_rate == 0:
        return principal / n

    r = annual_rate / payments_per_year
    # PMT = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return principal * r * factor / (factor - 1)


def annual_debt_service(
    principal: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_per_year: int = 12,
) -> Decimal:
    return periodic_payment(principal, annual_rate, amortization_years, payments_per_year) * payments_per_year


def principal_for_payment(
    payment: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_per_year: int = 12,
) -> Decimal:
    """Inverse of ``periodic_payment``: present value of an annuity.

    P = PMT * (1 - (1+r)^-n) / r, or PMT * n when the rate is zero.
    """
    n = amortization_years * payments_per_year
    if payment <= 0 or n <= 0:
        return Decimal("0")
    if annual_rate == 0:
        return payment * n

    r = annual_rate / payments_per_year
    return payment * (1 - (1 + r) ** -n) / r


def loan_balance(
    principal: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_made: int,
    payments_per_year: int = 12,
) -> Decimal:
    """Remaining balance after ``payments_made`` level payments."""
    total_payments = amortization_years * payments_per_year
    if principal <= 0 or total_payments <= 0:
        return Decimal("0")
    if payments_made <= 0:
        return principal
    if payments_made >= total_payments:
        return Decimal("0")

    if annual_rate == 0:
        return max(Decimal("0"), principal - principal / total_payments * payments_made)

    # Balance = PV of the remaining payments
    pmt = periodic_payment(principal, annual_rate, amortization_years, payments_per_year)
    r = annual_rate / payments_per_year
    remaining = total_payments - payments_made
    return max(Decimal("0"), pmt * (1 - (1 + r) ** -remaining) / r)


def yearly_debt(
    principal: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    year: int,
    payments_per_year: int = 12,
) -> YearlyDebt:
    """Interest/principal split for one loan year (1-indexed), full precision.

    Debt service is level until the loan is fully amortized and zero after.
    """
    total_payments = amortization_years * payments_per_year
    first = (year - 1) * payments_per_year
    last = min(year * payments_per_year, total_payments)
    pmt = periodic_payment(principal, annual_rate, amortization_years, payments_per_year)
    r = annual_rate / payments_per_year if payments_per_year else Decimal("0")

    interest = Decimal("0")
    for made in range(first, last):
        interest += loan_balance(principal, annual_rate, amortization_years, made, payments_per_year) * r

    debt_service = pmt * max(0, last - first)
    ending = loan_balance(principal, annual_rate, amortization_years, last, payments_per_year)

    return YearlyDebt(
        year=year,
        principal=debt_service - interest,
        interest=interest,
        debt_service=debt_service,
        ending_balance=ending,
    )


def amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_per_year: int = 12,
    years: int | None = None,
) -> AmortizationSchedule:
    """Generate full or partial amortization schedule, rounded to cents.

    Args:
        principal: Loan amount
        annual_rate: Annual interest rate (e.g. 0.065 for 6.5%)
        amortization_years: Amortization period in years
        payments_per_year: 1, 2, 4 or 12
        years: If provided, only generate schedule for this many years
    """
    pmt = periodic_payment(principal, annual_rate, amortization_years, payments_per_year).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )
    r = annual_rate / payments_per_year
    total_periods = amortization_years * payments_per_year
    n_periods = min((years or amortization_years) * payments_per_year, total_periods)

    payments: list[AmortizationPayment] = []
    balance = principal
    total_interest = Decimal("0")
    total_principal = Decimal("0")

    for period in range(1, n_periods + 1):
        interest = (balance * r).quantize(TWO_PLACES, ROUND_HALF_UP)
        principal_paid = pmt - interest

        # Final payment absorbs cent rounding drift
        if principal_paid > balance or period == total_periods:
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            actual_payment = pmt

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            period=period,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        ))

    return AmortizationSchedule(
        payments=payments,
        periodic_payment=pmt,
        payments_per_year=payments_per_year,
        total_interest=total_interest,
        total_principal=total_principal,
    )


def yearly_debt_summary(schedule: AmortizationSchedule) -> list[YearlyDebt]:
    """Aggregate amortization schedule by year."""
    per_year = schedule.payments_per_year
    yearly: list[YearlyDebt] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")
    year_debt_service = Decimal("0")

    for p in schedule.payments:
        year_principal += p.principal
        year_interest += p.interest
        year_debt_service += p.payment

        if p.period % per_year == 0 or p.period == len(schedule.payments):
            yearly.append(YearlyDebt(
                year=(p.period - 1) // per_year + 1,
                principal=year_principal,
                interest=year_interest,
                debt_service=year_debt_service,
                ending_balance=p.balance,
            ))
            year_principal = Decimal("0")
            year_interest = Decimal("0")
            year_debt_service = Decimal("0")

    return yearly
