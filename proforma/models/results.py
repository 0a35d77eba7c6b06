from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class AnnualCashflow:
    year: int  # 1-indexed hold year

    # Income waterfall
    gross_income: Decimal = Decimal("0")
    vacancy_loss: Decimal = Decimal("0")
    effective_gross_income: Decimal = Decimal("0")
    operating_expenses: Decimal = Decimal("0")
    noi: Decimal = Decimal("0")

    # Debt
    debt_service: Decimal = Decimal("0")
    interest_expense: Decimal = Decimal("0")
    principal_payment: Decimal = Decimal("0")
    loan_balance: Decimal = Decimal("0")  # End of year

    cash_flow_before_tax: Decimal = Decimal("0")

    # Tax
    depreciation: Decimal = Decimal("0")
    loan_costs_amortization: Decimal = Decimal("0")
    taxable_income: Decimal = Decimal("0")
    taxes: Decimal = Decimal("0")  # Negative = tax shield
    cash_flow_after_tax: Decimal = Decimal("0")

    # Metrics
    dscr: Decimal = Decimal("0")


@dataclass
class SaleProceeds:
    # Sale price. None when a cap-rate exit has no usable cap rate.
    sale_noi: Decimal = Decimal("0")
    exit_cap_rate: Decimal = Decimal("0")
    sale_price: Decimal | None = Decimal("0")
    determined: bool = True

    cost_of_sale: Decimal = Decimal("0")
    net_sale_proceeds: Decimal = Decimal("0")
    loan_balance: Decimal = Decimal("0")
    before_tax_sale_proceeds: Decimal = Decimal("0")

    # Gain calculation
    original_basis: Decimal = Decimal("0")
    accumulated_depreciation: Decimal = Decimal("0")
    adjusted_basis: Decimal = Decimal("0")
    total_gain: Decimal = Decimal("0")
    depreciation_recapture: Decimal = Decimal("0")
    capital_gain: Decimal = Decimal("0")

    # Tax on sale
    depreciation_recapture_tax: Decimal = Decimal("0")
    capital_gains_tax: Decimal = Decimal("0")
    taxes_on_sale: Decimal = Decimal("0")

    after_tax_proceeds: Decimal = Decimal("0")


@dataclass
class ProFormaResults:
    annual_cashflows: list[AnnualCashflow] = field(default_factory=list)
    sale_proceeds: SaleProceeds = field(default_factory=SaleProceeds)

    loan_amount: Decimal = Decimal("0")
    total_equity_invested: Decimal = Decimal("0")
    total_cash_returned: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")

    # None when no IRR exists for the cash flow vector
    irr: Decimal | None = None
    before_tax_irr: Decimal | None = None
    equity_multiple: Decimal = Decimal("0")
    before_tax_equity_multiple: Decimal = Decimal("0")
    average_cash_on_cash: Decimal = Decimal("0")
    total_tax_savings: Decimal = Decimal("0")


@dataclass
class SensitivityResult:
    """IRR under shocked exit cap / rent growth, DSCR under shocked rates."""
    exit_cap_minus_50bps: Decimal | None = None
    exit_cap_plus_50bps: Decimal | None = None
    rent_growth_minus_100bps: Decimal | None = None
    rent_growth_plus_100bps: Decimal | None = None
    dscr_rate_minus_50bps: Decimal | None = None
    dscr_rate_plus_50bps: Decimal | None = None


@dataclass
class CompletionState:
    property_income_complete: bool = False
    financing_complete: bool = False
    tax_exit_complete: bool = False
    cashflows_ready: bool = False
    sale_analysis_ready: bool = False
    overall_progress: int = 0  # Percent
