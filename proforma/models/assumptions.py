from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class PropertyType(Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


class AmountType(Enum):
    """How a cost field is expressed: share of a base amount, or flat dollars."""
    PERCENTAGE = "percentage"
    DOLLAR = "dollar"


class FinancingType(Enum):
    CASH = "cash"
    LTV = "ltv"
    DSCR = "dscr"


class DispositionPriceType(Enum):
    DOLLAR = "dollar"
    CAP_RATE = "caprate"


# IRS recovery periods (straight-line)
RESIDENTIAL_DEPRECIATION_YEARS = Decimal("27.5")
NONRESIDENTIAL_DEPRECIATION_YEARS = Decimal("39")

VALID_PAYMENTS_PER_YEAR = (1, 2, 4, 12)


def default_depreciation_years(property_type: PropertyType | None) -> Decimal:
    if property_type == PropertyType.RESIDENTIAL:
        return RESIDENTIAL_DEPRECIATION_YEARS
    return NONRESIDENTIAL_DEPRECIATION_YEARS


def schedule_value(values: tuple[Decimal, ...] | None, year: int) -> Decimal:
    """Entry of a per-year schedule (0-based year). Unset entries read as 0."""
    if not values or year < 0 or year >= len(values):
        return Decimal("0")
    value = values[year]
    return value if value is not None else Decimal("0")


@dataclass(frozen=True)
class CapitalImprovement:
    """Mid-hold capital expenditure with its own depreciation schedule."""
    year: int  # Hold year placed in service (1-indexed)
    amount: Decimal
    description: str = ""
    recovery_period: Decimal | None = None  # Defaults to the property's depreciation years


@dataclass(frozen=True)
class PropertyAssumptions:
    # Acquisition
    purchase_price: Decimal = Decimal("0")
    acquisition_costs: Decimal = Decimal("0")  # Percent of price (0-100) or dollars
    acquisition_cost_type: AmountType = AmountType.PERCENTAGE
    property_type: PropertyType = PropertyType.RESIDENTIAL
    land_percentage: Decimal = Decimal("20")  # 0-100, land is not depreciable
    improvements_percentage: Decimal = Decimal("80")  # 0-100
    depreciation_years: Decimal = RESIDENTIAL_DEPRECIATION_YEARS
    acquisition_month: int = 1  # For mid-month convention

    # Hold
    hold_period_years: int = 10

    # Income schedules, indexed by 0-based hold year
    potential_rental_income: tuple[Decimal, ...] = ()
    other_income: tuple[Decimal, ...] = ()
    vacancy_rates: tuple[Decimal, ...] = ()  # Fractions 0-1, rental income only

    # Operating expenses: percent of EGI (0-100) or dollars per year
    operating_expenses: tuple[Decimal, ...] = ()
    operating_expense_type: AmountType = AmountType.PERCENTAGE

    # Legacy flat NOI seed, used when there is no rent schedule
    year1_noi: Decimal = Decimal("0")
    noi_growth_rate: Decimal = Decimal("0")  # Annual, fraction

    # Schedule auto-population helpers
    rental_income_growth_rate: Decimal | None = None  # Fraction
    default_vacancy_rate: Decimal | None = None  # Fraction
    default_operating_expense_rate: Decimal | None = None  # Same units as operating_expenses

    # Financing
    financing_type: FinancingType | None = FinancingType.CASH
    target_ltv: Decimal | None = None  # Percent 0-100
    target_dscr: Decimal | None = None  # Ratio, e.g. 1.25
    interest_rate: Decimal = Decimal("0")  # Annual, fraction
    amortization_years: int = 30
    loan_term_years: int = 10
    payments_per_year: int = 12
    loan_amount: Decimal = Decimal("0")  # Derived cache for ltv/dscr
    loan_costs: Decimal = Decimal("0")  # Percent of loan (0-100) or dollars
    loan_cost_type: AmountType = AmountType.PERCENTAGE

    # Disposition
    disposition_price_type: DispositionPriceType = DispositionPriceType.CAP_RATE
    disposition_price: Decimal = Decimal("0")
    disposition_cap_rate: Decimal = Decimal("0")  # Fraction
    cost_of_sale_type: AmountType = AmountType.PERCENTAGE
    cost_of_sale_percentage: Decimal = Decimal("0")  # Fraction of sale price
    cost_of_sale_amount: Decimal = Decimal("0")

    # Tax
    ordinary_income_tax_rate: Decimal = Decimal("0")
    capital_gains_tax_rate: Decimal = Decimal("0")
    depreciation_recapture_rate: Decimal = Decimal("0")

    capital_improvements: tuple[CapitalImprovement, ...] = field(default_factory=tuple)

    @property
    def acquisition_cost_amount(self) -> Decimal:
        if self.acquisition_cost_type == AmountType.PERCENTAGE:
            return self.purchase_price * self.acquisition_costs / 100
        return self.acquisition_costs

    @property
    def original_basis(self) -> Decimal:
        """Cost basis = purchase price + acquisition costs."""
        return self.purchase_price + self.acquisition_cost_amount

    @property
    def depreciable_basis(self) -> Decimal:
        """Improvements share of the cost basis. Land is not depreciable."""
        return self.original_basis * self.improvements_percentage / 100

    @property
    def land_value(self) -> Decimal:
        return self.original_basis * self.land_percentage / 100

    @property
    def loan_costs_amount(self) -> Decimal:
        if self.loan_amount <= 0:
            return Decimal("0")
        if self.loan_cost_type == AmountType.PERCENTAGE:
            return self.loan_amount * self.loan_costs / 100
        return self.loan_costs

    @property
    def total_equity_invested(self) -> Decimal:
        return (
            self.purchase_price
            + self.acquisition_cost_amount
            + self.loan_costs_amount
            - self.loan_amount
        )

    @property
    def has_rent_schedule(self) -> bool:
        return schedule_value(self.potential_rental_income, 0) > 0

    @property
    def current_ltv(self) -> Decimal:
        """Loan amount as a percent of purchase price."""
        if self.purchase_price <= 0:
            return Decimal("0")
        return self.loan_amount / self.purchase_price * 100
