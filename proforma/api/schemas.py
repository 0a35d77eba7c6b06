"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from proforma.models.assumptions import (
    AmountType,
    CapitalImprovement,
    DispositionPriceType,
    FinancingType,
    PropertyAssumptions,
    PropertyType,
)


# ---- Request schemas ----

class CapitalImprovementPayload(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int = Field(..., ge=1, description="Hold year placed in service (1-indexed)")
    amount: Decimal
    description: str = ""
    recovery_period: Decimal | None = None


class AssumptionsPayload(BaseModel):
    """Full assumption record. Omitted fields take the engine defaults."""
    model_config = ConfigDict(from_attributes=True)

    # Acquisition
    purchase_price: Decimal = Decimal("0")
    acquisition_costs: Decimal = Decimal("0")
    acquisition_cost_type: AmountType = AmountType.PERCENTAGE
    property_type: PropertyType = PropertyType.RESIDENTIAL
    land_percentage: Decimal = Decimal("20")
    improvements_percentage: Decimal = Decimal("80")
    depreciation_years: Decimal = Decimal("27.5")
    acquisition_month: int = 1

    hold_period_years: int = 10

    # Income schedules (0-based year index)
    potential_rental_income: list[Decimal] = Field(default_factory=list)
    other_income: list[Decimal] = Field(default_factory=list)
    vacancy_rates: list[Decimal] = Field(default_factory=list)
    operating_expenses: list[Decimal] = Field(default_factory=list)
    operating_expense_type: AmountType = AmountType.PERCENTAGE

    year1_noi: Decimal = Decimal("0")
    noi_growth_rate: Decimal = Decimal("0")

    rental_income_growth_rate: Decimal | None = None
    default_vacancy_rate: Decimal | None = None
    default_operating_expense_rate: Decimal | None = None

    # Financing
    financing_type: FinancingType | None = FinancingType.CASH
    target_ltv: Decimal | None = None
    target_dscr: Decimal | None = None
    interest_rate: Decimal = Decimal("0")
    amortization_years: int = 30
    loan_term_years: int = 10
    payments_per_year: int = 12
    loan_amount: Decimal = Decimal("0")
    loan_costs: Decimal = Decimal("0")
    loan_cost_type: AmountType = AmountType.PERCENTAGE

    # Disposition
    disposition_price_type: DispositionPriceType = DispositionPriceType.CAP_RATE
    disposition_price: Decimal = Decimal("0")
    disposition_cap_rate: Decimal = Decimal("0")
    cost_of_sale_type: AmountType = AmountType.PERCENTAGE
    cost_of_sale_percentage: Decimal = Decimal("0")
    cost_of_sale_amount: Decimal = Decimal("0")

    # Tax
    ordinary_income_tax_rate: Decimal = Decimal("0")
    capital_gains_tax_rate: Decimal = Decimal("0")
    depreciation_recapture_rate: Decimal = Decimal("0")

    capital_improvements: list[CapitalImprovementPayload] = Field(default_factory=list)

    def to_assumptions(self) -> PropertyAssumptions:
        data = self.model_dump(exclude={"capital_improvements"})
        for name in ("potential_rental_income", "other_income", "vacancy_rates", "operating_expenses"):
            data[name] = tuple(data[name])
        data["capital_improvements"] = tuple(
            CapitalImprovement(**ci.model_dump()) for ci in self.capital_improvements
        )
        return PropertyAssumptions(**data)


class ProFormaRequest(BaseModel):
    assumptions: AssumptionsPayload
    forward_exit_noi: bool = Field(False, description="Capitalize year N+1 NOI at exit")
    include_sensitivity: bool = False


# ---- Response schemas ----

class AnnualCashflowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    gross_income: Decimal
    vacancy_loss: Decimal
    effective_gross_income: Decimal
    operating_expenses: Decimal
    noi: Decimal
    debt_service: Decimal
    interest_expense: Decimal
    principal_payment: Decimal
    loan_balance: Decimal
    cash_flow_before_tax: Decimal
    depreciation: Decimal
    loan_costs_amortization: Decimal
    taxable_income: Decimal
    taxes: Decimal
    cash_flow_after_tax: Decimal
    dscr: Decimal


class SaleProceedsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sale_noi: Decimal
    exit_cap_rate: Decimal
    sale_price: Decimal | None
    determined: bool
    cost_of_sale: Decimal
    net_sale_proceeds: Decimal
    loan_balance: Decimal
    before_tax_sale_proceeds: Decimal
    original_basis: Decimal
    accumulated_depreciation: Decimal
    adjusted_basis: Decimal
    total_gain: Decimal
    depreciation_recapture: Decimal
    capital_gain: Decimal
    depreciation_recapture_tax: Decimal
    capital_gains_tax: Decimal
    taxes_on_sale: Decimal
    after_tax_proceeds: Decimal


class SensitivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    exit_cap_minus_50bps: Decimal | None = None
    exit_cap_plus_50bps: Decimal | None = None
    rent_growth_minus_100bps: Decimal | None = None
    rent_growth_plus_100bps: Decimal | None = None
    dscr_rate_minus_50bps: Decimal | None = None
    dscr_rate_plus_50bps: Decimal | None = None


class ProFormaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    annual_cashflows: list[AnnualCashflowResponse]
    sale_proceeds: SaleProceedsResponse
    loan_amount: Decimal
    total_equity_invested: Decimal
    total_cash_returned: Decimal
    net_profit: Decimal
    irr: Decimal | None
    before_tax_irr: Decimal | None
    equity_multiple: Decimal
    before_tax_equity_multiple: Decimal
    average_cash_on_cash: Decimal
    total_tax_savings: Decimal

    # Derived metrics
    purchase_cap_rate: Decimal = Decimal("0")
    unlevered_irr: Decimal | None = None
    sensitivity: SensitivityResponse | None = None


class CompletionStateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    property_income_complete: bool
    financing_complete: bool
    tax_exit_complete: bool
    cashflows_ready: bool
    sale_analysis_ready: bool
    overall_progress: int


class ValidationResponse(BaseModel):
    valid: bool
    errors: list[str]
    completion: CompletionStateResponse


class LoanSizeResponse(BaseModel):
    financing_type: FinancingType | None
    loan_amount: Decimal
    cached_loan_amount: Decimal
    needs_update: bool
    annual_debt_service: Decimal
    year1_noi: Decimal
    year1_dscr: Decimal
    ltv: Decimal


class AmortizationPaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: int
    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance: Decimal


class AmortizationScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    periodic_payment: Decimal
    payments_per_year: int
    total_interest: Decimal
    total_principal: Decimal
    payments: list[AmortizationPaymentResponse]


class ScenarioSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
