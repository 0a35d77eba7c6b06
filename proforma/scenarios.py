"""Canned deal scenarios for manual testing and demos.

Each scenario is a complete, valid PropertyAssumptions record covering a
different deal profile (stabilized office, value-add, NNN retail, DSCR
sizing, stress, short hold).
"""

import random
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import (
    AmountType,
    DispositionPriceType,
    FinancingType,
    PropertyAssumptions,
    PropertyType,
)

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class Scenario:
    id: str
    name: str
    description: str
    assumptions: PropertyAssumptions


def _growing(base: str, rate: str, years: int) -> tuple[Decimal, ...]:
    growth = 1 + Decimal(rate)
    return tuple((Decimal(base) * growth ** i).quantize(TWO_PLACES, ROUND_HALF_UP) for i in range(years))


def _flat(value: str, years: int) -> tuple[Decimal, ...]:
    return (Decimal(value),) * years


def _series(*values: str) -> tuple[Decimal, ...]:
    return tuple(Decimal(v) for v in values)


STANDARD_OFFICE = PropertyAssumptions(
    purchase_price=Decimal("2000000"),
    acquisition_costs=Decimal("4"),
    acquisition_cost_type=AmountType.PERCENTAGE,
    property_type=PropertyType.COMMERCIAL,
    land_percentage=Decimal("20"),
    improvements_percentage=Decimal("80"),
    depreciation_years=Decimal("39"),
    hold_period_years=7,
    potential_rental_income=_growing("240000", "0.03", 10),
    vacancy_rates=_flat("0.05", 10),
    operating_expenses=_flat("40", 10),
    operating_expense_type=AmountType.PERCENTAGE,
    rental_income_growth_rate=Decimal("0.03"),
    default_vacancy_rate=Decimal("0.05"),
    default_operating_expense_rate=Decimal("40"),
    financing_type=FinancingType.LTV,
    target_ltv=Decimal("65"),
    loan_amount=Decimal("1300000"),
    interest_rate=Decimal("0.065"),
    loan_term_years=10,
    amortization_years=30,
    payments_per_year=12,
    loan_costs=Decimal("2"),
    loan_cost_type=AmountType.PERCENTAGE,
    ordinary_income_tax_rate=Decimal("0.35"),
    capital_gains_tax_rate=Decimal("0.20"),
    depreciation_recapture_rate=Decimal("0.25"),
    disposition_price_type=DispositionPriceType.CAP_RATE,
    disposition_cap_rate=Decimal("0.075"),
    cost_of_sale_type=AmountType.PERCENTAGE,
    cost_of_sale_percentage=Decimal("0.06"),
)

VALUE_ADD_MULTIFAMILY = PropertyAssumptions(
    purchase_price=Decimal("5000000"),
    acquisition_costs=Decimal("3"),
    property_type=PropertyType.RESIDENTIAL,
    land_percentage=Decimal("15"),
    improvements_percentage=Decimal("85"),
    depreciation_years=Decimal("27.5"),
    hold_period_years=5,
    potential_rental_income=_series(
        "480000", "500000", "650000", "689500", "731327",
        "775877", "823180", "873271", "926168", "982498",
    ),
    vacancy_rates=_series("0.15", "0.12", "0.08", "0.07", "0.06", "0.05", "0.05", "0.05", "0.05", "0.05"),
    operating_expenses=_flat("45", 10),
    financing_type=FinancingType.LTV,
    target_ltv=Decimal("80"),
    loan_amount=Decimal("4000000"),
    interest_rate=Decimal("0.075"),
    loan_term_years=5,
    amortization_years=30,
    loan_costs=Decimal("2.5"),
    ordinary_income_tax_rate=Decimal("0.37"),
    capital_gains_tax_rate=Decimal("0.20"),
    depreciation_recapture_rate=Decimal("0.25"),
    disposition_cap_rate=Decimal("0.065"),
    cost_of_sale_percentage=Decimal("0.07"),
    capital_improvements=(),
)

NNN_RETAIL = PropertyAssumptions(
    purchase_price=Decimal("3500000"),
    acquisition_costs=Decimal("2.5"),
    property_type=PropertyType.COMMERCIAL,
    land_percentage=Decimal("25"),
    improvements_percentage=Decimal("75"),
    depreciation_years=Decimal("39"),
    hold_period_years=15,
    potential_rental_income=_flat("350000", 5) + _flat("367500", 5) + _flat("385875", 5),
    vacancy_rates=_flat("0", 15),
    operating_expenses=_flat("5", 15),
    financing_type=FinancingType.LTV,
    target_ltv=Decimal("70"),
    loan_amount=Decimal("2450000"),
    interest_rate=Decimal("0.055"),
    loan_term_years=15,
    amortization_years=25,
    loan_costs=Decimal("1.5"),
    ordinary_income_tax_rate=Decimal("0.32"),
    capital_gains_tax_rate=Decimal("0.15"),
    depreciation_recapture_rate=Decimal("0.25"),
    disposition_cap_rate=Decimal("0.07"),
    cost_of_sale_percentage=Decimal("0.05"),
)

DSCR_INDUSTRIAL = PropertyAssumptions(
    purchase_price=Decimal("4200000"),
    acquisition_costs=Decimal("45000"),
    acquisition_cost_type=AmountType.DOLLAR,
    property_type=PropertyType.INDUSTRIAL,
    land_percentage=Decimal("30"),
    improvements_percentage=Decimal("70"),
    depreciation_years=Decimal("39"),
    acquisition_month=7,
    hold_period_years=10,
    potential_rental_income=_growing("390000", "0.025", 10),
    other_income=_flat("12000", 10),
    vacancy_rates=_flat("0.04", 10),
    operating_expenses=_growing("78000", "0.03", 10),
    operating_expense_type=AmountType.DOLLAR,
    financing_type=FinancingType.DSCR,
    target_dscr=Decimal("1.25"),
    interest_rate=Decimal("0.0625"),
    loan_term_years=10,
    amortization_years=25,
    payments_per_year=12,
    loan_costs=Decimal("25000"),
    loan_cost_type=AmountType.DOLLAR,
    ordinary_income_tax_rate=Decimal("0.35"),
    capital_gains_tax_rate=Decimal("0.20"),
    depreciation_recapture_rate=Decimal("0.25"),
    disposition_price_type=DispositionPriceType.CAP_RATE,
    disposition_cap_rate=Decimal("0.0725"),
    cost_of_sale_type=AmountType.DOLLAR,
    cost_of_sale_amount=Decimal("150000"),
)

STRESS_TEST = PropertyAssumptions(
    purchase_price=Decimal("1500000"),
    acquisition_costs=Decimal("6"),
    property_type=PropertyType.COMMERCIAL,
    land_percentage=Decimal("15"),
    improvements_percentage=Decimal("85"),
    depreciation_years=Decimal("39"),
    hold_period_years=5,
    potential_rental_income=_series(
        "180000", "162000", "145800", "140000", "142800",
        "148000", "155000", "162750", "170787", "179327",
    ),
    vacancy_rates=_series("0.08", "0.15", "0.20", "0.18", "0.15", "0.12", "0.08", "0.06", "0.05", "0.05"),
    operating_expenses=_flat("55", 10),
    financing_type=FinancingType.LTV,
    target_ltv=Decimal("70"),
    loan_amount=Decimal("1050000"),
    interest_rate=Decimal("0.095"),
    loan_term_years=5,
    amortization_years=25,
    loan_costs=Decimal("3.5"),
    ordinary_income_tax_rate=Decimal("0.35"),
    capital_gains_tax_rate=Decimal("0.20"),
    depreciation_recapture_rate=Decimal("0.25"),
    disposition_cap_rate=Decimal("0.095"),
    cost_of_sale_percentage=Decimal("0.08"),
)

QUICK_FLIP = PropertyAssumptions(
    purchase_price=Decimal("800000"),
    acquisition_costs=Decimal("3"),
    property_type=PropertyType.COMMERCIAL,
    land_percentage=Decimal("10"),
    improvements_percentage=Decimal("90"),
    depreciation_years=Decimal("39"),
    hold_period_years=2,
    potential_rental_income=_series("96000", "132000"),
    vacancy_rates=_series("0.20", "0.05"),
    operating_expenses=_series("60", "35"),
    financing_type=FinancingType.LTV,
    target_ltv=Decimal("75"),
    loan_amount=Decimal("600000"),
    interest_rate=Decimal("0.10"),
    loan_term_years=3,
    amortization_years=30,
    loan_costs=Decimal("4"),
    ordinary_income_tax_rate=Decimal("0.37"),
    capital_gains_tax_rate=Decimal("0.37"),  # Short hold, no long-term treatment
    depreciation_recapture_rate=Decimal("0.25"),
    disposition_cap_rate=Decimal("0.055"),
    cost_of_sale_percentage=Decimal("0.07"),
)

SCENARIOS: list[Scenario] = [
    Scenario(
        id="standard",
        name="Standard Office Building",
        description="Conservative 65% LTV office investment with stable income growth",
        assumptions=STANDARD_OFFICE,
    ),
    Scenario(
        id="valueadd",
        name="Value-Add Multifamily",
        description="High leverage multifamily with renovation period and rent growth",
        assumptions=VALUE_ADD_MULTIFAMILY,
    ),
    Scenario(
        id="nnn",
        name="Triple Net Retail",
        description="Single-tenant NNN retail with long-term lease and minimal expenses",
        assumptions=NNN_RETAIL,
    ),
    Scenario(
        id="dscr",
        name="DSCR-Sized Industrial",
        description="Flex industrial with the loan sized to a 1.25x coverage target",
        assumptions=DSCR_INDUSTRIAL,
    ),
    Scenario(
        id="stress",
        name="Stress Test Scenario",
        description="High interest rates, declining income, and market stress conditions",
        assumptions=STRESS_TEST,
    ),
    Scenario(
        id="quickflip",
        name="Quick Flip Strategy",
        description="2-year hold with renovation and quick appreciation",
        assumptions=QUICK_FLIP,
    ),
]


def get_scenario(scenario_id: str) -> Scenario:
    """Look up a scenario by id. Raises KeyError for unknown ids."""
    for scenario in SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    raise KeyError(scenario_id)


def sample_assumptions() -> PropertyAssumptions:
    """Default starting point for a new model."""
    return STANDARD_OFFICE


def randomize_scenario(base: PropertyAssumptions, seed: int | None = None) -> PropertyAssumptions:
    """Jitter the main inputs of ``base`` for edge-case exploration.

    The same seed always yields the same record.
    """
    rng = random.Random(seed)

    def vary(value: Decimal, factor: float) -> Decimal:
        multiplier = Decimal(str(round(1 + (rng.random() - 0.5) * 2 * factor, 6)))
        return max(Decimal("0"), value * multiplier)

    return replace(
        base,
        purchase_price=vary(base.purchase_price, 0.20).quantize(TWO_PLACES, ROUND_HALF_UP),
        acquisition_costs=vary(base.acquisition_costs, 0.25),
        interest_rate=vary(base.interest_rate, 0.30),
        potential_rental_income=tuple(
            vary(v, 0.15).quantize(TWO_PLACES, ROUND_HALF_UP) for v in base.potential_rental_income
        ),
        vacancy_rates=tuple(min(Decimal("0.25"), vary(v, 0.50)) for v in base.vacancy_rates),
        operating_expenses=tuple(vary(v, 0.20) for v in base.operating_expenses),
        disposition_cap_rate=vary(base.disposition_cap_rate, 0.25),
    )
