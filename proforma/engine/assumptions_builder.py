"""Field-by-field editing of PropertyAssumptions.

Every edit returns a new record. Coupled fields are kept consistent:
  - land % and improvements % always sum to 100
  - changing the property type resets the depreciation period
  - choosing cash financing clears the loan
  - the cached loan amount is re-sized when any loan sizing input changes
"""

import logging
from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import (
    FinancingType,
    PropertyAssumptions,
    default_depreciation_years,
    schedule_value,
)
from proforma.engine.financing import loan_sizing_key, resize_loan

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")
SCHEDULE_FIELDS = ("potential_rental_income", "other_income", "vacancy_rates", "operating_expenses")


def update_assumptions(
    assumptions: PropertyAssumptions,
    threshold: Decimal | None = None,
    **changes,
) -> PropertyAssumptions:
    """Apply ``changes`` and return the resulting consistent record.

    Raises TypeError for unknown field names (from ``dataclasses.replace``).
    """
    for name in SCHEDULE_FIELDS:
        if name in changes and changes[name] is not None:
            changes[name] = tuple(changes[name])

    if "land_percentage" in changes and "improvements_percentage" not in changes:
        changes["improvements_percentage"] = HUNDRED - changes["land_percentage"]
    elif "improvements_percentage" in changes and "land_percentage" not in changes:
        changes["land_percentage"] = HUNDRED - changes["improvements_percentage"]

    if "property_type" in changes and "depreciation_years" not in changes:
        changes["depreciation_years"] = default_depreciation_years(changes["property_type"])

    if changes.get("financing_type") == FinancingType.CASH:
        changes.setdefault("loan_amount", Decimal("0"))

    updated = replace(assumptions, **changes)

    # Explicit "loan_amount" edits are manual overrides; leave them alone
    if "loan_amount" not in changes and loan_sizing_key(updated) != loan_sizing_key(assumptions):
        updated = resize_loan(updated, threshold)

    return updated


def set_schedule_value(
    assumptions: PropertyAssumptions,
    field_name: str,
    year: int,
    value: Decimal,
) -> PropertyAssumptions:
    """Set one 0-based year of a schedule, padding earlier years with 0."""
    if field_name not in SCHEDULE_FIELDS:
        raise ValueError(f"Unknown schedule: {field_name}")
    if year < 0:
        raise ValueError(f"Year must be 0 or greater, got {year}")

    values = list(getattr(assumptions, field_name))
    if len(values) <= year:
        values.extend([Decimal("0")] * (year + 1 - len(values)))
    values[year] = value
    return update_assumptions(assumptions, **{field_name: values})


def populate_schedules(
    assumptions: PropertyAssumptions,
    years: int | None = None,
) -> PropertyAssumptions:
    """Fill the income/vacancy/expense schedules from the auto-population helpers.

    Rent grows from the year-0 entry at ``rental_income_growth_rate``;
    vacancy and operating expenses are held flat at their defaults. Schedules
    whose helper is unset are left untouched.
    """
    n = years if years is not None else assumptions.hold_period_years
    changes: dict = {}

    base_rent = schedule_value(assumptions.potential_rental_income, 0)
    growth = assumptions.rental_income_growth_rate
    if growth is not None and base_rent > 0:
        changes["potential_rental_income"] = [
            (base_rent * (1 + growth) ** i).quantize(TWO_PLACES, ROUND_HALF_UP) for i in range(n)
        ]

    if assumptions.default_vacancy_rate is not None:
        changes["vacancy_rates"] = [assumptions.default_vacancy_rate] * n

    if assumptions.default_operating_expense_rate is not None:
        changes["operating_expenses"] = [assumptions.default_operating_expense_rate] * n

    if not changes:
        return assumptions
    logger.debug("Populated %s for %d years", ", ".join(sorted(changes)), n)
    return update_assumptions(assumptions, **changes)


def truncate_schedules(assumptions: PropertyAssumptions) -> PropertyAssumptions:
    """Drop schedule entries beyond the hold period."""
    n = max(0, assumptions.hold_period_years)
    return replace(
        assumptions,
        **{name: tuple(getattr(assumptions, name)[:n]) for name in SCHEDULE_FIELDS},
    )
