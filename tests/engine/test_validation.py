from dataclasses import replace
from decimal import Decimal

from proforma.models.assumptions import FinancingType, PropertyAssumptions
from proforma.engine.proforma import analyze
from proforma.engine.validation import completion_state, validate_assumptions


class TestValidateAssumptions:
    def test_valid(self, simple_rental, leveraged_rental, dscr_rental):
        assert validate_assumptions(simple_rental) == []
        assert validate_assumptions(leveraged_rental) == []
        assert validate_assumptions(dscr_rental) == []

    def test_purchase_price_required(self, simple_rental):
        errors = validate_assumptions(replace(simple_rental, purchase_price=Decimal("0")))
        assert "Purchase price must be greater than 0" in errors

    def test_income_required(self, simple_rental):
        a = replace(simple_rental, potential_rental_income=(), year1_noi=Decimal("0"))
        assert "Either detailed income structure or Year 1 NOI must be provided" in validate_assumptions(a)

    def test_legacy_noi_is_enough(self, simple_rental):
        a = replace(simple_rental, potential_rental_income=(), year1_noi=Decimal("66500"))
        assert validate_assumptions(a) == []

    def test_first_bad_rent_year_only(self, simple_rental):
        rents = (Decimal("100000"), Decimal("100000"), Decimal("0"), Decimal("0"), Decimal("100000"))
        errors = validate_assumptions(replace(simple_rental, potential_rental_income=rents))
        assert "Year 3 rental income must be greater than 0" in errors
        assert not any(e.startswith("Year 4") for e in errors)

    def test_short_schedule_is_invalid(self, simple_rental):
        a = replace(simple_rental, hold_period_years=7)
        assert "Year 6 rental income must be greater than 0" in validate_assumptions(a)

    def test_vacancy_range(self, simple_rental):
        a = replace(simple_rental, vacancy_rates=(Decimal("1.5"),) * 5)
        assert "Year 1 vacancy rate must be between 0% and 100%" in validate_assumptions(a)

    def test_hold_period_cap(self, simple_rental):
        a = replace(simple_rental, hold_period_years=31)
        assert "Hold period must be between 1 and 30 years" in validate_assumptions(a)

    def test_zero_hold_cap_override_is_respected(self, simple_rental):
        errors = validate_assumptions(simple_rental, max_hold_period_years=0)
        assert "Hold period must be between 1 and 0 years" in errors

    def test_hold_period_cap_override(self, simple_rental):
        errors = validate_assumptions(simple_rental, max_hold_period_years=3)
        assert "Hold period must be between 1 and 3 years" in errors

    def test_financing_type_required(self, simple_rental):
        a = replace(simple_rental, financing_type=None)
        assert "Financing type must be selected" in validate_assumptions(a)

    def test_ltv_target_required(self, leveraged_rental):
        a = replace(leveraged_rental, target_ltv=None)
        assert "Target LTV is required for LTV financing" in validate_assumptions(a)

    def test_dscr_target_required(self, dscr_rental):
        a = replace(dscr_rental, target_dscr=None)
        assert "Target DSCR is required for DSCR financing" in validate_assumptions(a)

    def test_dscr_below_one(self, dscr_rental):
        a = replace(dscr_rental, target_dscr=Decimal("0.9"))
        assert "Target DSCR must be at least 1.00x" in validate_assumptions(a)

    def test_payments_per_year(self, leveraged_rental):
        a = replace(leveraged_rental, payments_per_year=6)
        assert "Payments per year must be 1, 2, 4, or 12" in validate_assumptions(a)

    def test_loan_exceeds_price(self, leveraged_rental):
        a = replace(leveraged_rental, target_ltv=Decimal("110"))
        assert "Loan amount cannot exceed purchase price" in validate_assumptions(a)

    def test_sized_loan_checked_not_cached(self, dscr_rental):
        """At 0% interest a 1.25x DSCR supports $1.596M against a $1M price."""
        a = replace(dscr_rental, interest_rate=Decimal("0"))
        assert a.loan_amount == Decimal("0")
        assert "Loan amount cannot exceed purchase price" in validate_assumptions(a)

    def test_stale_cache_ignored_when_sized_loan_fits(self, leveraged_rental):
        a = replace(leveraged_rental, loan_amount=Decimal("1100000"))
        assert validate_assumptions(a) == []

    def test_land_improvements_sum(self, simple_rental):
        a = replace(simple_rental, land_percentage=Decimal("30"))
        assert "Land % and Improvements % must add up to 100%" in validate_assumptions(a)

    def test_exit_cap_rate(self, simple_rental):
        a = replace(simple_rental, disposition_cap_rate=Decimal("0"))
        assert "Exit cap rate must be between 0% and 100%" in validate_assumptions(a)

    def test_tax_rate_range(self, simple_rental):
        a = replace(simple_rental, capital_gains_tax_rate=Decimal("20"))
        assert "Capital gains tax rate must be between 0% and 100%" in validate_assumptions(a)

    def test_never_raises_on_empty_record(self):
        errors = validate_assumptions(PropertyAssumptions())
        assert "Purchase price must be greater than 0" in errors


class TestAnalyzeGating:
    def test_invalid_returns_no_results(self, simple_rental):
        errors, results = analyze(replace(simple_rental, purchase_price=Decimal("0")))
        assert results is None
        assert "Purchase price must be greater than 0" in errors

    def test_oversized_dscr_loan_blocked(self, dscr_rental):
        errors, results = analyze(replace(dscr_rental, interest_rate=Decimal("0")))
        assert results is None
        assert "Loan amount cannot exceed purchase price" in errors

    def test_valid_runs(self, simple_rental):
        errors, results = analyze(simple_rental)
        assert errors == []
        assert results is not None


class TestCompletionState:
    def test_complete(self, leveraged_rental):
        state = completion_state(leveraged_rental)
        assert state.property_income_complete
        assert state.financing_complete
        assert state.tax_exit_complete
        assert state.cashflows_ready
        assert state.sale_analysis_ready
        assert state.overall_progress == 100

    def test_empty_record(self):
        state = completion_state(PropertyAssumptions())
        assert not state.property_income_complete
        assert state.financing_complete  # All cash needs nothing else
        assert not state.tax_exit_complete
        assert not state.cashflows_ready
        assert state.overall_progress == 33

    def test_financing_incomplete_without_rate(self, leveraged_rental):
        state = completion_state(replace(leveraged_rental, interest_rate=Decimal("0")))
        assert not state.financing_complete
        assert not state.sale_analysis_ready

    def test_dscr_needs_target(self, dscr_rental):
        a = replace(dscr_rental, target_dscr=None)
        assert a.financing_type == FinancingType.DSCR
        assert not completion_state(a).financing_complete
