from decimal import Decimal

import pytest

from proforma.engine.proforma import run_proforma
from proforma.engine.validation import validate_assumptions
from proforma.scenarios import (
    SCENARIOS,
    get_scenario,
    randomize_scenario,
    sample_assumptions,
)


class TestScenarios:
    def test_ids_unique(self):
        ids = [s.id for s in SCENARIOS]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.id)
    def test_valid(self, scenario):
        assert validate_assumptions(scenario.assumptions) == []

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.id)
    def test_runs(self, scenario):
        result = run_proforma(scenario.assumptions)
        assert len(result.annual_cashflows) == scenario.assumptions.hold_period_years
        assert result.sale_proceeds.determined

    def test_dscr_scenario_hits_target(self):
        result = run_proforma(get_scenario("dscr").assumptions)
        assert result.loan_amount > 0
        assert abs(result.annual_cashflows[0].dscr - Decimal("1.25")) <= Decimal("0.0001")

    def test_standard_loan_is_65_ltv(self):
        result = run_proforma(get_scenario("standard").assumptions)
        assert result.loan_amount == Decimal("1300000")

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_scenario("nope")

    def test_sample(self):
        assert sample_assumptions() == get_scenario("standard").assumptions


class TestRandomize:
    def test_same_seed_same_record(self):
        base = get_scenario("standard").assumptions
        assert randomize_scenario(base, 7) == randomize_scenario(base, 7)

    def test_different_seeds_differ(self):
        base = get_scenario("standard").assumptions
        assert randomize_scenario(base, 7) != randomize_scenario(base, 8)

    def test_keeps_schedule_lengths(self):
        base = get_scenario("valueadd").assumptions
        jittered = randomize_scenario(base, 1)
        assert len(jittered.potential_rental_income) == len(base.potential_rental_income)
        assert all(v <= Decimal("0.25") for v in jittered.vacancy_rates)
