from decimal import Decimal

from proforma.engine.irr import compute_equity_multiple, compute_irr, npv


class TestIRR:
    def test_one_period(self):
        assert compute_irr([Decimal("-1000"), Decimal("1100")]) == Decimal("0.1000")

    def test_two_periods(self):
        assert compute_irr([Decimal("-1000"), Decimal("0"), Decimal("1210")]) == Decimal("0.1000")

    def test_negative_return(self):
        irr = compute_irr([Decimal("-1000"), Decimal("900")])
        assert irr == Decimal("-0.1000")

    def test_no_root(self):
        assert compute_irr([Decimal("-1000"), Decimal("-100")]) is None

    def test_too_few_flows(self):
        assert compute_irr([Decimal("-1000")]) is None
        assert compute_irr([]) is None


class TestNPV:
    def test_zero_at_irr(self):
        assert npv([Decimal("-1000"), Decimal("1100")], Decimal("0.10")) == Decimal("0.00")

    def test_undiscounted(self):
        assert npv([Decimal("-1000"), Decimal("600"), Decimal("600")], Decimal("0")) == Decimal("200.00")


class TestEquityMultiple:
    def test_double(self):
        assert compute_equity_multiple(Decimal("2000"), Decimal("1000")) == Decimal("2.0000")

    def test_no_equity(self):
        assert compute_equity_multiple(Decimal("2000"), Decimal("0")) == Decimal("0")
