from dataclasses import replace
from decimal import Decimal

from proforma.models.assumptions import AmountType, CapitalImprovement, DispositionPriceType
from proforma.engine.disposition import (
    compute_sale_proceeds,
    cost_of_sale,
    sale_price,
    year_after_hold_noi,
)


class TestSalePrice:
    def test_cap_rate_exit(self, simple_rental):
        a = replace(simple_rental, disposition_cap_rate=Decimal("0.05"))
        assert sale_price(a, Decimal("500000")) == Decimal("10000000.00")

    def test_zero_cap_rate_undetermined(self, simple_rental):
        a = replace(simple_rental, disposition_cap_rate=Decimal("0"))
        assert sale_price(a, Decimal("500000")) is None

    def test_dollar_exit(self, simple_rental):
        a = replace(
            simple_rental,
            disposition_price_type=DispositionPriceType.DOLLAR,
            disposition_price=Decimal("1200000"),
        )
        assert sale_price(a, Decimal("66500")) == Decimal("1200000")

    def test_cost_of_sale_percentage(self, simple_rental):
        assert cost_of_sale(simple_rental, Decimal("1000000")) == Decimal("60000.00")

    def test_cost_of_sale_dollar(self, simple_rental):
        a = replace(
            simple_rental,
            cost_of_sale_type=AmountType.DOLLAR,
            cost_of_sale_amount=Decimal("25000"),
        )
        assert cost_of_sale(a, Decimal("1000000")) == Decimal("25000")


class TestSaleProceeds:
    def _no_selling_costs(self, a, price):
        return replace(
            a,
            disposition_price_type=DispositionPriceType.DOLLAR,
            disposition_price=Decimal(price),
            cost_of_sale_percentage=Decimal("0"),
        )

    def test_gain_split(self, simple_rental):
        a = self._no_selling_costs(simple_rental, "1200000")
        sale = compute_sale_proceeds(
            a,
            Decimal("66500"),
            loan_balance=Decimal("500000"),
            accumulated_depreciation=Decimal("100000"),
        )
        assert sale.determined
        assert sale.adjusted_basis == Decimal("900000")
        assert sale.total_gain == Decimal("300000")
        assert sale.depreciation_recapture == Decimal("100000")
        assert sale.capital_gain == Decimal("200000")
        assert sale.depreciation_recapture_tax == Decimal("25000.00")
        assert sale.capital_gains_tax == Decimal("40000.00")
        assert sale.before_tax_sale_proceeds == Decimal("700000")
        assert sale.after_tax_proceeds == Decimal("635000.00")

    def test_small_gain_is_all_recapture(self, simple_rental):
        a = self._no_selling_costs(simple_rental, "950000")
        sale = compute_sale_proceeds(a, Decimal("66500"), accumulated_depreciation=Decimal("100000"))
        assert sale.total_gain == Decimal("50000")
        assert sale.depreciation_recapture == Decimal("50000")
        assert sale.capital_gain == Decimal("0")

    def test_loss_not_taxed(self, simple_rental):
        a = self._no_selling_costs(simple_rental, "800000")
        sale = compute_sale_proceeds(a, Decimal("66500"), accumulated_depreciation=Decimal("100000"))
        assert sale.total_gain == Decimal("0")
        assert sale.taxes_on_sale == Decimal("0")
        assert sale.after_tax_proceeds == sale.before_tax_sale_proceeds

    def test_implied_cap_rate_for_dollar_exit(self, simple_rental):
        a = self._no_selling_costs(simple_rental, "1000000")
        sale = compute_sale_proceeds(a, Decimal("66500"))
        assert sale.exit_cap_rate == Decimal("0.0665")

    def test_capital_improvements_add_to_basis(self, simple_rental):
        a = replace(
            simple_rental,
            capital_improvements=(CapitalImprovement(year=2, amount=Decimal("50000")),),
        )
        sale = compute_sale_proceeds(a, Decimal("66500"))
        assert sale.original_basis == Decimal("1050000")

    def test_undetermined_sale(self, simple_rental):
        a = replace(simple_rental, disposition_cap_rate=Decimal("0"))
        sale = compute_sale_proceeds(a, Decimal("66500"), loan_balance=Decimal("400000"))
        assert not sale.determined
        assert sale.sale_price is None
        assert sale.after_tax_proceeds == Decimal("0")
        assert sale.loan_balance == Decimal("400000")


class TestYearAfterHoldNOI:
    def test_flat_schedule(self, simple_rental):
        assert year_after_hold_noi(simple_rental) == Decimal("66500.00")

    def test_grows_at_last_observed_rate(self, growing_rental):
        forward = year_after_hold_noi(growing_rental)
        # Year 6 rent ~ 100000 * 1.03^5, NOI margin 0.95 * 0.70
        assert forward > Decimal("77090")
        assert forward < Decimal("77093")

    def test_single_year_uses_default_growth(self, simple_rental):
        a = replace(
            simple_rental,
            hold_period_years=1,
            potential_rental_income=(Decimal("100000"),),
        )
        # 103,000 rent, 5% vacancy, 30% opex
        assert year_after_hold_noi(a) == Decimal("68495.00")

    def test_legacy_noi_grows(self, simple_rental):
        a = replace(
            simple_rental,
            potential_rental_income=(),
            year1_noi=Decimal("50000"),
            noi_growth_rate=Decimal("0.02"),
            hold_period_years=2,
        )
        # Year 2 NOI 51,000 grown once more
        assert year_after_hold_noi(a) == Decimal("52020.00")
