"""
Tests for Form 6251 - Alternative Minimum Tax

Covers:
- AMTI from taxable income, the standard deduction add-back and
  incentive stock options
- The exemption phase-out
- Part III capital gain rates inside the tentative minimum tax
- The flow to Schedule 2 line 2 and Form 1040 line 17
"""

from decimal import Decimal

import pytest

from forms.federal import Form6251, Schedule2
from forms.registry import FormRegistry
from models import AMTAdjustments, Form1099Div, ItemizedDeductions
from return_builders import make_return, make_w2


def _registry(settings, wages, iso=0.0, **kwargs):
    return_input = make_return(
        w2s=(make_w2(wages),),
        amt_adjustments=AMTAdjustments(incentive_stock_options=iso),
        **kwargs,
    )
    return FormRegistry(return_input, settings=settings)


class TestIncentiveStockOptions:
    """$100,000 wages and a $200,000 ISO bargain element."""

    @pytest.fixture
    def registry(self, settings):
        return _registry(settings, 100000.0, iso=200000.0)

    def test_amti(self, registry):
        form = registry.root.form(Form6251)
        assert form.l1() == Decimal("84250")
        assert form.l2a() == Decimal("15750")
        assert form.l2i() == Decimal("200000")
        assert form.l4() == Decimal("300000")

    def test_tentative_minimum_tax(self, registry):
        form = registry.root.form(Form6251)
        assert form.l5() == Decimal("88100")
        assert form.l6() == Decimal("211900")
        # 26% of the whole excess, which is under the 28% threshold
        assert form.l7() == Decimal("55094")
        assert form.l10() == Decimal("13449")
        assert form.l11() == Decimal("41645")

    def test_flows_to_1040(self, registry):
        root = registry.root
        assert root.form(Schedule2).l2() == Decimal("41645")
        assert root.l17() == Decimal("41645")
        assert root.l18() == Decimal("55094")
        tags = [entry.tag for entry in registry.included()]
        assert "f6251" in tags
        assert "f1040s2" in tags


class TestCapitalGainRates:
    """Same facts plus $10,000 of qualified dividends, taxed at 15% in Part III."""

    @pytest.fixture
    def form(self, settings):
        registry = _registry(
            settings, 100000.0, iso=200000.0,
            dividend_1099s=(Form1099Div(payer="Index Fund", ordinary_dividends=10000.0,
                                        qualified_dividends=10000.0),),
        )
        return registry.root.form(Form6251)

    def test_part_three(self, form):
        assert form.l12() == Decimal("221900")
        assert form.l13() == Decimal("10000")
        assert form.l17() == Decimal("211900")
        assert form.l18() == Decimal("55094")
        assert form.l20() == Decimal("84250")
        assert form.l21() == Decimal("0")
        assert form.l28() == Decimal("10000")
        assert form.l29() == Decimal("1500")
        assert form.l30() == Decimal("0")
        assert form.l32() == Decimal("56594")
        assert form.l33() == Decimal("56594")

    def test_minimum_tax(self, form):
        assert form.l7() == Decimal("56594")
        assert form.l10() == Decimal("14949")
        assert form.l11() == Decimal("41645")


class TestNoMinimumTax:

    def test_wage_return(self, wage_return, settings):
        registry = FormRegistry(wage_return, settings=settings)
        form = registry.root.form(Form6251)
        assert form.l6() == Decimal("0")
        assert form.l11() == Decimal("0")
        assert form.is_needed() is False
        assert registry.root.form(Schedule2).l2() == Decimal("0")

    def test_exemption_phase_out(self, settings):
        form = _registry(settings, 700000.0).root.form(Form6251)
        assert form.l4() == Decimal("700000")
        # 88,100 less 25% of the 73,650 over 626,350
        assert form.l5() == Decimal("69687.5")
        # Regular tax still exceeds the tentative minimum tax
        assert form.l11() == Decimal("0")

    def test_itemizer_adds_back_taxes(self, settings):
        registry = _registry(
            settings, 100000.0,
            itemized=ItemizedDeductions(state_local_income_tax=9000.0, mortgage_interest=10000.0),
        )
        form = registry.root.form(Form6251)
        assert registry.root.itemizes() is True
        assert form.l2a() == Decimal("9000")
        assert form.l4() == Decimal("90000")
