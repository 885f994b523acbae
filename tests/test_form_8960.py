"""Tests for Form 8960 - Net Investment Income Tax."""

from decimal import Decimal

from forms.federal import Form8960, Schedule2
from forms.registry import FormRegistry
from models import CapitalTransaction, Form1099Div, Form1099Int
from return_builders import make_return, make_w2


def _registry(settings, wages, interest, **kwargs):
    return_input = make_return(
        w2s=(make_w2(wages),),
        interest_1099s=(Form1099Int(payer="First Bank", interest=interest),),
        **kwargs,
    )
    return FormRegistry(return_input, settings=settings)


class TestNetInvestmentIncomeTax:

    def test_investment_income_is_the_smaller_amount(self, settings):
        registry = _registry(
            settings, 210000.0, 5000.0,
            dividend_1099s=(Form1099Div(payer="Index Fund", ordinary_dividends=3000.0),),
            capital_transactions=(
                CapitalTransaction(description="Stock A", proceeds=9000.0, cost_basis=5000.0, is_long_term=True),
            ),
        )
        form = registry.root.form(Form8960)
        assert form.l1() == Decimal("5000")
        assert form.l2() == Decimal("3000")
        assert form.l5a() == Decimal("4000")
        assert form.l8() == Decimal("12000")
        assert form.l12() == Decimal("12000")
        assert form.l13() == Decimal("222000")
        assert form.l15() == Decimal("22000")
        assert form.l16() == Decimal("12000")
        assert form.l17() == Decimal("456")
        assert registry.root.form(Schedule2).l12() == Decimal("456")

    def test_excess_magi_is_the_smaller_amount(self, settings):
        form = _registry(settings, 195000.0, 10000.0).root.form(Form8960)
        assert form.l15() == Decimal("5000")
        assert form.l16() == Decimal("5000")
        assert form.l17() == Decimal("190")
        assert form.is_needed() is True

    def test_below_threshold(self, settings):
        form = _registry(settings, 100000.0, 10000.0).root.form(Form8960)
        assert form.l12() == Decimal("10000")
        assert form.l17() == Decimal("0")
        assert form.is_needed() is False
