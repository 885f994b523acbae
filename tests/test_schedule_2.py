"""
Tests for Schedule 2 - Additional Taxes

Covers:
- Part I: excess advance premium tax credit and alternative minimum tax
- Part II: self-employment tax, HSA additional tax, Additional Medicare
  Tax and net investment income tax, each read from its own form
"""

from decimal import Decimal

import pytest

from forms.federal import Form6251, Schedule2
from forms.registry import FormRegistry
from models import Credits, Form1099Int, HSAInfo
from return_builders import make_business, make_return, make_w2


class TestSelfEmployedReturn:
    """$50,000 Schedule C profit, a non-qualified HSA distribution and a premium credit repayment."""

    @pytest.fixture
    def registry(self, settings):
        return_input = make_return(
            businesses=(make_business(gross_receipts=50000.0),),
            hsa=HSAInfo(total_distributions=1000.0),
            credits=Credits(excess_advance_premium_tax_credit=300.0),
        )
        return FormRegistry(return_input, settings=settings)

    def test_part_one(self, registry):
        schedule = registry.root.form(Schedule2)
        assert schedule.l1a() == Decimal("300")
        assert schedule.l2() == Decimal("0")
        assert schedule.l3() == Decimal("300")
        assert registry.root.l17() == Decimal("300")

    def test_part_two(self, registry):
        schedule = registry.root.form(Schedule2)
        # 12.4% and 2.9% of 92.35% of 50,000
        assert schedule.l4() == Decimal("7064.775")
        assert schedule.l8() == Decimal("200")
        assert schedule.l11() == Decimal("0")
        assert schedule.l12() == Decimal("0")
        assert schedule.l21() == Decimal("7264.775")
        assert registry.root.l23() == Decimal("7264.775")

    def test_attached(self, registry):
        assert "f1040s2" in [entry.tag for entry in registry.included()]


class TestHighIncomeReturn:
    """$250,000 wages and $10,000 interest: Additional Medicare Tax and NIIT."""

    @pytest.fixture
    def registry(self, settings):
        return_input = make_return(
            w2s=(make_w2(250000.0),),
            interest_1099s=(Form1099Int(payer="First Bank", interest=10000.0),),
        )
        return FormRegistry(return_input, settings=settings)

    def test_other_taxes(self, registry):
        schedule = registry.root.form(Schedule2)
        assert schedule.l4() == Decimal("0")
        # 0.9% of 50,000 over the threshold
        assert schedule.l11() == Decimal("450")
        # 3.8% of the 10,000 of investment income
        assert schedule.l12() == Decimal("380")
        assert schedule.l21() == Decimal("830")

    def test_no_minimum_tax(self, registry):
        assert registry.root.form(Form6251).l11() == Decimal("0")
        assert registry.root.form(Schedule2).l3() == Decimal("0")


def test_wage_return_has_no_schedule_2(wage_return, settings):
    registry = FormRegistry(wage_return, settings=settings)
    assert registry.root.form(Schedule2).is_needed() is False
    assert registry.root.l17() == Decimal("0")
    assert registry.root.l23() == Decimal("0")
