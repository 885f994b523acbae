"""
Tests for Schedule A - Itemized Deductions

Covers:
- Medical expenses over 7.5% of AGI
- The state and local tax cap, its phase-down and floor, halved for
  married filing separately
- Attachment: itemized deductions over the standard deduction, or elected
"""

from decimal import Decimal

import pytest

from forms.federal import ScheduleA
from forms.registry import FormRegistry
from models import Elections, ItemizedDeductions
from return_builders import make_return, make_w2


def _registry(settings, wages, itemized, filing_status="single", **kwargs):
    return_input = make_return(filing_status, w2s=(make_w2(wages),), itemized=itemized, **kwargs)
    return FormRegistry(return_input, settings=settings)


class TestItemizedDeductions:

    @pytest.fixture
    def registry(self, settings):
        return _registry(settings, 100000.0, ItemizedDeductions(
            medical_and_dental=9000.0,
            state_local_income_tax=6000.0,
            real_estate_taxes=5000.0,
            personal_property_taxes=500.0,
            mortgage_interest=12000.0,
            charitable_cash=2000.0,
            charitable_noncash=500.0,
        ))

    def test_medical(self, registry):
        schedule = registry.root.form(ScheduleA)
        assert schedule.l2() == Decimal("100000")
        assert schedule.l3() == Decimal("7500")
        assert schedule.l4() == Decimal("1500")

    def test_taxes(self, registry):
        schedule = registry.root.form(ScheduleA)
        assert schedule.l5d() == Decimal("11500")
        assert schedule.salt_limit() == Decimal("40000")
        assert schedule.l5e() == Decimal("11500")
        assert schedule.l7() == Decimal("11500")

    def test_interest_and_gifts(self, registry):
        schedule = registry.root.form(ScheduleA)
        assert schedule.l10() == Decimal("12000")
        assert schedule.l14() == Decimal("2500")

    def test_total_replaces_standard_deduction(self, registry):
        root = registry.root
        assert root.form(ScheduleA).l17() == Decimal("27500")
        assert root.itemizes() is True
        assert root.l12() == Decimal("27500")
        assert "f1040sa" in [entry.tag for entry in registry.included()]


class TestSaltCap:

    def test_phase_down(self, settings):
        registry = _registry(settings, 600000.0, ItemizedDeductions(state_local_income_tax=50000.0))
        schedule = registry.root.form(ScheduleA)
        # 40,000 less 30% of the 100,000 over 500,000
        assert schedule.salt_limit() == Decimal("10000")
        assert schedule.l5e() == Decimal("10000")

    def test_floor(self, settings):
        registry = _registry(settings, 700000.0, ItemizedDeductions(state_local_income_tax=50000.0))
        assert registry.root.form(ScheduleA).salt_limit() == Decimal("10000")

    def test_married_separate_halved(self, settings):
        registry = _registry(settings, 100000.0, ItemizedDeductions(state_local_income_tax=30000.0),
                             filing_status="married_separate")
        assert registry.root.form(ScheduleA).l5e() == Decimal("20000")


class TestAttachment:

    def test_below_standard_deduction(self, settings):
        registry = _registry(settings, 50000.0, ItemizedDeductions(mortgage_interest=8000.0))
        root = registry.root
        assert root.itemizes() is False
        assert root.schedule_a is None
        assert root.l12() == Decimal("15750")

    def test_forced(self, settings):
        registry = _registry(settings, 50000.0, ItemizedDeductions(mortgage_interest=8000.0),
                             elections=Elections(force_itemize=True))
        root = registry.root
        assert root.itemizes() is True
        assert root.schedule_a is not None
        assert root.l12() == Decimal("8000")
