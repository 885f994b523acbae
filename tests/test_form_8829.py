"""
Tests for Form 8829 - Expenses for Business Use of Your Home

Covers:
- Business use percentage (Part I)
- Mortgage interest and taxes, operating expenses and depreciation (Part II/III)
- The business income limit and carryovers (Part IV)
- Schedule C integration through the profit-before-home-office line
"""

from decimal import Decimal

import pytest

from forms.federal import Form8829
from forms.registry import FormRegistry
from models import HomeOffice, HomeOfficeMethod
from return_builders import make_business, make_return


def _form_8829(settings, gross_receipts, **office):
    office.setdefault("business_area_sqft", 200.0)
    office.setdefault("total_area_sqft", 2000.0)
    business = make_business(gross_receipts=gross_receipts, home_office=HomeOffice(**office))
    registry = FormRegistry(make_return(businesses=(business,)), settings=settings)
    return registry.root.form(Form8829)


@pytest.fixture
def form_8829(home_office_return, settings):
    registry = FormRegistry(home_office_return, settings=settings)
    return registry.root.form(Form8829)


class TestForm8829BusinessPercentage:
    """Part I: Business use percentage."""

    def test_basic_percentage(self, form_8829):
        assert form_8829.l3() == Decimal("0.1")

    def test_zero_total_area(self, settings):
        """Zero total area gives 0%, never a division error."""
        form = _form_8829(settings, 10000.0, total_area_sqft=0.0)
        assert form.l3() == Decimal("0")

    def test_percentage_capped_at_100(self, settings):
        form = _form_8829(settings, 10000.0, business_area_sqft=3000.0)
        assert form.l3() == Decimal("1")


class TestForm8829Deduction:
    """Part II: allowable deduction under the business income limit."""

    def test_tentative_profit_from_schedule_c(self, form_8829):
        assert form_8829.l8() == Decimal("50940")

    def test_mortgage_interest_and_taxes(self, form_8829):
        assert form_8829.l12() == Decimal("18000")
        assert form_8829.l14() == Decimal("1800")
        assert form_8829.l15() == Decimal("49140")

    def test_operating_expenses(self, form_8829):
        assert form_8829.l23() == Decimal("4500")
        assert form_8829.l27() == Decimal("450")

    def test_depreciation(self, form_8829):
        assert form_8829.l39() == Decimal("300000")
        assert form_8829.l42() == Decimal("769.2")
        assert form_8829.l33() == Decimal("769.2")

    def test_total_deduction(self, form_8829):
        assert form_8829.l36() == Decimal("3019.2")
        assert form_8829.l43() == Decimal("0")
        assert form_8829.l44() == Decimal("0")


class TestForm8829IncomeLimit:
    """Operating expenses and depreciation cannot exceed business income."""

    def test_limited_deduction_carries_over(self, settings):
        form = _form_8829(
            settings, 2000.0,
            mortgage_interest=12000.0, real_estate_taxes=6000.0,
            insurance=1500.0, utilities=3000.0,
            home_basis=400000.0, land_value=100000.0,
        )
        assert form.l15() == Decimal("200")
        assert form.l27() == Decimal("200")
        assert form.l33() == Decimal("0")
        assert form.l36() == Decimal("2000")
        assert form.l43() == Decimal("250")
        assert form.l44() == Decimal("769.2")

    def test_deduction_bounded_by_its_parts(self, settings):
        """Line 36 never exceeds interest/taxes plus operating costs plus depreciation."""
        for gross_receipts in (0.0, 1000.0, 2500.0, 10000.0, 80000.0):
            form = _form_8829(
                settings, gross_receipts,
                mortgage_interest=9000.0, real_estate_taxes=3000.0, utilities=2400.0,
                home_basis=300000.0, land_value=50000.0,
                prior_year_operating_carryover=400.0, prior_year_depreciation_carryover=250.0,
            )
            assert form.l36() <= form.l14() + form.l26() + form.l32()
            assert form.l27() + form.l33() <= form.l15()

    def test_prior_year_carryovers(self, settings):
        form = _form_8829(
            settings, 50000.0,
            utilities=1000.0,
            prior_year_operating_carryover=400.0, prior_year_depreciation_carryover=250.0,
        )
        assert form.l26() == Decimal("500")
        assert form.l32() == Decimal("250")


class TestForm8829Inclusion:

    def test_needed_for_regular_method(self, form_8829):
        assert form_8829.is_needed() is True

    def test_not_needed_for_simplified_method(self, settings):
        form = _form_8829(settings, 10000.0, method=HomeOfficeMethod.SIMPLIFIED)
        assert form.is_needed() is False

    def test_not_needed_without_area(self, settings):
        form = _form_8829(settings, 10000.0, business_area_sqft=0.0)
        assert form.is_needed() is False
