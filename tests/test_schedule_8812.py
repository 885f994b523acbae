"""
Tests for Schedule 8812 - Credits for Qualifying Children and Other Dependents

Covers:
- Part I: credit amounts, the $1,000-step phase-out and the tax limit
- Part II-A: additional child tax credit from earned income
"""

from datetime import date
from decimal import Decimal

import pytest

from forms.federal import Schedule8812
from forms.registry import FormRegistry
from models import Dependent
from return_builders import make_return, make_taxpayer, make_w2


class TestFamilyReturn:
    """Two children, $38,000 wages: the tax limit pushes most of the credit into Part II-A."""

    @pytest.fixture
    def schedule(self, family_return, settings):
        return FormRegistry(family_return, settings=settings).root.form(Schedule8812)

    def test_part_one(self, schedule):
        assert schedule.l4() == Decimal("2")
        assert schedule.l5() == Decimal("4400")
        assert schedule.l6() == Decimal("0")
        assert schedule.l8() == Decimal("4400")
        assert schedule.l9() == Decimal("400000")
        assert schedule.l10() == Decimal("0")
        assert schedule.l12() == Decimal("4400")
        assert schedule.l13() == Decimal("650")
        assert schedule.l14() == Decimal("650")

    def test_part_two(self, schedule):
        assert schedule.l16a() == Decimal("3750")
        assert schedule.l16b() == Decimal("3400")
        assert schedule.l17() == Decimal("3400")
        assert schedule.l18a() == Decimal("38000")
        assert schedule.l19() == Decimal("35500")
        assert schedule.l20() == Decimal("5325")
        assert schedule.l27() == Decimal("3400")


def _single_parent(wages, *dependents):
    return make_return(taxpayer=make_taxpayer(dependents=dependents), w2s=(make_w2(wages),))


class TestPhaseOut:

    def test_excess_rounded_up_to_next_thousand(self, settings):
        return_input = _single_parent(
            215500.0,
            Dependent(first_name="Robin", last_name="Rivera", date_of_birth=date(2015, 6, 1)),
        )
        schedule = FormRegistry(return_input, settings=settings).root.form(Schedule8812)
        assert schedule.l10() == Decimal("16000")
        assert schedule.l11() == Decimal("800")
        assert schedule.l12() == Decimal("1400")
        assert schedule.l14() == Decimal("1400")
        assert schedule.l27() == Decimal("0")


class TestOtherDependents:

    def test_older_dependent_gets_500(self, settings):
        return_input = _single_parent(
            60000.0,
            Dependent(first_name="Jamie", last_name="Rivera", date_of_birth=date(2007, 2, 1)),
        )
        schedule = FormRegistry(return_input, settings=settings).root.form(Schedule8812)
        assert schedule.l4() == Decimal("0")
        assert schedule.l6() == Decimal("1")
        assert schedule.l8() == Decimal("500")
        assert schedule.l14() == Decimal("500")
        # No additional credit without a qualifying child
        assert schedule.l27() == Decimal("0")
        assert schedule.is_needed() is True


def test_no_dependents(wage_return, settings):
    schedule = FormRegistry(wage_return, settings=settings).root.form(Schedule8812)
    assert schedule.is_needed() is False
    assert schedule.l14() == Decimal("0")
