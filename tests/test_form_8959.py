"""
Tests for Form 8959 - Additional Medicare Tax

Covers:
- Tax on Medicare wages over the threshold
- The threshold shared between wages and self-employment income
- Withholding reconciliation to Form 1040 line 25c
"""

from decimal import Decimal

import pytest

from forms.federal import Form8959, Schedule2
from forms.registry import FormRegistry
from return_builders import make_business, make_return, make_w2


class TestWages:
    """$230,000 wages with Medicare tax withheld at both rates."""

    @pytest.fixture
    def registry(self, settings):
        return_input = make_return(w2s=(make_w2(230000.0, medicare_tax_withheld=3605.0),))
        return FormRegistry(return_input, settings=settings)

    def test_part_one(self, registry):
        form = registry.root.form(Form8959)
        assert form.l1() == Decimal("230000")
        assert form.l5() == Decimal("200000")
        assert form.l6() == Decimal("30000")
        assert form.l7() == Decimal("270")
        assert form.l18() == Decimal("270")
        assert registry.root.form(Schedule2).l11() == Decimal("270")

    def test_withholding(self, registry):
        form = registry.root.form(Form8959)
        assert form.l19() == Decimal("3605")
        assert form.l21() == Decimal("3335")
        assert form.l22() == Decimal("270")
        assert form.l24() == Decimal("270")
        assert registry.root.l25c() == Decimal("270")

    def test_attached(self, registry):
        assert "f8959" in [entry.tag for entry in registry.included()]


class TestSelfEmployment:

    def test_threshold_used_by_wages_first(self, settings):
        return_input = make_return(
            w2s=(make_w2(150000.0),),
            businesses=(make_business(gross_receipts=100000.0),),
        )
        form = FormRegistry(return_input, settings=settings).root.form(Form8959)
        assert form.l7() == Decimal("0")
        assert form.l8() == Decimal("92350")
        assert form.l11() == Decimal("50000")
        assert form.l12() == Decimal("42350")
        assert form.l13() == Decimal("381.15")
        assert form.l18() == Decimal("381.15")


def test_joint_threshold(settings):
    return_input = make_return("married_joint", w2s=(make_w2(240000.0),))
    form = FormRegistry(return_input, settings=settings).root.form(Form8959)
    assert form.threshold() == Decimal("250000")
    assert form.l18() == Decimal("0")
    assert form.is_needed() is False
