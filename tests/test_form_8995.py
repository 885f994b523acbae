"""
Tests for Form 8995 - Qualified Business Income Deduction Simplified Computation

Covers:
- The QBI component and income limitation below the threshold
- Attachment in place of Form 8995-A and the flow to Form 1040 line 13
- The deduction never exceeds either of its two limits
"""

from decimal import Decimal

import pytest

from forms.federal import Form8995, Form8995A
from forms.registry import FormRegistry
from models import BusinessExpenses, Form1099Div
from return_builders import make_business, make_return, make_w2


class TestSimplifiedComputation:
    """$50,000 Schedule C profit, no other income."""

    @pytest.fixture
    def registry(self, settings):
        return_input = make_return(businesses=(make_business(gross_receipts=50000.0),))
        return FormRegistry(return_input, settings=settings)

    def test_qbi_component(self, registry):
        form = registry.root.form(Form8995)
        assert form.business_name() == "Rivera Consulting"
        # Profit less half of 7,064.775 self-employment tax
        assert form.l1() == Decimal("46467.6125")
        assert form.l4() == Decimal("46467.6125")
        assert form.l5() == Decimal("9293.5225")

    def test_income_limitation(self, registry):
        form = registry.root.form(Form8995)
        assert form.l11() == Decimal("30717.6125")
        assert form.l12() == Decimal("0")
        assert form.l13() == Decimal("30717.6125")
        assert form.l14() == Decimal("6143.5225")
        assert form.l15() == Decimal("6143.5225")

    def test_attached_with_deduction_on_line_13(self, registry):
        root = registry.root
        tags = [entry.tag for entry in registry.included()]
        assert "f8995" in tags
        assert "f8995a" not in tags
        assert root.form_8995 is not None
        assert root.l13() == Decimal("6143.5225")
        assert root.l15() == Decimal("24574.09")

    def test_capital_gain_reduces_the_limit(self, settings):
        return_input = make_return(
            businesses=(make_business(gross_receipts=50000.0),),
            dividend_1099s=(Form1099Div(payer="Index Fund", ordinary_dividends=2000.0,
                                        qualified_dividends=2000.0),),
        )
        form = FormRegistry(return_input, settings=settings).root.form(Form8995)
        assert form.l12() == Decimal("2000")
        assert form.l13() == form.l11() - Decimal("2000")


class TestNotAttached:

    def test_business_loss(self, settings):
        return_input = make_return(
            w2s=(make_w2(40000.0),),
            businesses=(make_business(gross_receipts=1000.0, expenses=BusinessExpenses(supplies=3000.0)),),
        )
        registry = FormRegistry(return_input, settings=settings)
        assert registry.root.form(Form8995).is_needed() is False
        assert registry.root.l13() == Decimal("0")

    def test_above_threshold_uses_form_8995a(self, settings):
        return_input = make_return(businesses=(make_business(gross_receipts=400000.0),))
        registry = FormRegistry(return_input, settings=settings)
        form = registry.root.form(Form8995)
        assert form.within_threshold() is False
        assert form.is_needed() is False
        assert form.l15() == Decimal("0")
        assert registry.root.form(Form8995A).is_needed() is True


class TestDeductionBounds:
    """The deduction is capped by 20% of QBI and by 20% of taxable income before it."""

    @pytest.mark.parametrize("gross_receipts", [5000.0, 30000.0, 80000.0, 150000.0])
    @pytest.mark.parametrize("wages", [0.0, 20000.0, 120000.0])
    @pytest.mark.parametrize("filing_status", ["single", "married_joint"])
    def test_bounds(self, settings, gross_receipts, wages, filing_status):
        return_input = make_return(
            filing_status,
            w2s=(make_w2(wages),),
            businesses=(make_business(gross_receipts=gross_receipts),),
        )
        root = FormRegistry(return_input, settings=settings).root
        form = root.form(Form8995)
        deduction = form.l15()
        assert deduction >= 0
        assert deduction <= form.l5()
        assert deduction <= root.taxable_income_before_qbi() * Decimal("0.2")
        assert root.l13() == deduction + root.form(Form8995A).l39()
