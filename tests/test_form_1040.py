"""
Tests for Form 1040 as the root of the form graph.

Covers:
- A wage-only return end to end
- A family return with the child tax credit and earned income credit
- The Social Security Benefits Worksheet and its interaction with the
  student loan interest deduction
- The Qualified Dividends and Capital Gain Tax Worksheet
- A return with nearly every attachment
"""

from datetime import date
from decimal import Decimal

import pytest

from forms.federal import Form1040, Schedule1
from forms.registry import FormRegistry
from models import Adjustments, Dependent, Form1099Div, OtherIncome, SSA1099
from return_builders import make_return, make_taxpayer, make_w2


def _root(return_input, settings) -> Form1040:
    return FormRegistry(return_input, settings=settings).root


class TestWageReturn:
    """Single filer, $50,000 wages, $5,000 withheld."""

    @pytest.fixture
    def root(self, wage_return, settings):
        return _root(wage_return, settings)

    def test_income(self, root):
        assert root.l1a() == Decimal("50000")
        assert root.l9() == Decimal("50000")
        assert root.l11() == Decimal("50000")

    def test_standard_deduction(self, root):
        assert root.l12() == Decimal("15750")
        assert root.l15() == Decimal("34250")

    def test_tax(self, root):
        # 10% of 11,925 plus 12% of 22,325
        assert root.l16() == Decimal("3871.5")
        assert root.l24() == Decimal("3871.5")

    def test_refund(self, root):
        assert root.l25a() == Decimal("5000")
        assert root.l27() == Decimal("0")
        assert root.l34() == Decimal("1128.5")
        assert root.l35a() == Decimal("1128.5")
        assert root.l37() == Decimal("0")

    def test_no_attachments(self, root):
        assert root.schedule_1 is None
        assert root.schedule_8812 is None
        assert root.form_1040v is None

    def test_serialized_fields(self, root):
        values = {f.line: f.value for f in root.fields()}
        assert values["names"] == "Alex Rivera"
        assert values["ssn"] == "123456789"
        assert values["filing_status_code"] == "single"
        assert values["l16"] == 3872
        assert values["l35a"] == 1129
        assert values["spouse_ssn"] == ""


class TestFamilyReturn:
    """Married filing jointly, two children, $38,000 wages."""

    @pytest.fixture
    def registry(self, family_return, settings):
        return FormRegistry(family_return, settings=settings)

    def test_tax_before_credits(self, registry):
        root = registry.root
        assert root.l15() == Decimal("6500")
        assert root.l18() == Decimal("650")

    def test_child_tax_credit_limited_by_tax(self, registry):
        root = registry.root
        assert root.l19() == Decimal("650")
        assert root.l22() == Decimal("0")

    def test_additional_child_tax_credit(self, registry):
        assert registry.root.l28() == Decimal("3400")

    def test_earned_income_credit(self, registry):
        root = registry.root
        assert root.eic_qualifying_children() == Decimal("2")
        # 7,152 maximum less 21.06% of the income over 30,470
        assert root.l27() == Decimal("5566.182")

    def test_refund(self, registry):
        root = registry.root
        assert root.l33() == Decimal("10166.182")
        assert root.l35a() == Decimal("10166.182")

    def test_included_forms(self, registry):
        assert [entry.tag for entry in registry.included()] == ["f1040", "f1040seic", "f1040s8812"]

    def test_eic_disclaimed(self, family_return, settings):
        no_eic = family_return.model_copy(update={
            "elections": family_return.elections.model_copy(update={"claim_eic": False}),
        })
        registry = FormRegistry(no_eic, settings=settings)
        assert registry.root.l27() == Decimal("0")
        assert "f1040seic" not in [entry.tag for entry in registry.included()]


def _one_child_return(wages, unemployment):
    taxpayer = make_taxpayer(dependents=(
        Dependent(first_name="Robin", last_name="Rivera", date_of_birth=date(2018, 3, 1)),
    ))
    return make_return(
        taxpayer=taxpayer,
        w2s=(make_w2(wages),),
        other_income=OtherIncome(unemployment_compensation=unemployment),
    )


class TestEarnedIncomeCreditAgiLimit:
    """Single filer, one child: the credit is the smaller of the credit on earned income and on AGI."""

    def test_earned_income_credit_when_smaller(self, settings):
        root = _root(_one_child_return(5000.0, 25000.0), settings)
        assert root.earned_income() == Decimal("5000")
        assert root.l11() == Decimal("30000")
        # 34% of 5,000; the AGI figure would be 4,328 - 15.98% of 6,650
        assert root.l27() == Decimal("1700")

    def test_agi_credit_when_smaller(self, settings):
        root = _root(_one_child_return(20000.0, 20000.0), settings)
        assert root.l11() == Decimal("40000")
        # 4,328 maximum less 15.98% of the AGI over 23,350
        assert root.l27() == Decimal("1667.33")

    def test_agi_equal_to_earned_income(self, settings):
        root = _root(_one_child_return(30000.0, 0.0), settings)
        assert root.l27() == Decimal("3265.33")


class TestSocialSecurityBenefits:
    """Social Security Benefits Worksheet (line 6b)."""

    def test_below_base_amount(self, settings):
        root = _root(make_return(ssa_1099s=(SSA1099(net_benefits=20000.0),)), settings)
        assert root.l6a() == Decimal("20000")
        assert root.l6b() == Decimal("0")

    def test_first_tier(self, settings):
        root = _root(make_return(
            w2s=(make_w2(20000.0),),
            ssa_1099s=(SSA1099(net_benefits=20000.0),),
        ), settings)
        assert root.l6b() == Decimal("2500")

    def test_capped_at_85_percent(self, settings):
        root = _root(make_return(
            w2s=(make_w2(40000.0),),
            ssa_1099s=(SSA1099(net_benefits=20000.0),),
        ), settings)
        assert root.l6b() == Decimal("17000")

    def test_married_separate(self, settings):
        root = _root(make_return(
            "married_separate",
            ssa_1099s=(SSA1099(net_benefits=10000.0),),
        ), settings)
        assert root.l6b() == Decimal("8500")

    def test_student_loan_interest_uses_taxable_benefits(self, settings):
        """
        The student loan phase-out reads MAGI including taxable benefits,
        while the benefits worksheet reads adjustments before student loan
        interest. Both resolve in one pass.
        """
        registry = FormRegistry(make_return(
            w2s=(make_w2(40000.0),),
            ssa_1099s=(SSA1099(net_benefits=20000.0),),
            adjustments=Adjustments(student_loan_interest=2000.0),
        ), settings=settings)
        root = registry.root
        schedule_1 = root.form(Schedule1)
        assert root.l6b() == Decimal("17000")
        assert schedule_1.student_loan_magi() == Decimal("57000")
        assert schedule_1.l21() == Decimal("2000")
        assert root.l11() == Decimal("55000")

    def test_student_loan_interest_phase_out(self, settings):
        registry = FormRegistry(make_return(
            w2s=(make_w2(92500.0),),
            adjustments=Adjustments(student_loan_interest=2000.0),
        ), settings=settings)
        assert registry.root.form(Schedule1).l21() == Decimal("1000")


class TestCapitalGainWorksheet:

    def test_qualified_dividends_taxed_at_zero(self, settings):
        root = _root(make_return(
            w2s=(make_w2(60000.0),),
            dividend_1099s=(Form1099Div(payer="Fund", ordinary_dividends=4000.0, qualified_dividends=4000.0),),
        ), settings)
        assert root.uses_capital_gain_worksheet() is True
        assert root.l15() == Decimal("48250")
        assert root.l16() == Decimal("5071.5")

    def test_ordinary_rates_without_preferential_income(self, wage_return, settings):
        assert _root(wage_return, settings).uses_capital_gain_worksheet() is False


class TestKitchenSinkReturn:
    """A return touching nearly every form still resolves consistently."""

    @pytest.fixture
    def registry(self, kitchen_sink_return, settings):
        return FormRegistry(kitchen_sink_return, settings=settings)

    def test_attachments(self, registry):
        tags = [entry.tag for entry in registry.included()]
        for tag in ("f1040", "f1040s1", "f1040s1a", "f1040s2", "f1040sa", "f1040sb",
                    "f1040sc", "f1040sd", "f1040sse", "f4562", "f8829", "f8889", "f8959"):
            assert tag in tags
        assert "f8938" not in tags

    def test_totals_are_consistent(self, registry):
        root = registry.root
        assert root.l11() == max(root.l9() - root.l10(), Decimal("0"))
        assert root.l15() == max(root.l11() - root.l14(), Decimal("0"))
        assert root.l24() == root.l22() + root.l23()
        assert root.l34() - root.l37() == root.l33() - root.l24()
        assert root.l35a() + root.l36() == root.l34()

    def test_itemizes_when_forced(self, registry):
        root = registry.root
        assert root.schedule_a is not None
        assert root.l12() >= root.schedule_a.l17()
