"""
Form 1040 - U.S. Individual Income Tax Return (root of the form graph).

Other federal forms are reached two ways:

- `form_1040.schedule_c` and friends return the shared instance when that
  form is attached to the return and None otherwise. They ask the form's
  is_needed predicate, so they are for callers outside line evaluation.
- `form_1040.data.schedule_c` returns the shared instance unconditionally.
  Line bodies read sibling values through it; a sibling that would not be
  attached yields zero on the lines other forms carry over.

Because no line body asks whether a sibling is attached, an is_needed
predicate can read any data line without depending on another form's
inclusion.

Worksheets that have no form of their own live here as lines:
- Social Security Benefits Worksheet (line 6b)
- Standard deduction (line 12)
- Qualified Dividends and Capital Gain Tax Worksheet (line 16)
- Earned Income Credit worksheet (line 27)
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from calculator.decimal_math import (
    ZERO,
    clamp_zero,
    max_decimal,
    min_decimal,
    multiply,
    sum_fields,
    to_decimal,
)
from calculator.tax_table import ordinary_income_tax, qualified_dividends_capital_gain_tax
from forms.form_node import RootForm, TaxpayerHeader
from forms.lines import LineKind, line, restricted_line
from forms.federal.form_1040v import Form1040V
from forms.federal.form_4562 import Form4562
from forms.federal.form_6251 import Form6251
from forms.federal.form_8829 import Form8829
from forms.federal.form_8889 import Form8889
from forms.federal.form_8938 import Form8938
from forms.federal.form_8959 import Form8959
from forms.federal.form_8960 import Form8960
from forms.federal.form_8995 import Form8995
from forms.federal.form_8995a import Form8995A
from forms.federal.schedule_1 import Schedule1
from forms.federal.schedule_1a import Schedule1A
from forms.federal.schedule_2 import Schedule2
from forms.federal.schedule_3 import Schedule3
from forms.federal.schedule_8812 import Schedule8812
from forms.federal.schedule_a import ScheduleA
from forms.federal.schedule_b import ScheduleB
from forms.federal.schedule_c import ScheduleC
from forms.federal.schedule_d import ScheduleD
from forms.federal.schedule_eic import ScheduleEIC
from forms.federal.schedule_se import ScheduleSE
from models.taxpayer import FilingStatus


class F1040Siblings:
    """Typed, unconditional access to the shared instance of every sibling form."""

    def __init__(self, root: RootForm):
        self._root = root

    @property
    def schedule_1(self) -> Schedule1:
        return self._root.form(Schedule1)

    @property
    def schedule_1a(self) -> Schedule1A:
        return self._root.form(Schedule1A)

    @property
    def schedule_2(self) -> Schedule2:
        return self._root.form(Schedule2)

    @property
    def schedule_3(self) -> Schedule3:
        return self._root.form(Schedule3)

    @property
    def schedule_a(self) -> ScheduleA:
        return self._root.form(ScheduleA)

    @property
    def schedule_b(self) -> ScheduleB:
        return self._root.form(ScheduleB)

    @property
    def schedule_c(self) -> ScheduleC:
        return self._root.form(ScheduleC)

    @property
    def schedule_d(self) -> ScheduleD:
        return self._root.form(ScheduleD)

    @property
    def schedule_se(self) -> ScheduleSE:
        return self._root.form(ScheduleSE)

    @property
    def schedule_8812(self) -> Schedule8812:
        return self._root.form(Schedule8812)

    @property
    def form_4562(self) -> Form4562:
        return self._root.form(Form4562)

    @property
    def form_6251(self) -> Form6251:
        return self._root.form(Form6251)

    @property
    def form_8829(self) -> Form8829:
        return self._root.form(Form8829)

    @property
    def form_8889(self) -> Form8889:
        return self._root.form(Form8889)

    @property
    def form_8959(self) -> Form8959:
        return self._root.form(Form8959)

    @property
    def form_8960(self) -> Form8960:
        return self._root.form(Form8960)

    @property
    def form_8995(self) -> Form8995:
        return self._root.form(Form8995)

    @property
    def form_8995a(self) -> Form8995A:
        return self._root.form(Form8995A)


class Form1040(TaxpayerHeader, RootForm):
    tag = "f1040"
    sequence_index = 0

    FIELDS = (
        "names", "ssn", "spouse_ssn", "filing_status_code",
        "l1a", "l1z", "l2a", "l2b", "l3a", "l3b", "l4a", "l4b",
        "l5a", "l5b", "l6a", "l6b", "l7", "l8", "l9", "l10", "l11",
        "l12", "l13", "l14", "l15", "l16", "l17", "l18", "l19", "l20",
        "l21", "l22", "l23", "l24", "l25a", "l25b", "l25c", "l25d",
        "l26", "l27", "l28", "l29", "l31", "l32", "l33", "l34",
        "l35a", "routing_number", "account_number", "l36", "l37",
    )

    @property
    def data(self) -> F1040Siblings:
        return F1040Siblings(self)

    # ------------------------------------------------------------------
    # Attached forms
    # ------------------------------------------------------------------

    @property
    def schedule_1(self) -> Optional[Schedule1]:
        return self.optional_form(Schedule1)

    @property
    def schedule_1a(self) -> Optional[Schedule1A]:
        return self.optional_form(Schedule1A)

    @property
    def schedule_2(self) -> Optional[Schedule2]:
        return self.optional_form(Schedule2)

    @property
    def schedule_3(self) -> Optional[Schedule3]:
        return self.optional_form(Schedule3)

    @property
    def schedule_a(self) -> Optional[ScheduleA]:
        return self.optional_form(ScheduleA)

    @property
    def schedule_b(self) -> Optional[ScheduleB]:
        return self.optional_form(ScheduleB)

    @property
    def schedule_c(self) -> Optional[ScheduleC]:
        return self.optional_form(ScheduleC)

    @property
    def schedule_d(self) -> Optional[ScheduleD]:
        return self.optional_form(ScheduleD)

    @property
    def schedule_se(self) -> Optional[ScheduleSE]:
        return self.optional_form(ScheduleSE)

    @property
    def schedule_8812(self) -> Optional[Schedule8812]:
        return self.optional_form(Schedule8812)

    @property
    def schedule_eic(self) -> Optional[ScheduleEIC]:
        return self.optional_form(ScheduleEIC)

    @property
    def form_1040v(self) -> Optional[Form1040V]:
        return self.optional_form(Form1040V)

    @property
    def form_4562(self) -> Optional[Form4562]:
        return self.optional_form(Form4562)

    @property
    def form_6251(self) -> Optional[Form6251]:
        return self.optional_form(Form6251)

    @property
    def form_8829(self) -> Optional[Form8829]:
        return self.optional_form(Form8829)

    @property
    def form_8889(self) -> Optional[Form8889]:
        return self.optional_form(Form8889)

    @property
    def form_8938(self) -> Optional[Form8938]:
        return self.optional_form(Form8938)

    @property
    def form_8959(self) -> Optional[Form8959]:
        return self.optional_form(Form8959)

    @property
    def form_8960(self) -> Optional[Form8960]:
        return self.optional_form(Form8960)

    @property
    def form_8995(self) -> Optional[Form8995]:
        return self.optional_form(Form8995)

    @property
    def form_8995a(self) -> Optional[Form8995A]:
        return self.optional_form(Form8995A)

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    @line(LineKind.TEXT)
    def spouse_ssn(self) -> str:
        spouse = self.return_input.taxpayer.spouse
        return spouse.ssn if spouse else ""

    @line(LineKind.TEXT)
    def filing_status_code(self) -> str:
        return self.filing_status.value

    # ------------------------------------------------------------------
    # Income
    # ------------------------------------------------------------------

    @line
    def l1a(self) -> Decimal:
        """Total amount from Form(s) W-2, box 1"""
        return sum_fields(w2.wages for w2 in self.return_input.w2s)

    @line
    def l1z(self) -> Decimal:
        """Add lines 1a through 1h"""
        return self.l1a()

    @line
    def l2a(self) -> Decimal:
        """Tax-exempt interest"""
        return sum_fields(f.tax_exempt_interest for f in self.return_input.interest_1099s)

    @line
    def l2b(self) -> Decimal:
        """Taxable interest"""
        return self.data.schedule_b.l4()

    @line
    def l3a(self) -> Decimal:
        """Qualified dividends"""
        return sum_fields(f.qualified_dividends for f in self.return_input.dividend_1099s)

    @line
    def l3b(self) -> Decimal:
        """Ordinary dividends"""
        return self.data.schedule_b.l6()

    @line
    def l4a(self) -> Decimal:
        """IRA distributions"""
        return sum_fields(f.gross_distribution for f in self.return_input.retirement_1099s if f.is_ira)

    @line
    def l4b(self) -> Decimal:
        return sum_fields(f.taxable_amount for f in self.return_input.retirement_1099s if f.is_ira)

    @line
    def l5a(self) -> Decimal:
        """Pensions and annuities"""
        return sum_fields(f.gross_distribution for f in self.return_input.retirement_1099s if not f.is_ira)

    @line
    def l5b(self) -> Decimal:
        return sum_fields(f.taxable_amount for f in self.return_input.retirement_1099s if not f.is_ira)

    @line
    def l6a(self) -> Decimal:
        """Social security benefits"""
        return clamp_zero(sum_fields(f.net_benefits for f in self.return_input.ssa_1099s))

    # Social Security Benefits Worksheet. Line 6 of the worksheet uses
    # Schedule 1 adjustments *before* student loan interest, because the
    # student loan interest phase-out itself depends on line 6b.

    @line
    def ss_worksheet_l3(self) -> Decimal:
        """Other income: lines 1z, 2b, 3b, 4b, 5b, 7 and 8"""
        return sum_fields([
            self.l1z(), self.l2b(), self.l3b(), self.l4b(),
            self.l5b(), self.l7(), self.l8(),
        ])

    @line
    def ss_worksheet_l6(self) -> Decimal:
        return self.data.schedule_1.adjustments_before_student_loan_interest()

    @line
    def l6b(self) -> Decimal:
        """Taxable amount of social security benefits"""
        benefits = self.l6a()
        if benefits <= 0:
            return ZERO

        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            # Assumes the spouses lived together during the year
            return multiply(benefits, "0.85")

        config = self.config
        half_benefits = multiply(benefits, "0.5")
        combined = half_benefits + self.ss_worksheet_l3() + self.l2a()
        provisional = clamp_zero(combined - self.ss_worksheet_l6())

        if self.filing_status == FilingStatus.MARRIED_JOINT:
            base1, base2 = to_decimal(config.ss_base1_mfj), to_decimal(config.ss_base2_mfj)
        else:
            base1, base2 = to_decimal(config.ss_base1_single), to_decimal(config.ss_base2_single)

        if provisional <= base1:
            return ZERO
        over_base1 = provisional - base1
        tier_gap = base2 - base1
        over_base2 = clamp_zero(over_base1 - tier_gap)
        tier1 = multiply(min_decimal(over_base1, tier_gap), "0.5")
        tier1 = min_decimal(tier1, half_benefits)
        taxable = multiply(over_base2, "0.85") + tier1
        return min_decimal(taxable, multiply(benefits, "0.85"))

    @line
    def net_capital_gain(self) -> Decimal:
        """Capital gain eligible for preferential rates, excluding qualified dividends"""
        return self.data.schedule_d.net_capital_gain()

    @line
    def l7(self) -> Decimal:
        """Capital gain or (loss)"""
        return self.data.schedule_d.to_1040_l7()

    @line
    def l8(self) -> Decimal:
        """Additional income from Schedule 1, line 10"""
        return self.data.schedule_1.l10()

    @line
    def l9(self) -> Decimal:
        """Total income"""
        return sum_fields([
            self.l1z(), self.l2b(), self.l3b(), self.l4b(),
            self.l5b(), self.l6b(), self.l7(), self.l8(),
        ])

    @line
    def l10(self) -> Decimal:
        """Adjustments to income from Schedule 1, line 26"""
        return self.data.schedule_1.l26()

    @line
    def l11(self) -> Decimal:
        """Adjusted gross income"""
        return clamp_zero(self.l9() - self.l10())

    # ------------------------------------------------------------------
    # Deductions
    # ------------------------------------------------------------------

    @line
    def earned_income(self) -> Decimal:
        """Wages plus net earnings from self-employment less the deductible part of SE tax"""
        schedule_se = self.data.schedule_se
        return clamp_zero(self.l1z() + schedule_se.l3() - schedule_se.l13())

    @line
    def standard_deduction(self) -> Decimal:
        config = self.config
        taxpayer = self.return_input.taxpayer
        base = to_decimal(config.for_status(config.standard_deduction, self.filing_status))

        if taxpayer.can_be_claimed_as_dependent:
            limited = max_decimal(
                config.dependent_standard_deduction_min,
                self.earned_income() + to_decimal(config.dependent_standard_deduction_earned_addon),
            )
            base = min_decimal(base, limited)

        boxes = 0
        for person in taxpayer.people():
            if person.is_65_or_older(self.tax_year):
                boxes += 1
            if person.is_blind:
                boxes += 1
        additional = config.for_status(config.additional_standard_deduction_over_65_or_blind, self.filing_status)
        return base + multiply(boxes, additional)

    @line(LineKind.BOOLEAN)
    def itemizes(self) -> bool:
        """Itemized deductions exceed the standard deduction, or itemizing was elected"""
        if self.return_input.elections.force_itemize:
            return True
        return self.data.schedule_a.l17() > self.standard_deduction()

    @line
    def l12(self) -> Decimal:
        """Standard deduction or itemized deductions, plus Schedule 1-A deductions"""
        if self.itemizes():
            deduction = self.data.schedule_a.l17()
        else:
            deduction = self.standard_deduction()
        return deduction + self.data.schedule_1a.l19()

    @restricted_line(excluding=("l13", "l14", "l15"), consumers=("f8995", "f8995a"))
    def taxable_income_before_qbi(self) -> Decimal:
        """Taxable income before the qualified business income deduction"""
        return clamp_zero(self.l11() - self.l12())

    @line
    def l13(self) -> Decimal:
        """Qualified business income deduction from Form 8995 or Form 8995-A"""
        data = self.data
        return data.form_8995.l15() + data.form_8995a.l39()

    @line
    def l14(self) -> Decimal:
        return self.l12() + self.l13()

    @line
    def l15(self) -> Decimal:
        """Taxable income"""
        return clamp_zero(self.l11() - self.l14())

    # ------------------------------------------------------------------
    # Tax and credits
    # ------------------------------------------------------------------

    @line(LineKind.BOOLEAN)
    def uses_capital_gain_worksheet(self) -> bool:
        return self.l3a() > 0 or self.net_capital_gain() > 0

    @line
    def l16(self) -> Decimal:
        """Tax"""
        if self.uses_capital_gain_worksheet():
            return qualified_dividends_capital_gain_tax(
                self.l15(),
                self.l3a(),
                self.net_capital_gain(),
                self.filing_status,
                self.config,
            )
        return ordinary_income_tax(self.l15(), self.filing_status, self.config)

    @line
    def l17(self) -> Decimal:
        """Amount from Schedule 2, line 3"""
        return self.data.schedule_2.l3()

    @line
    def l18(self) -> Decimal:
        return self.l16() + self.l17()

    @line
    def l19(self) -> Decimal:
        """Child tax credit or credit for other dependents from Schedule 8812"""
        return self.data.schedule_8812.l14()

    @line
    def l20(self) -> Decimal:
        """Amount from Schedule 3, line 8"""
        return self.data.schedule_3.l8()

    @line
    def l21(self) -> Decimal:
        return self.l19() + self.l20()

    @line
    def l22(self) -> Decimal:
        return clamp_zero(self.l18() - self.l21())

    @line
    def l23(self) -> Decimal:
        """Other taxes, including self-employment tax, from Schedule 2, line 21"""
        return self.data.schedule_2.l21()

    @line
    def l24(self) -> Decimal:
        """Total tax"""
        return self.l22() + self.l23()

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    @line
    def l25a(self) -> Decimal:
        """Federal income tax withheld from Form(s) W-2"""
        return sum_fields(w2.federal_withholding for w2 in self.return_input.w2s)

    @line
    def l25b(self) -> Decimal:
        """Federal income tax withheld from Form(s) 1099"""
        ri = self.return_input
        return sum_fields(
            [f.federal_withholding for f in ri.interest_1099s]
            + [f.federal_withholding for f in ri.dividend_1099s]
            + [f.federal_withholding for f in ri.retirement_1099s]
            + [f.federal_withholding for f in ri.ssa_1099s]
        )

    @line
    def l25c(self) -> Decimal:
        """Additional Medicare Tax withholding from Form 8959, line 24"""
        return self.data.form_8959.l24()

    @line
    def l25d(self) -> Decimal:
        return sum_fields([self.l25a(), self.l25b(), self.l25c()])

    @line
    def l26(self) -> Decimal:
        """Estimated tax payments and amount applied from prior year return"""
        payments = self.return_input.payments
        return sum_fields(p.amount for p in payments.estimated_payments) + to_decimal(
            payments.prior_year_overpayment_applied
        )

    @line(LineKind.NUMBER)
    def eic_qualifying_children(self) -> Decimal:
        children = [
            d for d in self.return_input.taxpayer.dependents
            if d.qualifies_for_eic(self.tax_year)
        ]
        return Decimal(min(len(children), 3))

    @line
    def eic_investment_income(self) -> Decimal:
        return sum_fields([self.l2a(), self.l2b(), self.l3b(), clamp_zero(self.l7())])

    @line
    def l27(self) -> Decimal:
        """Earned income credit"""
        ri = self.return_input
        config = self.config
        if not ri.elections.claim_eic or ri.taxpayer.can_be_claimed_as_dependent:
            return ZERO
        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            return ZERO
        if config.eitc_max_credit is None or config.eitc_phaseout_start is None:
            return ZERO
        if self.eic_investment_income() > to_decimal(config.eitc_investment_income_limit):
            return ZERO

        children = int(self.eic_qualifying_children())
        if children == 0:
            age = ri.taxpayer.primary.age_at_end_of_year(self.tax_year)
            if age is not None and not 25 <= age <= 64:
                return ZERO

        earned = self.earned_income()
        if earned <= 0:
            return ZERO

        max_credit = to_decimal(config.eitc_max_credit[children])
        phase_in_rate = (config.eitc_phase_in_rate or {}).get(children, 0)
        phaseout_rate = (config.eitc_phaseout_rate or {}).get(children, 0)
        start_table = config.eitc_phaseout_start.get(self.filing_status.value) or config.eitc_phaseout_start["single"]
        start = to_decimal(start_table[children])

        def credit_for(income: Decimal) -> Decimal:
            phase_in = min_decimal(multiply(income, phase_in_rate), max_credit)
            return clamp_zero(phase_in - multiply(clamp_zero(income - start), phaseout_rate))

        # Worksheet A: the smaller of the credit on earned income and the
        # credit on AGI, when AGI differs and is at or above the phase-out start
        credit = credit_for(earned)
        agi = self.l11()
        if agi >= start and agi != earned:
            credit = min_decimal(credit, credit_for(agi))
        return credit

    @line
    def l28(self) -> Decimal:
        """Additional child tax credit from Schedule 8812"""
        return self.data.schedule_8812.l27()

    @line
    def l29(self) -> Decimal:
        """American opportunity credit (refundable part)"""
        return to_decimal(self.return_input.credits.refundable_education_credit)

    @line
    def l31(self) -> Decimal:
        """Amount from Schedule 3, line 15"""
        return self.data.schedule_3.l15()

    @line
    def l32(self) -> Decimal:
        """Total other payments and refundable credits"""
        return sum_fields([self.l27(), self.l28(), self.l29(), self.l31()])

    @line
    def l33(self) -> Decimal:
        """Total payments"""
        return sum_fields([self.l25d(), self.l26(), self.l32()])

    # ------------------------------------------------------------------
    # Refund / amount you owe
    # ------------------------------------------------------------------

    @line
    def l34(self) -> Decimal:
        """Amount overpaid"""
        return clamp_zero(self.l33() - self.l24())

    @line
    def l36(self) -> Decimal:
        """Amount of line 34 applied to next year's estimated tax"""
        return min_decimal(self.l34(), self.return_input.refund.applied_to_next_year)

    @line
    def l35a(self) -> Decimal:
        """Refund"""
        return self.l34() - self.l36()

    @line(LineKind.TEXT)
    def routing_number(self) -> str:
        return self.return_input.refund.routing_number if self.l35a() > 0 else ""

    @line(LineKind.TEXT)
    def account_number(self) -> str:
        return self.return_input.refund.account_number if self.l35a() > 0 else ""

    @line
    def l37(self) -> Decimal:
        """Amount you owe"""
        return clamp_zero(self.l24() - self.l33())
