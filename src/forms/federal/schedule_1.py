"""
Schedule 1 (Form 1040) - Additional Income and Adjustments to Income.

Part I feeds Form 1040 line 8 and Part II feeds line 10. The student loan
interest deduction phases out on a MAGI that itself includes taxable social
security benefits, which in turn subtract Schedule 1 adjustments. The
`adjustments_before_student_loan_interest` line breaks that loop: the
benefits worksheet reads it instead of line 26.
"""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import (
    ZERO,
    clamp_zero,
    min_decimal,
    multiply,
    phase_out_fraction,
    sum_fields,
    to_decimal,
)
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line, restricted_line
from models.taxpayer import FilingStatus


class Schedule1(F1040Attachment):
    tag = "f1040s1"
    sequence_index = 1

    FIELDS = (
        "names", "ssn",
        "l1", "l2a", "l3", "l7", "l8z", "l9", "l10",
        "l11", "l13", "l15", "l19a", "l20", "l21", "l26",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return (
            self.l10() != 0
            or self.adjustments_before_student_loan_interest() != 0
            or self.return_input.adjustments.student_loan_interest > 0
        )

    # Part I - Additional Income

    @line
    def l1(self) -> Decimal:
        """Taxable refunds of state and local income taxes"""
        return to_decimal(self.return_input.other_income.taxable_refunds)

    @line
    def l2a(self) -> Decimal:
        """Alimony received"""
        return to_decimal(self.return_input.other_income.alimony_received)

    @line
    def l3(self) -> Decimal:
        """Business income or (loss) from Schedule C"""
        return self.f1040.data.schedule_c.l31()

    @line
    def l7(self) -> Decimal:
        """Unemployment compensation"""
        return to_decimal(self.return_input.other_income.unemployment_compensation)

    @line
    def l8z(self) -> Decimal:
        return to_decimal(self.return_input.other_income.other_income)

    @line
    def l9(self) -> Decimal:
        return self.l8z()

    @line
    def l10(self) -> Decimal:
        """Combine lines 1 through 7 and 9"""
        return sum_fields([self.l1(), self.l2a(), self.l3(), self.l7(), self.l9()])

    # Part II - Adjustments to Income

    @line
    def l11(self) -> Decimal:
        """Educator expenses"""
        limit = to_decimal(self.config.educator_expense_limit)
        if self.filing_status == FilingStatus.MARRIED_JOINT:
            limit *= 2
        return min_decimal(self.return_input.adjustments.educator_expenses, limit)

    @line
    def l13(self) -> Decimal:
        """Health savings account deduction from Form 8889"""
        return self.f1040.data.form_8889.l13()

    @line
    def l15(self) -> Decimal:
        """Deductible part of self-employment tax from Schedule SE"""
        return self.f1040.data.schedule_se.l13()

    @line
    def l19a(self) -> Decimal:
        """Alimony paid"""
        return to_decimal(self.return_input.adjustments.alimony_paid)

    @line
    def l20(self) -> Decimal:
        """IRA deduction"""
        return to_decimal(self.return_input.adjustments.ira_deduction)

    @restricted_line(excluding=("l21", "l26"), consumers=("f1040", "f1040s1"))
    def adjustments_before_student_loan_interest(self) -> Decimal:
        return sum_fields([self.l11(), self.l13(), self.l15(), self.l19a(), self.l20()])

    @line
    def student_loan_magi(self) -> Decimal:
        return clamp_zero(self.f1040.l9() - self.adjustments_before_student_loan_interest())

    @line
    def l21(self) -> Decimal:
        """Student loan interest deduction"""
        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            return ZERO
        config = self.config
        interest = min_decimal(
            self.return_input.adjustments.student_loan_interest,
            config.student_loan_interest_max,
        )
        if interest <= 0:
            return ZERO
        fraction = phase_out_fraction(
            self.student_loan_magi(),
            config.for_status(config.student_loan_phaseout_start, self.filing_status),
            config.for_status(config.student_loan_phaseout_end, self.filing_status),
        )
        return multiply(interest, fraction)

    @line
    def l26(self) -> Decimal:
        """Total adjustments to income"""
        return self.adjustments_before_student_loan_interest() + self.l21()
