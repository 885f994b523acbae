"""
Form 8959 - Additional Medicare Tax.

The threshold is shared between wages (Part I) and self-employment income
(Part II): wages use it first, and only the unused part shelters net
earnings from self-employment. Part V reconciles withholding.
"""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import clamp_zero, multiply, sum_fields, to_decimal
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Form8959(F1040Attachment):
    tag = "f8959"
    sequence_index = 71

    FIELDS = (
        "names", "ssn",
        "l1", "l4", "l5", "l6", "l7",
        "l8", "l9", "l10", "l11", "l12", "l13",
        "l18",
        "l19", "l20", "l21", "l22", "l24",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.l18() > 0 or self.l22() > 0

    @line
    def threshold(self) -> Decimal:
        config = self.config
        return to_decimal(config.for_status(config.additional_medicare_threshold, self.filing_status))

    # Part I - Additional Medicare Tax on Medicare Wages

    @line
    def l1(self) -> Decimal:
        """Medicare wages and tips from Form W-2 box 5"""
        return sum_fields(w2.box5 for w2 in self.return_input.w2s)

    @line
    def l4(self) -> Decimal:
        return self.l1()

    @line
    def l5(self) -> Decimal:
        return self.threshold()

    @line
    def l6(self) -> Decimal:
        return clamp_zero(self.l4() - self.l5())

    @line
    def l7(self) -> Decimal:
        return multiply(self.l6(), self.config.additional_medicare_tax_rate)

    # Part II - Additional Medicare Tax on Self-Employment Income

    @line
    def l8(self) -> Decimal:
        """Self-employment income from Schedule SE line 6"""
        return clamp_zero(self.f1040.data.schedule_se.l6())

    @line
    def l9(self) -> Decimal:
        return self.threshold()

    @line
    def l10(self) -> Decimal:
        return self.l4()

    @line
    def l11(self) -> Decimal:
        return clamp_zero(self.l9() - self.l10())

    @line
    def l12(self) -> Decimal:
        return clamp_zero(self.l8() - self.l11())

    @line
    def l13(self) -> Decimal:
        return multiply(self.l12(), self.config.additional_medicare_tax_rate)

    @line
    def l18(self) -> Decimal:
        """Total Additional Medicare Tax, to Schedule 2 line 11"""
        return self.l7() + self.l13()

    # Part V - Withholding Reconciliation

    @line
    def l19(self) -> Decimal:
        """Medicare tax withheld from Form W-2 box 6"""
        return sum_fields(w2.medicare_tax_withheld for w2 in self.return_input.w2s)

    @line
    def l20(self) -> Decimal:
        return self.l1()

    @line
    def l21(self) -> Decimal:
        """Regular Medicare tax withholding on Medicare wages"""
        return multiply(self.l20(), self.config.employee_medicare_rate)

    @line
    def l22(self) -> Decimal:
        return clamp_zero(self.l19() - self.l21())

    @line
    def l24(self) -> Decimal:
        """Total Additional Medicare Tax withholding, to Form 1040 line 25c"""
        return self.l22()
