"""Form 8960 - Net Investment Income Tax (individuals)."""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import ZERO, clamp_zero, min_decimal, multiply, sum_fields, to_decimal
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Form8960(F1040Attachment):
    tag = "f8960"
    sequence_index = 72

    FIELDS = (
        "names", "ssn",
        "l1", "l2", "l5a", "l8", "l11", "l12",
        "l13", "l14", "l15", "l16", "l17",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.l17() > 0

    # Part I - Investment Income

    @line
    def l1(self) -> Decimal:
        """Taxable interest from Form 1040 line 2b"""
        return self.f1040.l2b()

    @line
    def l2(self) -> Decimal:
        """Ordinary dividends from Form 1040 line 3b"""
        return self.f1040.l3b()

    @line
    def l5a(self) -> Decimal:
        """Net gain or loss from Form 1040 line 7"""
        return self.f1040.l7()

    @line
    def l8(self) -> Decimal:
        return sum_fields([self.l1(), self.l2(), self.l5a()])

    # Part II - Investment Expenses

    @line
    def l11(self) -> Decimal:
        return ZERO

    # Part III - Tax Computation

    @line
    def l12(self) -> Decimal:
        """Net investment income"""
        return clamp_zero(self.l8() - self.l11())

    @line
    def l13(self) -> Decimal:
        """Modified adjusted gross income"""
        return self.f1040.l11()

    @line
    def l14(self) -> Decimal:
        config = self.config
        return to_decimal(config.for_status(config.niit_threshold, self.filing_status))

    @line
    def l15(self) -> Decimal:
        return clamp_zero(self.l13() - self.l14())

    @line
    def l16(self) -> Decimal:
        return min_decimal(self.l12(), self.l15())

    @line
    def l17(self) -> Decimal:
        """Net investment income tax, to Schedule 2 line 12"""
        return multiply(self.l16(), self.config.niit_rate)
