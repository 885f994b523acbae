"""
Form 8995 - Qualified Business Income Deduction Simplified Computation.

Used when taxable income before the QBI deduction is at or below the
threshold. The income limitation reads Form 1040's restricted
`taxable_income_before_qbi` line, since line 15 of Form 1040 already
includes this form's result.
"""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import ZERO, clamp_zero, min_decimal, multiply, to_decimal
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Form8995(F1040Attachment):
    tag = "f8995"
    sequence_index = 55

    FIELDS = (
        "names", "ssn", "business_name",
        "l1", "l2", "l4", "l5",
        "l11", "l12", "l13", "l14", "l15",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.l2() > 0 and self.within_threshold()

    @line(LineKind.BOOLEAN)
    def within_threshold(self) -> bool:
        config = self.config
        threshold = to_decimal(config.for_status(config.qbi_threshold_start, self.filing_status))
        return self.l11() <= threshold

    @line(LineKind.TEXT)
    def business_name(self) -> str:
        business = self.return_input.primary_business
        return business.name if business is not None else ""

    @line
    def l1(self) -> Decimal:
        """Qualified business income: Schedule C profit less the deductible part of SE tax"""
        data = self.f1040.data
        return data.schedule_c.l31() - data.schedule_se.l13()

    @line
    def l2(self) -> Decimal:
        """Total qualified business income"""
        return self.l1()

    @line
    def l4(self) -> Decimal:
        return clamp_zero(self.l2())

    @line
    def l5(self) -> Decimal:
        """Qualified business income component"""
        return multiply(self.l4(), self.config.qbi_deduction_rate)

    @line
    def l11(self) -> Decimal:
        """Taxable income before qualified business income deduction"""
        return self.f1040.taxable_income_before_qbi()

    @line
    def l12(self) -> Decimal:
        """Net capital gain including qualified dividends"""
        return self.f1040.l3a() + self.f1040.net_capital_gain()

    @line
    def l13(self) -> Decimal:
        return clamp_zero(self.l11() - self.l12())

    @line
    def l14(self) -> Decimal:
        """Income limitation"""
        return multiply(self.l13(), self.config.qbi_deduction_rate)

    @line
    def l15(self) -> Decimal:
        """Qualified business income deduction, to Form 1040 line 13"""
        if not self.within_threshold():
            return ZERO
        return min_decimal(self.l5(), self.l14())
