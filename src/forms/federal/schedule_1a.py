"""
Schedule 1-A (Form 1040) - Additional Deductions.

Deductions for qualified overtime, qualified tips, car loan interest and
the enhanced senior deduction. They are taken below adjusted gross income
(Form 1040 line 12), so the phase-outs use line 11 directly.
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
from forms.lines import LineKind, line
from models.taxpayer import FilingStatus


class Schedule1A(F1040Attachment):
    tag = "f1040s1a"
    sequence_index = 1.5

    FIELDS = (
        "names", "ssn",
        "l1", "l2", "l3", "l4", "l5",
        "l6", "l7", "l8",
        "l9", "l10", "l11", "l12", "l13", "l14",
        "l15", "l16", "l17", "l18", "l19",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        if not self.config.schedule_1a_enabled:
            return False
        extra = self.return_input.additional_deductions
        return (
            extra.qualified_overtime > 0
            or extra.qualified_tips > 0
            or extra.auto_loan_interest > 0
            or self.l15() > 0
        )

    @line
    def magi(self) -> Decimal:
        return self.f1040.l11()

    @line(LineKind.RATE)
    def income_phase_out(self) -> Decimal:
        config = self.config
        return phase_out_fraction(
            self.magi(),
            config.for_status(config.income_deduction_phaseout_start, self.filing_status),
            config.for_status(config.income_deduction_phaseout_end, self.filing_status),
        )

    # Part I - No tax on overtime

    @line
    def l1(self) -> Decimal:
        """Qualified overtime compensation"""
        return to_decimal(self.return_input.additional_deductions.qualified_overtime)

    @line(LineKind.RATE)
    def l2(self) -> Decimal:
        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            return ZERO
        return self.income_phase_out()

    @line
    def l3(self) -> Decimal:
        return multiply(self.l1(), self.l2())

    @line
    def l4(self) -> Decimal:
        return to_decimal(self.config.for_status(self.config.overtime_deduction_cap, self.filing_status))

    @line
    def l5(self) -> Decimal:
        """Qualified overtime compensation deduction"""
        return min_decimal(self.l3(), self.l4())

    # Part II - No tax on tips

    @line
    def l6(self) -> Decimal:
        """Qualified tips"""
        return to_decimal(self.return_input.additional_deductions.qualified_tips)

    @line(LineKind.RATE)
    def l7(self) -> Decimal:
        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            return ZERO
        return self.income_phase_out()

    @line
    def l8(self) -> Decimal:
        """Qualified tips deduction"""
        return min_decimal(multiply(self.l6(), self.l7()), self.config.tips_deduction_cap)

    # Part III - Car loan interest

    @line(LineKind.BOOLEAN)
    def l9(self) -> bool:
        """Final assembly of the vehicle occurred in the United States"""
        return self.return_input.additional_deductions.vehicle_assembled_in_us

    @line
    def l10(self) -> Decimal:
        if not self.l9():
            return ZERO
        return to_decimal(self.return_input.additional_deductions.auto_loan_interest)

    @line(LineKind.RATE)
    def l11(self) -> Decimal:
        config = self.config
        return phase_out_fraction(
            self.magi(),
            config.for_status(config.auto_loan_phaseout_start, self.filing_status),
            config.for_status(config.auto_loan_phaseout_end, self.filing_status),
        )

    @line
    def l12(self) -> Decimal:
        return multiply(self.l10(), self.l11())

    @line
    def l13(self) -> Decimal:
        return to_decimal(self.config.for_status(self.config.auto_loan_interest_cap, self.filing_status))

    @line
    def l14(self) -> Decimal:
        """Qualified car loan interest deduction"""
        return min_decimal(self.l12(), self.l13())

    # Part IV - Enhanced deduction for seniors

    @line(LineKind.NUMBER)
    def l15(self) -> Decimal:
        """Number of spouses age 65 or older with a valid SSN"""
        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            return ZERO
        people = self.return_input.taxpayer.people()
        return Decimal(sum(1 for p in people if p.ssn and p.is_65_or_older(self.tax_year)))

    @line
    def l16(self) -> Decimal:
        return multiply(self.l15(), self.config.senior_deduction_amount)

    @line
    def l17(self) -> Decimal:
        config = self.config
        start = config.for_status(config.senior_deduction_phaseout_start, self.filing_status)
        return multiply(clamp_zero(self.magi() - to_decimal(start)), config.senior_deduction_phaseout_rate)

    @line
    def l18(self) -> Decimal:
        """Enhanced deduction for seniors"""
        return clamp_zero(self.l16() - self.l17())

    @line
    def l19(self) -> Decimal:
        """Total additional deductions, to Form 1040 line 12"""
        if not self.config.schedule_1a_enabled:
            return ZERO
        return sum_fields([self.l5(), self.l8(), self.l14(), self.l18()])
