"""
Schedule 8812 (Form 1040) - Credits for Qualifying Children and Other Dependents.

Part I computes the nonrefundable child tax credit and credit for other
dependents (Form 1040 line 19). Part II-A computes the additional child
tax credit (Form 1040 line 28) from the unused portion.
"""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import (
    ZERO,
    clamp_zero,
    min_decimal,
    multiply,
    round_up_to_multiple,
    to_decimal,
)
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Schedule8812(F1040Attachment):
    tag = "f1040s8812"
    sequence_index = 47

    FIELDS = (
        "names", "ssn",
        "l4", "l5", "l6", "l7", "l8",
        "l9", "l10", "l11", "l12", "l13", "l14",
        "l16a", "l16b", "l17", "l18a", "l19", "l20", "l27",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.l4() > 0 or self.l6() > 0

    # Part I - Child Tax Credit and Credit for Other Dependents

    @line(LineKind.NUMBER)
    def l4(self) -> Decimal:
        """Number of qualifying children under age 17"""
        dependents = self.return_input.taxpayer.dependents
        return Decimal(sum(1 for d in dependents if d.qualifies_for_child_tax_credit(self.tax_year)))

    @line
    def l5(self) -> Decimal:
        return multiply(self.l4(), self.config.child_tax_credit_amount)

    @line(LineKind.NUMBER)
    def l6(self) -> Decimal:
        """Number of other dependents"""
        return Decimal(len(self.return_input.taxpayer.dependents)) - self.l4()

    @line
    def l7(self) -> Decimal:
        return multiply(self.l6(), self.config.other_dependent_credit_amount)

    @line
    def l8(self) -> Decimal:
        return self.l5() + self.l7()

    @line
    def l9(self) -> Decimal:
        """Phase-out threshold for the filing status"""
        config = self.config
        return to_decimal(config.for_status(config.child_tax_credit_phaseout_start, self.filing_status))

    @line
    def l10(self) -> Decimal:
        """Excess over the threshold, rounded up to the next multiple of $1,000"""
        excess = clamp_zero(self.f1040.l11() - self.l9())
        return round_up_to_multiple(excess, self.config.child_tax_credit_phaseout_step)

    @line
    def l11(self) -> Decimal:
        return multiply(self.l10(), self.config.child_tax_credit_phaseout_rate)

    @line
    def l12(self) -> Decimal:
        return clamp_zero(self.l8() - self.l11())

    @line
    def l13(self) -> Decimal:
        """Credit limit worksheet A: tax less Schedule 3 nonrefundable credits"""
        f1040 = self.f1040
        return clamp_zero(f1040.l18() - f1040.data.schedule_3.l8())

    @line
    def l14(self) -> Decimal:
        """Child tax credit and credit for other dependents, to Form 1040 line 19"""
        return min_decimal(self.l12(), self.l13())

    # Part II-A - Additional Child Tax Credit

    @line
    def l16a(self) -> Decimal:
        """Credit not allowed because of the tax liability limit"""
        return clamp_zero(self.l12() - self.l14())

    @line
    def l16b(self) -> Decimal:
        return multiply(self.l4(), self.config.child_tax_credit_refundable)

    @line
    def l17(self) -> Decimal:
        return min_decimal(self.l16a(), self.l16b())

    @line
    def l18a(self) -> Decimal:
        """Earned income"""
        return self.f1040.earned_income()

    @line
    def l19(self) -> Decimal:
        return clamp_zero(self.l18a() - to_decimal(self.config.actc_earned_income_threshold))

    @line
    def l20(self) -> Decimal:
        return multiply(self.l19(), self.config.actc_earned_income_rate)

    @line
    def l27(self) -> Decimal:
        """Additional child tax credit, to Form 1040 line 28"""
        if self.l4() <= 0:
            return ZERO
        return min_decimal(self.l17(), self.l20())
