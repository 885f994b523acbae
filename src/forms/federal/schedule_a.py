"""
Schedule A (Form 1040) - Itemized Deductions.

Attached when the taxpayer elects to itemize or when itemized deductions
exceed the standard deduction. The state and local tax cap phases down by
30% of MAGI above the threshold, but never below the floor.
"""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import (
    clamp_zero,
    max_decimal,
    min_decimal,
    multiply,
    sum_fields,
    to_decimal,
)
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line
from models.taxpayer import FilingStatus


class ScheduleA(F1040Attachment):
    tag = "f1040sa"
    sequence_index = 7

    FIELDS = (
        "names", "ssn",
        "l1", "l2", "l3", "l4",
        "l5a", "l5b", "l5c", "l5d", "l5e",
        "l7", "l8a", "l10", "l11", "l12", "l14", "l15", "l16", "l17",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.f1040.itemizes()

    # Medical and Dental Expenses

    @line
    def l1(self) -> Decimal:
        return to_decimal(self.return_input.itemized.medical_and_dental)

    @line
    def l2(self) -> Decimal:
        """Adjusted gross income from Form 1040 line 11"""
        return self.f1040.l11()

    @line
    def l3(self) -> Decimal:
        return multiply(self.l2(), self.config.medical_expense_floor_pct)

    @line
    def l4(self) -> Decimal:
        return clamp_zero(self.l1() - self.l3())

    # Taxes You Paid

    @line
    def l5a(self) -> Decimal:
        """State and local income taxes"""
        return to_decimal(self.return_input.itemized.state_local_income_tax)

    @line
    def l5b(self) -> Decimal:
        """State and local real estate taxes"""
        return to_decimal(self.return_input.itemized.real_estate_taxes)

    @line
    def l5c(self) -> Decimal:
        """State and local personal property taxes"""
        return to_decimal(self.return_input.itemized.personal_property_taxes)

    @line
    def l5d(self) -> Decimal:
        return sum_fields([self.l5a(), self.l5b(), self.l5c()])

    @line
    def salt_limit(self) -> Decimal:
        config = self.config
        cap = to_decimal(config.salt_cap)
        floor = to_decimal(config.salt_cap_floor)
        start = config.for_status(config.salt_cap_phaseout_start, self.filing_status, default=0.0)
        if start:
            reduction = multiply(clamp_zero(self.l2() - to_decimal(start)), config.salt_cap_phaseout_rate)
            cap = max_decimal(cap - reduction, floor)
        if self.filing_status == FilingStatus.MARRIED_SEPARATE:
            cap = cap / 2
        return cap

    @line
    def l5e(self) -> Decimal:
        return min_decimal(self.l5d(), self.salt_limit())

    @line
    def l7(self) -> Decimal:
        return self.l5e()

    # Interest You Paid

    @line
    def l8a(self) -> Decimal:
        """Home mortgage interest reported on Form 1098"""
        return to_decimal(self.return_input.itemized.mortgage_interest)

    @line
    def l10(self) -> Decimal:
        return self.l8a()

    # Gifts to Charity

    @line
    def l11(self) -> Decimal:
        return to_decimal(self.return_input.itemized.charitable_cash)

    @line
    def l12(self) -> Decimal:
        return to_decimal(self.return_input.itemized.charitable_noncash)

    @line
    def l14(self) -> Decimal:
        return self.l11() + self.l12()

    @line
    def l15(self) -> Decimal:
        """Casualty and theft losses"""
        return to_decimal(self.return_input.itemized.casualty_losses)

    @line
    def l16(self) -> Decimal:
        return to_decimal(self.return_input.itemized.other_itemized)

    @line
    def l17(self) -> Decimal:
        """Total itemized deductions"""
        return sum_fields([self.l4(), self.l7(), self.l10(), self.l14(), self.l15(), self.l16()])
