"""Schedule 3 (Form 1040) - Additional Credits and Payments."""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import ZERO, clamp_zero, multiply, sum_fields, to_decimal
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line
from models.taxpayer import PersonRole


class Schedule3(F1040Attachment):
    tag = "f1040s3"
    sequence_index = 3

    FIELDS = (
        "names", "ssn",
        "l1", "l2", "l3", "l4", "l8",
        "l9", "l10", "l11", "l15",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.l8() != 0 or self.l15() != 0

    # Part I - Nonrefundable Credits

    @line
    def l1(self) -> Decimal:
        """Foreign tax credit"""
        return to_decimal(self.return_input.credits.foreign_tax_credit)

    @line
    def l2(self) -> Decimal:
        """Credit for child and dependent care expenses"""
        return to_decimal(self.return_input.credits.child_care_credit)

    @line
    def l3(self) -> Decimal:
        """Education credits"""
        return to_decimal(self.return_input.credits.education_credit)

    @line
    def l4(self) -> Decimal:
        """Retirement savings contributions credit"""
        return to_decimal(self.return_input.credits.retirement_savings_credit)

    @line
    def l8(self) -> Decimal:
        return sum_fields([self.l1(), self.l2(), self.l3(), self.l4()])

    # Part II - Other Payments and Refundable Credits

    @line
    def l9(self) -> Decimal:
        """Net premium tax credit"""
        return to_decimal(self.return_input.credits.net_premium_tax_credit)

    @line
    def l10(self) -> Decimal:
        """Amount paid with request for extension to file"""
        return to_decimal(self.return_input.payments.extension_payment)

    @line
    def l11(self) -> Decimal:
        """Excess social security tax withheld"""
        config = self.config
        max_tax = multiply(config.ss_wage_base, config.employee_ss_rate)
        total = ZERO
        for role in PersonRole:
            w2s = [w2 for w2 in self.return_input.w2s if w2.owner == role]
            # Only arises with more than one employer
            if len(w2s) < 2:
                continue
            withheld = sum_fields(w2.social_security_tax_withheld for w2 in w2s)
            total += clamp_zero(withheld - max_tax)
        return total

    @line
    def l15(self) -> Decimal:
        return sum_fields([self.l9(), self.l10(), self.l11()])
