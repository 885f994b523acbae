"""Schedule 2 (Form 1040) - Additional Taxes."""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import sum_fields, to_decimal
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Schedule2(F1040Attachment):
    tag = "f1040s2"
    sequence_index = 2

    FIELDS = (
        "names", "ssn",
        "l1a", "l2", "l3",
        "l4", "l8", "l11", "l12", "l21",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.l3() != 0 or self.l21() != 0

    # Part I - Tax

    @line
    def l1a(self) -> Decimal:
        """Excess advance premium tax credit repayment"""
        return to_decimal(self.return_input.credits.excess_advance_premium_tax_credit)

    @line
    def l2(self) -> Decimal:
        """Alternative minimum tax from Form 6251"""
        return self.f1040.data.form_6251.l11()

    @line
    def l3(self) -> Decimal:
        return self.l1a() + self.l2()

    # Part II - Other Taxes

    @line
    def l4(self) -> Decimal:
        """Self-employment tax from Schedule SE"""
        return self.f1040.data.schedule_se.l12()

    @line
    def l8(self) -> Decimal:
        """Additional tax on HSA distributions from Form 8889"""
        return self.f1040.data.form_8889.l17b()

    @line
    def l11(self) -> Decimal:
        """Additional Medicare Tax from Form 8959"""
        return self.f1040.data.form_8959.l18()

    @line
    def l12(self) -> Decimal:
        """Net investment income tax from Form 8960"""
        return self.f1040.data.form_8960.l17()

    @line
    def l21(self) -> Decimal:
        """Total other taxes"""
        return sum_fields([self.l4(), self.l8(), self.l11(), self.l12()])
