"""Schedule B (Form 1040) - Interest and Ordinary Dividends."""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import sum_fields
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class ScheduleB(F1040Attachment):
    tag = "f1040sb"
    sequence_index = 8

    FIELDS = (
        "names", "ssn",
        "interest_payers", "l2", "l4",
        "dividend_payers", "l5", "l6",
        "l7a",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        threshold = self.config.schedule_b_threshold
        return self.l4() > threshold or self.l6() > threshold or self.l7a()

    @line(LineKind.TEXT)
    def interest_payers(self) -> str:
        return "; ".join(f.payer for f in self.return_input.interest_1099s)

    @line
    def l2(self) -> Decimal:
        return sum_fields(f.interest for f in self.return_input.interest_1099s)

    @line
    def l4(self) -> Decimal:
        """Taxable interest, to Form 1040 line 2b"""
        return self.l2()

    @line(LineKind.TEXT)
    def dividend_payers(self) -> str:
        return "; ".join(f.payer for f in self.return_input.dividend_1099s)

    @line
    def l5(self) -> Decimal:
        return sum_fields(f.ordinary_dividends for f in self.return_input.dividend_1099s)

    @line
    def l6(self) -> Decimal:
        """Ordinary dividends, to Form 1040 line 3b"""
        return self.l5()

    @line(LineKind.BOOLEAN)
    def l7a(self) -> bool:
        """Financial interest in or signature authority over a foreign account"""
        return self.return_input.foreign_account
