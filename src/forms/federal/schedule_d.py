"""Schedule D (Form 1040) - Capital Gains and Losses."""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import ZERO, clamp_zero, min_decimal, sum_fields, to_decimal
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line
from models.taxpayer import FilingStatus


class ScheduleD(F1040Attachment):
    tag = "f1040sd"
    sequence_index = 12

    FIELDS = (
        "names", "ssn",
        "l3", "l6", "l7",
        "l10", "l13", "l14", "l15",
        "l16", "l21",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        carry_forwards = self.return_input.carry_forwards
        return bool(self.return_input.capital_transactions) or (
            carry_forwards.short_term_capital_loss > 0
            or carry_forwards.long_term_capital_loss > 0
        )

    # Part I - Short-Term

    @line
    def l3(self) -> Decimal:
        """Short-term totals from Form 8949"""
        return sum_fields(t.gain for t in self.return_input.capital_transactions if not t.is_long_term)

    @line
    def l6(self) -> Decimal:
        """Short-term capital loss carryover"""
        return to_decimal(self.return_input.carry_forwards.short_term_capital_loss)

    @line
    def l7(self) -> Decimal:
        """Net short-term capital gain or (loss)"""
        return self.l3() - self.l6()

    # Part II - Long-Term

    @line
    def l10(self) -> Decimal:
        """Long-term totals from Form 8949"""
        return sum_fields(t.gain for t in self.return_input.capital_transactions if t.is_long_term)

    @line
    def l13(self) -> Decimal:
        """Capital gain distributions"""
        return sum_fields(f.capital_gain_distributions for f in self.return_input.dividend_1099s)

    @line
    def l14(self) -> Decimal:
        """Long-term capital loss carryover"""
        return to_decimal(self.return_input.carry_forwards.long_term_capital_loss)

    @line
    def l15(self) -> Decimal:
        """Net long-term capital gain or (loss)"""
        return self.l10() + self.l13() - self.l14()

    # Part III - Summary

    @line
    def l16(self) -> Decimal:
        return self.l7() + self.l15()

    @line
    def l21(self) -> Decimal:
        """Capital loss allowed this year, as a negative amount"""
        loss = self.l16()
        if loss >= 0:
            return ZERO
        config = self.config
        limit = config.capital_loss_limit_mfs if self.filing_status == FilingStatus.MARRIED_SEPARATE else config.capital_loss_limit
        return -min_decimal(-loss, limit)

    @line
    def to_1040_l7(self) -> Decimal:
        gain = self.l16()
        return gain if gain >= 0 else self.l21()

    @line
    def net_capital_gain(self) -> Decimal:
        """Smaller of line 15 or line 16, not less than zero"""
        return clamp_zero(min_decimal(self.l15(), self.l16()))
