"""
Schedule SE (Form 1040) - Self-Employment Tax.

Net earnings are 92.35% of Schedule C profit. Social security tax applies
up to the wage base less social security wages already taxed on Form W-2;
Medicare applies to all net earnings. Half the tax is deductible on
Schedule 1 line 15.
"""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import ZERO, clamp_zero, min_decimal, multiply, sum_fields, to_decimal
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line
from models.taxpayer import PersonRole


class ScheduleSE(F1040Attachment):
    tag = "f1040sse"
    sequence_index = 17

    FIELDS = (
        "names", "ssn",
        "l2", "l3", "l4a", "l4c", "l6",
        "l7", "l8a", "l9", "l10", "l11", "l12", "l13",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.l4c() >= to_decimal(self.config.se_minimum_net_earnings)

    @property
    def owner(self) -> PersonRole:
        business = self.return_input.primary_business
        return business.owner if business is not None else PersonRole.PRIMARY

    @line
    def l2(self) -> Decimal:
        """Net profit or (loss) from Schedule C line 31"""
        return self.f1040.data.schedule_c.l31()

    @line
    def l3(self) -> Decimal:
        return self.l2()

    @line
    def l4a(self) -> Decimal:
        if self.l3() <= 0:
            return ZERO
        return multiply(self.l3(), self.config.se_net_earnings_factor)

    @line
    def l4c(self) -> Decimal:
        """Net earnings; under the minimum no self-employment tax is owed"""
        if self.l4a() < to_decimal(self.config.se_minimum_net_earnings):
            return ZERO
        return self.l4a()

    @line
    def l6(self) -> Decimal:
        """Net earnings from self-employment"""
        return self.l4c()

    @line
    def l7(self) -> Decimal:
        """Maximum earnings subject to social security tax"""
        return to_decimal(self.config.ss_wage_base)

    @line
    def l8a(self) -> Decimal:
        """Social security wages of the business owner from Form W-2"""
        return sum_fields(w2.box3 for w2 in self.return_input.w2s if w2.owner == self.owner)

    @line
    def l9(self) -> Decimal:
        return clamp_zero(self.l7() - self.l8a())

    @line
    def l10(self) -> Decimal:
        """Social security portion"""
        return multiply(min_decimal(self.l6(), self.l9()), self.config.ss_rate)

    @line
    def l11(self) -> Decimal:
        """Medicare portion"""
        return multiply(self.l6(), self.config.medicare_rate)

    @line
    def l12(self) -> Decimal:
        """Self-employment tax, to Schedule 2 line 4"""
        return self.l10() + self.l11()

    @line
    def l13(self) -> Decimal:
        """Deduction for one-half of self-employment tax, to Schedule 1 line 15"""
        return multiply(self.l12(), "0.5")
