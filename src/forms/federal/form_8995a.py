"""
Form 8995-A - Qualified Business Income Deduction.

Used instead of Form 8995 when taxable income before the QBI deduction is
above the threshold. The 20% QBI component is limited by the greater of
50% of W-2 wages or 25% of W-2 wages plus 2.5% of UBIA; inside the
phase-in range only part of the excess over that limit is lost (Part III).
A specified service trade or business keeps only its applicable
percentage of QBI, wages and UBIA (Schedule A).

Like Form 8995, the income limitation reads Form 1040's restricted
`taxable_income_before_qbi` line.
"""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import (
    ONE,
    ZERO,
    clamp_zero,
    max_decimal,
    min_decimal,
    multiply,
    safe_ratio,
    to_decimal,
)
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Form8995A(F1040Attachment):
    tag = "f8995a"
    sequence_index = 55.5

    FIELDS = (
        "names", "ssn", "business_name", "sstb",
        "l2", "l3", "l4", "l5", "l6", "l7", "l8", "l9", "l10",
        "l11", "l12", "l13", "l15", "l16",
        "l17", "l18", "l19", "l20", "l21", "l22", "l23", "l24", "l25", "l26",
        "l27", "l32", "l33", "l34", "l35", "l36", "l37", "l39",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.qualified_business_income() > 0 and self.above_threshold()

    @line(LineKind.TEXT)
    def business_name(self) -> str:
        business = self.return_input.primary_business
        return business.name if business is not None else ""

    @line(LineKind.BOOLEAN)
    def sstb(self) -> bool:
        business = self.return_input.primary_business
        return business is not None and business.is_sstb

    @line(LineKind.BOOLEAN)
    def above_threshold(self) -> bool:
        return self.l20() > self.l21()

    @line(LineKind.RATE)
    def phase_in_ratio(self) -> Decimal:
        """0 at the threshold, 1 at the end of the phase-in range"""
        if self.l23() <= 0:
            return ONE if self.l22() > 0 else ZERO
        return min_decimal(safe_ratio(self.l22(), self.l23()), ONE)

    @line(LineKind.RATE)
    def applicable_percentage(self) -> Decimal:
        """Schedule A: share of an SSTB's items still taken into account"""
        if not self.sstb():
            return ONE
        return clamp_zero(ONE - self.phase_in_ratio())

    @line
    def qualified_business_income(self) -> Decimal:
        """Schedule C profit less the deductible part of SE tax"""
        data = self.f1040.data
        return data.schedule_c.l31() - data.schedule_se.l13()

    # Part II - Determine Your Adjusted Qualified Business Income

    @line
    def l2(self) -> Decimal:
        """Qualified business income"""
        return multiply(self.qualified_business_income(), self.applicable_percentage())

    @line
    def l3(self) -> Decimal:
        return multiply(clamp_zero(self.l2()), self.config.qbi_deduction_rate)

    @line
    def l4(self) -> Decimal:
        """W-2 wages paid by the business"""
        business = self.return_input.primary_business
        wages = business.expenses.wages if business is not None else None
        return multiply(to_decimal(wages), self.applicable_percentage())

    @line
    def l5(self) -> Decimal:
        return multiply(self.l4(), self.config.qbi_wage_limit_rate)

    @line
    def l6(self) -> Decimal:
        return multiply(self.l4(), self.config.qbi_wage_ubia_wage_rate)

    @line
    def l7(self) -> Decimal:
        """UBIA of qualified property"""
        business = self.return_input.primary_business
        ubia = business.ubia if business is not None else None
        return multiply(to_decimal(ubia), self.applicable_percentage())

    @line
    def l8(self) -> Decimal:
        return multiply(self.l7(), self.config.qbi_ubia_rate)

    @line
    def l9(self) -> Decimal:
        return self.l6() + self.l8()

    @line
    def l10(self) -> Decimal:
        """W-2 wage and UBIA limitation"""
        return max_decimal(self.l5(), self.l9())

    @line
    def l11(self) -> Decimal:
        return min_decimal(self.l3(), self.l10())

    @line
    def l12(self) -> Decimal:
        """Phased-in reduction from Part III, inside the phase-in range only"""
        if self.phase_in_ratio() >= ONE or self.l19() <= 0:
            return ZERO
        return self.l26()

    @line
    def l13(self) -> Decimal:
        return max_decimal(self.l11(), self.l12())

    @line
    def l15(self) -> Decimal:
        """Qualified business income component"""
        return self.l13()

    @line
    def l16(self) -> Decimal:
        return self.l15()

    # Part III - Phased-in Reduction

    @line
    def l17(self) -> Decimal:
        return self.l3()

    @line
    def l18(self) -> Decimal:
        return self.l10()

    @line
    def l19(self) -> Decimal:
        return clamp_zero(self.l17() - self.l18())

    @line
    def l20(self) -> Decimal:
        """Taxable income before qualified business income deduction"""
        return self.f1040.taxable_income_before_qbi()

    @line
    def l21(self) -> Decimal:
        """Threshold"""
        config = self.config
        return to_decimal(config.for_status(config.qbi_threshold_start, self.filing_status))

    @line
    def l22(self) -> Decimal:
        return clamp_zero(self.l20() - self.l21())

    @line
    def l23(self) -> Decimal:
        """Phase-in range"""
        config = self.config
        end = to_decimal(config.for_status(config.qbi_threshold_end, self.filing_status))
        return clamp_zero(end - self.l21())

    @line(LineKind.RATE)
    def l24(self) -> Decimal:
        return self.phase_in_ratio()

    @line
    def l25(self) -> Decimal:
        """Total reduction"""
        return multiply(self.l19(), self.l24())

    @line
    def l26(self) -> Decimal:
        return self.l17() - self.l25()

    # Part IV - Determine Your Qualified Business Income Deduction

    @line
    def l27(self) -> Decimal:
        """Total qualified business income component"""
        return self.l16()

    @line
    def l32(self) -> Decimal:
        """QBI deduction before the income limitation"""
        return self.l27()

    @line
    def l33(self) -> Decimal:
        return self.l20()

    @line
    def l34(self) -> Decimal:
        """Net capital gain including qualified dividends"""
        f1040 = self.f1040
        return f1040.l3a() + f1040.net_capital_gain()

    @line
    def l35(self) -> Decimal:
        return clamp_zero(self.l33() - self.l34())

    @line
    def l36(self) -> Decimal:
        """Income limitation"""
        return multiply(self.l35(), self.config.qbi_deduction_rate)

    @line
    def l37(self) -> Decimal:
        return min_decimal(self.l32(), self.l36())

    @line
    def l39(self) -> Decimal:
        """Qualified business income deduction, to Form 1040 line 13"""
        if not self.above_threshold():
            return ZERO
        return self.l37()
