"""
Form 6251 - Alternative Minimum Tax (Individuals).

Alternative minimum taxable income starts from taxable income and adds
back the deduction for state and local taxes (or the standard deduction)
and the preference items in `amt_adjustments`. The tentative minimum tax
uses the 26%/28% schedule, or Part III when the return has qualified
dividends or net capital gain. The excess over regular tax goes to
Schedule 2 line 2.
"""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import ZERO, clamp_zero, min_decimal, multiply, sum_fields, to_decimal
from calculator.tax_table import amt_rate_tax
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Form6251(F1040Attachment):
    tag = "f6251"
    sequence_index = 32

    FIELDS = (
        "names", "ssn",
        "l1", "l2a", "l2g", "l2i", "l3", "l4", "l5", "l6", "l7", "l9", "l10", "l11",
        "l12", "l13", "l16", "l17", "l18", "l19", "l20", "l21", "l22", "l23",
        "l24", "l25", "l26", "l27", "l28", "l29", "l30", "l31", "l32", "l33",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.l11() > 0

    # Part I - Alternative Minimum Taxable Income

    @line
    def l1(self) -> Decimal:
        """Taxable income, or line 11 less line 14 of Form 1040 when that is negative"""
        f1040 = self.f1040
        return f1040.l11() - f1040.l14()

    @line
    def l2a(self) -> Decimal:
        """Taxes from Schedule A line 7, or the standard deduction when not itemizing"""
        f1040 = self.f1040
        if f1040.itemizes():
            return f1040.data.schedule_a.l7()
        return f1040.standard_deduction()

    @line
    def l2g(self) -> Decimal:
        """Interest from specified private activity bonds"""
        return to_decimal(self.return_input.amt_adjustments.private_activity_bond_interest)

    @line
    def l2i(self) -> Decimal:
        """Incentive stock options"""
        return to_decimal(self.return_input.amt_adjustments.incentive_stock_options)

    @line
    def l3(self) -> Decimal:
        return to_decimal(self.return_input.amt_adjustments.other_adjustments)

    @line
    def l4(self) -> Decimal:
        """Alternative minimum taxable income"""
        return sum_fields([self.l1(), self.l2a(), self.l2g(), self.l2i(), self.l3()])

    # Part II - Alternative Minimum Tax

    @line
    def l5(self) -> Decimal:
        """Exemption, reduced by 25% of AMTI over the phase-out start"""
        config = self.config
        exemption = to_decimal(config.for_status(config.amt_exemption, self.filing_status))
        start = to_decimal(config.for_status(config.amt_exemption_phaseout_start, self.filing_status))
        reduction = multiply(clamp_zero(self.l4() - start), config.amt_exemption_phaseout_rate)
        return clamp_zero(exemption - reduction)

    @line
    def l6(self) -> Decimal:
        return clamp_zero(self.l4() - self.l5())

    @line
    def l7(self) -> Decimal:
        """Tentative minimum tax before the foreign tax credit"""
        if self.l6() <= 0:
            return ZERO
        if self.f1040.uses_capital_gain_worksheet():
            return self.l33()
        return amt_rate_tax(self.l6(), self.filing_status, self.config)

    @line
    def l9(self) -> Decimal:
        """Tentative minimum tax"""
        return self.l7()

    @line
    def l10(self) -> Decimal:
        """Regular tax: Form 1040 line 16 plus Schedule 2 line 1a, less the foreign tax credit"""
        data = self.f1040.data
        return clamp_zero(self.f1040.l16() + data.schedule_2.l1a() - data.schedule_3.l1())

    @line
    def l11(self) -> Decimal:
        """Alternative minimum tax, to Schedule 2 line 2"""
        if self.config.amt_exemption is None:
            return ZERO
        return clamp_zero(self.l9() - self.l10())

    # Part III - Tax Computation Using Maximum Capital Gains Rates

    @line
    def l12(self) -> Decimal:
        return self.l6()

    @line
    def l13(self) -> Decimal:
        """Qualified dividends and net capital gain (worksheet line 4)"""
        f1040 = self.f1040
        return f1040.l3a() + f1040.net_capital_gain()

    @line
    def l16(self) -> Decimal:
        return min_decimal(self.l12(), self.l13())

    @line
    def l17(self) -> Decimal:
        return self.l12() - self.l16()

    @line
    def l18(self) -> Decimal:
        """26%/28% tax on the part not eligible for capital gain rates"""
        return amt_rate_tax(self.l17(), self.filing_status, self.config)

    @line
    def l19(self) -> Decimal:
        """Top of the 0% capital gain rate bracket"""
        config = self.config
        return to_decimal(config.for_status(config.qd_ltcg_0_rate_threshold, self.filing_status))

    @line
    def l20(self) -> Decimal:
        """Ordinary taxable income from the regular tax worksheet (line 5)"""
        return clamp_zero(self.f1040.l15() - self.l13())

    @line
    def l21(self) -> Decimal:
        return clamp_zero(self.l19() - self.l20())

    @line
    def l22(self) -> Decimal:
        return min_decimal(self.l12(), self.l13())

    @line
    def l23(self) -> Decimal:
        """Taxed at 0%"""
        return min_decimal(self.l21(), self.l22())

    @line
    def l24(self) -> Decimal:
        return self.l22() - self.l23()

    @line
    def l25(self) -> Decimal:
        """Top of the 15% capital gain rate bracket"""
        config = self.config
        return to_decimal(config.for_status(config.qd_ltcg_15_rate_threshold, self.filing_status))

    @line
    def l26(self) -> Decimal:
        return self.l21() + self.l20()

    @line
    def l27(self) -> Decimal:
        return clamp_zero(self.l25() - self.l26())

    @line
    def l28(self) -> Decimal:
        """Taxed at 15%"""
        return min_decimal(self.l24(), self.l27())

    @line
    def l29(self) -> Decimal:
        return multiply(self.l28(), "0.15")

    @line
    def l30(self) -> Decimal:
        """Taxed at 20%"""
        return self.l22() - (self.l23() + self.l28())

    @line
    def l31(self) -> Decimal:
        return multiply(self.l30(), "0.20")

    @line
    def l32(self) -> Decimal:
        return sum_fields([self.l18(), self.l29(), self.l31()])

    @line
    def l33(self) -> Decimal:
        """Smaller of the capital gain computation or the 26%/28% tax on line 12"""
        return min_decimal(self.l32(), amt_rate_tax(self.l12(), self.filing_status, self.config))
