"""
Tax computation for Form 1040 line 16 and Form 6251.

- Ordinary income tax from the year's bracket table
- Qualified Dividends and Capital Gain Tax Worksheet (Form 1040 instructions)
- The 26%/28% alternative minimum tax rate schedule (Form 6251)

Results are unrounded; the caller's output step rounds once.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from calculator.decimal_math import (
    Numeric,
    calculate_progressive_tax,
    clamp_zero,
    min_decimal,
    multiply,
    to_decimal,
    ZERO,
)
from calculator.tax_year_config import TaxYearConfig


def ordinary_income_tax(taxable_income: Numeric, filing_status: Any, config: TaxYearConfig) -> Decimal:
    """Tax on taxable income using only ordinary brackets."""
    status = getattr(filing_status, "value", filing_status)
    brackets = config.ordinary_income_brackets.get(status) or config.ordinary_income_brackets["single"]
    return calculate_progressive_tax(clamp_zero(taxable_income), brackets)


def qualified_dividends_capital_gain_tax(
    taxable_income: Numeric,
    qualified_dividends: Numeric,
    net_capital_gain: Numeric,
    filing_status: Any,
    config: TaxYearConfig,
) -> Decimal:
    """
    Qualified Dividends and Capital Gain Tax Worksheet.

    Args:
        taxable_income: Form 1040 line 15
        qualified_dividends: Form 1040 line 3a
        net_capital_gain: smaller of Schedule D lines 15 and 16 (or capital
            gain distributions when Schedule D is not filed); never negative
    """
    if config.qd_ltcg_0_rate_threshold is None or config.qd_ltcg_15_rate_threshold is None:
        # No preferential thresholds configured: tax everything as ordinary
        return ordinary_income_tax(taxable_income, filing_status, config)

    line1 = clamp_zero(taxable_income)
    line4 = to_decimal(qualified_dividends) + clamp_zero(net_capital_gain)
    line5 = clamp_zero(line1 - line4)
    line6 = to_decimal(config.for_status(config.qd_ltcg_0_rate_threshold, filing_status))
    line7 = min_decimal(line1, line6)
    line8 = min_decimal(line5, line7)
    line9 = line7 - line8  # taxed at 0%
    line10 = min_decimal(line1, line4)
    line12 = line10 - line9
    line13 = to_decimal(config.for_status(config.qd_ltcg_15_rate_threshold, filing_status))
    line14 = min_decimal(line1, line13)
    line15 = line5 + line9
    line16 = clamp_zero(line14 - line15)
    line17 = min_decimal(line12, line16)
    line18 = multiply(line17, "0.15")
    line19 = line9 + line17
    line20 = line10 - line19
    line21 = multiply(line20, "0.20")
    line22 = ordinary_income_tax(line5, filing_status, config)
    line23 = line18 + line21 + line22
    line24 = ordinary_income_tax(line1, filing_status, config)
    if line4 <= ZERO:
        return line24
    return min_decimal(line23, line24)


def amt_rate_tax(taxable_excess: Numeric, filing_status: Any, config: TaxYearConfig) -> Decimal:
    """
    Form 6251 line 7 rate schedule: 26% of the AMT taxable excess up to the
    28% threshold, 28% of the rest.
    """
    excess = clamp_zero(taxable_excess)
    threshold = to_decimal(config.for_status(config.amt_28_threshold, filing_status))
    low = min_decimal(excess, threshold)
    return multiply(low, config.amt_rate_26) + multiply(excess - low, config.amt_rate_28)
