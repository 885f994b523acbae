"""
Tests for Form 1040 line 16 tax computation.

- Ordinary income tax from the 2025 bracket tables
- Qualified Dividends and Capital Gain Tax Worksheet
"""

from decimal import Decimal

import pytest

from calculator.tax_table import ordinary_income_tax, qualified_dividends_capital_gain_tax
from models import FilingStatus


class TestOrdinaryIncomeTax:

    @pytest.mark.parametrize("taxable_income,expected", [
        (0, "0"),
        (11925, "1192.5"),
        (34250, "3871.5"),
        (48475, "5578.5"),
    ])
    def test_single(self, config, taxable_income, expected):
        assert ordinary_income_tax(taxable_income, FilingStatus.SINGLE, config) == Decimal(expected)

    def test_married_joint_brackets_are_wider(self, config):
        assert ordinary_income_tax(23850, FilingStatus.MARRIED_JOINT, config) == Decimal("2385")

    def test_negative_income_is_untaxed(self, config):
        assert ordinary_income_tax(-5000, "single", config) == Decimal("0")


class TestCapitalGainWorksheet:
    """Preferential rates for qualified dividends and net capital gain."""

    def test_all_in_zero_bracket(self, config):
        tax = qualified_dividends_capital_gain_tax(30000, 5000, 0, FilingStatus.SINGLE, config)
        assert tax == ordinary_income_tax(25000, FilingStatus.SINGLE, config)

    def test_fifteen_percent_portion(self, config):
        # 60,000 taxable with 20,000 long-term gain: 8,350 at 0%, 11,650 at 15%
        tax = qualified_dividends_capital_gain_tax(60000, 0, 20000, FilingStatus.SINGLE, config)
        expected = ordinary_income_tax(40000, FilingStatus.SINGLE, config) + Decimal("1747.5")
        assert tax == expected

    def test_never_more_than_ordinary(self, config):
        for taxable in (10000, 50000, 250000, 700000):
            worksheet = qualified_dividends_capital_gain_tax(taxable, 5000, 10000, FilingStatus.SINGLE, config)
            assert worksheet <= ordinary_income_tax(taxable, FilingStatus.SINGLE, config)

    def test_no_preferential_income(self, config):
        tax = qualified_dividends_capital_gain_tax(50000, 0, 0, FilingStatus.SINGLE, config)
        assert tax == ordinary_income_tax(50000, FilingStatus.SINGLE, config)
