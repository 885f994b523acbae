"""
Form 4562 - Depreciation and Amortization (Schedule C assets).

Section 179 expense is limited by business income computed before the
Section 179 deduction; that income is read from Schedule C's restricted
`income_before_section_179` line. Assets take the Section 179 amount
first, then bonus depreciation, then first-year MACRS (half-year
convention) on whatever basis remains.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Tuple

from calculator.decimal_math import (
    ONE,
    ZERO,
    clamp_zero,
    min_decimal,
    multiply,
    safe_ratio,
    sum_fields,
    to_decimal,
)
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line
from models.business import DepreciableAsset

# First-year MACRS percentages, half-year convention (Pub. 946 Table A-1)
MACRS_HALF_YEAR_FIRST_YEAR = {
    3: Decimal("0.3333"),
    5: Decimal("0.20"),
    7: Decimal("0.1429"),
    10: Decimal("0.10"),
    15: Decimal("0.05"),
    20: Decimal("0.0375"),
}


class Form4562(F1040Attachment):
    tag = "f4562"
    sequence_index = 67

    FIELDS = (
        "names", "business_name", "ssn",
        "l1", "l2", "l3", "l4", "l5", "l8", "l9",
        "l11", "l12", "l13", "l14", "l19", "l22",
    )

    @property
    def assets(self) -> Tuple[DepreciableAsset, ...]:
        business = self.return_input.primary_business
        return business.assets if business is not None else ()

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return any(asset.cost > 0 for asset in self.assets)

    @line(LineKind.TEXT)
    def business_name(self) -> str:
        business = self.return_input.primary_business
        return business.name if business is not None else ""

    # Part I - Election To Expense Certain Property Under Section 179

    @line
    def l1(self) -> Decimal:
        """Maximum amount"""
        return to_decimal(self.config.section_179_limit)

    @line
    def l2(self) -> Decimal:
        """Total cost of section 179 property placed in service"""
        return sum_fields(a.business_basis for a in self.assets if a.section_179_elected > 0)

    @line
    def l3(self) -> Decimal:
        """Threshold cost of section 179 property before reduction in limitation"""
        return to_decimal(self.config.section_179_phaseout_threshold)

    @line
    def l4(self) -> Decimal:
        return clamp_zero(self.l2() - self.l3())

    @line
    def l5(self) -> Decimal:
        """Dollar limitation for tax year"""
        return clamp_zero(self.l1() - self.l4())

    @line
    def l8(self) -> Decimal:
        """Total elected cost of section 179 property"""
        return sum_fields(min_decimal(a.section_179_elected, a.business_basis) for a in self.assets)

    @line
    def l9(self) -> Decimal:
        """Tentative deduction"""
        return min_decimal(self.l5(), self.l8())

    @line
    def l11(self) -> Decimal:
        """Business income limitation"""
        business = self.return_input.primary_business
        if business is None:
            return ZERO
        income = self.f1040.data.schedule_c.income_before_section_179() + self.wages_for(business.owner)
        return clamp_zero(min_decimal(income, self.l5()))

    @line
    def l12(self) -> Decimal:
        """Section 179 expense deduction"""
        return min_decimal(self.l9(), self.l11())

    @line
    def l13(self) -> Decimal:
        """Carryover of disallowed deduction to next year"""
        return clamp_zero(self.l9() - self.l12())

    @line(LineKind.RATE)
    def section_179_allowed_ratio(self) -> Decimal:
        """Share of each asset's elected amount actually deducted this year"""
        if self.l8() <= 0:
            return ZERO
        return min_decimal(safe_ratio(self.l12(), self.l8()), ONE)

    def _remaining_bases(self) -> List[Tuple[DepreciableAsset, Decimal]]:
        ratio = self.section_179_allowed_ratio()
        remaining = []
        for asset in self.assets:
            basis = to_decimal(asset.business_basis)
            expensed = multiply(min_decimal(asset.section_179_elected, basis), ratio)
            remaining.append((asset, clamp_zero(basis - expensed)))
        return remaining

    # Part II - Special Depreciation Allowance

    @line
    def l14(self) -> Decimal:
        """Special depreciation allowance for qualified property"""
        rate = self.config.bonus_depreciation_rate
        return sum_fields(
            multiply(basis, rate)
            for asset, basis in self._remaining_bases()
            if asset.bonus_eligible
        )

    # Part III - MACRS Depreciation

    @line
    def l19(self) -> Decimal:
        """First-year MACRS deduction, half-year convention"""
        bonus_rate = to_decimal(self.config.bonus_depreciation_rate)
        total = ZERO
        for asset, basis in self._remaining_bases():
            if asset.bonus_eligible:
                basis -= multiply(basis, bonus_rate)
            rate = MACRS_HALF_YEAR_FIRST_YEAR.get(asset.recovery_period_years, MACRS_HALF_YEAR_FIRST_YEAR[7])
            total += multiply(basis, rate)
        return total

    # Part IV - Summary

    @line
    def l22(self) -> Decimal:
        """Total depreciation, to Schedule C line 13"""
        return sum_fields([self.l12(), self.l14(), self.l19()])
