"""
Form 8829 - Expenses for Business Use of Your Home (regular method).

Operating expenses and depreciation are allowed only up to the business
income left after the mortgage interest and real estate taxes on the
business part of the home. That income starts from Schedule C's tentative
profit before this deduction (`profit_before_home_office`), never from
Schedule C line 29 or 31 directly. Disallowed amounts carry over (Part IV).

All expenses are treated as indirect (column (b)) and prorated by the
business-use percentage.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from calculator.decimal_math import (
    clamp_zero,
    min_decimal,
    multiply,
    safe_ratio,
    sum_fields,
    to_decimal,
)
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line
from models.business import HomeOffice, HomeOfficeMethod


class Form8829(F1040Attachment):
    tag = "f8829"
    sequence_index = 66

    FIELDS = (
        "names", "ssn",
        "l1", "l2", "l3", "l7",
        "l8", "l10", "l11", "l12", "l13", "l14", "l15",
        "l17", "l20", "l21", "l22", "l23", "l24", "l25", "l26", "l27", "l28",
        "l30", "l31", "l32", "l33", "l34", "l36",
        "l37", "l38", "l39", "l40", "l41", "l42",
        "l43", "l44",
    )

    @property
    def home_office(self) -> Optional[HomeOffice]:
        business = self.return_input.primary_business
        return business.home_office if business is not None else None

    @property
    def _office(self) -> HomeOffice:
        return self.home_office or HomeOffice()

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        office = self.home_office
        return (
            office is not None
            and office.method == HomeOfficeMethod.REGULAR
            and office.business_area_sqft > 0
        )

    # Part I - Part of Your Home Used for Business

    @line(LineKind.NUMBER)
    def l1(self) -> Decimal:
        """Area used regularly and exclusively for business"""
        return to_decimal(self._office.business_area_sqft)

    @line(LineKind.NUMBER)
    def l2(self) -> Decimal:
        """Total area of home"""
        return to_decimal(self._office.total_area_sqft)

    @line(LineKind.RATE)
    def l3(self) -> Decimal:
        """Business percentage"""
        return min_decimal(safe_ratio(self.l1(), self.l2()), 1)

    @line(LineKind.RATE)
    def l7(self) -> Decimal:
        return self.l3()

    # Part II - Figure Your Allowable Deduction

    @line
    def l8(self) -> Decimal:
        """Schedule C tentative profit before the home office deduction"""
        return self.f1040.data.schedule_c.profit_before_home_office()

    @line
    def l10(self) -> Decimal:
        """Deductible mortgage interest"""
        return to_decimal(self._office.mortgage_interest)

    @line
    def l11(self) -> Decimal:
        """Real estate taxes"""
        return to_decimal(self._office.real_estate_taxes)

    @line
    def l12(self) -> Decimal:
        return self.l10() + self.l11()

    @line
    def l13(self) -> Decimal:
        return multiply(self.l12(), self.l7())

    @line
    def l14(self) -> Decimal:
        return self.l13()

    @line
    def l15(self) -> Decimal:
        """Business income available for operating expenses and depreciation"""
        return clamp_zero(self.l8() - self.l14())

    @line
    def l17(self) -> Decimal:
        return to_decimal(self._office.insurance)

    @line
    def l20(self) -> Decimal:
        return to_decimal(self._office.repairs)

    @line
    def l21(self) -> Decimal:
        return to_decimal(self._office.utilities)

    @line
    def l22(self) -> Decimal:
        return to_decimal(self._office.other_expenses)

    @line
    def l23(self) -> Decimal:
        return sum_fields([self.l17(), self.l20(), self.l21(), self.l22()])

    @line
    def l24(self) -> Decimal:
        return multiply(self.l23(), self.l7())

    @line
    def l25(self) -> Decimal:
        """Carryover of prior year operating expenses"""
        return to_decimal(self._office.prior_year_operating_carryover)

    @line
    def l26(self) -> Decimal:
        return self.l24() + self.l25()

    @line
    def l27(self) -> Decimal:
        """Allowable operating expenses"""
        return min_decimal(self.l15(), self.l26())

    @line
    def l28(self) -> Decimal:
        """Limit on excess casualty losses and depreciation"""
        return clamp_zero(self.l15() - self.l27())

    @line
    def l30(self) -> Decimal:
        """Depreciation of your home from line 42"""
        return self.l42()

    @line
    def l31(self) -> Decimal:
        """Carryover of prior year excess casualty losses and depreciation"""
        return to_decimal(self._office.prior_year_depreciation_carryover)

    @line
    def l32(self) -> Decimal:
        return self.l30() + self.l31()

    @line
    def l33(self) -> Decimal:
        """Allowable depreciation"""
        return min_decimal(self.l28(), self.l32())

    @line
    def l34(self) -> Decimal:
        return sum_fields([self.l14(), self.l27(), self.l33()])

    @line
    def l36(self) -> Decimal:
        """Allowable expenses for business use of your home, to Schedule C line 30"""
        return self.l34()

    # Part III - Depreciation of Your Home

    @line
    def l37(self) -> Decimal:
        return to_decimal(self._office.home_basis)

    @line
    def l38(self) -> Decimal:
        """Value of land included on line 37"""
        return to_decimal(self._office.land_value)

    @line
    def l39(self) -> Decimal:
        """Basis of building"""
        return clamp_zero(self.l37() - self.l38())

    @line
    def l40(self) -> Decimal:
        return multiply(self.l39(), self.l7())

    @line(LineKind.RATE)
    def l41(self) -> Decimal:
        return to_decimal(self.config.home_office_depreciation_rate)

    @line
    def l42(self) -> Decimal:
        return multiply(self.l40(), self.l41())

    # Part IV - Carryover of Unallowed Expenses

    @line
    def l43(self) -> Decimal:
        """Operating expenses carried to next year"""
        return clamp_zero(self.l26() - self.l27())

    @line
    def l44(self) -> Decimal:
        """Excess casualty losses and depreciation carried to next year"""
        return clamp_zero(self.l32() - self.l33())
