"""
Schedule C (Form 1040) - Profit or Loss From Business.

Two deductions on this schedule are limited by the schedule's own profit:

- the home office deduction (line 30, Form 8829) is limited to tentative
  profit before that deduction,
- the Section 179 expense in depreciation (line 13, Form 4562) is limited
  to business income before that expense.

Each limiting form reads a restricted intermediate line here instead of
line 29/31, which keeps the dependency graph acyclic.

Only the first business in the return input is reported.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from calculator.decimal_math import (
    ZERO,
    clamp_zero,
    min_decimal,
    multiply,
    sum_fields,
    to_decimal,
)
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line, restricted_line
from models.business import BusinessExpenses, BusinessInfo, HomeOfficeMethod

# Expense lines read straight from the input, in form order. Line 13
# (depreciation) and 24b (meals) are computed.
EXPENSE_LINES = (
    ("l8", "advertising"),
    ("l9", "car_and_truck"),
    ("l10", "commissions_and_fees"),
    ("l11", "contract_labor"),
    ("l12", "depletion"),
    ("l14", "employee_benefits"),
    ("l15", "insurance"),
    ("l16a", "mortgage_interest"),
    ("l16b", "other_interest"),
    ("l17", "legal_and_professional"),
    ("l18", "office_expense"),
    ("l19", "pension_plans"),
    ("l20a", "rent_vehicles_equipment"),
    ("l20b", "rent_other_property"),
    ("l21", "repairs"),
    ("l22", "supplies"),
    ("l23", "taxes_and_licenses"),
    ("l24a", "travel"),
    ("l25", "utilities"),
    ("l26", "wages"),
    ("l27a", "other_expenses"),
)

MEALS_DEDUCTIBLE_RATE = Decimal("0.5")


def _expense_line(line_name: str, attribute: str):
    def compute(self: "ScheduleC") -> Decimal:
        return to_decimal(getattr(self.expenses, attribute))

    compute.__name__ = line_name
    compute.__doc__ = BusinessExpenses.model_fields[attribute].description
    return line(compute)


class ScheduleC(F1040Attachment):
    tag = "f1040sc"
    sequence_index = 9

    FIELDS = (
        "names", "ssn", "business_name", "ein",
        "l1", "l2", "l3", "l4", "l5", "l6", "l7",
        "l8", "l9", "l10", "l11", "l12", "l13", "l14", "l15",
        "l16a", "l16b", "l17", "l18", "l19", "l20a", "l20b",
        "l21", "l22", "l23", "l24a", "l24b", "l25", "l26", "l27a",
        "l28", "l29", "l30", "l31",
    )

    @property
    def business(self) -> Optional[BusinessInfo]:
        return self.return_input.primary_business

    @property
    def expenses(self) -> BusinessExpenses:
        business = self.business
        return business.expenses if business is not None else BusinessExpenses()

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.business is not None

    @line(LineKind.TEXT)
    def business_name(self) -> str:
        return self.business.name if self.business else ""

    @line(LineKind.TEXT)
    def ein(self) -> str:
        return self.business.ein if self.business else ""

    # Part I - Income

    @line
    def l1(self) -> Decimal:
        """Gross receipts or sales"""
        return to_decimal(self.business.gross_receipts if self.business else None)

    @line
    def l2(self) -> Decimal:
        """Returns and allowances"""
        return to_decimal(self.business.returns_and_allowances if self.business else None)

    @line
    def l3(self) -> Decimal:
        return self.l1() - self.l2()

    @line
    def l4(self) -> Decimal:
        """Cost of goods sold"""
        return to_decimal(self.business.cost_of_goods_sold if self.business else None)

    @line
    def l5(self) -> Decimal:
        """Gross profit"""
        return self.l3() - self.l4()

    @line
    def l6(self) -> Decimal:
        return to_decimal(self.business.other_income if self.business else None)

    @line
    def l7(self) -> Decimal:
        """Gross income"""
        return self.l5() + self.l6()

    # Part II - Expenses

    @line
    def l13(self) -> Decimal:
        """Depreciation and Section 179 expense deduction from Form 4562"""
        return self.f1040.data.form_4562.l22()

    @line
    def l24b(self) -> Decimal:
        """Deductible meals"""
        return multiply(self.expenses.meals, MEALS_DEDUCTIBLE_RATE)

    @line
    def expenses_excluding_depreciation(self) -> Decimal:
        values = [getattr(self, name)() for name, _ in EXPENSE_LINES]
        values.append(self.l24b())
        return sum_fields(values)

    @line
    def l28(self) -> Decimal:
        """Total expenses before expenses for business use of home"""
        return self.expenses_excluding_depreciation() + self.l13()

    @line
    def l29(self) -> Decimal:
        """Tentative profit or (loss)"""
        return self.l7() - self.l28()

    @restricted_line(excluding=("l30", "l31"), consumers=("f8829",))
    def profit_before_home_office(self) -> Decimal:
        return self.l29()

    @restricted_line(excluding=("l13", "l28", "l29", "l30", "l31"), consumers=("f4562",))
    def income_before_section_179(self) -> Decimal:
        return self.l7() - self.expenses_excluding_depreciation()

    @line
    def l30(self) -> Decimal:
        """Expenses for business use of your home"""
        business = self.business
        if business is None or business.home_office is None:
            return ZERO
        home_office = business.home_office
        if home_office.method == HomeOfficeMethod.SIMPLIFIED:
            config = self.config
            area = min_decimal(home_office.business_area_sqft, config.home_office_simplified_max_sqft)
            deduction = multiply(area, config.home_office_simplified_rate)
            return min_decimal(deduction, clamp_zero(self.profit_before_home_office()))
        return self.f1040.data.form_8829.l36()

    @line
    def l31(self) -> Decimal:
        """Net profit or (loss), to Schedule 1 line 3 and Schedule SE line 2"""
        return self.l29() - self.l30()


for _name, _attribute in EXPENSE_LINES:
    setattr(ScheduleC, _name, _expense_line(_name, _attribute))
