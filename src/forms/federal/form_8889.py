"""Form 8889 - Health Savings Accounts (HSAs)."""

from __future__ import annotations

from decimal import Decimal

from calculator.decimal_math import ZERO, clamp_zero, min_decimal, multiply, sum_fields, to_decimal
from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line
from models.return_input import HSACoverageType, HSAInfo


class Form8889(F1040Attachment):
    tag = "f8889"
    sequence_index = 52

    FIELDS = (
        "names", "ssn",
        "l1", "l2", "l3", "l7", "l8", "l9", "l12", "l13",
        "l14a", "l15", "l16", "l17b",
    )

    @property
    def hsa(self) -> HSAInfo:
        return self.return_input.hsa or HSAInfo()

    def _owner_age(self):
        person = self.return_input.taxpayer.person(self.hsa.owner)
        return person.age_at_end_of_year(self.tax_year) if person is not None else None

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        if self.return_input.hsa is None:
            return False
        return self.l2() > 0 or self.l9() > 0 or self.l14a() > 0

    # Part I - HSA Contributions and Deduction

    @line(LineKind.TEXT)
    def l1(self) -> str:
        """Coverage under a high-deductible health plan"""
        return self.hsa.coverage_type.value

    @line
    def l2(self) -> Decimal:
        """HSA contributions you made"""
        return to_decimal(self.hsa.contributions)

    @line
    def l3(self) -> Decimal:
        config = self.config
        if self.hsa.coverage_type == HSACoverageType.FAMILY:
            return to_decimal(config.hsa_family_limit)
        return to_decimal(config.hsa_individual_limit)

    @line
    def l7(self) -> Decimal:
        """Additional contribution amount for age 55 or older"""
        age = self._owner_age()
        if age is not None and age >= 55:
            return to_decimal(self.config.hsa_catchup_55_plus)
        return ZERO

    @line
    def l8(self) -> Decimal:
        return self.l3() + self.l7()

    @line
    def l9(self) -> Decimal:
        """Employer contributions (Form W-2 box 12, code W)"""
        owner = self.hsa.owner
        return sum_fields(w2.hsa_employer_contributions for w2 in self.return_input.w2s if w2.owner == owner)

    @line
    def l12(self) -> Decimal:
        return clamp_zero(self.l8() - self.l9())

    @line
    def l13(self) -> Decimal:
        """HSA deduction, to Schedule 1 line 13"""
        return min_decimal(self.l2(), self.l12())

    # Part II - HSA Distributions

    @line
    def l14a(self) -> Decimal:
        return to_decimal(self.hsa.total_distributions)

    @line
    def l15(self) -> Decimal:
        """Qualified medical expenses paid using HSA distributions"""
        return to_decimal(self.hsa.qualified_medical_expenses)

    @line
    def l16(self) -> Decimal:
        """Taxable HSA distributions"""
        return clamp_zero(self.l14a() - self.l15())

    @line
    def l17b(self) -> Decimal:
        """Additional 20% tax, to Schedule 2 line 8"""
        age = self._owner_age()
        if age is not None and age >= 65:
            return ZERO
        return multiply(self.l16(), self.config.hsa_additional_tax_rate)
