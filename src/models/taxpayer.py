from datetime import date
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FrozenModel(BaseModel):
    """Base for return input models: immutable once constructed."""
    model_config = ConfigDict(frozen=True, extra="forbid")


class FilingStatus(str, Enum):
    """IRS filing status options"""
    SINGLE = "single"
    MARRIED_JOINT = "married_joint"
    MARRIED_SEPARATE = "married_separate"
    HEAD_OF_HOUSEHOLD = "head_of_household"
    QUALIFYING_WIDOW = "qualifying_widow"


class PersonRole(str, Enum):
    """Whose document this is on a joint return."""
    PRIMARY = "primary"
    SPOUSE = "spouse"


class Address(FrozenModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class Person(FrozenModel):
    """A taxpayer or spouse."""
    first_name: str
    last_name: str
    ssn: str = Field(default="", description="Social Security Number, digits only")
    date_of_birth: Optional[date] = None
    is_blind: bool = False

    @field_validator('ssn', mode='before')
    def normalize_ssn(cls, v):
        if isinstance(v, str):
            v = v.replace('-', '').replace(' ', '')
        return v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def age_at_end_of_year(self, tax_year: int) -> Optional[int]:
        """Age on December 31 of the tax year, or None when no birth date is known."""
        if self.date_of_birth is None:
            return None
        return tax_year - self.date_of_birth.year

    def is_65_or_older(self, tax_year: int) -> bool:
        age = self.age_at_end_of_year(tax_year)
        return age is not None and age >= 65


class Dependent(Person):
    """
    Tax dependent.

    Qualifying-child tests are reduced to the ones the credit schedules use:
    age, student/disability status and residency.
    """
    relationship: str = "child"
    months_lived_with_taxpayer: int = Field(default=12, ge=0, le=12, description="Months lived with taxpayer in tax year")
    is_student: bool = Field(default=False, description="Full-time student for 5+ months")
    is_permanently_disabled: bool = Field(default=False, description="Permanently and totally disabled")

    def qualifies_for_child_tax_credit(self, tax_year: int) -> bool:
        """Under 17 at year end and lived with the taxpayer more than half the year."""
        age = self.age_at_end_of_year(tax_year)
        return age is not None and age < 17 and self.months_lived_with_taxpayer > 6

    def qualifies_for_eic(self, tax_year: int) -> bool:
        """EIC qualifying child: under 19, under 24 and a student, or disabled."""
        if self.months_lived_with_taxpayer <= 6:
            return False
        if self.is_permanently_disabled:
            return True
        age = self.age_at_end_of_year(tax_year)
        if age is None:
            return False
        return age < 19 or (self.is_student and age < 24)


class TaxpayerInfo(FrozenModel):
    """Filer, spouse, filing status and dependents."""
    primary: Person
    spouse: Optional[Person] = None
    filing_status: FilingStatus
    address: Address = Field(default_factory=Address)
    dependents: Tuple[Dependent, ...] = ()
    can_be_claimed_as_dependent: bool = Field(
        default=False,
        description="If True, use dependent standard deduction formula"
    )

    @field_validator('filing_status', mode='before')
    def validate_filing_status(cls, v):
        if isinstance(v, str):
            v = v.lower().replace(' ', '_')
        return v

    @model_validator(mode='after')
    def spouse_required_for_joint(self):
        if self.filing_status == FilingStatus.MARRIED_JOINT and self.spouse is None:
            raise ValueError("married_joint returns require spouse information")
        return self

    @property
    def is_married_joint(self) -> bool:
        return self.filing_status == FilingStatus.MARRIED_JOINT

    def people(self) -> Tuple[Person, ...]:
        """Filers on the return: the primary, plus the spouse on a joint return."""
        if self.is_married_joint and self.spouse is not None:
            return (self.primary, self.spouse)
        return (self.primary,)

    def person(self, role: PersonRole) -> Optional[Person]:
        return self.spouse if role == PersonRole.SPOUSE else self.primary
