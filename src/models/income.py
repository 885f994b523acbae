from datetime import date
from typing import Optional
from pydantic import Field

from models.taxpayer import FrozenModel, PersonRole


class W2Info(FrozenModel):
    """Form W-2 wage and tax statement."""
    employer_name: str
    employer_ein: str = ""
    owner: PersonRole = PersonRole.PRIMARY
    wages: float = Field(default=0.0, ge=0, description="Box 1: Wages, tips, other compensation")
    federal_withholding: float = Field(default=0.0, ge=0, description="Box 2: Federal income tax withheld")
    social_security_wages: Optional[float] = Field(default=None, ge=0, description="Box 3; defaults to box 1")
    social_security_tax_withheld: float = Field(default=0.0, ge=0, description="Box 4")
    medicare_wages: Optional[float] = Field(default=None, ge=0, description="Box 5; defaults to box 1")
    medicare_tax_withheld: float = Field(default=0.0, ge=0, description="Box 6")
    hsa_employer_contributions: float = Field(default=0.0, ge=0, description="Box 12 code W")

    @property
    def box3(self) -> float:
        return self.wages if self.social_security_wages is None else self.social_security_wages

    @property
    def box5(self) -> float:
        return self.wages if self.medicare_wages is None else self.medicare_wages


class Form1099Int(FrozenModel):
    payer: str
    interest: float = Field(default=0.0, ge=0, description="Box 1: Interest income")
    tax_exempt_interest: float = Field(default=0.0, ge=0, description="Box 8")
    federal_withholding: float = Field(default=0.0, ge=0, description="Box 4")


class Form1099Div(FrozenModel):
    payer: str
    ordinary_dividends: float = Field(default=0.0, ge=0, description="Box 1a")
    qualified_dividends: float = Field(default=0.0, ge=0, description="Box 1b")
    capital_gain_distributions: float = Field(default=0.0, ge=0, description="Box 2a")
    federal_withholding: float = Field(default=0.0, ge=0, description="Box 4")


class Form1099R(FrozenModel):
    """Retirement distribution. IRA distributions go to 1040 line 4, pensions to line 5."""
    payer: str
    owner: PersonRole = PersonRole.PRIMARY
    gross_distribution: float = Field(default=0.0, ge=0, description="Box 1")
    taxable_amount: float = Field(default=0.0, ge=0, description="Box 2a")
    is_ira: bool = False
    federal_withholding: float = Field(default=0.0, ge=0, description="Box 4")


class SSA1099(FrozenModel):
    owner: PersonRole = PersonRole.PRIMARY
    net_benefits: float = Field(default=0.0, description="Box 5 (can be negative after repayments)")
    federal_withholding: float = Field(default=0.0, ge=0, description="Box 6")


class CapitalTransaction(FrozenModel):
    """One sale reported on Form 8949 and summarized on Schedule D."""
    description: str
    date_acquired: Optional[date] = None
    date_sold: Optional[date] = None
    proceeds: float = Field(default=0.0, ge=0)
    cost_basis: float = Field(default=0.0, ge=0)
    adjustment: float = Field(default=0.0, description="Wash sale or other basis adjustment")
    is_long_term: bool = False

    @property
    def gain(self) -> float:
        return self.proceeds - self.cost_basis + self.adjustment


class OtherIncome(FrozenModel):
    """Schedule 1 Part I items not tied to another document."""
    taxable_refunds: float = Field(default=0.0, ge=0, description="Line 1: Taxable state/local refunds")
    alimony_received: float = Field(default=0.0, ge=0, description="Line 2a: Pre-2019 divorce alimony")
    unemployment_compensation: float = Field(default=0.0, ge=0, description="Line 7")
    other_income: float = Field(default=0.0, description="Line 8z")
    other_income_description: str = ""
