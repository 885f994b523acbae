"""
Sole proprietorship input for Schedule C, Form 4562 and Form 8829.

Expense fields map one-to-one onto Schedule C Part II lines; home office
fields onto Form 8829 Part I/II; depreciable assets onto Form 4562 Parts I-II.
"""

from datetime import date
from enum import Enum
from typing import Optional, Tuple
from pydantic import Field

from models.taxpayer import FrozenModel, PersonRole


class HomeOfficeMethod(str, Enum):
    """Simplified ($5/sqft) or regular (actual expenses) method."""
    SIMPLIFIED = "simplified"
    REGULAR = "regular"


class BusinessExpenses(FrozenModel):
    """Schedule C Part II (depreciation and home office come from their own forms)."""
    advertising: float = Field(default=0.0, ge=0, description="Line 8")
    car_and_truck: float = Field(default=0.0, ge=0, description="Line 9")
    commissions_and_fees: float = Field(default=0.0, ge=0, description="Line 10")
    contract_labor: float = Field(default=0.0, ge=0, description="Line 11")
    depletion: float = Field(default=0.0, ge=0, description="Line 12")
    employee_benefits: float = Field(default=0.0, ge=0, description="Line 14")
    insurance: float = Field(default=0.0, ge=0, description="Line 15")
    mortgage_interest: float = Field(default=0.0, ge=0, description="Line 16a")
    other_interest: float = Field(default=0.0, ge=0, description="Line 16b")
    legal_and_professional: float = Field(default=0.0, ge=0, description="Line 17")
    office_expense: float = Field(default=0.0, ge=0, description="Line 18")
    pension_plans: float = Field(default=0.0, ge=0, description="Line 19")
    rent_vehicles_equipment: float = Field(default=0.0, ge=0, description="Line 20a")
    rent_other_property: float = Field(default=0.0, ge=0, description="Line 20b")
    repairs: float = Field(default=0.0, ge=0, description="Line 21")
    supplies: float = Field(default=0.0, ge=0, description="Line 22")
    taxes_and_licenses: float = Field(default=0.0, ge=0, description="Line 23")
    travel: float = Field(default=0.0, ge=0, description="Line 24a")
    meals: float = Field(default=0.0, ge=0, description="Line 24b before the 50% limit")
    utilities: float = Field(default=0.0, ge=0, description="Line 25")
    wages: float = Field(default=0.0, ge=0, description="Line 26")
    other_expenses: float = Field(default=0.0, ge=0, description="Line 27a")


class DepreciableAsset(FrozenModel):
    """Property placed in service this year (Form 4562)."""
    description: str
    cost: float = Field(default=0.0, ge=0)
    placed_in_service: Optional[date] = None
    business_use_percentage: float = Field(default=100.0, ge=0, le=100)
    section_179_elected: float = Field(default=0.0, ge=0, description="Amount elected under Section 179")
    bonus_eligible: bool = True
    recovery_period_years: int = Field(default=5, description="MACRS recovery period: 3, 5, 7, 10, 15 or 20")

    @property
    def business_basis(self) -> float:
        return self.cost * self.business_use_percentage / 100.0


class HomeOffice(FrozenModel):
    """Business use of home (Form 8829 or the simplified method)."""
    method: HomeOfficeMethod = HomeOfficeMethod.REGULAR
    business_area_sqft: float = Field(default=0.0, ge=0, description="Form 8829 line 1")
    total_area_sqft: float = Field(default=0.0, ge=0, description="Form 8829 line 2")
    mortgage_interest: float = Field(default=0.0, ge=0)
    real_estate_taxes: float = Field(default=0.0, ge=0)
    insurance: float = Field(default=0.0, ge=0)
    repairs: float = Field(default=0.0, ge=0)
    utilities: float = Field(default=0.0, ge=0)
    other_expenses: float = Field(default=0.0, ge=0)
    home_basis: float = Field(default=0.0, ge=0, description="Smaller of adjusted basis or FMV")
    land_value: float = Field(default=0.0, ge=0)
    prior_year_operating_carryover: float = Field(default=0.0, ge=0, description="2024 Form 8829 line 43")
    prior_year_depreciation_carryover: float = Field(default=0.0, ge=0, description="2024 Form 8829 line 44")


class BusinessInfo(FrozenModel):
    """One sole proprietorship reported on Schedule C."""
    name: str
    ein: str = ""
    owner: PersonRole = PersonRole.PRIMARY
    principal_business_code: str = ""
    gross_receipts: float = Field(default=0.0, ge=0, description="Line 1")
    returns_and_allowances: float = Field(default=0.0, ge=0, description="Line 2")
    cost_of_goods_sold: float = Field(default=0.0, ge=0, description="Line 4 (Part III total)")
    other_income: float = Field(default=0.0, description="Line 6")
    expenses: BusinessExpenses = Field(default_factory=BusinessExpenses)
    assets: Tuple[DepreciableAsset, ...] = ()
    home_office: Optional[HomeOffice] = None
    is_sstb: bool = Field(default=False, description="Specified service trade or business")
    ubia_qualified_property: float = Field(
        default=0.0, ge=0,
        description="Unadjusted basis of qualified property placed in service in earlier years",
    )

    @property
    def ubia(self) -> float:
        """UBIA of all qualified property, including assets placed in service this year."""
        return self.ubia_qualified_property + sum(asset.business_basis for asset in self.assets)
