"""
ReturnInput: one taxpayer's structured data for one tax year.

Built once by the caller (import/validation layers live outside this
package), then shared read-only by every form in a computation pass.
Pydantic validation is the gate for malformed input: negative amounts and
unknown fields are rejected here, before any form line runs.
"""

from typing import Optional, Tuple
from enum import Enum
from pydantic import Field

from models.taxpayer import FrozenModel, TaxpayerInfo, PersonRole
from models.income import (
    W2Info,
    Form1099Int,
    Form1099Div,
    Form1099R,
    SSA1099,
    CapitalTransaction,
    OtherIncome,
)
from models.business import BusinessInfo


class HSACoverageType(str, Enum):
    SELF_ONLY = "self_only"
    FAMILY = "family"


class HSAInfo(FrozenModel):
    """Health savings account activity (Form 8889)."""
    owner: PersonRole = PersonRole.PRIMARY
    coverage_type: HSACoverageType = HSACoverageType.SELF_ONLY
    contributions: float = Field(default=0.0, ge=0, description="Line 2: Personal contributions")
    total_distributions: float = Field(default=0.0, ge=0, description="Line 14a")
    qualified_medical_expenses: float = Field(default=0.0, ge=0, description="Line 15")


class ItemizedDeductions(FrozenModel):
    """Schedule A inputs."""
    medical_and_dental: float = Field(default=0.0, ge=0, description="Line 1")
    state_local_income_tax: float = Field(default=0.0, ge=0, description="Line 5a")
    real_estate_taxes: float = Field(default=0.0, ge=0, description="Line 5b")
    personal_property_taxes: float = Field(default=0.0, ge=0, description="Line 5c")
    mortgage_interest: float = Field(default=0.0, ge=0, description="Line 8a")
    charitable_cash: float = Field(default=0.0, ge=0, description="Line 11")
    charitable_noncash: float = Field(default=0.0, ge=0, description="Line 12")
    casualty_losses: float = Field(default=0.0, ge=0, description="Line 15")
    other_itemized: float = Field(default=0.0, ge=0, description="Line 16")


class Adjustments(FrozenModel):
    """Schedule 1 Part II inputs."""
    educator_expenses: float = Field(default=0.0, ge=0, description="Line 11 before the limit")
    alimony_paid: float = Field(default=0.0, ge=0, description="Line 19a")
    ira_deduction: float = Field(default=0.0, ge=0, description="Line 20")
    student_loan_interest: float = Field(default=0.0, ge=0, description="Line 21 before the limit")


class AdditionalDeductions(FrozenModel):
    """Schedule 1-A inputs."""
    qualified_overtime: float = Field(default=0.0, ge=0, description="Premium portion of overtime pay")
    qualified_tips: float = Field(default=0.0, ge=0)
    auto_loan_interest: float = Field(default=0.0, ge=0)
    vehicle_assembled_in_us: bool = Field(default=False, description="Final assembly occurred in the United States")


class Credits(FrozenModel):
    """Credits computed by forms this package does not model, entered as amounts."""
    foreign_tax_credit: float = Field(default=0.0, ge=0, description="Schedule 3 line 1")
    child_care_credit: float = Field(default=0.0, ge=0, description="Schedule 3 line 2")
    education_credit: float = Field(default=0.0, ge=0, description="Schedule 3 line 3")
    retirement_savings_credit: float = Field(default=0.0, ge=0, description="Schedule 3 line 4")
    refundable_education_credit: float = Field(default=0.0, ge=0, description="Form 1040 line 29")
    net_premium_tax_credit: float = Field(default=0.0, ge=0, description="Schedule 3 line 9")
    excess_advance_premium_tax_credit: float = Field(default=0.0, ge=0, description="Schedule 2 line 1a")


class EstimatedTaxPayment(FrozenModel):
    label: str = ""
    amount: float = Field(default=0.0, ge=0)


class Payments(FrozenModel):
    estimated_payments: Tuple[EstimatedTaxPayment, ...] = ()
    prior_year_overpayment_applied: float = Field(default=0.0, ge=0)
    extension_payment: float = Field(default=0.0, ge=0, description="Schedule 3 line 10")


class RefundElection(FrozenModel):
    applied_to_next_year: float = Field(default=0.0, ge=0, description="Form 1040 line 36")
    routing_number: str = ""
    account_number: str = ""


class CarryForwards(FrozenModel):
    short_term_capital_loss: float = Field(default=0.0, ge=0, description="Schedule D line 6")
    long_term_capital_loss: float = Field(default=0.0, ge=0, description="Schedule D line 14")


class AMTAdjustments(FrozenModel):
    """Form 6251 Part I adjustments and preferences not derived from other forms."""
    private_activity_bond_interest: float = Field(default=0.0, ge=0, description="Line 2g")
    incentive_stock_options: float = Field(default=0.0, ge=0, description="Line 2i: bargain element")
    other_adjustments: float = Field(default=0.0, description="Line 3")


class Elections(FrozenModel):
    force_itemize: bool = False
    claim_eic: bool = True


class ReturnInput(FrozenModel):
    """Everything the form graph reads for one return."""
    tax_year: Optional[int] = Field(default=None, description="Defaults to the engine's default tax year")
    taxpayer: TaxpayerInfo
    w2s: Tuple[W2Info, ...] = ()
    interest_1099s: Tuple[Form1099Int, ...] = ()
    dividend_1099s: Tuple[Form1099Div, ...] = ()
    retirement_1099s: Tuple[Form1099R, ...] = ()
    ssa_1099s: Tuple[SSA1099, ...] = ()
    capital_transactions: Tuple[CapitalTransaction, ...] = ()
    other_income: OtherIncome = Field(default_factory=OtherIncome)
    businesses: Tuple[BusinessInfo, ...] = ()
    hsa: Optional[HSAInfo] = None
    itemized: ItemizedDeductions = Field(default_factory=ItemizedDeductions)
    adjustments: Adjustments = Field(default_factory=Adjustments)
    additional_deductions: AdditionalDeductions = Field(default_factory=AdditionalDeductions)
    credits: Credits = Field(default_factory=Credits)
    payments: Payments = Field(default_factory=Payments)
    refund: RefundElection = Field(default_factory=RefundElection)
    carry_forwards: CarryForwards = Field(default_factory=CarryForwards)
    amt_adjustments: AMTAdjustments = Field(default_factory=AMTAdjustments)
    elections: Elections = Field(default_factory=Elections)
    foreign_account: bool = Field(default=False, description="Schedule B Part III line 7a")

    @property
    def primary_business(self) -> Optional[BusinessInfo]:
        """The business reported on the return's Schedule C."""
        return self.businesses[0] if self.businesses else None
