"""Pytest configuration and fixtures for the form graph test suite."""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from calculator.tax_year_config import TaxYearConfig  # noqa: E402
from config.settings import EngineSettings  # noqa: E402
from models import (  # noqa: E402
    AdditionalDeductions,
    Adjustments,
    BusinessExpenses,
    CapitalTransaction,
    Credits,
    Dependent,
    DepreciableAsset,
    Elections,
    Form1099Div,
    Form1099Int,
    HomeOffice,
    HomeOfficeMethod,
    HSAInfo,
    ItemizedDeductions,
    Person,
    ReturnInput,
    SSA1099,
)
from return_builders import make_business, make_return, make_taxpayer, make_w2  # noqa: E402


@pytest.fixture
def config() -> TaxYearConfig:
    return TaxYearConfig.for_2025()


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings(max_line_depth=200, trace_dependencies=False, log_level="INFO", log_json=False)


@pytest.fixture
def zero_document_return() -> ReturnInput:
    """A single filer with no income documents at all."""
    return make_return()


@pytest.fixture
def wage_return() -> ReturnInput:
    """One W-2: $50,000 wages, $5,000 withheld."""
    return make_return(w2s=(make_w2(50000.0, 5000.0),))


@pytest.fixture
def home_office_return() -> ReturnInput:
    """Sole proprietor using the regular home office method, with equipment."""
    business = make_business(
        gross_receipts=60000.0,
        expenses=BusinessExpenses(advertising=2000.0, supplies=3000.0, meals=1000.0),
        assets=(
            DepreciableAsset(description="Laptop", cost=3000.0, recovery_period_years=5),
            DepreciableAsset(description="Desk", cost=2000.0, section_179_elected=2000.0,
                             recovery_period_years=7),
        ),
        home_office=HomeOffice(
            method=HomeOfficeMethod.REGULAR,
            business_area_sqft=200.0,
            total_area_sqft=2000.0,
            mortgage_interest=12000.0,
            real_estate_taxes=6000.0,
            insurance=1500.0,
            utilities=3000.0,
            home_basis=400000.0,
            land_value=100000.0,
        ),
    )
    return make_return(businesses=(business,))


@pytest.fixture
def family_return() -> ReturnInput:
    """Married couple with two young children and modest wages."""
    taxpayer = make_taxpayer(
        "married_joint",
        primary=Person(first_name="Jordan", last_name="Lee", ssn="111-22-3333",
                       date_of_birth=date(1988, 4, 2)),
        spouse=Person(first_name="Casey", last_name="Lee", ssn="444-55-6666",
                      date_of_birth=date(1990, 9, 12)),
        dependents=(
            Dependent(first_name="Riley", last_name="Lee", date_of_birth=date(2018, 1, 5)),
            Dependent(first_name="Avery", last_name="Lee", date_of_birth=date(2021, 6, 20)),
        ),
    )
    return make_return(taxpayer=taxpayer, w2s=(make_w2(38000.0, 1200.0),))


@pytest.fixture
def kitchen_sink_return() -> ReturnInput:
    """
    A return that attaches nearly every catalog form, used to exercise as
    many dependency edges as possible.
    """
    taxpayer = make_taxpayer(
        "married_joint",
        primary=Person(first_name="Morgan", last_name="Price", ssn="222-33-4444",
                       date_of_birth=date(1958, 3, 1)),
        spouse=Person(first_name="Taylor", last_name="Price", ssn="555-66-7777",
                      date_of_birth=date(1962, 7, 15)),
        dependents=(
            Dependent(first_name="Quinn", last_name="Price", date_of_birth=date(2012, 2, 2)),
        ),
    )
    business = make_business(
        gross_receipts=140000.0,
        expenses=BusinessExpenses(contract_labor=10000.0, supplies=4000.0, meals=2000.0),
        assets=(DepreciableAsset(description="Van", cost=45000.0, section_179_elected=20000.0),),
        home_office=HomeOffice(
            business_area_sqft=300.0, total_area_sqft=2400.0,
            mortgage_interest=15000.0, real_estate_taxes=8000.0, utilities=4000.0,
            home_basis=500000.0, land_value=120000.0,
        ),
    )
    return make_return(
        taxpayer=taxpayer,
        businesses=(business,),
        w2s=(
            make_w2(210000.0, 30000.0, medicare_tax_withheld=3500.0, hsa_employer_contributions=1000.0),
            make_w2(40000.0, 4000.0, employer_name="Side Gig LLC", owner="spouse"),
        ),
        interest_1099s=(Form1099Int(payer="First Bank", interest=2500.0, tax_exempt_interest=300.0),),
        dividend_1099s=(Form1099Div(payer="Index Fund", ordinary_dividends=6000.0,
                                    qualified_dividends=5000.0, capital_gain_distributions=800.0),),
        ssa_1099s=(SSA1099(net_benefits=24000.0),),
        capital_transactions=(
            CapitalTransaction(description="Stock A", proceeds=30000.0, cost_basis=18000.0, is_long_term=True),
            CapitalTransaction(description="Stock B", proceeds=5000.0, cost_basis=7000.0),
        ),
        hsa=HSAInfo(contributions=3000.0, total_distributions=2000.0, qualified_medical_expenses=1500.0),
        itemized=ItemizedDeductions(state_local_income_tax=18000.0, real_estate_taxes=9000.0,
                                    mortgage_interest=14000.0, charitable_cash=5000.0),
        adjustments=Adjustments(educator_expenses=400.0, ira_deduction=1000.0, student_loan_interest=1500.0),
        additional_deductions=AdditionalDeductions(qualified_overtime=3000.0, qualified_tips=1000.0),
        credits=Credits(foreign_tax_credit=120.0),
        elections=Elections(force_itemize=True),
    )
