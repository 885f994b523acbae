#!/usr/bin/env python3
"""
Example script showing how to compute a return programmatically
"""
import sys
import os
from datetime import date

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from models import (
    BusinessExpenses,
    BusinessInfo,
    Dependent,
    FilingStatus,
    HomeOffice,
    Person,
    ReturnInput,
    TaxpayerInfo,
    W2Info,
)
from services.logging_config import configure_logging
from services.return_service import compare_scenarios, compute_return


def print_result(result):
    summary = result.summary
    print(f"Forms attached:   {', '.join(result.tags)}")
    print(f"Total income:     ${summary.total_income:,}")
    print(f"AGI:              ${summary.adjusted_gross_income:,}")
    print(f"Taxable income:   ${summary.taxable_income:,}")
    print(f"Total tax:        ${summary.total_tax:,}")
    print(f"Refund:           ${summary.refund:,}")
    print(f"Amount owed:      ${summary.amount_owed:,}")
    print(f"Line evaluations: {result.line_evaluations}")
    print()


def example_single_taxpayer():
    """Example: Single taxpayer with W-2 income"""
    print("Example 1: Single Taxpayer with W-2 Income")
    print("=" * 60)

    return_input = ReturnInput(
        taxpayer=TaxpayerInfo(
            primary=Person(first_name="John", last_name="Doe", ssn="123456789"),
            filing_status=FilingStatus.SINGLE,
        ),
        w2s=(W2Info(employer_name="ABC Company", wages=75000.0, federal_withholding=12000.0),),
    )
    print_result(compute_return(return_input, return_id="example-1"))


def example_married_joint():
    """Example: Married filing jointly with children"""
    print("Example 2: Married Filing Jointly with Children")
    print("=" * 60)

    return_input = ReturnInput(
        taxpayer=TaxpayerInfo(
            primary=Person(first_name="Jane", last_name="Smith", ssn="111223333"),
            spouse=Person(first_name="John", last_name="Smith", ssn="444556666"),
            filing_status=FilingStatus.MARRIED_JOINT,
            dependents=(
                Dependent(first_name="Alice", last_name="Smith", date_of_birth=date(2017, 4, 2)),
                Dependent(first_name="Bob", last_name="Smith", date_of_birth=date(2020, 9, 14)),
            ),
        ),
        w2s=(
            W2Info(employer_name="Tech Corp", wages=31000.0, federal_withholding=900.0),
            W2Info(employer_name="Design Inc", wages=9000.0, federal_withholding=0.0),
        ),
    )
    print_result(compute_return(return_input, return_id="example-2"))


def example_home_office_scenarios():
    """Example: Sole proprietor comparing home office methods"""
    print("Example 3: Home Office Method Comparison")
    print("=" * 60)

    def business_return(home_office):
        return ReturnInput(
            taxpayer=TaxpayerInfo(
                primary=Person(first_name="Robert", last_name="Johnson", ssn="777889999"),
                filing_status=FilingStatus.SINGLE,
            ),
            businesses=(BusinessInfo(
                name="Johnson Design",
                gross_receipts=85000.0,
                expenses=BusinessExpenses(supplies=4000.0, advertising=1500.0),
                home_office=home_office,
            ),),
        )

    regular = business_return(HomeOffice(
        business_area_sqft=250.0,
        total_area_sqft=2000.0,
        mortgage_interest=14000.0,
        real_estate_taxes=5000.0,
        utilities=3600.0,
        home_basis=350000.0,
        land_value=70000.0,
    ))
    simplified = business_return(HomeOffice(method="simplified", business_area_sqft=250.0))
    no_office = business_return(None)

    comparison = compare_scenarios(regular, {"simplified": simplified, "no home office": no_office})
    print(f"Regular method total tax: ${comparison.base.total_tax:,}")
    for scenario in comparison.scenarios:
        print(f"  {scenario.name:16s} tax change: ${scenario.tax_difference:,}"
              f"  forms removed: {scenario.forms_removed or '-'}")
    print(f"Best alternative: {comparison.best or 'keep the regular method'}")
    print()


if __name__ == "__main__":
    configure_logging(level="WARNING")

    example_single_taxpayer()
    example_married_joint()
    example_home_office_scenarios()

    print("=" * 60)
    print("All examples completed!")
    print("=" * 60)
