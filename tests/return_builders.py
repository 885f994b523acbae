"""Builders for ReturnInput test data with sensible defaults."""

from models import BusinessInfo, Person, ReturnInput, TaxpayerInfo, W2Info


def make_taxpayer(filing_status="single", **kwargs) -> TaxpayerInfo:
    """Taxpayer with a primary filer (and a spouse on joint returns)."""
    primary = kwargs.pop("primary", None) or Person(
        first_name="Alex", last_name="Rivera", ssn="123-45-6789",
    )
    spouse = kwargs.pop("spouse", None)
    if spouse is None and filing_status == "married_joint":
        spouse = Person(first_name="Sam", last_name="Rivera", ssn="987-65-4321")
    return TaxpayerInfo(primary=primary, spouse=spouse, filing_status=filing_status, **kwargs)


def make_return(filing_status="single", taxpayer=None, **kwargs) -> ReturnInput:
    return ReturnInput(
        tax_year=kwargs.pop("tax_year", 2025),
        taxpayer=taxpayer or make_taxpayer(filing_status),
        **kwargs,
    )


def make_w2(wages, withholding=0.0, **kwargs) -> W2Info:
    return W2Info(employer_name=kwargs.pop("employer_name", "Acme Corp"),
                  wages=wages, federal_withholding=withholding, **kwargs)


def make_business(**kwargs) -> BusinessInfo:
    return BusinessInfo(name=kwargs.pop("name", "Rivera Consulting"), **kwargs)
