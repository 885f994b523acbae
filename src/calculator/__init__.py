from .tax_year_config import TaxYearConfig
from .tax_table import ordinary_income_tax, qualified_dividends_capital_gain_tax

__all__ = [
    "TaxYearConfig",
    "ordinary_income_tax",
    "qualified_dividends_capital_gain_tax",
]
