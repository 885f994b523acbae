from .taxpayer import TaxpayerInfo, FilingStatus, Person, PersonRole, Dependent, Address
from .income import (
    W2Info,
    Form1099Int,
    Form1099Div,
    Form1099R,
    SSA1099,
    CapitalTransaction,
    OtherIncome,
)
from .business import BusinessInfo, BusinessExpenses, DepreciableAsset, HomeOffice, HomeOfficeMethod
from .return_input import (
    ReturnInput,
    HSAInfo,
    HSACoverageType,
    ItemizedDeductions,
    Adjustments,
    AdditionalDeductions,
    Credits,
    Payments,
    EstimatedTaxPayment,
    RefundElection,
    CarryForwards,
    AMTAdjustments,
    Elections,
)

__all__ = [
    'TaxpayerInfo',
    'FilingStatus',
    'Person',
    'PersonRole',
    'Dependent',
    'Address',
    'W2Info',
    'Form1099Int',
    'Form1099Div',
    'Form1099R',
    'SSA1099',
    'CapitalTransaction',
    'OtherIncome',
    'BusinessInfo',
    'BusinessExpenses',
    'DepreciableAsset',
    'HomeOffice',
    'HomeOfficeMethod',
    'ReturnInput',
    'HSAInfo',
    'HSACoverageType',
    'ItemizedDeductions',
    'Adjustments',
    'AdditionalDeductions',
    'Credits',
    'Payments',
    'EstimatedTaxPayment',
    'RefundElection',
    'CarryForwards',
    'AMTAdjustments',
    'Elections',
]
