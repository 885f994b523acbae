from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


BracketTable = Dict[str, List[Tuple[float, float]]]
StatusTable = Dict[str, float]

FILING_STATUSES = (
    "single",
    "married_joint",
    "married_separate",
    "head_of_household",
    "qualifying_widow",
)


@dataclass(frozen=True)
class TaxYearConfig:
    """
    Centralized constants for a given tax year.

    The form registry receives one of these at construction; line bodies read
    thresholds from it instead of module-level tables, so moving to a new
    tax year never touches a line.

    NOTE: Values here should be reviewed annually against IRS published figures.
    """

    tax_year: int
    ordinary_income_brackets: BracketTable
    standard_deduction: StatusTable
    additional_standard_deduction_over_65_or_blind: StatusTable

    # Fillable positions per form tag on this year's PDFs
    field_positions: Dict[str, int] = field(default_factory=dict)

    # Dependent standard deduction: greater of the minimum or earned income + add-on
    dependent_standard_deduction_min: float = 1350.0
    dependent_standard_deduction_earned_addon: float = 450.0

    # Preferential rate thresholds for Qualified Dividends / Long-Term Capital Gains
    qd_ltcg_0_rate_threshold: Optional[StatusTable] = None
    qd_ltcg_15_rate_threshold: Optional[StatusTable] = None

    # Self-employment (Schedule SE)
    se_net_earnings_factor: float = 0.9235  # 92.35%
    se_minimum_net_earnings: float = 400.0
    ss_wage_base: float = 176100.0
    ss_rate: float = 0.124  # 12.4% Social Security (up to wage base)
    medicare_rate: float = 0.029  # 2.9% Medicare (no wage base limit)
    employee_ss_rate: float = 0.062

    # Additional Medicare Tax (Form 8959)
    additional_medicare_tax_rate: float = 0.009
    additional_medicare_threshold: Optional[StatusTable] = None
    employee_medicare_rate: float = 0.0145

    # Net Investment Income Tax (Form 8960)
    niit_rate: float = 0.038
    niit_threshold: Optional[StatusTable] = None

    # Child Tax Credit / Credit for Other Dependents (Schedule 8812)
    child_tax_credit_amount: float = 2200.0
    other_dependent_credit_amount: float = 500.0
    child_tax_credit_refundable: float = 1700.0
    child_tax_credit_phaseout_start: Optional[StatusTable] = None
    child_tax_credit_phaseout_step: float = 1000.0
    child_tax_credit_phaseout_rate: float = 0.05  # $50 per $1,000 over threshold
    actc_earned_income_threshold: float = 2500.0
    actc_earned_income_rate: float = 0.15

    # EITC parameters by number of qualifying children (0, 1, 2, 3+)
    eitc_max_credit: Optional[Dict[int, float]] = None
    eitc_phase_in_rate: Optional[Dict[int, float]] = None
    eitc_phaseout_rate: Optional[Dict[int, float]] = None
    eitc_phaseout_start: Optional[Dict[str, Dict[int, float]]] = None
    eitc_investment_income_limit: float = 11950.0

    # Health Savings Account (Form 8889)
    hsa_individual_limit: float = 4300.0
    hsa_family_limit: float = 8550.0
    hsa_catchup_55_plus: float = 1000.0
    hsa_additional_tax_rate: float = 0.20

    # Schedule 1 adjustments
    educator_expense_limit: float = 300.0
    student_loan_interest_max: float = 2500.0
    student_loan_phaseout_start: Optional[StatusTable] = None
    student_loan_phaseout_end: Optional[StatusTable] = None

    # Schedule 1-A (2025-2028 deductions)
    schedule_1a_enabled: bool = True
    overtime_deduction_cap: Optional[StatusTable] = None
    tips_deduction_cap: float = 25000.0
    income_deduction_phaseout_start: Optional[StatusTable] = None
    income_deduction_phaseout_end: Optional[StatusTable] = None
    auto_loan_interest_cap: Optional[StatusTable] = None
    auto_loan_phaseout_start: Optional[StatusTable] = None
    auto_loan_phaseout_end: Optional[StatusTable] = None
    senior_deduction_amount: float = 6000.0
    senior_deduction_phaseout_start: Optional[StatusTable] = None
    senior_deduction_phaseout_rate: float = 0.06

    # Schedule A
    salt_cap: float = 40000.0
    salt_cap_floor: float = 10000.0
    salt_cap_phaseout_start: Optional[StatusTable] = None
    salt_cap_phaseout_rate: float = 0.30
    medical_expense_floor_pct: float = 0.075

    # Schedule B filing threshold for interest / ordinary dividends
    schedule_b_threshold: float = 1500.0

    # QBI (Form 8995 at or below the threshold, Form 8995-A above it)
    qbi_deduction_rate: float = 0.20
    qbi_threshold_start: Optional[StatusTable] = None
    qbi_threshold_end: Optional[StatusTable] = None  # End of the wage/UBIA phase-in range
    qbi_wage_limit_rate: float = 0.50
    qbi_wage_ubia_wage_rate: float = 0.25
    qbi_ubia_rate: float = 0.025

    # Alternative Minimum Tax (Form 6251)
    amt_exemption: Optional[StatusTable] = None
    amt_exemption_phaseout_start: Optional[StatusTable] = None
    amt_exemption_phaseout_rate: float = 0.25  # Exemption reduced by 25 cents per dollar over the start
    amt_rate_26: float = 0.26
    amt_rate_28: float = 0.28
    amt_28_threshold: Optional[StatusTable] = None  # AMT taxable excess where the 28% rate starts

    # Capital Loss Deduction Limits (IRC Section 1211(b))
    capital_loss_limit: float = 3000.0
    capital_loss_limit_mfs: float = 1500.0

    # Social Security Taxation Thresholds (IRS Pub. 915)
    ss_base1_single: float = 25000.0
    ss_base2_single: float = 34000.0
    ss_base1_mfj: float = 32000.0
    ss_base2_mfj: float = 44000.0

    # Depreciation - Form 4562 / IRC Section 168 (MACRS)
    section_179_limit: float = 1250000.0
    section_179_phaseout_threshold: float = 3130000.0
    bonus_depreciation_rate: float = 0.40

    # Home office - Form 8829 / Rev. Proc. 2013-13
    home_office_simplified_rate: float = 5.0
    home_office_simplified_max_sqft: float = 300.0
    home_office_depreciation_rate: float = 0.02564  # 39-year nonresidential, full year

    def for_status(self, table: Optional[Dict[str, Any]], filing_status: Any, default: float = 0.0) -> float:
        """Look up a filing-status keyed value; missing tables resolve to default."""
        if not table:
            return default
        key = getattr(filing_status, "value", filing_status)
        return table.get(key, table.get("single", default))

    def expected_field_count(self, tag: str) -> Optional[int]:
        return self.field_positions.get(tag)

    @staticmethod
    def for_2025() -> "TaxYearConfig":
        # Ordinary income brackets (marginal rates) for tax year 2025 (filing in 2026).
        brackets = {
            "single": [
                (0, 0.10),
                (11925, 0.12),
                (48475, 0.22),
                (103350, 0.24),
                (197300, 0.32),
                (250525, 0.35),
                (626350, 0.37),
            ],
            "married_joint": [
                (0, 0.10),
                (23850, 0.12),
                (96950, 0.22),
                (206700, 0.24),
                (394600, 0.32),
                (501050, 0.35),
                (751600, 0.37),
            ],
            "married_separate": [
                (0, 0.10),
                (11925, 0.12),
                (48475, 0.22),
                (103350, 0.24),
                (197300, 0.32),
                (250525, 0.35),
                (375800, 0.37),
            ],
            "head_of_household": [
                (0, 0.10),
                (17000, 0.12),
                (64850, 0.22),
                (103350, 0.24),
                (197300, 0.32),
                (250500, 0.35),
                (626350, 0.37),
            ],
            "qualifying_widow": [
                (0, 0.10),
                (23850, 0.12),
                (96950, 0.22),
                (206700, 0.24),
                (394600, 0.32),
                (501050, 0.35),
                (751600, 0.37),
            ],
        }

        # Standard deduction amounts (tax year 2025, as amended in July 2025).
        std = {
            "single": 15750.0,
            "married_joint": 31500.0,
            "married_separate": 15750.0,
            "head_of_household": 23625.0,
            "qualifying_widow": 31500.0,
        }

        # Additional standard deduction amounts per condition (65+ OR blind).
        additional = {
            "single": 2000.0,
            "head_of_household": 2000.0,
            "married_joint": 1600.0,
            "married_separate": 1600.0,
            "qualifying_widow": 1600.0,
        }

        qd_ltcg_0 = {
            "single": 48350.0,
            "married_joint": 96700.0,
            "married_separate": 48350.0,
            "head_of_household": 64750.0,
            "qualifying_widow": 96700.0,
        }
        qd_ltcg_15 = {
            "single": 533400.0,
            "married_joint": 600050.0,
            "married_separate": 300000.0,
            "head_of_household": 566700.0,
            "qualifying_widow": 600050.0,
        }

        # Additional Medicare Tax thresholds are not indexed
        additional_medicare = {
            "single": 200000.0,
            "married_joint": 250000.0,
            "married_separate": 125000.0,
            "head_of_household": 200000.0,
            "qualifying_widow": 200000.0,
        }

        niit = {
            "single": 200000.0,
            "married_joint": 250000.0,
            "married_separate": 125000.0,
            "head_of_household": 200000.0,
            "qualifying_widow": 250000.0,
        }

        ctc_phaseout = {
            "single": 200000.0,
            "married_joint": 400000.0,
            "married_separate": 200000.0,
            "head_of_household": 200000.0,
            "qualifying_widow": 200000.0,
        }

        eitc_max = {0: 649.0, 1: 4328.0, 2: 7152.0, 3: 8046.0}
        eitc_phase_in = {0: 0.0765, 1: 0.34, 2: 0.40, 3: 0.45}
        eitc_phaseout = {0: 0.0765, 1: 0.1598, 2: 0.2106, 3: 0.2106}
        eitc_phase_start = {
            "single": {0: 10620.0, 1: 23350.0, 2: 23350.0, 3: 23350.0},
            "married_joint": {0: 17730.0, 1: 30470.0, 2: 30470.0, 3: 30470.0},
            "married_separate": {0: 10620.0, 1: 23350.0, 2: 23350.0, 3: 23350.0},
            "head_of_household": {0: 10620.0, 1: 23350.0, 2: 23350.0, 3: 23350.0},
            "qualifying_widow": {0: 10620.0, 1: 23350.0, 2: 23350.0, 3: 23350.0},
        }

        # MFS cannot claim the student loan interest deduction
        student_loan_phase_start = {
            "single": 85000.0,
            "married_joint": 170000.0,
            "married_separate": 0.0,
            "head_of_household": 85000.0,
            "qualifying_widow": 85000.0,
        }
        student_loan_phase_end = {
            "single": 100000.0,
            "married_joint": 200000.0,
            "married_separate": 0.0,
            "head_of_household": 100000.0,
            "qualifying_widow": 100000.0,
        }

        overtime_cap = {
            "single": 12500.0,
            "married_joint": 25000.0,
            "married_separate": 12500.0,
            "head_of_household": 12500.0,
            "qualifying_widow": 12500.0,
        }
        income_deduction_start = {
            "single": 100000.0,
            "married_joint": 150000.0,
            "married_separate": 100000.0,
            "head_of_household": 125000.0,
            "qualifying_widow": 150000.0,
        }
        income_deduction_end = {
            "single": 150000.0,
            "married_joint": 200000.0,
            "married_separate": 150000.0,
            "head_of_household": 175000.0,
            "qualifying_widow": 200000.0,
        }
        auto_loan_cap = {
            "single": 10000.0,
            "married_joint": 20000.0,
            "married_separate": 10000.0,
            "head_of_household": 10000.0,
            "qualifying_widow": 10000.0,
        }
        auto_loan_start = {
            "single": 100000.0,
            "married_joint": 200000.0,
            "married_separate": 100000.0,
            "head_of_household": 100000.0,
            "qualifying_widow": 100000.0,
        }
        auto_loan_end = {
            "single": 125000.0,
            "married_joint": 250000.0,
            "married_separate": 125000.0,
            "head_of_household": 125000.0,
            "qualifying_widow": 125000.0,
        }
        senior_start = {
            "single": 75000.0,
            "married_joint": 150000.0,
            "married_separate": 75000.0,
            "head_of_household": 75000.0,
            "qualifying_widow": 75000.0,
        }

        salt_start = {
            "single": 500000.0,
            "married_joint": 500000.0,
            "married_separate": 250000.0,
            "head_of_household": 500000.0,
            "qualifying_widow": 500000.0,
        }

        qbi_threshold_start = {
            "single": 197300.0,
            "married_joint": 394600.0,
            "married_separate": 197300.0,
            "head_of_household": 197300.0,
            "qualifying_widow": 394600.0,
        }
        qbi_threshold_end = {
            "single": 247300.0,
            "married_joint": 494600.0,
            "married_separate": 247300.0,
            "head_of_household": 247300.0,
            "qualifying_widow": 494600.0,
        }

        # AMT exemption amounts (2025)
        amt_exemption = {
            "single": 88100.0,
            "married_joint": 137000.0,
            "married_separate": 68500.0,
            "head_of_household": 88100.0,
            "qualifying_widow": 137000.0,
        }
        amt_phaseout_start = {
            "single": 626350.0,
            "married_joint": 1252700.0,
            "married_separate": 626350.0,
            "head_of_household": 626350.0,
            "qualifying_widow": 1252700.0,
        }
        amt_28_threshold = {
            "single": 239100.0,
            "married_joint": 239100.0,
            "married_separate": 119550.0,
            "head_of_household": 239100.0,
            "qualifying_widow": 239100.0,
        }

        return TaxYearConfig(
            tax_year=2025,
            ordinary_income_brackets=brackets,
            standard_deduction=std,
            additional_standard_deduction_over_65_or_blind=additional,
            field_positions=dict(DEFAULT_FIELD_POSITIONS),
            qd_ltcg_0_rate_threshold=qd_ltcg_0,
            qd_ltcg_15_rate_threshold=qd_ltcg_15,
            ss_wage_base=176100.0,
            additional_medicare_threshold=additional_medicare,
            niit_threshold=niit,
            child_tax_credit_amount=2200.0,
            child_tax_credit_refundable=1700.0,
            child_tax_credit_phaseout_start=ctc_phaseout,
            eitc_max_credit=eitc_max,
            eitc_phase_in_rate=eitc_phase_in,
            eitc_phaseout_rate=eitc_phaseout,
            eitc_phaseout_start=eitc_phase_start,
            eitc_investment_income_limit=11950.0,
            hsa_individual_limit=4300.0,
            hsa_family_limit=8550.0,
            student_loan_interest_max=2500.0,
            student_loan_phaseout_start=student_loan_phase_start,
            student_loan_phaseout_end=student_loan_phase_end,
            schedule_1a_enabled=True,
            overtime_deduction_cap=overtime_cap,
            tips_deduction_cap=25000.0,
            income_deduction_phaseout_start=income_deduction_start,
            income_deduction_phaseout_end=income_deduction_end,
            auto_loan_interest_cap=auto_loan_cap,
            auto_loan_phaseout_start=auto_loan_start,
            auto_loan_phaseout_end=auto_loan_end,
            senior_deduction_amount=6000.0,
            senior_deduction_phaseout_start=senior_start,
            salt_cap=40000.0,
            salt_cap_floor=10000.0,
            salt_cap_phaseout_start=salt_start,
            qbi_threshold_start=qbi_threshold_start,
            qbi_threshold_end=qbi_threshold_end,
            amt_exemption=amt_exemption,
            amt_exemption_phaseout_start=amt_phaseout_start,
            amt_exemption_phaseout_rate=0.25,
            amt_28_threshold=amt_28_threshold,
            section_179_limit=1250000.0,
            section_179_phaseout_threshold=3130000.0,
            bonus_depreciation_rate=0.40,
        )

    @staticmethod
    def for_year(tax_year: int) -> "TaxYearConfig":
        """
        Load tax configuration for any supported year.

        2025 uses the inline table above; other years are read from
        src/config/tax_parameters/tax_year_{year}.yaml through the
        TaxConfigLoader, which also applies TAX_{year}_* environment overrides.

        Raises:
            ValueError: If the tax year is not supported
        """
        if tax_year == 2025:
            return TaxYearConfig.for_2025()

        from config.tax_config_loader import get_config_loader

        loader = get_config_loader()
        if tax_year not in loader.available_years():
            raise ValueError(
                f"Tax year {tax_year} is not supported. "
                f"Supported years: {sorted(set(loader.available_years()) | {2025})}"
            )

        return TaxYearConfig.from_mapping(tax_year, loader.load_config(tax_year))

    @staticmethod
    def from_mapping(tax_year: int, data: Dict[str, Any]) -> "TaxYearConfig":
        """Build a config from a parsed YAML mapping, defaulting what it omits."""

        # Convert YAML bracket format [threshold, rate] to tuple format (threshold, rate)
        def convert_brackets(yaml_brackets: dict) -> BracketTable:
            converted = {}
            for status, brackets in yaml_brackets.items():
                converted[status] = [(float(b[0]), float(b[1])) for b in brackets]
                # Add (0, 0.10) as the first bracket if not present
                if converted[status] and converted[status][0][0] != 0:
                    converted[status].insert(0, (0.0, 0.10))
            return converted

        def status_table(key: str) -> Optional[StatusTable]:
            raw = data.get(key) or {}
            return {k: float(v) for k, v in raw.items()} or None

        def per_children(raw: Optional[dict]) -> Optional[Dict[int, float]]:
            return {int(k): float(v) for k, v in raw.items()} if raw else None

        additional_raw = data.get("additional_standard_deduction_65_or_blind", {})
        additional = {
            "single": float(additional_raw.get("single", 1950)),
            "head_of_household": float(additional_raw.get("head_of_household", additional_raw.get("single", 1950))),
            "married_joint": float(additional_raw.get("married", 1550)),
            "married_separate": float(additional_raw.get("married", 1550)),
            "qualifying_widow": float(additional_raw.get("married", 1550)),
        }

        cap_gains = data.get("capital_gains_brackets", {})
        zero_rate = cap_gains.get("zero_rate_threshold", {})
        fifteen_rate = cap_gains.get("fifteen_rate_threshold", {})

        student_loan_raw = data.get("student_loan_phaseout", {})
        student_loan_start = {s: float(v.get("start", 0)) for s, v in student_loan_raw.items()}
        student_loan_end = {s: float(v.get("end", 0)) for s, v in student_loan_raw.items()}

        eitc_start_raw = data.get("eitc_phaseout_start", {})
        eitc_start = {s: per_children(v) for s, v in eitc_start_raw.items()}

        field_positions = dict(DEFAULT_FIELD_POSITIONS)
        field_positions.update({k: int(v) for k, v in (data.get("field_positions") or {}).items()})

        return TaxYearConfig(
            tax_year=tax_year,
            ordinary_income_brackets=convert_brackets(data.get("ordinary_income_brackets", {})),
            standard_deduction={k: float(v) for k, v in data.get("standard_deduction", {}).items()},
            additional_standard_deduction_over_65_or_blind=additional,
            field_positions=field_positions,
            dependent_standard_deduction_min=float(data.get("dependent_standard_deduction_min", 1350)),
            dependent_standard_deduction_earned_addon=float(data.get("dependent_standard_deduction_earned_addon", 450)),
            qd_ltcg_0_rate_threshold={k: float(v) for k, v in zero_rate.items()} or None,
            qd_ltcg_15_rate_threshold={k: float(v) for k, v in fifteen_rate.items()} or None,
            ss_wage_base=float(data.get("ss_wage_base", 176100)),
            ss_rate=float(data.get("ss_rate", 0.124)),
            medicare_rate=float(data.get("medicare_rate", 0.029)),
            additional_medicare_tax_rate=float(data.get("additional_medicare_tax_rate", 0.009)),
            additional_medicare_threshold=status_table("additional_medicare_threshold"),
            niit_rate=float(data.get("niit_rate", 0.038)),
            niit_threshold=status_table("niit_threshold"),
            child_tax_credit_amount=float(data.get("child_tax_credit_amount", 2000)),
            other_dependent_credit_amount=float(data.get("other_dependent_credit_amount", 500)),
            child_tax_credit_refundable=float(data.get("child_tax_credit_refundable", 1700)),
            child_tax_credit_phaseout_start=status_table("child_tax_credit_phaseout_start"),
            eitc_max_credit=per_children(data.get("eitc_max_credit")),
            eitc_phase_in_rate=per_children(data.get("eitc_phase_in_rate")),
            eitc_phaseout_rate=per_children(data.get("eitc_phaseout_rate")),
            eitc_phaseout_start=eitc_start or None,
            eitc_investment_income_limit=float(data.get("eitc_investment_income_limit", 11950)),
            hsa_individual_limit=float(data.get("hsa_individual_limit", 4300)),
            hsa_family_limit=float(data.get("hsa_family_limit", 8550)),
            hsa_catchup_55_plus=float(data.get("hsa_catchup_55_plus", 1000)),
            educator_expense_limit=float(data.get("educator_expense_limit", 300)),
            student_loan_interest_max=float(data.get("student_loan_interest_max", 2500)),
            student_loan_phaseout_start=student_loan_start or None,
            student_loan_phaseout_end=student_loan_end or None,
            schedule_1a_enabled=bool(data.get("schedule_1a_enabled", False)),
            salt_cap=float(data.get("salt_cap", 10000)),
            salt_cap_floor=float(data.get("salt_cap_floor", data.get("salt_cap", 10000))),
            salt_cap_phaseout_start=status_table("salt_cap_phaseout_start"),
            medical_expense_floor_pct=float(data.get("medical_expense_floor_pct", 0.075)),
            qbi_deduction_rate=float(data.get("qbi_deduction_rate", 0.20)),
            qbi_threshold_start=status_table("qbi_threshold_start"),
            qbi_threshold_end=status_table("qbi_threshold_end"),
            amt_exemption=status_table("amt_exemption"),
            amt_exemption_phaseout_start=status_table("amt_exemption_phaseout_start"),
            amt_exemption_phaseout_rate=float(data.get("amt_exemption_phaseout_rate", 0.25)),
            amt_rate_26=float(data.get("amt_rate_26", 0.26)),
            amt_rate_28=float(data.get("amt_rate_28", 0.28)),
            amt_28_threshold=status_table("amt_28_threshold"),
            capital_loss_limit=float(data.get("capital_loss_limit", 3000)),
            capital_loss_limit_mfs=float(data.get("capital_loss_limit_mfs", 1500)),
            section_179_limit=float(data.get("section_179_limit", 1250000)),
            section_179_phaseout_threshold=float(data.get("section_179_phaseout_threshold", 3130000)),
            bonus_depreciation_rate=float(data.get("bonus_depreciation_rate", 0.40)),
        )


# Fillable positions on the current-year PDFs. Years whose PDFs differ
# override entries under `field_positions` in their YAML file.
DEFAULT_FIELD_POSITIONS: Dict[str, int] = {
    "f1040": 51,
    "f1040v": 5,
    "f1040s1": 16,
    "f1040s1a": 21,
    "f1040s2": 10,
    "f1040s3": 11,
    "f1040sa": 20,
    "f1040sb": 9,
    "f1040sc": 38,
    "f1040sd": 11,
    "f1040sse": 14,
    "f1040s8812": 20,
    "f1040seic": 6,
    "f4562": 16,
    "f8829": 37,
    "f8889": 14,
    "f8959": 19,
    "f8960": 13,
    "f8995": 12,
    "f8995a": 36,
    "f6251": 34,
    "f8938": 2,
}
