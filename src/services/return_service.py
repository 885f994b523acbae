"""
Return Service - computes one return end to end.

Builds a fresh FormRegistry for the input, selects the attached forms,
serializes their fields and reads the cross-form summary off the root
form. Graph-integrity errors are logged with their line path and re-raised
unchanged; bad taxpayer data never gets this far because ReturnInput
validation rejects it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from calculator.decimal_math import round_currency
from calculator.tax_year_config import TaxYearConfig
from config.settings import EngineSettings
from forms.errors import FormGraphError
from forms.fields import FormField
from forms.form_node import FormNode
from forms.registry import FormRegistry, IncludedForm
from models.return_input import ReturnInput
from services.logging_config import CalculationLogger, get_logger, return_id_var

logger = get_logger(__name__)


class FieldOutput(BaseModel):
    """One serialized field, ready for a PDF filler."""
    model_config = ConfigDict(frozen=True)

    position: int
    line: str
    kind: str
    value: Union[bool, int, float, str]

    @classmethod
    def from_form_field(cls, form_field: FormField) -> "FieldOutput":
        return cls(
            position=form_field.position,
            line=form_field.line,
            kind=form_field.kind.value,
            value=form_field.value,
        )


class ReturnSummary(BaseModel):
    """Cross-form totals in whole dollars."""
    model_config = ConfigDict(frozen=True)

    tax_year: int
    filing_status: str
    total_income: Decimal = Field(description="Form 1040 line 9")
    adjusted_gross_income: Decimal = Field(description="Form 1040 line 11")
    taxable_income: Decimal = Field(description="Form 1040 line 15")
    total_tax: Decimal = Field(description="Form 1040 line 24")
    total_withholding: Decimal = Field(description="Form 1040 line 25d")
    total_payments: Decimal = Field(description="Form 1040 line 33")
    refund: Decimal = Field(description="Form 1040 line 35a")
    amount_owed: Decimal = Field(description="Form 1040 line 37")

    @property
    def net_position(self) -> Decimal:
        """Refund as a positive amount, balance due as a negative one."""
        return self.refund - self.amount_owed

    @property
    def effective_rate(self) -> float:
        if self.adjusted_gross_income <= 0:
            return 0.0
        return float(self.total_tax / self.adjusted_gross_income)


class ComputedReturn(BaseModel):
    tax_year: int
    included_forms: List[IncludedForm]
    fields: Dict[str, List[FieldOutput]]
    summary: ReturnSummary
    line_evaluations: int = 0

    @property
    def tags(self) -> List[str]:
        return [entry.tag for entry in self.included_forms]


class ScenarioResult(BaseModel):
    name: str
    summary: ReturnSummary
    tax_difference: Decimal = Field(description="Scenario total tax less base total tax")
    net_position_difference: Decimal = Field(description="Change in refund (positive) or balance due")
    forms_added: List[str] = Field(default_factory=list)
    forms_removed: List[str] = Field(default_factory=list)


class ScenarioComparison(BaseModel):
    base: ReturnSummary
    scenarios: List[ScenarioResult]

    @property
    def best(self) -> Optional[str]:
        """Scenario with the lowest total tax, if any beats the base."""
        better = [s for s in self.scenarios if s.tax_difference < 0]
        if not better:
            return None
        return min(better, key=lambda s: s.tax_difference).name


def summarize(root: FormNode) -> ReturnSummary:
    """Read the summary values off a computed Form 1040."""
    return ReturnSummary(
        tax_year=root.tax_year,
        filing_status=root.filing_status.value,
        total_income=round_currency(root.l9()),
        adjusted_gross_income=round_currency(root.l11()),
        taxable_income=round_currency(root.l15()),
        total_tax=round_currency(root.l24()),
        total_withholding=round_currency(root.l25d()),
        total_payments=round_currency(root.l33()),
        refund=round_currency(root.l35a()),
        amount_owed=round_currency(root.l37()),
    )


def compute_return(
    return_input: ReturnInput,
    config: Optional[TaxYearConfig] = None,
    settings: Optional[EngineSettings] = None,
    catalog: Optional[Sequence[Type[FormNode]]] = None,
    return_id: Optional[str] = None,
) -> ComputedReturn:
    """
    Compute every attached form of a return.

    Args:
        return_input: Validated taxpayer data for one tax year
        config: Tax-year constants; defaults to the input's tax year
        settings: Engine settings; defaults to the environment
        catalog: Form classes, root first; defaults to the federal catalog
        return_id: Correlation ID attached to every log record

    Returns:
        ComputedReturn with included forms, per-form fields and the summary

    Raises:
        FormGraphError: the catalog is inconsistent (cycle, layout mismatch, ...)
    """
    calc_logger = CalculationLogger(return_id)
    token = return_id_var.set(return_id) if return_id else None
    try:
        calc_logger.start_calculation(return_input.tax_year, return_input.taxpayer.filing_status.value)

        registry = FormRegistry(return_input, config=config, catalog=catalog, settings=settings)
        included = registry.included()
        calc_logger.log_included_forms(entry.tag for entry in included)

        fields = {
            tag: [FieldOutput.from_form_field(f) for f in form_fields]
            for tag, form_fields in registry.fields().items()
        }
        summary = summarize(registry.root)
        evaluations = registry.evaluation_pass.evaluations
        calc_logger.log_summary(summary.model_dump(mode="json"), evaluations)

        return ComputedReturn(
            tax_year=registry.config.tax_year,
            included_forms=included,
            fields=fields,
            summary=summary,
            line_evaluations=evaluations,
        )
    except FormGraphError as e:
        calc_logger.log_error(
            f"Form graph error: {e}",
            error_type=type(e).__name__,
            path=e.path,
        )
        raise
    finally:
        if token is not None:
            return_id_var.reset(token)


def compare_scenarios(
    base: ReturnInput,
    alternatives: Mapping[str, ReturnInput],
    config: Optional[TaxYearConfig] = None,
    settings: Optional[EngineSettings] = None,
) -> ScenarioComparison:
    """
    Compute what-if variants of a return against a base.

    Each input gets its own computation pass, so no cached line of one
    scenario can leak into another.
    """
    if not alternatives:
        raise ValueError("At least one alternative scenario is required")

    base_result = compute_return(base, config=config, settings=settings)
    base_tags = set(base_result.tags)

    results = []
    for name, scenario_input in alternatives.items():
        computed = compute_return(scenario_input, config=config, settings=settings)
        tags = set(computed.tags)
        results.append(ScenarioResult(
            name=name,
            summary=computed.summary,
            tax_difference=computed.summary.total_tax - base_result.summary.total_tax,
            net_position_difference=computed.summary.net_position - base_result.summary.net_position,
            forms_added=sorted(tags - base_tags),
            forms_removed=sorted(base_tags - tags),
        ))

    logger.info(
        f"Compared {len(results)} scenarios",
        extra={'extra_data': {'scenarios': [r.name for r in results]}},
    )
    return ScenarioComparison(base=base_result.summary, scenarios=results)
