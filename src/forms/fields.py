"""
Field serialization.

Flattens a form's resolved lines into the fixed, ordered list of values a
PDF filler maps onto fillable positions. This is the only place currency
lines are rounded (whole dollars, half-up); everything upstream keeps full
Decimal precision.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, List, Type, Union

from calculator.decimal_math import round_currency, to_decimal
from calculator.tax_year_config import TaxYearConfig
from forms.errors import FieldLayoutError
from forms.lines import LineKind, LineValue

if TYPE_CHECKING:
    from forms.form_node import FormNode, HasLines

logger = logging.getLogger(__name__)

FieldValue = Union[int, float, bool, str]


@dataclass(frozen=True)
class FormField:
    """One output value bound for a physical form position."""
    tag: str
    position: int
    line: str
    kind: LineKind
    value: FieldValue


def render_value(value: LineValue, kind: LineKind) -> FieldValue:
    """Convert a resolved line value to its output representation."""
    if kind == LineKind.CURRENCY:
        return int(round_currency(value))
    if kind == LineKind.NUMBER:
        number = to_decimal(value)
        if number == number.to_integral_value():
            return int(number)
        return float(number)
    if kind == LineKind.RATE:
        return float(to_decimal(value))
    if kind == LineKind.BOOLEAN:
        return bool(value)
    if kind == LineKind.DATE:
        if isinstance(value, date):
            return value.isoformat()
        return "" if value is None else str(value)
    return "" if value is None else str(value)


def validate_layout(form_cls: Type["HasLines"], config: TaxYearConfig) -> None:
    """
    Check a form class's layout for the config's tax year.

    Raises:
        FieldLayoutError: unknown line name, duplicated position, or a count
            that differs from the year's fillable positions
    """
    tag = form_cls.tag
    layout = form_cls.field_layout(config.tax_year)
    known = form_cls.lines()

    unknown = [name for name in layout if name not in known]
    if unknown:
        raise FieldLayoutError(tag, f"layout names are not lines: {unknown}")

    seen = set()
    duplicates = []
    for name in layout:
        if name in seen:
            duplicates.append(name)
        seen.add(name)
    if duplicates:
        raise FieldLayoutError(tag, f"lines appear more than once in layout: {duplicates}")

    expected = config.expected_field_count(tag)
    if expected is None:
        raise FieldLayoutError(tag, f"no fillable position count configured for {config.tax_year}")
    if expected != len(layout):
        raise FieldLayoutError(
            tag,
            f"layout has {len(layout)} fields but the {config.tax_year} form has {expected} positions",
        )


def serialize_fields(form: "FormNode") -> List[FormField]:
    """Evaluate and render every line in the form's layout, in order."""
    layout = form.field_layout(form.tax_year)
    known = form.lines()
    fields = []
    for position, name in enumerate(layout):
        line_obj = known[name]
        value = getattr(form, name)()
        fields.append(FormField(
            tag=form.tag,
            position=position,
            line=name,
            kind=line_obj.kind,
            value=render_value(value, line_obj.kind),
        ))
    return fields
