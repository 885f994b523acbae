"""
Decimal Math Utilities for Form Line Computations.

Provides precise decimal arithmetic to avoid floating point errors
in line computations. Every currency line on every form is computed
with these helpers instead of direct float arithmetic.

Numeric policy:
- Lines keep full Decimal precision while they flow through the graph.
- Missing values (None) aggregate as zero.
- Rounding to whole dollars (round-half-up) happens exactly once, when a
  value leaves the graph (field serialization, return summary).
- Division by zero in a rate resolves to 0, never an error.

Why Decimal?
- Float: 0.1 + 0.2 = 0.30000000000000004
- Decimal: 0.1 + 0.2 = 0.3
"""

from decimal import Decimal, ROUND_HALF_UP, ROUND_CEILING, InvalidOperation
from typing import Iterable, List, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)

# Type alias for values that can be converted to Decimal
Numeric = Union[int, float, str, Decimal]

WHOLE_DOLLARS = Decimal("1")

ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value: Optional[Numeric]) -> Decimal:
    """
    Convert a numeric value to Decimal.

    None converts to zero, which is the documented default for an
    absent currency amount.

    Examples:
        >>> to_decimal(100.50)
        Decimal('100.5')
        >>> to_decimal(None)
        Decimal('0')
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return ONE if value else ZERO
    if isinstance(value, float):
        # Convert float to string first to preserve representation
        return Decimal(str(value))
    return Decimal(value)


def sum_fields(values: Iterable[Optional[Numeric]]) -> Decimal:
    """
    Sum line values, treating None as zero.

    The sum is never rounded here; see round_currency.

    Examples:
        >>> sum_fields([100, None, 25.5])
        Decimal('125.5')
    """
    result = ZERO
    for v in values:
        result += to_decimal(v)
    return result


def add(*values: Optional[Numeric]) -> Decimal:
    """Add multiple values with Decimal precision."""
    return sum_fields(values)


def subtract(a: Optional[Numeric], b: Optional[Numeric]) -> Decimal:
    """Subtract b from a with Decimal precision."""
    return to_decimal(a) - to_decimal(b)


def multiply(a: Optional[Numeric], b: Optional[Numeric]) -> Decimal:
    """Multiply two values with Decimal precision."""
    return to_decimal(a) * to_decimal(b)


def divide(a: Optional[Numeric], b: Optional[Numeric], default: Optional[Numeric] = None) -> Decimal:
    """
    Divide a by b with Decimal precision.

    Args:
        a: Dividend
        b: Divisor
        default: Value to return if division by zero (None raises error)

    Raises:
        InvalidOperation: If b is zero and no default provided
    """
    b_dec = to_decimal(b)
    if b_dec == 0:
        if default is not None:
            return to_decimal(default)
        raise InvalidOperation("Division by zero")
    return to_decimal(a) / b_dec


def safe_ratio(numerator: Optional[Numeric], denominator: Optional[Numeric]) -> Decimal:
    """
    Ratio for rate lines; 0 when the denominator is 0.

    The result keeps full precision.
    """
    return divide(numerator, denominator, default=0)


def min_decimal(*values: Optional[Numeric]) -> Decimal:
    """Find minimum of values with Decimal precision."""
    return min(to_decimal(v) for v in values)


def max_decimal(*values: Optional[Numeric]) -> Decimal:
    """Find maximum of values with Decimal precision."""
    return max(to_decimal(v) for v in values)


def clamp(value: Optional[Numeric], minimum: Numeric, maximum: Numeric) -> Decimal:
    """
    Clamp value between minimum and maximum.

    Examples:
        >>> clamp(150, 0, 100)
        Decimal('100')
        >>> clamp(-50, 0, 100)
        Decimal('0')
    """
    return max_decimal(minimum, min_decimal(value, maximum))


def clamp_zero(value: Optional[Numeric]) -> Decimal:
    """Floor a value at zero, for lines that cannot be negative."""
    return max_decimal(ZERO, value)


def phase_out_fraction(
    amount: Optional[Numeric],
    start: Numeric,
    end: Numeric
) -> Decimal:
    """
    Fraction of a benefit that survives a linear phase-out.

    Returns 1 at or below start, 0 at or above end, and the linear
    interpolation in between. A zero-width range behaves as a cliff at start.

    Examples:
        >>> phase_out_fraction(112500, 100000, 125000)
        Decimal('0.5')
    """
    amount_d = to_decimal(amount)
    start_d = to_decimal(start)
    end_d = to_decimal(end)
    if amount_d <= start_d:
        return ONE
    if amount_d >= end_d:
        return ZERO
    return ONE - safe_ratio(amount_d - start_d, end_d - start_d)


def round_up_to_multiple(value: Optional[Numeric], step: Numeric) -> Decimal:
    """
    Round a positive value up to the next multiple of step.

    Used by worksheets that count "each $1,000 or fraction thereof".

    Examples:
        >>> round_up_to_multiple(1001, 1000)
        Decimal('2000')
    """
    value_d = to_decimal(value)
    step_d = to_decimal(step)
    if value_d <= 0 or step_d <= 0:
        return ZERO
    units = (value_d / step_d).to_integral_value(rounding=ROUND_CEILING)
    return units * step_d


def round_currency(value: Optional[Numeric]) -> Decimal:
    """
    Round a currency value to whole dollars, half-up.

    Only output code calls this; lines never round their own results.

    Examples:
        >>> round_currency(Decimal("0.8"))
        Decimal('1')
        >>> round_currency(-2.5)
        Decimal('-3')
    """
    return to_decimal(value).quantize(WHOLE_DOLLARS, rounding=ROUND_HALF_UP)


def calculate_progressive_tax(
    income: Optional[Numeric],
    brackets: List[Tuple[float, float]]
) -> Decimal:
    """
    Calculate tax using progressive brackets.

    Args:
        income: Taxable income
        brackets: List of (threshold, rate) tuples in ascending order.
                  Each rate applies from its threshold to the next one.

    Returns:
        Total tax, unrounded

    Examples:
        >>> brackets = [(0, 0.10), (11925, 0.12), (48475, 0.22)]
        >>> calculate_progressive_tax(20000, brackets)
        Decimal('2161.50')
    """
    income_d = to_decimal(income)
    total_tax = ZERO

    for index, (threshold, rate_value) in enumerate(brackets):
        start = to_decimal(threshold)
        if income_d <= start:
            break
        if index + 1 < len(brackets):
            end = min_decimal(income_d, brackets[index + 1][0])
        else:
            end = income_d
        total_tax += multiply(end - start, rate_value)

    return total_tax
