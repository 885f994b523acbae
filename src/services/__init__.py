"""
Services Module - orchestration around the form graph.

- compute_return: one return, one computation pass
- compare_scenarios: what-if variants computed on independent passes
- Logging and observability
"""

from .logging_config import CalculationLogger, configure_logging, get_logger
from .return_service import (
    ComputedReturn,
    FieldOutput,
    ReturnSummary,
    ScenarioComparison,
    ScenarioResult,
    compare_scenarios,
    compute_return,
    summarize,
)

__all__ = [
    "CalculationLogger",
    "ComputedReturn",
    "FieldOutput",
    "ReturnSummary",
    "ScenarioComparison",
    "ScenarioResult",
    "compare_scenarios",
    "compute_return",
    "configure_logging",
    "get_logger",
    "summarize",
]
