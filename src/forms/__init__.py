from .errors import (
    CircularLineError,
    FieldLayoutError,
    FormGraphError,
    InclusionDependencyError,
    LineDepthExceededError,
    RestrictedLineViolation,
    UnknownFormError,
)
from .fields import FormField, serialize_fields, validate_layout
from .form_node import Attachment, FormNode, HasInclusion, HasLines, RootForm, TaxpayerHeader
from .lines import EvaluationPass, Line, LineKind, RestrictedLine, line, restricted_line
from .registry import FormRegistry, IncludedForm, rank_included, validate_catalog

__all__ = [
    "Attachment",
    "CircularLineError",
    "EvaluationPass",
    "FieldLayoutError",
    "FormField",
    "FormGraphError",
    "FormNode",
    "FormRegistry",
    "HasInclusion",
    "HasLines",
    "InclusionDependencyError",
    "IncludedForm",
    "Line",
    "LineDepthExceededError",
    "LineKind",
    "RestrictedLine",
    "RestrictedLineViolation",
    "RootForm",
    "TaxpayerHeader",
    "UnknownFormError",
    "line",
    "rank_included",
    "restricted_line",
    "serialize_fields",
    "validate_catalog",
    "validate_layout",
]
