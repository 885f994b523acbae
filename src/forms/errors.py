"""
Form graph errors.

Everything here is a modeling error: a broken catalog, not bad taxpayer
data. Missing or zero data never raises; it resolves to a line's default.
"""

from typing import Optional, Sequence


class FormGraphError(Exception):
    """Base class for structural errors in the form graph."""

    def __init__(self, message: str, path: Optional[Sequence[str]] = None):
        self.path = list(path or [])
        if self.path:
            message = f"{message} (path: {' -> '.join(self.path)})"
        super().__init__(message)


class CircularLineError(FormGraphError):
    """A line was re-entered while it was already being evaluated."""

    def __init__(self, line_key: str, path: Sequence[str]):
        self.line_key = line_key
        super().__init__(f"Circular dependency on {line_key}", path)


class LineDepthExceededError(FormGraphError):
    """Line evaluation nested deeper than the configured limit."""

    def __init__(self, line_key: str, limit: int, path: Sequence[str]):
        self.line_key = line_key
        self.limit = limit
        super().__init__(f"Evaluation of {line_key} exceeded maximum depth {limit}", path)


class RestrictedLineViolation(FormGraphError):
    """A restricted line reached one of the lines it promises to exclude."""

    def __init__(self, restricted_key: str, excluded_key: str, path: Sequence[str]):
        self.restricted_key = restricted_key
        self.excluded_key = excluded_key
        super().__init__(f"{restricted_key} must not depend on {excluded_key}", path)


class InclusionDependencyError(FormGraphError):
    """An is_needed predicate asked whether another form is attached."""

    def __init__(self, tag: str, other_tag: str, path: Sequence[str]):
        self.tag = tag
        self.other_tag = other_tag
        super().__init__(
            f"{tag}.is_needed depends on the inclusion status of {other_tag}; "
            f"use the form's data lines instead",
            path,
        )


class FieldLayoutError(FormGraphError):
    """A form's field layout does not match its fillable positions."""

    def __init__(self, tag: str, message: str):
        self.tag = tag
        super().__init__(f"{tag}: {message}")


class UnknownFormError(FormGraphError):
    """A sibling lookup asked for a form class outside the registry's catalog."""

    def __init__(self, form_name: str):
        self.form_name = form_name
        super().__init__(f"{form_name} is not in this return's form catalog")
