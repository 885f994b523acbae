"""
Line evaluation for form nodes.

A line is a zero-argument method on a form, decorated with @line. Calling it
pulls its dependencies on demand (depth-first), caches the result on the form
instance for the rest of the pass, and returns the cached value on every later
call. The EvaluationPass shared by all forms of one return tracks the active
call stack so that:

- re-entering a line that is still being computed raises CircularLineError,
- nesting deeper than max_depth raises LineDepthExceededError,
- a restricted line that reaches one of its excluded lines raises
  RestrictedLineViolation.

Restricted lines are how mutually dependent forms are kept acyclic: the
limiting form consumes an intermediate such as "net profit before the home
office deduction" instead of the full chain that includes its own result.
"""

from __future__ import annotations

import functools
import inspect
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from calculator.decimal_math import to_decimal
from forms.errors import CircularLineError, LineDepthExceededError, RestrictedLineViolation

if TYPE_CHECKING:
    from forms.form_node import FormNode

logger = logging.getLogger(__name__)

LineValue = Union[Decimal, bool, str, date, None]

# (caller "tag.line" or None at top level, callee "tag.line")
Tracer = Callable[[Optional[str], str], None]

INCLUSION_LINE = "is_needed"


class LineKind(str, Enum):
    """What a line returns, which decides its default and how it serializes."""
    CURRENCY = "currency"
    RATE = "rate"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"
    DATE = "date"


def line_key(node: "FormNode", name: str) -> str:
    return f"{node.tag}.{name}"


@dataclass(frozen=True)
class Frame:
    node: "FormNode"
    line: "Line"

    @property
    def key(self) -> str:
        return line_key(self.node, self.line.name)


class EvaluationPass:
    """
    State shared by every form of one return for one computation.

    Forms keep their own caches; the pass only owns the active stack, the
    depth guard and optional edge tracing. A new registry always gets a new
    pass, so nothing here outlives one computation.
    """

    def __init__(
        self,
        max_depth: int = 200,
        tracer: Optional[Tracer] = None,
        log_edges: bool = False,
    ):
        self.max_depth = max_depth
        self.tracer = tracer
        self.log_edges = log_edges
        self.evaluations = 0
        self._stack: List[Frame] = []

    @property
    def path(self) -> List[str]:
        return [frame.key for frame in self._stack]

    @property
    def current(self) -> Optional[Frame]:
        return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        return len(self._stack)

    def inclusion_frame(self) -> Optional[Frame]:
        """The innermost is_needed predicate on the active stack, if any."""
        for frame in reversed(self._stack):
            if frame.line.name == INCLUSION_LINE:
                return frame
        return None

    def record_access(self, node: "FormNode", line: "Line") -> None:
        """Called on every line access, cached or not."""
        key = line_key(node, line.name)
        for frame in self._stack:
            if (
                isinstance(frame.line, RestrictedLine)
                and frame.node is node
                and line.name in frame.line.excluding
            ):
                raise RestrictedLineViolation(frame.key, key, self.path + [key])

        caller = self.current.key if self._stack else None
        if self.tracer is not None:
            self.tracer(caller, key)
        if self.log_edges and caller is not None:
            logger.debug(f"{caller} -> {key}")

    def enter(self, node: "FormNode", line: "Line") -> None:
        key = line_key(node, line.name)
        for frame in self._stack:
            if frame.node is node and frame.line.name == line.name:
                raise CircularLineError(key, self.path + [key])
        if len(self._stack) >= self.max_depth:
            raise LineDepthExceededError(key, self.max_depth, self.path + [key])
        self._stack.append(Frame(node, line))
        self.evaluations += 1

    def exit(self) -> None:
        self._stack.pop()


class Line:
    """
    Descriptor wrapping a line method.

    Accessing the attribute on a form returns a zero-argument callable that
    evaluates through the form's cache.
    """

    def __init__(
        self,
        func: Callable[[Any], Any],
        kind: LineKind = LineKind.CURRENCY,
        description: Optional[str] = None,
    ):
        functools.update_wrapper(self, func)
        self.func = func
        self.name = func.__name__
        self.kind = kind
        doc = inspect.getdoc(func) or ""
        self.description = description or doc.split("\n")[0]

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, node: Optional["FormNode"], owner: Optional[type] = None):
        if node is None:
            return self
        return functools.partial(self.evaluate, node)

    def evaluate(self, node: "FormNode") -> LineValue:
        evaluation_pass = node.evaluation_pass
        evaluation_pass.record_access(node, self)

        cache = node._line_cache
        if self.name in cache:
            return cache[self.name]

        evaluation_pass.enter(node, self)
        try:
            value = self.coerce(self.func(node))
        finally:
            evaluation_pass.exit()

        cache[self.name] = value
        return value

    def coerce(self, value: Any) -> LineValue:
        """Apply the documented default for absent values."""
        if self.kind in (LineKind.CURRENCY, LineKind.RATE, LineKind.NUMBER):
            return to_decimal(value)
        if self.kind == LineKind.BOOLEAN:
            return bool(value)
        if self.kind == LineKind.TEXT:
            return "" if value is None else str(value)
        return value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} ({self.kind.value})>"


class RestrictedLine(Line):
    """
    A line that is guaranteed not to reach the lines named in `excluding`.

    `consumers` lists the form tags that read it to break a cycle; the
    dependency graph analysis checks those edges exist.
    """

    def __init__(
        self,
        func: Callable[[Any], Any],
        excluding: Iterable[str],
        consumers: Iterable[str] = (),
        kind: LineKind = LineKind.CURRENCY,
        description: Optional[str] = None,
    ):
        super().__init__(func, kind=kind, description=description)
        self.excluding: FrozenSet[str] = frozenset(excluding)
        self.consumers: Tuple[str, ...] = tuple(consumers)


def line(kind: Union[LineKind, Callable[[Any], Any]] = LineKind.CURRENCY, description: Optional[str] = None):
    """
    Declare a form line.

        @line
        def l9(self): ...

        @line(LineKind.BOOLEAN)
        def is_needed(self): ...
    """
    if callable(kind) and not isinstance(kind, LineKind):
        return Line(kind)

    def decorator(func: Callable[[Any], Any]) -> Line:
        return Line(func, kind=kind, description=description)

    return decorator


def restricted_line(
    excluding: Iterable[str],
    consumers: Iterable[str] = (),
    kind: LineKind = LineKind.CURRENCY,
    description: Optional[str] = None,
):
    """Declare a cycle-breaking intermediate line; see RestrictedLine."""

    def decorator(func: Callable[[Any], Any]) -> RestrictedLine:
        return RestrictedLine(func, excluding, consumers=consumers, kind=kind, description=description)

    return decorator


def lines_of(cls: type) -> Dict[str, Line]:
    """All lines declared on a form class and its bases, subclass definitions winning."""
    found: Dict[str, Line] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, Line):
                found[name] = attr
            elif name in found:
                del found[name]
    return found
