"""
Form nodes: one computation unit per IRS form or schedule.

A form is assembled from small capabilities rather than a deep class tree:

- HasLines: a tag, a sequence index, declared lines and a field layout
- HasInclusion: lines plus an `is_needed()` predicate

Layout validation and graph tracing take HasLines; the registry ranks
HasInclusion forms into the included-forms list.

RootForm is the return's primary form (Form 1040). It owns the single
instance of every sibling so all referrers share one cache. Attachment is
everything else. TaxpayerHeader adds the name/SSN lines most forms print.
"""

from __future__ import annotations

import logging
from typing import (
    TYPE_CHECKING,
    ClassVar,
    Dict,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    runtime_checkable,
)

from calculator.tax_year_config import TaxYearConfig
from forms.errors import InclusionDependencyError, UnknownFormError
from forms.lines import EvaluationPass, Line, LineKind, line, lines_of
from models.return_input import ReturnInput
from models.taxpayer import FilingStatus

if TYPE_CHECKING:
    from forms.fields import FormField

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="FormNode")


@runtime_checkable
class HasLines(Protocol):
    tag: str
    sequence_index: float

    @classmethod
    def lines(cls) -> Dict[str, Line]: ...

    @classmethod
    def field_layout(cls, tax_year: int) -> Tuple[str, ...]: ...

    def fields(self) -> List["FormField"]: ...


@runtime_checkable
class HasInclusion(HasLines, Protocol):
    def is_needed(self) -> bool: ...


class FormNode:
    """
    Base computation unit.

    Subclasses set `tag`, `sequence_index` and `FIELDS` (line names in
    fillable-position order), and declare lines with @line.
    """

    tag: ClassVar[str] = ""
    sequence_index: ClassVar[float] = 999
    FIELDS: ClassVar[Tuple[str, ...]] = ()
    # Layouts for tax years whose PDF differs from FIELDS
    FIELDS_BY_YEAR: ClassVar[Dict[int, Tuple[str, ...]]] = {}

    def __init__(self, return_input: ReturnInput, config: TaxYearConfig, evaluation_pass: EvaluationPass):
        self.return_input = return_input
        self.config = config
        self.evaluation_pass = evaluation_pass
        self._line_cache: Dict[str, object] = {}

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return True

    @classmethod
    def lines(cls) -> Dict[str, Line]:
        return lines_of(cls)

    @classmethod
    def field_layout(cls, tax_year: int) -> Tuple[str, ...]:
        return cls.FIELDS_BY_YEAR.get(tax_year, cls.FIELDS)

    def fields(self) -> List["FormField"]:
        from forms.fields import serialize_fields
        return serialize_fields(self)

    @property
    def tax_year(self) -> int:
        return self.config.tax_year

    @property
    def filing_status(self) -> FilingStatus:
        return self.return_input.taxpayer.filing_status

    def __repr__(self) -> str:
        return f"<{type(self).__name__} tag={self.tag!r} seq={self.sequence_index}>"


class RootForm(FormNode):
    """
    The primary form of a return.

    Holds the catalog of form classes for this pass and lazily creates one
    shared instance per class.
    """

    def __init__(
        self,
        return_input: ReturnInput,
        config: TaxYearConfig,
        evaluation_pass: Optional[EvaluationPass] = None,
        catalog: Sequence[Type[FormNode]] = (),
    ):
        super().__init__(return_input, config, evaluation_pass or EvaluationPass())
        self.catalog: Tuple[Type[FormNode], ...] = tuple(catalog) or (type(self),)
        self._instances: Dict[Type[FormNode], FormNode] = {type(self): self}

    @property
    def root(self) -> "RootForm":
        return self

    def form(self, form_cls: Type[F]) -> F:
        """The shared instance of a catalog form, attached or not."""
        instance = self._instances.get(form_cls)
        if instance is None:
            if form_cls not in self.catalog:
                raise UnknownFormError(form_cls.__name__)
            instance = form_cls(self)
            self._instances[form_cls] = instance
        return instance  # type: ignore[return-value]

    def optional_form(self, form_cls: Type[F]) -> Optional[F]:
        """
        The shared instance when the form is attached to this return, else None.

        Not callable while an is_needed predicate is anywhere on the stack,
        directly or through the data lines it reads: inclusion may depend on
        other forms' data lines, never on whether they are attached.
        """
        evaluation_pass = self.evaluation_pass
        frame = evaluation_pass.inclusion_frame()
        if frame is not None:
            raise InclusionDependencyError(frame.node.tag, form_cls.tag, evaluation_pass.path)
        if form_cls not in self.catalog:
            return None
        instance = self.form(form_cls)
        return instance if instance.is_needed() else None


class Attachment(FormNode):
    """A form filed with the root form; reaches siblings through `root`."""

    def __init__(self, root: RootForm):
        super().__init__(root.return_input, root.config, root.evaluation_pass)
        self.root = root

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return False


class TaxpayerHeader:
    """Name and SSN lines printed at the top of most forms."""

    @line(LineKind.TEXT)
    def names(self) -> str:
        taxpayer = self.return_input.taxpayer
        names = [person.full_name for person in taxpayer.people()]
        return " & ".join(names)

    @line(LineKind.TEXT)
    def ssn(self) -> str:
        return self.return_input.taxpayer.primary.ssn
