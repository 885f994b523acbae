"""
Form registry.

Binds a catalog of form classes to one ReturnInput for one computation
pass. The registry owns the pass: a fresh EvaluationPass, a fresh root
form and therefore fresh line caches. What-if scenarios build a new
registry rather than reusing one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Type

from calculator.tax_year_config import TaxYearConfig
from config.settings import EngineSettings, get_settings
from forms.errors import FormGraphError, UnknownFormError
from forms.fields import FormField, validate_layout
from forms.form_node import FormNode, HasInclusion, RootForm
from forms.lines import INCLUSION_LINE, EvaluationPass, Line, Tracer
from models.return_input import ReturnInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncludedForm:
    """One entry of the included-forms list handed to e-file packaging."""
    tag: str
    sequence_index: float


def rank_included(forms: Iterable[HasInclusion]) -> List[IncludedForm]:
    """Attached forms ordered by (sequence index, position in `forms`)."""
    ranked = []
    for position, form in enumerate(forms):
        if form.is_needed():
            ranked.append((form.sequence_index, position, form))
    ranked.sort(key=lambda item: (item[0], item[1]))
    return [IncludedForm(form.tag, form.sequence_index) for _, _, form in ranked]


def validate_catalog(catalog: Sequence[Type[FormNode]], config: TaxYearConfig) -> None:
    """
    Check a catalog before any line is evaluated.

    Raises:
        FormGraphError: empty catalog, root not first, duplicate tags or a
            form without an is_needed line
        FieldLayoutError: a form's layout does not match the year's positions
    """
    if not catalog:
        raise FormGraphError("Form catalog is empty")

    root_cls = catalog[0]
    if not (isinstance(root_cls, type) and issubclass(root_cls, RootForm)):
        raise FormGraphError(f"First catalog entry {root_cls!r} is not a root form")

    seen: Dict[str, Type[FormNode]] = {}
    for form_cls in catalog:
        if not form_cls.tag:
            raise FormGraphError(f"{form_cls.__name__} has no tag")
        if form_cls.tag in seen:
            raise FormGraphError(
                f"Duplicate form tag {form_cls.tag!r}: "
                f"{seen[form_cls.tag].__name__} and {form_cls.__name__}"
            )
        seen[form_cls.tag] = form_cls

        if not isinstance(form_cls.lines().get(INCLUSION_LINE), Line):
            raise FormGraphError(f"{form_cls.tag}.{INCLUSION_LINE} must be declared with @line")

        if form_cls is not root_cls and issubclass(form_cls, RootForm):
            raise FormGraphError(f"{form_cls.tag}: only the first catalog entry may be a root form")

        validate_layout(form_cls, config)


class FormRegistry:
    """
    The set of forms computed for one return.

    Usage:
        registry = FormRegistry(return_input)
        for entry in registry.included():
            print(entry.tag, registry.get(entry.tag).fields())
    """

    def __init__(
        self,
        return_input: ReturnInput,
        config: Optional[TaxYearConfig] = None,
        catalog: Optional[Sequence[Type[FormNode]]] = None,
        settings: Optional[EngineSettings] = None,
        tracer: Optional[Tracer] = None,
    ):
        if catalog is None:
            from forms.federal import FEDERAL_CATALOG
            catalog = FEDERAL_CATALOG

        self.return_input = return_input
        self.settings = settings or get_settings()
        self.config = config or TaxYearConfig.for_year(
            return_input.tax_year or self.settings.default_tax_year
        )
        self.catalog: Tuple[Type[FormNode], ...] = tuple(catalog)

        validate_catalog(self.catalog, self.config)

        self.evaluation_pass = EvaluationPass(
            max_depth=self.settings.max_line_depth,
            tracer=tracer,
            log_edges=self.settings.trace_dependencies,
        )
        root_cls: Type[RootForm] = self.catalog[0]  # type: ignore[assignment]
        self.root: RootForm = root_cls(
            return_input,
            self.config,
            evaluation_pass=self.evaluation_pass,
            catalog=self.catalog,
        )
        self._included: Optional[List[IncludedForm]] = None

    def forms(self) -> List[FormNode]:
        """Shared instances of every catalog form, attached or not, in catalog order."""
        return [self.root.form(form_cls) for form_cls in self.catalog]

    def get(self, tag: str) -> FormNode:
        for form_cls in self.catalog:
            if form_cls.tag == tag:
                return self.root.form(form_cls)
        raise UnknownFormError(tag)

    def included(self) -> List[IncludedForm]:
        """
        Forms attached to this return, ordered by (sequence index, catalog position).

        Computed once per registry; the order never depends on the order in
        which is_needed predicates happen to be evaluated.
        """
        if self._included is None:
            self._included = rank_included(self.forms())
            logger.debug(f"Included forms: {[entry.tag for entry in self._included]}")
        return list(self._included)

    def included_forms(self) -> List[FormNode]:
        return [self.get(entry.tag) for entry in self.included()]

    def fields(self) -> Dict[str, List[FormField]]:
        """Field lists for every included form, keyed by tag, in included order."""
        return {form.tag: form.fields() for form in self.included_forms()}
