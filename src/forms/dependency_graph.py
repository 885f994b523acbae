"""
Dependency graph analysis.

Line dependencies are implicit: an edge exists whenever one line body calls
another. This module makes them explicit by evaluating every line of every
catalog form on a fresh pass with a tracer installed, recording each
caller -> callee access as a networkx edge. The resulting graph is used by
tests to prove the shipped catalog is acyclic and that every restricted
line is actually consumed by the forms it was introduced for.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple, Type, Union

import networkx as nx

from forms.errors import CircularLineError
from forms.form_node import HasLines
from forms.lines import RestrictedLine

if TYPE_CHECKING:
    from forms.registry import FormRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestrictedLineInfo:
    key: str
    excluding: Tuple[str, ...]
    consumers: Tuple[str, ...]


class _EdgeRecorder:
    def __init__(self, graph: nx.DiGraph):
        self.graph = graph

    def __call__(self, caller: Optional[str], callee: str) -> None:
        self.graph.add_node(callee)
        if caller is not None and caller != callee:
            self.graph.add_edge(caller, callee)


def build_dependency_graph(registry: "FormRegistry") -> nx.DiGraph:
    """
    Trace every line of every catalog form for the registry's return.

    Runs on a new registry built from the same input, config and catalog so
    that no cached line hides its dependencies. A CircularLineError raised
    while tracing is not fatal: the cyclic path is added to the graph and
    reported by find_cycles().

    Args:
        registry: FormRegistry whose return input, config and catalog to trace

    Returns:
        DiGraph with "tag.line" nodes and caller -> callee edges
    """
    from forms.registry import FormRegistry

    graph = nx.DiGraph()
    traced = FormRegistry(
        registry.return_input,
        config=registry.config,
        catalog=registry.catalog,
        settings=registry.settings,
        tracer=_EdgeRecorder(graph),
    )

    for form in traced.forms():
        for name, line_obj in form.lines().items():
            key = f"{form.tag}.{name}"
            graph.add_node(key, tag=form.tag, line=name, kind=line_obj.kind.value,
                           restricted=isinstance(line_obj, RestrictedLine))
            try:
                getattr(form, name)()
            except CircularLineError as e:
                logger.warning(f"Cycle while tracing {key}: {' -> '.join(e.path)}")
                nx.add_path(graph, e.path)

    logger.debug(
        f"Traced {graph.number_of_nodes()} lines and {graph.number_of_edges()} edges "
        f"in {traced.evaluation_pass.evaluations} evaluations"
    )
    return graph


def merge_graphs(graphs: Iterable[nx.DiGraph]) -> nx.DiGraph:
    """Union of graphs traced for several returns; branches differ by input."""
    graphs = list(graphs)
    if not graphs:
        return nx.DiGraph()
    return nx.compose_all(graphs)


def find_cycles(graph: nx.DiGraph) -> List[List[str]]:
    cycles = [list(cycle) for cycle in nx.simple_cycles(graph)]
    return sorted(cycles, key=lambda cycle: (len(cycle), cycle))


def assert_acyclic(graph: nx.DiGraph) -> None:
    """
    Raises:
        CircularLineError: for the shortest cycle found, with its full path
    """
    cycles = find_cycles(graph)
    if cycles:
        cycle = cycles[0]
        raise CircularLineError(cycle[0], cycle + [cycle[0]])


def restricted_lines(source: Union["FormRegistry", Sequence[Type[HasLines]]]) -> List[RestrictedLineInfo]:
    """Every restricted line declared in a registry's (or a plain) catalog."""
    catalog = getattr(source, "catalog", source)
    found = []
    for form_cls in catalog:
        for name, line_obj in form_cls.lines().items():
            if isinstance(line_obj, RestrictedLine):
                found.append(RestrictedLineInfo(
                    key=f"{form_cls.tag}.{name}",
                    excluding=tuple(sorted(line_obj.excluding)),
                    consumers=line_obj.consumers,
                ))
    return found


def missing_restricted_consumers(
    graph: nx.DiGraph,
    source: Union["FormRegistry", Sequence[Type[HasLines]]],
) -> List[Tuple[str, str]]:
    """
    (restricted line, consumer tag) pairs with no edge from that consumer.

    An empty result means each restricted line is read by every form it
    names as a consumer somewhere in the traced graph.
    """
    missing = []
    for info in restricted_lines(source):
        callers = set(graph.predecessors(info.key)) if info.key in graph else set()
        for consumer in info.consumers:
            if not any(caller.startswith(f"{consumer}.") for caller in callers):
                missing.append((info.key, consumer))
    return missing
