"""Dependency Graph Engine — cycle guard and structural metrics over components.

Invariants:
    - The dependency relation is acyclic after every successful mutation
    - The cycle guard runs BEFORE the edge is written (no partial mutation)
    - A component with no dependencies has depth 1; an empty graph has depth 0
    - Balance score is always within [1, 10]; one component (or none) scores 10
    - Metric computation never raises unless strict cycle handling is requested

Design Decisions:
    - Explicit stack-based DFS: no recursion, deep chains never hit the
      interpreter recursion limit
    - visited / on_path sets are local to each traversal call, never shared
    - Depth of a node revisited while still on the current path contributes 0
      (logged); strict=True raises CycleDetectedError instead
    - Dependencies outside the scoped graph count as leaves (depth 1) and join
      the in-degree statistics as extra entries
"""

import logging
import math
from collections.abc import Iterable, Mapping, Sequence

from decomposition_engine.core.domain_types import (
    MIN_BALANCE_SCORE, PERFECT_BALANCE_SCORE, BalanceScore,
)
from decomposition_engine.core.entities import Component, DecompositionMetrics
from decomposition_engine.core.entity_store import EntityStore
from decomposition_engine.core.errors import CycleDetectedError

logger = logging.getLogger(__name__)

Graph = Mapping[str, Sequence[str]]


# --- Graph construction -------------------------------------------------------

def build_dependency_graph(components: Iterable[Component]) -> dict[str, list[str]]:
    """Adjacency view: component id -> ids it depends on."""
    return {c.component_id: list(c.dependencies) for c in components}


# --- Cycle guard ----------------------------------------------------------------

def can_reach(graph: Graph, start: str, goal: str) -> bool:
    """Whether goal is reachable from start by following dependency edges."""
    visited: set[str] = set()
    stack = [start]
    while stack:
        node = stack.pop()
        if node == goal:
            return True
        if node in visited:
            continue
        visited.add(node)
        stack.extend(graph.get(node, ()))
    return False


def would_create_cycle(graph: Graph, source_id: str, target_id: str) -> bool:
    """Adding source -> target closes a cycle iff target already reaches source."""
    return can_reach(graph, target_id, source_id)


def check_dependency_set(
    graph: Graph, component_id: str, dependencies: Iterable[str],
) -> None:
    """Raise CycleDetectedError if any proposed dependency reaches component_id."""
    for dep_id in dependencies:
        if would_create_cycle(graph, component_id, dep_id):
            raise CycleDetectedError(component_id, dep_id)


def link_components(store: EntityStore, source_id: str, target_id: str) -> Component:
    """Make source depend on target. Idempotent; rejects cycles before writing."""
    source = store.get_component(source_id, "Source component")
    store.get_component(target_id, "Target component")
    if source.depends_on(target_id):
        return source
    if would_create_cycle(store.adjacency(), source_id, target_id):
        raise CycleDetectedError(source_id, target_id)
    return store.add_dependency(source_id, target_id)


# --- Depth ------------------------------------------------------------------------

def calculate_max_depth(graph: Graph, strict: bool = False) -> int:
    """Longest dependency chain length, counting nodes. Memoized per node."""
    depths: dict[str, int] = {}
    on_path: set[str] = set()

    for root in graph:
        if root in depths:
            continue
        # frame: [node, remaining dependencies, deepest child seen]
        stack: list[list] = [[root, iter(graph.get(root, ())), 0]]
        on_path.add(root)
        while stack:
            frame = stack[-1]
            child = next(frame[1], None)
            if child is None:
                stack.pop()
                on_path.discard(frame[0])
                depths[frame[0]] = 1 + frame[2]
                if stack:
                    stack[-1][2] = max(stack[-1][2], depths[frame[0]])
                continue
            if child in depths:
                frame[2] = max(frame[2], depths[child])
                continue
            if child in on_path:
                if strict:
                    raise CycleDetectedError(frame[0], child)
                logger.warning(
                    f"Cycle through '{child}' found during depth computation",
                    extra={"component_id": frame[0]},
                )
                continue
            on_path.add(child)
            stack.append([child, iter(graph.get(child, ())), 0])

    return max((depths[node] for node in graph), default=0)


# --- Balance ------------------------------------------------------------------------

def calculate_in_degrees(component_ids: Sequence[str], graph: Graph) -> dict[str, int]:
    """Number of scoped components listing each target as a dependency.

    Targets outside component_ids get their own entry.
    """
    in_degree = {cid: 0 for cid in component_ids}
    for deps in graph.values():
        for dep_id in deps:
            in_degree[dep_id] = in_degree.get(dep_id, 0) + 1
    return in_degree


def calculate_balance_score(
    component_ids: Sequence[str], graph: Graph,
) -> BalanceScore:
    """10 * (1 - sigma / (n - 1)) over in-degrees, clamped to [1, 10].

    sigma is the population standard deviation over every in-degree entry,
    out-of-scope targets included; n is the number of scoped components, so
    n - 1 is the worst case (one component depended on by every other one).
    """
    n = len(component_ids)
    if n <= 1:
        return BalanceScore(PERFECT_BALANCE_SCORE)

    degrees = list(calculate_in_degrees(component_ids, graph).values())
    mean = sum(degrees) / len(degrees)
    variance = sum((d - mean) ** 2 for d in degrees) / len(degrees)
    normalized = math.sqrt(variance) / (n - 1)
    score = PERFECT_BALANCE_SCORE * (1 - normalized)
    return BalanceScore(max(MIN_BALANCE_SCORE, min(PERFECT_BALANCE_SCORE, score)))


# --- Aggregate metrics ----------------------------------------------------------------

def calculate_metrics(
    store: EntityStore, problem_id: str, strict: bool = False,
) -> DecompositionMetrics:
    """Structural metrics for the components owned by problem_id."""
    components = store.components_for_problem(problem_id)
    if not components:
        return DecompositionMetrics()

    graph = build_dependency_graph(components)
    component_ids = [c.component_id for c in components]
    return DecompositionMetrics(
        component_count=len(components),
        average_complexity=sum(c.complexity for c in components) / len(components),
        max_depth=calculate_max_depth(graph, strict=strict),
        dependency_count=sum(len(c.dependencies) for c in components),
        balance_score=calculate_balance_score(component_ids, graph),
    )
