"""Graph Handlers — linking and read-only decomposition queries (5 methods).

Invariants:
    - linkComponents is idempotent and never writes when the cycle guard fires
    - Query handlers never mutate state
    - Every query naming a problem/component fails with RESOURCE_NOT_FOUND if absent

Design Decisions:
    - Metrics computed on demand, never cached: the graph is small and in-memory
"""

import logging

from decomposition_engine.core.decomposition_state import DecompositionState
from decomposition_engine.core.dependency_graph import calculate_metrics, link_components
from decomposition_engine.schemas.decomposition import (
    ComponentRef, LinkInput, ProblemRef, validate_input,
)

logger = logging.getLogger(__name__)


class GraphHandlers:
    """Dependency edges and structural queries."""

    def __init__(self, state: DecompositionState, log_summaries: bool = True):
        self.state = state
        self.log_summaries = log_summaries

    def link_components(self, arguments: dict) -> dict:
        data = validate_input(LinkInput, arguments)
        already_linked = (
            self.state.store.has_component(data.source_id)
            and self.state.store.get_component(data.source_id).depends_on(data.target_id)
        )
        component = link_components(self.state.store, data.source_id, data.target_id)
        if self.log_summaries and not already_linked:
            logger.info(
                f"Linked component {data.source_id} to depend on {data.target_id}",
                extra={"component_id": data.source_id},
            )
        return {
            "message": f"Component {data.source_id} now depends on {data.target_id}",
            "component": component.to_dict(),
        }

    def calculate_metrics(self, arguments: dict) -> dict:
        data = validate_input(ProblemRef, arguments)
        self.state.store.get_problem(data.problem_id)
        metrics = calculate_metrics(
            self.state.store, data.problem_id, strict=self.state.strict_depth_cycles,
        )
        return {"metrics": metrics.to_dict()}

    def get_decomposition(self, arguments: dict) -> dict:
        data = validate_input(ProblemRef, arguments)
        store = self.state.store
        problem = store.get_problem(data.problem_id)
        components = store.components_for_problem(data.problem_id)
        metrics = calculate_metrics(
            store, data.problem_id, strict=self.state.strict_depth_cycles,
        )
        return {
            "problem": problem.to_dict(),
            "components": [c.to_dict() for c in components],
            "metrics": metrics.to_dict(),
        }

    def get_component_details(self, arguments: dict) -> dict:
        data = validate_input(ComponentRef, arguments)
        store = self.state.store
        component = store.get_component(data.component_id)
        return {
            "component": component.to_dict(),
            "dependencies": [
                store.get_component(dep_id).to_dict()
                for dep_id in component.dependencies
            ],
            "dependents": [c.to_dict() for c in store.dependents_of(data.component_id)],
        }

    def get_problem_details(self, arguments: dict) -> dict:
        data = validate_input(ProblemRef, arguments)
        problem = self.state.store.get_problem(data.problem_id)
        return {"problem": problem.to_dict()}
