"""Entity Handlers — create/update actions for Problems and Components (4 methods).

Invariants:
    - All methods follow validate (schema) -> check (store/graph) -> write
    - Every raised DecompositionError precedes the store write
    - updateComponent runs the cycle guard on its new dependency set

Design Decisions:
    - Handler class with explicit state: no globals (ADR: ExMA)
    - Raises (does not return error dicts): the dispatcher owns the failure envelope
"""

import logging

from decomposition_engine.core.decomposition_state import DecompositionState
from decomposition_engine.core.dependency_graph import check_dependency_set
from decomposition_engine.core.domain_types import ComponentId, ProblemId
from decomposition_engine.core.entities import Component, Problem
from decomposition_engine.core.format_component import format_component
from decomposition_engine.schemas.decomposition import (
    ComponentInput, ProblemInput, nested_payload, validate_input,
)

logger = logging.getLogger(__name__)


def _problem_from(data: ProblemInput) -> Problem:
    return Problem(
        problem_id=ProblemId(data.problem_id),
        problem_statement=data.problem_statement,
        complexity=data.complexity,
        domain=data.domain,
        constraints=list(data.constraints),
    )


def _component_from(data: ComponentInput) -> Component:
    return Component(
        component_id=ComponentId(data.component_id),
        parent_problem_id=ProblemId(data.parent_problem_id),
        name=data.name,
        description=data.description,
        dependencies=[ComponentId(d) for d in data.dependencies],
        status=data.status,
        complexity=data.complexity,
        metadata=dict(data.metadata),
    )


class EntityHandlers:
    """Problem and Component writes."""

    def __init__(self, state: DecompositionState, log_summaries: bool = True):
        self.state = state
        self.log_summaries = log_summaries

    def create_problem(self, arguments: dict) -> dict:
        data = validate_input(ProblemInput, nested_payload(arguments, "problemData"))
        problem = self.state.store.create_problem(_problem_from(data))
        if self.log_summaries:
            logger.info(
                f"Created problem: {problem.problem_id}",
                extra={"problem_id": problem.problem_id},
            )
        return {
            "message": f"Problem {problem.problem_id} created successfully",
            "problem": problem.to_dict(),
        }

    def update_problem(self, arguments: dict) -> dict:
        data = validate_input(ProblemInput, nested_payload(arguments, "problemData"))
        problem = self.state.store.update_problem(_problem_from(data))
        if self.log_summaries:
            logger.info(
                f"Updated problem: {problem.problem_id}",
                extra={"problem_id": problem.problem_id},
            )
        return {
            "message": f"Problem {problem.problem_id} updated successfully",
            "problem": problem.to_dict(),
        }

    def create_component(self, arguments: dict) -> dict:
        data = validate_input(ComponentInput, nested_payload(arguments, "componentData"))
        component = self.state.store.create_component(_component_from(data))
        self._log_component("Created", component)
        return {
            "message": f"Component {component.component_id} created successfully",
            "component": component.to_dict(),
        }

    def update_component(self, arguments: dict) -> dict:
        data = validate_input(ComponentInput, nested_payload(arguments, "componentData"))
        store = self.state.store
        candidate = _component_from(data)

        # Existence first, then references, then acyclicity — all before the write
        store.get_component(candidate.component_id)
        store.ensure_references(candidate)
        check_dependency_set(
            store.adjacency(), candidate.component_id, candidate.dependencies,
        )

        component = store.update_component(candidate)
        self._log_component("Updated", component)
        return {
            "message": f"Component {component.component_id} updated successfully",
            "component": component.to_dict(),
        }

    def _log_component(self, verb: str, component: Component) -> None:
        if not self.log_summaries:
            return
        logger.info(
            f"{verb} component: {component.component_id}\n"
            f"{format_component(component)}",
            extra={"component_id": component.component_id},
        )
