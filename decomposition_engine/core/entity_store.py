"""Entity Store — in-memory repository of Problems and Components keyed by id.

Invariants:
    - One mapping per entity type, owned by the store instance (no module globals)
    - Every existence check runs BEFORE the write: a raised error means no mutation
    - Updates copy forward created_at; component updates refresh updated_at
    - Nothing is ever deleted

Design Decisions:
    - Explicit repository object passed into handlers: test isolation and one
      store per decomposition session (ADR: no ambient global state)
    - Clock injected as a callable: timestamp behavior testable without sleeping
    - Cycle checks are NOT done here — dependency_graph owns acyclicity
"""

from collections.abc import Callable

from decomposition_engine.core.domain_types import ComponentId, EpochMillis, ProblemId
from decomposition_engine.core.entities import Component, Problem, now_millis
from decomposition_engine.core.errors import AlreadyExistsError, ResourceNotFoundError


class EntityStore:
    """Problems and Components for one decomposition session."""

    def __init__(self, clock: Callable[[], EpochMillis] = now_millis):
        self._clock = clock
        self._problems: dict[str, Problem] = {}
        self._components: dict[str, Component] = {}

    def now(self) -> EpochMillis:
        return self._clock()

    # --- Existence checks -----------------------------------------------------

    def has_problem(self, problem_id: str) -> bool:
        return problem_id in self._problems

    def has_component(self, component_id: str) -> bool:
        return component_id in self._components

    def get_problem(self, problem_id: str) -> Problem:
        problem = self._problems.get(problem_id)
        if problem is None:
            raise ResourceNotFoundError("Problem", problem_id)
        return problem

    def get_component(self, component_id: str, role: str = "Component") -> Component:
        component = self._components.get(component_id)
        if component is None:
            raise ResourceNotFoundError(role, component_id)
        return component

    def ensure_references(self, component: Component) -> None:
        """Parent problem and every dependency must already exist."""
        if not self.has_problem(component.parent_problem_id):
            raise ResourceNotFoundError("Parent problem", component.parent_problem_id)
        for dep_id in component.dependencies:
            if not self.has_component(dep_id):
                raise ResourceNotFoundError("Dependency component", dep_id)

    # --- Problems -------------------------------------------------------------

    def create_problem(self, problem: Problem) -> Problem:
        if self.has_problem(problem.problem_id):
            raise AlreadyExistsError("Problem", problem.problem_id)
        problem.created_at = self.now()
        self._problems[problem.problem_id] = problem
        return problem

    def update_problem(self, problem: Problem) -> Problem:
        existing = self.get_problem(problem.problem_id)
        problem.created_at = existing.created_at
        self._problems[problem.problem_id] = problem
        return problem

    # --- Components -----------------------------------------------------------

    def create_component(self, component: Component) -> Component:
        if self.has_component(component.component_id):
            raise AlreadyExistsError("Component", component.component_id)
        self.ensure_references(component)
        now = self.now()
        component.created_at = now
        component.updated_at = now
        self._components[component.component_id] = component
        return component

    def update_component(self, component: Component) -> Component:
        existing = self.get_component(component.component_id)
        self.ensure_references(component)
        component.created_at = existing.created_at
        component.updated_at = self.now()
        self._components[component.component_id] = component
        return component

    def add_dependency(self, source_id: str, target_id: str) -> Component:
        """Append target to source's dependencies. Caller has run the cycle guard."""
        source = self.get_component(source_id, "Source component")
        self.get_component(target_id, "Target component")
        if not source.depends_on(target_id):
            source.dependencies.append(ComponentId(target_id))
            source.updated_at = self.now()
        return source

    # --- Queries --------------------------------------------------------------

    def components_for_problem(self, problem_id: str) -> list[Component]:
        """Components owned by problem_id, in creation order."""
        return [
            c for c in self._components.values()
            if c.parent_problem_id == ProblemId(problem_id)
        ]

    def dependents_of(self, component_id: str) -> list[Component]:
        """Components that list component_id as a dependency."""
        return [c for c in self._components.values() if c.depends_on(component_id)]

    def adjacency(self) -> dict[str, list[str]]:
        """Dependency edges over the full component universe."""
        return {cid: list(c.dependencies) for cid, c in self._components.items()}

    @property
    def component_count(self) -> int:
        return len(self._components)
