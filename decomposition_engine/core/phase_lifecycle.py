"""Phase Lifecycle — append-only history of decomposition phases.

Invariants:
    - Phases are never removed; abandoned phases keep completed_at = None
    - current_phase_index points at the most recently STARTED phase (-1 before any)
    - A new phase carries placeholder metrics (count 0, balance 10, rest 0)
    - complete_phase checks phase AND problem existence before writing anything
    - Completion snapshot measures the whole Problem at that instant, not the phase

Design Decisions:
    - Duplicate phase ids accepted as independent history entries; completion
      targets the first entry with the id
    - Completing an already-completed phase recomputes and overwrites the snapshot
"""

from dataclasses import dataclass, field

from decomposition_engine.core.dependency_graph import calculate_metrics
from decomposition_engine.core.domain_types import NO_CURRENT_PHASE, PhaseId
from decomposition_engine.core.entities import DecompositionPhase
from decomposition_engine.core.entity_store import EntityStore
from decomposition_engine.core.errors import ResourceNotFoundError


@dataclass
class PhaseLifecycle:
    """Ordered phase history for one decomposition session."""

    phases: list[DecompositionPhase] = field(default_factory=list)
    current_phase_index: int = NO_CURRENT_PHASE

    @property
    def current_phase(self) -> DecompositionPhase | None:
        if self.current_phase_index == NO_CURRENT_PHASE:
            return None
        return self.phases[self.current_phase_index]

    def find_phase(self, phase_id: str) -> DecompositionPhase:
        for phase in self.phases:
            if phase.phase_id == phase_id:
                return phase
        raise ResourceNotFoundError("Phase", phase_id)

    def start_phase(
        self, store: EntityStore, phase_id: str, phase_name: str, description: str,
    ) -> DecompositionPhase:
        phase = DecompositionPhase(
            phase_id=PhaseId(phase_id),
            phase_name=phase_name,
            description=description,
            started_at=store.now(),
        )
        self.phases.append(phase)
        self.current_phase_index = len(self.phases) - 1
        return phase

    def complete_phase(
        self, store: EntityStore, phase_id: str, problem_id: str,
        strict: bool = False,
    ) -> DecompositionPhase:
        phase = self.find_phase(phase_id)
        store.get_problem(problem_id)
        metrics = calculate_metrics(store, problem_id, strict=strict)
        phase.completed_at = store.now()
        phase.metrics = metrics
        return phase

    def history(self) -> dict:
        return {
            "phases": [p.to_dict() for p in self.phases],
            "currentPhaseIndex": self.current_phase_index,
        }
