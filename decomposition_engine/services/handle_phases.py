"""Phase Handlers — start, complete and list decomposition phases (3 methods).

Invariants:
    - startPhase fails only on malformed input (duplicate ids accepted)
    - completePhase writes nothing unless both phase and problem exist
"""

import logging

from decomposition_engine.core.decomposition_state import DecompositionState
from decomposition_engine.core.format_component import format_metrics
from decomposition_engine.schemas.decomposition import (
    CompletePhaseInput, PhaseInput, nested_payload, validate_input,
)

logger = logging.getLogger(__name__)


class PhaseHandlers:
    """Phase lifecycle actions."""

    def __init__(self, state: DecompositionState, log_summaries: bool = True):
        self.state = state
        self.log_summaries = log_summaries

    def start_phase(self, arguments: dict) -> dict:
        data = validate_input(PhaseInput, nested_payload(arguments, "phaseData"))
        phase = self.state.lifecycle.start_phase(
            self.state.store, data.phase_id, data.phase_name, data.description,
        )
        if self.log_summaries:
            logger.info(
                f"Started phase: {phase.phase_name}",
                extra={"phase_id": phase.phase_id},
            )
        return {
            "message": f"Phase {phase.phase_name} started successfully",
            "phase": phase.to_dict(),
        }

    def complete_phase(self, arguments: dict) -> dict:
        data = validate_input(CompletePhaseInput, arguments)
        phase = self.state.lifecycle.complete_phase(
            self.state.store, data.phase_id, data.problem_id,
            strict=self.state.strict_depth_cycles,
        )
        if self.log_summaries:
            logger.info(
                f"Completed phase: {phase.phase_name} ({format_metrics(phase.metrics)})",
                extra={"phase_id": phase.phase_id, "problem_id": data.problem_id},
            )
        return {
            "message": f"Phase {phase.phase_name} completed successfully",
            "phase": phase.to_dict(),
        }

    def get_phase_history(self, arguments: dict) -> dict:
        return self.state.lifecycle.history()
