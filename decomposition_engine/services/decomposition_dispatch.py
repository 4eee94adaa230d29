"""Decomposition Dispatch — explicit routing from action name to handler.

Invariants:
    - Every action->handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown actions return an UNKNOWN_ACTION failure envelope (never raises)
    - DecompositionError -> {status: failed, error, errorCode}; anything else propagates
    - One action at a time: a dispatcher-wide lock serializes every call, so the
      cycle guard and the write it protects are atomic
    - Every call logged with action and outcome

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
      (ADR: ExMA no convention-over-config)
    - Split handlers by concern: max ~5 methods per class (ADR: ExMA no god objects)
    - threading.Lock over per-problem locks: components may depend across problems,
      so the whole component universe is one critical section
"""

import logging
import threading
from collections.abc import Callable

from decomposition_engine.core.decomposition_state import DecompositionState
from decomposition_engine.core.domain_types import Action
from decomposition_engine.core.errors import DecompositionError, UnknownActionError
from decomposition_engine.services.handle_entities import EntityHandlers
from decomposition_engine.services.handle_graph import GraphHandlers
from decomposition_engine.services.handle_phases import PhaseHandlers

logger = logging.getLogger(__name__)


class DecompositionDispatch:
    """Routes action -> handler. Explicit registration, no auto-discovery."""

    def __init__(
        self, state: DecompositionState | None = None,
        log_summaries: bool = True, session_id: str | None = None,
    ):
        self._state = state or DecompositionState()
        self._session_id = session_id
        self._lock = threading.Lock()
        entities = EntityHandlers(self._state, log_summaries)
        graph = GraphHandlers(self._state, log_summaries)
        phases = PhaseHandlers(self._state, log_summaries)

        # ADR: every mapping explicit — adding an action requires editing this dict
        self._handlers: dict[str, Callable[[dict], dict]] = {
            # Entity store (4 actions)
            Action.CREATE_PROBLEM.value: entities.create_problem,
            Action.UPDATE_PROBLEM.value: entities.update_problem,
            Action.CREATE_COMPONENT.value: entities.create_component,
            Action.UPDATE_COMPONENT.value: entities.update_component,

            # Dependency graph (5 actions)
            Action.LINK_COMPONENTS.value: graph.link_components,
            Action.CALCULATE_METRICS.value: graph.calculate_metrics,
            Action.GET_DECOMPOSITION.value: graph.get_decomposition,
            Action.GET_COMPONENT_DETAILS.value: graph.get_component_details,
            Action.GET_PROBLEM_DETAILS.value: graph.get_problem_details,

            # Phase lifecycle (3 actions)
            Action.START_PHASE.value: phases.start_phase,
            Action.COMPLETE_PHASE.value: phases.complete_phase,
            Action.GET_PHASE_HISTORY.value: phases.get_phase_history,
        }

    @property
    def state(self) -> DecompositionState:
        return self._state

    @property
    def actions(self) -> list[str]:
        return list(self._handlers)

    def execute(self, action: str, arguments: dict | None = None) -> dict:
        """Route action to handler. Returns the success or failure envelope."""
        arguments = arguments or {}
        with self._lock:
            try:
                handler = self._handlers.get(action)
                if handler is None:
                    raise UnknownActionError(action)
                result = {"status": "success", **handler(arguments)}
            except DecompositionError as e:
                e.context.action = action
                e.context.session_id = self._session_id
                self._log_failure(e)
                return e.to_envelope()
        logger.debug(
            f"Action '{action}' succeeded",
            extra={"action": action, "session_id": self._session_id},
        )
        return result

    def _log_failure(self, error: DecompositionError) -> None:
        logger.info(
            f"Action '{error.context.action}' failed "
            f"({error.category.value}): {error.message}",
            extra={
                "action": error.context.action,
                "session_id": error.context.session_id,
                "error_code": error.code,
            },
        )
