"""Decomposition State — everything one decomposition session owns.

Invariants:
    - Pure dataclass, no IO; lives for the life of the running process
    - Each session has its own store and phase history (no sharing)

Design Decisions:
    - In-memory not DB (ADR: no persistence across restarts)
    - strict_depth_cycles travels with the state so handlers need no settings import
"""

from dataclasses import dataclass, field

from decomposition_engine.core.entity_store import EntityStore
from decomposition_engine.core.phase_lifecycle import PhaseLifecycle


@dataclass
class DecompositionState:
    """Per-session engine state."""

    store: EntityStore = field(default_factory=EntityStore)
    lifecycle: PhaseLifecycle = field(default_factory=PhaseLifecycle)
    strict_depth_cycles: bool = False
