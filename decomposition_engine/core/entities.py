"""Entities — Problem, Component, DecompositionPhase and derived metrics.

Invariants:
    - Pure dataclasses: no IO, no lookups, no validation (schemas/ validates)
    - to_dict() emits the camelCase wire shape used in tool results
    - DecompositionPhase.completed_at is None while the phase is open
    - Component.dependencies keeps insertion order, never holds duplicates

Design Decisions:
    - Mutable dataclasses: updates replace fields in place, identity is the key
    - Timestamps as epoch milliseconds (tool-result wire format)
"""

import time
from dataclasses import dataclass, field

from decomposition_engine.core.domain_types import (
    BalanceScore, ComponentId, ComponentStatus, DEFAULT_COMPLEXITY, EpochMillis,
    MetadataValue, PERFECT_BALANCE_SCORE, PhaseId, ProblemId,
)


def now_millis() -> EpochMillis:
    """Current wall-clock time in epoch milliseconds."""
    return EpochMillis(int(time.time() * 1000))


@dataclass
class Problem:
    problem_id: ProblemId
    problem_statement: str
    complexity: float = DEFAULT_COMPLEXITY
    domain: str = ""
    constraints: list[str] = field(default_factory=list)
    created_at: EpochMillis = EpochMillis(0)

    def to_dict(self) -> dict:
        return {
            "problemId": self.problem_id,
            "problemStatement": self.problem_statement,
            "complexity": self.complexity,
            "domain": self.domain,
            "constraints": list(self.constraints),
            "createdAt": self.created_at,
        }


@dataclass
class Component:
    component_id: ComponentId
    parent_problem_id: ProblemId
    name: str
    description: str
    dependencies: list[ComponentId] = field(default_factory=list)
    status: ComponentStatus = ComponentStatus.PENDING
    complexity: float = DEFAULT_COMPLEXITY
    created_at: EpochMillis = EpochMillis(0)
    updated_at: EpochMillis = EpochMillis(0)
    metadata: dict[str, MetadataValue] = field(default_factory=dict)

    def depends_on(self, component_id: str) -> bool:
        return component_id in self.dependencies

    def to_dict(self) -> dict:
        return {
            "componentId": self.component_id,
            "parentProblemId": self.parent_problem_id,
            "name": self.name,
            "description": self.description,
            "dependencies": list(self.dependencies),
            "status": self.status.value,
            "complexity": self.complexity,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class DecompositionMetrics:
    """Point-in-time structural measurement of one Problem's components."""
    component_count: int = 0
    average_complexity: float = 0.0
    max_depth: int = 0
    dependency_count: int = 0
    balance_score: BalanceScore = BalanceScore(PERFECT_BALANCE_SCORE)

    def to_dict(self) -> dict:
        return {
            "componentCount": self.component_count,
            "averageComplexity": self.average_complexity,
            "maxDepth": self.max_depth,
            "dependencyCount": self.dependency_count,
            "balanceScore": self.balance_score,
        }


@dataclass
class DecompositionPhase:
    phase_id: PhaseId
    phase_name: str
    description: str
    started_at: EpochMillis
    completed_at: EpochMillis | None = None
    metrics: DecompositionMetrics = field(default_factory=DecompositionMetrics)

    @property
    def is_open(self) -> bool:
        return self.completed_at is None

    def to_dict(self) -> dict:
        data = {
            "phaseId": self.phase_id,
            "phaseName": self.phase_name,
            "description": self.description,
            "startedAt": self.started_at,
            "metrics": self.metrics.to_dict(),
        }
        if self.completed_at is not None:
            data["completedAt"] = self.completed_at
        return data
