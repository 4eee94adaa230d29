"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProblemId, ComponentId, PhaseId wrap caller-supplied strings
    - Complexity is bounded 1–10 (MIN_COMPLEXITY..MAX_COMPLEXITY)
    - BalanceScore is bounded 1.0–10.0
    - Component status encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (tool results are JSON)
    - MetadataValue as a recursive JSON alias: "anything goes" bag stays typed
"""

from enum import Enum
from typing import NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

ProblemId = NewType("ProblemId", str)
ComponentId = NewType("ComponentId", str)
PhaseId = NewType("PhaseId", str)


# ─── Value Types ─────────────────────────────────────────────────

BalanceScore = NewType("BalanceScore", float)   # 1.0–10.0
EpochMillis = NewType("EpochMillis", int)

MetadataValue = Union[
    str, int, float, bool, None,
    list["MetadataValue"], dict[str, "MetadataValue"],
]


# ─── Bounds ──────────────────────────────────────────────────────

MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 10
DEFAULT_COMPLEXITY = 5

MIN_BALANCE_SCORE = 1.0
PERFECT_BALANCE_SCORE = 10.0

NO_CURRENT_PHASE = -1


# ─── Enums ───────────────────────────────────────────────────────

class ComponentStatus(str, Enum):
    """Component progress states."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Action(str, Enum):
    """Every action the decomposition tool accepts."""
    CREATE_PROBLEM = "createProblem"
    UPDATE_PROBLEM = "updateProblem"
    CREATE_COMPONENT = "createComponent"
    UPDATE_COMPONENT = "updateComponent"
    LINK_COMPONENTS = "linkComponents"
    START_PHASE = "startPhase"
    COMPLETE_PHASE = "completePhase"
    CALCULATE_METRICS = "calculateMetrics"
    GET_DECOMPOSITION = "getDecomposition"
    GET_COMPONENT_DETAILS = "getComponentDetails"
    GET_PROBLEM_DETAILS = "getProblemDetails"
    GET_PHASE_HISTORY = "getPhaseHistory"
