"""Decomposition Schemas — Pydantic models validating every action payload.

Invariants:
    - Validation happens before any store lookup: a rejected payload never mutates state
    - Required identifiers and texts are non-empty strings (no number coercion)
    - complexity is a number within 1–10, defaulting to 5
    - dependencies are de-duplicated, first occurrence order kept
    - Field names on the wire are camelCase (aliases); Python side is snake_case

Design Decisions:
    - Entity payloads nest under problemData / componentData / phaseData (tool schema);
      flat top-level arguments accepted when the nested object is absent
    - pydantic ValidationError translated to ToolValidationError naming the first
      failing field, so the dispatcher sees one error hierarchy
    - metadata validated as pydantic JsonValue, the validating twin of the
      MetadataValue alias: non-JSON values are rejected at the boundary
"""

from typing import Any, TypeVar

from pydantic import (
    BaseModel, ConfigDict, Field, JsonValue, ValidationError, field_validator,
)

from decomposition_engine.core.domain_types import (
    ComponentStatus, DEFAULT_COMPLEXITY, MAX_COMPLEXITY, MIN_COMPLEXITY,
)
from decomposition_engine.core.errors import ToolValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _complexity() -> Any:
    return Field(
        DEFAULT_COMPLEXITY, ge=MIN_COMPLEXITY, le=MAX_COMPLEXITY, strict=True,
    )


class ProblemInput(_Payload):
    """createProblem / updateProblem payload."""
    problem_id: str = Field(alias="problemId", min_length=1)
    problem_statement: str = Field(alias="problemStatement", min_length=1)
    complexity: float = _complexity()
    domain: str = ""
    constraints: list[str] = Field(default_factory=list)


class ComponentInput(_Payload):
    """createComponent / updateComponent payload."""
    component_id: str = Field(alias="componentId", min_length=1)
    parent_problem_id: str = Field(alias="parentProblemId", min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    dependencies: list[str] = Field(default_factory=list)
    status: ComponentStatus = ComponentStatus.PENDING
    complexity: float = _complexity()
    metadata: dict[str, JsonValue] = Field(default_factory=dict)

    @field_validator("dependencies")
    @classmethod
    def dedupe_dependencies(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


class PhaseInput(_Payload):
    """startPhase payload."""
    phase_id: str = Field(alias="phaseId", min_length=1)
    phase_name: str = Field(alias="phaseName", min_length=1)
    description: str = Field(min_length=1)


class LinkInput(_Payload):
    source_id: str = Field(alias="sourceId", min_length=1)
    target_id: str = Field(alias="targetId", min_length=1)


class CompletePhaseInput(_Payload):
    phase_id: str = Field(alias="phaseId", min_length=1)
    problem_id: str = Field(alias="problemId", min_length=1)


class ProblemRef(_Payload):
    problem_id: str = Field(alias="problemId", min_length=1)


class ComponentRef(_Payload):
    component_id: str = Field(alias="componentId", min_length=1)


class ToolCallRequest(BaseModel):
    """HTTP body: action name plus the action's arguments at the top level."""
    model_config = ConfigDict(extra="allow")

    action: str = Field(min_length=1)


# --- Parsing helpers ---------------------------------------------------------

def nested_payload(arguments: dict, key: str) -> dict:
    """Return arguments[key] when present, else the flat arguments."""
    if key not in arguments:
        return arguments
    payload = arguments[key]
    if not isinstance(payload, dict):
        raise ToolValidationError(f"Invalid {key}: must be an object", key)
    return payload


def validate_input(model: type[ModelT], data: dict) -> ModelT:
    """Validate data against model, raising ToolValidationError on the first failure."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"]) or "payload"
        raise ToolValidationError(f"Invalid {field}: {first['msg']}", field) from e
