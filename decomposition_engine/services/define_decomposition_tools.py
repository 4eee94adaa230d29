"""Define Decomposition Tool — tool schema advertised to the tool-calling host.

Invariants:
    - Schema follows the tool_use format (name, description, input_schema)
    - The action enum lists exactly the actions the dispatcher registers
    - Required fields per entity payload mirror schemas/decomposition.py

Design Decisions:
    - Tool schema in a dedicated file: explicit, no auto-discovery (ADR: ExMA anti-pattern)
"""

from decomposition_engine.core.domain_types import Action, ComponentStatus

_ID = {"type": "string"}

DECOMPOSITION_TOOL = {
    "name": "decomposition",
    "description": """Break complex problems down into manageable components.

Analyzes a problem through a structured decomposition process that identifies components, dependencies and relationships.

When to use this tool:
- Breaking down complex systems or problems into smaller parts
- Identifying dependencies between components
- Planning implementation strategies for complex tasks
- Measuring the complexity and balance of a decomposition over phases

Dependencies must be created before they are referenced, and a link that would close a dependency cycle is rejected.""",
    "input_schema": {
        "type": "object",
        "properties": {
            "action": {
                "type": "string",
                "enum": [a.value for a in Action],
                "description": "The decomposition action to perform",
            },
            "problemData": {
                "type": "object",
                "properties": {
                    "problemId": {**_ID, "description": "Unique identifier for the problem"},
                    "problemStatement": {"type": "string", "description": "Clear statement of the problem"},
                    "complexity": {"type": "number", "minimum": 1, "maximum": 10, "description": "Estimated complexity on a scale of 1-10"},
                    "domain": {"type": "string", "description": "Domain or field the problem belongs to"},
                    "constraints": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "List of constraints or requirements",
                    },
                },
                "required": ["problemId", "problemStatement"],
            },
            "componentData": {
                "type": "object",
                "properties": {
                    "componentId": {**_ID, "description": "Unique identifier for the component"},
                    "parentProblemId": {**_ID, "description": "ID of the problem this component belongs to"},
                    "name": {"type": "string", "description": "Name of the component"},
                    "description": {"type": "string", "description": "Detailed description of the component"},
                    "dependencies": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "IDs of components this component depends on",
                    },
                    "status": {
                        "type": "string",
                        "enum": [s.value for s in ComponentStatus],
                        "description": "Current status of the component",
                    },
                    "complexity": {"type": "number", "minimum": 1, "maximum": 10, "description": "Estimated complexity on a scale of 1-10"},
                    "metadata": {"type": "object", "description": "Additional metadata for the component"},
                },
                "required": ["componentId", "parentProblemId", "name", "description"],
            },
            "phaseData": {
                "type": "object",
                "properties": {
                    "phaseId": {**_ID, "description": "Unique identifier for the phase"},
                    "phaseName": {"type": "string", "description": "Name of the decomposition phase"},
                    "description": {"type": "string", "description": "Description of the phase's purpose"},
                },
                "required": ["phaseId", "phaseName", "description"],
            },
            "sourceId": {**_ID, "description": "ID of the component that gains the dependency"},
            "targetId": {**_ID, "description": "ID of the component being depended on"},
            "problemId": {**_ID, "description": "ID of the problem to operate on"},
            "componentId": {**_ID, "description": "ID of the component to operate on"},
            "phaseId": {**_ID, "description": "ID of the phase to operate on"},
        },
        "required": ["action"],
    },
}

ALL_TOOLS: list[dict] = [DECOMPOSITION_TOOL]
