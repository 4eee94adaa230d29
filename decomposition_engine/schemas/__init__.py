"""Pydantic Schemas — action payload validation at the tool boundary.

Invariants:
    - Schemas validate before any store access
    - Domain types from core/ used for enum fields and bounds

Design Decisions:
    - Separate from core entities: schemas are wire contracts, entities are state (ADR: DDD boundary)
"""
