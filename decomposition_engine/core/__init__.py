"""Core Layer — domain logic over in-memory state, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - Every check that can fail runs before the write it guards

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
