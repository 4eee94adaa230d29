"""Services Layer — action handlers, tool definition and dispatch.

Invariants:
    - Handlers split by concern (max 5 methods each)
    - Dispatch uses explicit dict mapping (no auto-discovery)

Design Decisions:
    - One handler file per engine component for locality (ADR: ExMA no god objects)
"""
