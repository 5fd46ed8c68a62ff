"""Services Layer — repositories and request-scoped orchestration.

Invariants:
    - Services receive repositories, never construct sessions
    - Business rules delegated to core/ pure functions
"""
