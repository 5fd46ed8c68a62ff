"""Infrastructure Layer — database, security primitives and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Library exceptions mapped to core/errors.py types at this boundary
"""
