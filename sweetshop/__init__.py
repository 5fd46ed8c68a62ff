"""Sweet Shop Application Package — inventory service for the sweet catalog.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
