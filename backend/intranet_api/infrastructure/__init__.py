"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver exceptions are mapped to core/errors.py types before leaving this layer
"""
