"""Pydantic Schemas — request/response validation for the entity endpoints.

Invariants:
    - Schemas validate shape at the system boundary only

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
