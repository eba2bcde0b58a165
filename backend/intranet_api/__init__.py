"""Intranet API Package — entity CRUD and the legacy stored-procedure gateway.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
