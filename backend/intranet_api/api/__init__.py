"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Gateway responses are passed through verbatim; everything else is structured JSON
"""
