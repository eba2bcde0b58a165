"""Services Layer — entity services and the stored-procedure gateway.

Invariants:
    - Services talk to repositories/executors, never to FastAPI objects
"""
