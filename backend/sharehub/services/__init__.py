"""Services Layer — coordinators that stitch independent concept stores into workflows.

Invariants:
    - Coordinators own no persistent state; all state lives in the stores
    - Every multi-store write is declared as SagaStep list (saga.py)

Design Decisions:
    - Coordinators depend on core StoreProvider, never on concrete stores
"""
