"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, stores/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (clock is always passed in)

Design Decisions:
    - Functional core separated from imperative shell: coordinators in services/
      decide with core functions and perform IO through stores
"""
