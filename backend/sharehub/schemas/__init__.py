"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain rules (quantities, ratings, expiration instants) are re-checked
      by core/ and the stores; schemas only reject malformed input early

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Responses read ORM rows directly (from_attributes=True)
"""
