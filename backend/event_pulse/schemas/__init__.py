"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the boundary; grammar parsing stays in core/
    - Domain enums from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
