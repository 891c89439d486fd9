"""Pydantic Schemas - response envelope and word DTOs for API endpoints.

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
