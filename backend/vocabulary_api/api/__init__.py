"""API Layer - FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All word endpoints return the ApiResponse envelope

Design Decisions:
    - Thin routes: validate, delegate to the WordService, shape the response
"""
