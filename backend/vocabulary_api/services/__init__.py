"""Services Layer - word repository and cache-first word service.

Invariants:
    - WordService is the only collaborator the routes know about
"""
