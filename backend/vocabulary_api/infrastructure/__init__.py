"""Infrastructure Layer - database sessions, dictionary provider client, logging.

Invariants:
    - Infrastructure never imports from services/
    - External calls wrapped with retry/timeout/error mapping
"""
