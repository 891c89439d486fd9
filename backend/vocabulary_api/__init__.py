"""Vocabulary API Package - word lookup backed by a local cache and an external dictionary.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
