"""Core - pure domain logic: validation rules, result types, statistics, errors.

Invariants:
    - No IO, no async, no DB in core functions
    - IO contracts expressed as Protocols (repository_protocols.py)
"""
