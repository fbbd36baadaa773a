"""Core Layer: pure domain logic, no IO, no DB, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Typed errors, password rules, and the error classifier live here

Design Decisions:
    - Functional core separated from imperative shell; IO reached only via Protocols
"""
