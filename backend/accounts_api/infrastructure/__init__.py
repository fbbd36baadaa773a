"""Infrastructure Layer: database, password hashing, and logging setup.

Invariants:
    - Implements the core Protocols (UserStore, PasswordHasher)
    - Infrastructure never raises framework exceptions into core

Design Decisions:
    - Concrete adapters live here so core stays testable with in-memory fakes
"""
