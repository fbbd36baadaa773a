"""Services Layer: business rules orchestrating store and hasher.

Invariants:
    - Services depend on core Protocols, never on SQLAlchemy or passlib directly

Design Decisions:
    - One service class per aggregate (AccountService for users)
"""
