"""Database Infrastructure: SQLAlchemy Base and standalone session factory.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local runs and tests
"""
