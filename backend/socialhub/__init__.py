"""
SocialHub Backend — Application Package Initializer
====================================================

What: Marks the `socialhub` directory as a Python package.
Who:  Used by uvicorn (`socialhub.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is layered; each layer only talks to the one below it.

    ┌─────────────────────────────────────┐
    │   Middleware (request id, logging,  │  ← bearer token → caller identity
    │   authentication)                   │
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns, access policy
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← rules, outcome → exception
    ├─────────────────────────────────────┤
    │      Repositories (Query Layer)     │  ← parameterized statements,
    │                                     │    explicit found/conflict outcomes
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Entities reference each other by id only (users ← posts ← likes/comments,
    users ← follows → users); related rows are resolved with joins on read.
"""

__version__ = "1.0.0"
