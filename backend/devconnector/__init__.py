"""
DevConnector Backend: Application Package
==========================================

What: The `devconnector` package holds the REST backend for the developer
      social network (accounts, profiles, posts).
Who:  Imported by uvicorn (`devconnector.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │      Routes (API Layer)             │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Business Rules)      │  ← ownership, duplicates, tokens
    ├─────────────────────────────────────┤
    │      Repositories (Documents)       │  ← CRUD + sub-collection mutation
    ├─────────────────────────────────────┤
    │      Models & Schemas (Data)        │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Routes never touch the database directly; services never see HTTP objects.
    Every layer is built once by `create_app()` and handed down explicitly.
"""

__version__ = "1.0.0"
