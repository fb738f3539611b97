"""
DevConnector Backend - Application Package Initializer
======================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import Settings`.
Who:  Used by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Auth Gate (dependencies.py)    │  ← bearer token → User
    ├─────────────────────────────────────┤
    │         Services (Orchestration)    │  ← load → mutate → persist
    ├─────────────────────────────────────┤
    │     Mutation Engine (mutations.py)  │  ← pure sub-collection rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Profiles and posts are stored as aggregates: one row holds the scalar
    fields plus JSON sub-collections (experience, education, likes, comments),
    loaded and written back as a single unit.
"""

__version__ = "1.0.0"
