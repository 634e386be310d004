"""
Works API - Application Package Initializer
============================================

What: Marks the `worksapi` directory as a Python package.
Who:  Used by uvicorn (worksapi.main:app), pytest, and the `works-api` script.

Architecture Note:
    The service follows the same layered shape throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Work storage)     │  ← find/create/update/delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Database handle, sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
