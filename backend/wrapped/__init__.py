"""
Wrapped Backend - Application Package
=======================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │      Routes + Dependencies (API)    │  ← HTTP, cookies, auth context
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Ownership checks, conflicts
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

`wrapped.client` is the Python counterpart of the browser client's API layer.
"""

__version__ = "1.0.0"
