"""
Commander Backend — Application Package Initializer
===================================================

What: Marks the `commander` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn commander.main:app`), pytest and the
      route/service modules.

Architecture Note:
    A small layered REST service that stores terminal command reminders:

    ┌─────────────────────────────────────┐
    │         Routes (API Layer)          │  ← status codes, headers, bodies
    ├─────────────────────────────────────┤
    │     Services (Resource Handler)     │  ← fetch, null-check, map, commit
    ├─────────────────────────────────────┤
    │   Mapping · Schemas · ORM Models    │  ← DTO ↔ entity field table
    ├─────────────────────────────────────┤
    │       Repositories (Data Access)    │  ← mock or async SQLAlchemy store
    └─────────────────────────────────────┘

    The repository implementation is chosen once, when the application is
    created, and handed to each request through FastAPI dependencies.
"""

__version__ = "1.0.0"
