"""
Album API — Application Package Initializer
============================================

What: Marks the `albumapi` directory as a Python package.
Why:  Enables module imports like `from albumapi.config import Settings`.
Who:  Used by uvicorn, pytest, and the `album-api` console script.

Architecture Note:
    The service is a thin layered facade over an Airtable table:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      AlbumService (the Store)       │  ← one backend call per operation
    ├─────────────────────────────────────┤
    │   Record Mapper & Schemas (Data)    │  ← field map ⇄ Album
    ├─────────────────────────────────────┤
    │     TableBackend (Airtable REST)    │  ← httpx client, durable state lives remotely
    └─────────────────────────────────────┘

    Nothing is persisted locally; the backend is the only source of truth.
"""

__version__ = "1.0.0"
