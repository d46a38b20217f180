"""
Idea Canvas Backend — Application Package
==========================================

What: REST API for the Idea Canvas blogging platform (blogs, comments,
      wishlists, newsletter, profiles, notifications) over MongoDB.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← queries, toggles, defaults
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic request/response models
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Motor client and collections
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
