"""
Exercise Tracker: Application Package
=======================================

A small HTTP API that stores users and their exercise sessions and answers
filtered exercise-log queries.

    ┌─────────────────────────────────────┐
    │     Routes (FastAPI, HTTP only)     │  routes/
    ├─────────────────────────────────────┤
    │  Services (coercion, log building)  │  services/
    ├─────────────────────────────────────┤
    │  Models (SQLAlchemy) & Schemas      │  models/, schemas/
    ├─────────────────────────────────────┤
    │  Database handle (async sessions)   │  database.py
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
