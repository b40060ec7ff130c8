"""
Feature modules for the Habit Tracker.

Each feature is a self-contained module with:
- models.py - SQLAlchemy models / domain types
- schemas.py - Pydantic schemas (optional)
- repository.py - Data access (optional)
- adapters/ - Vendor integrations (optional)
"""
