"""
Shared utilities (NOT business logic).

Usage:
    from app.shared import BaseRepository
"""
from .repository import BaseRepository

__all__ = [
    "BaseRepository",
]
