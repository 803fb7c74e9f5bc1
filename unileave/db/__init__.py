"""
Database init - Exports for routes
"""

from .base import Base
from unileave.database import engine, SessionLocal, get_db

__all__ = ["Base", "engine", "SessionLocal", "get_db"]
