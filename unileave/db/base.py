# unileave/db/base.py

"""
Declarative base shared by every model.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models - SINGLE SOURCE OF TRUTH."""
    pass
