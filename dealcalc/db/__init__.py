"""
Database configuration and models.
"""

from dealcalc.db.database import engine, SessionLocal, get_db
from dealcalc.db.models import Base

__all__ = ["engine", "SessionLocal", "get_db", "Base"]
