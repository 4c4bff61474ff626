"""
SQLAlchemy ORM models for saved deal scenarios.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Integer,
    Boolean,
    DateTime,
    JSON,
    Enum as SQLEnum,
)
from sqlalchemy.orm import declarative_base
import uuid

from dealcalc.calculations.types import Strategy

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class AuditMixin:
    """Mixin for audit fields on all models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    is_deleted = Column(Boolean, default=False, nullable=False)


class Scenario(AuditMixin, Base):
    """
    A saved deal: the calculator inputs for one strategy plus the summary
    metrics computed when it was saved.

    The payload is stored as-is; it is only interpreted by API clients.
    """

    __tablename__ = "scenarios"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False, index=True)
    strategy = Column(SQLEnum(Strategy), nullable=False, index=True)

    # Calculator inputs and cached outputs
    payload = Column(JSON, nullable=False, default=dict)
    summary = Column(JSON, nullable=True)

    # Payload schema version
    version = Column(Integer, default=1, nullable=False)

    def __repr__(self):
        return f"<Scenario(id={self.id}, name={self.name}, strategy={self.strategy})>"
