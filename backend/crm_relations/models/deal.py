"""
Deal model (business opportunity).
"""

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crm_relations.db.base import Base


class Deal(Base):
    """Business opportunity; referenced by synergies."""

    __tablename__ = "deals"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(100), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True)
    value = Column(Numeric(15, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    company = relationship("Company", back_populates="deals")
    synergies = relationship(
        "Synergy",
        back_populates="deal",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
