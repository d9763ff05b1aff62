"""
Contact model.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crm_relations.db.base import Base


class Contact(Base):
    """A person tracked by the CRM."""

    __tablename__ = "contacts"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    # Denormalized pointer to the company of the primary area of activity
    primary_company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    primary_company = relationship("Company", foreign_keys=[primary_company_id])
    areas_of_activity = relationship(
        "AreaOfActivity",
        back_populates="contact",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="AreaOfActivity.id",
    )
    synergies = relationship(
        "Synergy",
        back_populates="contact",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
