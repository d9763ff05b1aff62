"""
Area of activity: association object between Contact and Company.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crm_relations.db.base import Base


class AreaOfActivity(Base):
    """A contact's role at a company. At most one area per contact is primary."""

    __tablename__ = "areas_of_activity"
    __table_args__ = (
        UniqueConstraint("contact_id", "company_id", name="uq_areas_of_activity_contact_company"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    contact_id = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(100), nullable=True)
    job_description = Column(Text, nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    contact = relationship("Contact", back_populates="areas_of_activity")
    company = relationship("Company", back_populates="areas_of_activity")
