"""
Synergy: ternary association between Contact, Company and Deal.
"""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crm_relations.db.base import Base


class Synergy(Base):
    """
    An external connector for a deal.

    The contact is linked to a deal of the company without working there.
    A synergy is only valid with all three owners present.
    """

    __tablename__ = "synergies"
    __table_args__ = (
        CheckConstraint("contact_id IS NOT NULL", name="ck_synergies_contact_id"),
        CheckConstraint("company_id IS NOT NULL", name="ck_synergies_company_id"),
        CheckConstraint("deal_id IS NOT NULL", name="ck_synergies_deal_id"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    contact_id = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    deal_id = Column(Integer, ForeignKey("deals.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False, default="business")
    status = Column(String(50), nullable=False, default="active")
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    contact = relationship("Contact", back_populates="synergies")
    company = relationship("Company", back_populates="synergies")
    deal = relationship("Deal", back_populates="synergies")
