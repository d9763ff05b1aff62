"""
Company model.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crm_relations.db.base import Base


class Company(Base):
    """An organization tracked by the CRM."""

    __tablename__ = "companies"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    website = Column(String(255), nullable=True)
    # Company-side designation; independent of any area's is_primary flag.
    # contacts <-> companies reference each other, so this side is added after both tables exist.
    primary_contact_id = Column(
        Integer,
        ForeignKey(
            "contacts.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_companies_primary_contact_id",
        ),
        nullable=True,
        index=True,
    )
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    primary_contact = relationship("Contact", foreign_keys=[primary_contact_id], post_update=True)
    areas_of_activity = relationship(
        "AreaOfActivity",
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    synergies = relationship(
        "Synergy",
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    deals = relationship("Deal", back_populates="company", passive_deletes=True)
