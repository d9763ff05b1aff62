"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from crm_relations.models.contact import Contact
from crm_relations.models.company import Company
from crm_relations.models.deal import Deal
from crm_relations.models.area_of_activity import AreaOfActivity
from crm_relations.models.synergy import Synergy

__all__ = [
    "Contact",
    "Company",
    "Deal",
    "AreaOfActivity",
    "Synergy",
]
