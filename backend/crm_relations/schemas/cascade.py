"""
Cascade delete report schema.
"""

from pydantic import BaseModel


class CascadeReport(BaseModel):
    """What disappeared along with a deleted contact, company or deal."""
    entity: str
    id: int
    areas_removed: int = 0
    synergies_removed: int = 0
