"""
Base controller class.
A controller composes the services behind one HTTP resource and returns Pydantic schemas.
"""

from abc import ABC


class BaseController(ABC):
    """Base controller class for all controllers."""
    pass
