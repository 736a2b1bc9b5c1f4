"""Manufacturer persistence: PostgreSQL repository with logical deletion."""

from .exceptions import PersistenceError
from .models import Manufacturer

__all__ = ['Manufacturer', 'PersistenceError']
