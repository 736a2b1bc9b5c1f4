"""Domain models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Manufacturer:
    """A car manufacturer as stored in the manufacturers table.

    The is_deleted flag lives only in the database and is not mirrored here.
    """
    name: str
    country: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: dict):
        """Create from a RealDictCursor row."""
        return cls(
            id=row['id'],
            name=row['name'],
            country=row['country']
        )
