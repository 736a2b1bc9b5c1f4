"""
Repositories - Pattern Repository pour l'accès aux données.

Chaque repository gère l'accès aux données d'une table spécifique.
"""

from .manufacturers_repository import ManufacturersRepository

__all__ = [
    'ManufacturersRepository'
]
