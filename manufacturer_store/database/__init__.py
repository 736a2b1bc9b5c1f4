"""
Database package - Couche d'accès aux données PostgreSQL.

Ce package contient:
- DatabaseManager: Gestion du pool de connexions
- Repositories: Accès aux données par table (pattern Repository)
"""

from .db_manager import DatabaseManager

__all__ = ['DatabaseManager']
