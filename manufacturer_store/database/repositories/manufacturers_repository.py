"""
ManufacturersRepository - Gestion des constructeurs (table manufacturers).

Repository pour les opérations CRUD sur les constructeurs. La suppression
est logique : la ligne reste en base avec is_deleted = true.
"""

from typing import Optional, List
import psycopg2
import structlog

from ...exceptions import PersistenceError
from ...models import Manufacturer

logger = structlog.get_logger(__name__)

INSERT_QUERY = "INSERT INTO manufacturers (name, country) VALUES (%s, %s) RETURNING id"
GET_BY_ID_QUERY = "SELECT * FROM manufacturers WHERE id = %s"
GET_ALL_QUERY = "SELECT * FROM manufacturers WHERE is_deleted = false"
UPDATE_QUERY = "UPDATE manufacturers SET name = %s, country = %s WHERE id = %s"
DELETE_QUERY = "UPDATE manufacturers SET is_deleted = true WHERE id = %s"


class ManufacturersRepository:
    """
    Repository pour la table manufacturers.

    Chaque méthode emprunte une connexion au DatabaseManager, exécute une
    seule requête et rend la connexion. Toute erreur psycopg2 est convertie
    en PersistenceError.
    """

    def __init__(self, db_manager):
        """
        Initialise le repository.

        Args:
            db_manager: Instance de DatabaseManager
        """
        self.db = db_manager

    def create(self, manufacturer: Manufacturer) -> Manufacturer:
        """
        Insère un nouveau constructeur.

        L'id généré par la base est affecté à l'instance passée, qui est
        ensuite retournée.

        Args:
            manufacturer: Constructeur avec name et country renseignés

        Returns:
            Le même constructeur, avec son id

        Raises:
            PersistenceError: si l'insertion échoue

        Example:
            toyota = repo.create(Manufacturer(name='Toyota', country='Japan'))
        """
        logger.info("manufacturer_create_called", manufacturer=repr(manufacturer))
        try:
            with self.db.get_cursor(dict_cursor=False) as cursor:
                cursor.execute(INSERT_QUERY, (manufacturer.name, manufacturer.country))
                row = cursor.fetchone()
        except psycopg2.Error as e:
            raise PersistenceError(
                f"Can't insert manufacturer to db {manufacturer!r}", e
            ) from e

        if row:
            manufacturer.id = row[0]
        logger.info("manufacturer_created", manufacturer_id=manufacturer.id)
        return manufacturer

    def get_by_id(self, manufacturer_id: int) -> Optional[Manufacturer]:
        """
        Récupère un constructeur par son ID.

        Args:
            manufacturer_id: ID du constructeur

        Returns:
            Manufacturer ou None

        Note:
            Ne filtre pas sur is_deleted : un constructeur supprimé
            logiquement reste accessible par son ID.
        """
        logger.info("manufacturer_get_by_id_called", manufacturer_id=manufacturer_id)
        try:
            row = self.db.fetch_one(GET_BY_ID_QUERY, (manufacturer_id,))
        except psycopg2.Error as e:
            raise PersistenceError(
                f"Can't get manufacturer by id {manufacturer_id}", e
            ) from e
        return Manufacturer.from_row(row) if row else None

    def get_all(self) -> List[Manufacturer]:
        """
        Récupère tous les constructeurs non supprimés.

        Returns:
            Liste des constructeurs (peut être vide), sans ordre garanti
        """
        logger.info("manufacturer_get_all_called")
        try:
            rows = self.db.fetch_all(GET_ALL_QUERY)
        except psycopg2.Error as e:
            raise PersistenceError("Can't get all manufacturers from db", e) from e
        return [Manufacturer.from_row(row) for row in rows]

    def update(self, manufacturer: Manufacturer) -> Optional[Manufacturer]:
        """
        Met à jour le nom et le pays d'un constructeur.

        Args:
            manufacturer: Constructeur avec id, name et country

        Returns:
            Le constructeur passé si au moins une ligne a été modifiée,
            None sinon (aucune erreur levée)
        """
        logger.info("manufacturer_update_called", manufacturer=repr(manufacturer))
        try:
            rows_affected = self.db.execute_query(
                UPDATE_QUERY,
                (manufacturer.name, manufacturer.country, manufacturer.id)
            )
        except psycopg2.Error as e:
            raise PersistenceError(
                f"Can't update manufacturer {manufacturer!r}", e
            ) from e

        if rows_affected >= 1:
            logger.info("manufacturer_updated", manufacturer_id=manufacturer.id)
            return manufacturer
        return None

    def delete(self, manufacturer_id: int) -> bool:
        """
        Supprime logiquement un constructeur (is_deleted = true).

        Args:
            manufacturer_id: ID du constructeur

        Returns:
            True si au moins une ligne a été marquée
        """
        logger.info("manufacturer_delete_called", manufacturer_id=manufacturer_id)
        try:
            rows_affected = self.db.execute_query(DELETE_QUERY, (manufacturer_id,))
        except psycopg2.Error as e:
            raise PersistenceError(
                f"Can't delete manufacturer by id {manufacturer_id}", e
            ) from e

        if rows_affected >= 1:
            logger.info("manufacturer_deleted", manufacturer_id=manufacturer_id)
            return True
        return False
