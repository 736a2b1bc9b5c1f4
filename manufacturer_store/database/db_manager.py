"""
DatabaseManager - Gestionnaire de connexions PostgreSQL.

Fournit les connexions aux repositories à partir d'un pool partagé et
garantit leur restitution au pool à la sortie de chaque opération.
"""

from typing import Any, Optional, List, Dict, Union, Tuple
from contextlib import contextmanager
import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor
import structlog

from ..config import DatabaseConfig

logger = structlog.get_logger(__name__)

Params = Optional[Union[Tuple, Dict[str, Any]]]


class DatabaseManager:
    """
    Gestionnaire de connexions PostgreSQL avec pool de connexions.

    Le pool (ThreadedConnectionPool) peut être partagé entre threads ; chaque
    opération emprunte une connexion et la rend immédiatement après usage.

    Exemple:
        db = DatabaseManager()
        row = db.fetch_one("SELECT * FROM manufacturers WHERE id = %s", (1,))
        db.close_pool()
    """

    _instance = None
    _pool = None

    def __new__(cls, config: Optional[DatabaseConfig] = None):
        """Singleton pattern pour réutiliser le pool de connexions."""
        if cls._instance is None:
            cls._instance = super(DatabaseManager, cls).__new__(cls)
        return cls._instance

    def __init__(self, config: Optional[DatabaseConfig] = None):
        """
        Initialise le pool de connexions PostgreSQL.

        Args:
            config: Paramètres de connexion (lus depuis l'environnement si absent)
        """
        if self._pool is None:
            self.config = config or getattr(self, 'config', None) or DatabaseConfig()
            self._initialize_pool()
        elif config is not None and config != self.config:
            # Le pool existant reste attaché à sa configuration d'origine
            logger.warning("database_config_ignored", reason="pool_already_initialized")

    def _initialize_pool(self):
        """Crée le pool de connexions à partir de la configuration."""
        try:
            self._pool = pool.ThreadedConnectionPool(
                minconn=self.config.pool_min_size,
                maxconn=self.config.pool_max_size,
                **self.config.connection_params()
            )
            logger.info(
                "database_pool_created",
                host=self.config.host,
                database=self.config.name,
                min_connections=self.config.pool_min_size,
                max_connections=self.config.pool_max_size
            )
        except psycopg2.Error as e:
            logger.error("database_pool_creation_failed", error=str(e))
            raise

    def get_connection(self):
        """
        Récupère une connexion du pool.

        Returns:
            connection: Connexion PostgreSQL

        Raises:
            psycopg2.OperationalError: si aucune connexion ne peut être établie
            psycopg2.pool.PoolError: si le pool est épuisé

        Note:
            N'oubliez pas de retourner la connexion au pool avec put_connection()
        """
        if self._pool is None:
            self._initialize_pool()
        return self._pool.getconn()

    def put_connection(self, conn):
        """
        Retourne une connexion au pool.

        Args:
            conn: Connexion à retourner au pool
        """
        if self._pool:
            self._pool.putconn(conn)

    @contextmanager
    def get_cursor(self, dict_cursor=True, commit=True):
        """
        Context manager pour obtenir un cursor.

        La connexion est rendue au pool sur tous les chemins de sortie,
        y compris en cas d'exception (rollback préalable).

        Args:
            dict_cursor: Si True, utilise RealDictCursor (rows as dicts)
            commit: Si True, commit automatiquement à la fin

        Yields:
            cursor: Cursor PostgreSQL

        Example:
            with db.get_cursor() as cursor:
                cursor.execute("SELECT * FROM manufacturers")
                results = cursor.fetchall()
        """
        conn = self.get_connection()
        cursor = None

        try:
            cursor_factory = RealDictCursor if dict_cursor else None
            cursor = conn.cursor(cursor_factory=cursor_factory)
            yield cursor

            if commit:
                conn.commit()

        except Exception as e:
            logger.error("database_operation_failed", error=str(e))
            try:
                conn.rollback()
            except psycopg2.Error as rollback_error:
                # Connexion perdue : l'erreur d'origine reste celle propagée
                logger.warning("database_rollback_failed", error=str(rollback_error))
            raise

        finally:
            if cursor:
                cursor.close()
            self.put_connection(conn)

    def execute_query(self, query: str, params: Params = None, commit: bool = True) -> int:
        """
        Exécute une requête SQL sans retour de résultat (INSERT, UPDATE, DELETE).

        Args:
            query: Requête SQL à exécuter
            params: Paramètres de la requête (tuple)
            commit: Si True, commit automatiquement

        Returns:
            int: Nombre de lignes affectées

        Example:
            rows_affected = db.execute_query(
                "UPDATE manufacturers SET is_deleted = true WHERE id = %s",
                (manufacturer_id,)
            )
        """
        with self.get_cursor(dict_cursor=False, commit=commit) as cursor:
            cursor.execute(query, params)
            logger.debug("query_executed", query=query[:100], rows_affected=cursor.rowcount)
            return cursor.rowcount

    def fetch_one(self, query: str, params: Params = None) -> Optional[Dict]:
        """
        Exécute une requête et retourne une seule ligne.

        Args:
            query: Requête SQL SELECT
            params: Paramètres de la requête

        Returns:
            Dict ou None si aucun résultat
        """
        with self.get_cursor(dict_cursor=True, commit=False) as cursor:
            cursor.execute(query, params)
            result = cursor.fetchone()
            return dict(result) if result else None

    def fetch_all(self, query: str, params: Params = None) -> List[Dict]:
        """
        Exécute une requête et retourne toutes les lignes.

        Args:
            query: Requête SQL SELECT
            params: Paramètres de la requête

        Returns:
            Liste de dicts (peut être vide)
        """
        with self.get_cursor(dict_cursor=True, commit=False) as cursor:
            cursor.execute(query, params)
            results = cursor.fetchall()
            return [dict(row) for row in results]

    def close_pool(self):
        """Ferme toutes les connexions du pool."""
        if self._pool:
            self._pool.closeall()
            self._pool = None
            logger.info("database_pool_closed")

    def close(self):
        """Alias pour close_pool() - ferme toutes les connexions."""
        self.close_pool()

    def __del__(self):
        """Destructeur - ferme le pool si nécessaire."""
        self.close_pool()
