"""
Tests d'intégration pour la couche d'accès aux données (PostgreSQL réel).

Les paramètres de connexion viennent de .env (DB_HOST, DB_NAME, ...).
Les tests sont ignorés si aucun serveur PostgreSQL n'est joignable.

Tests couverts :
- DatabaseManager: connexion, fetch, execute
- ManufacturersRepository: cycle de vie complet avec suppression logique
"""

from pathlib import Path

import pytest
import psycopg2
from dotenv import load_dotenv

from manufacturer_store.database.db_manager import DatabaseManager
from manufacturer_store.database.repositories import ManufacturersRepository
from manufacturer_store.models import Manufacturer

# Charger les variables d'environnement
load_dotenv()

SCHEMA_PATH = Path(__file__).parent.parent / 'database' / 'schema.sql'


# =====================================================
# FIXTURES
# =====================================================

@pytest.fixture(scope="function")
def db_manager():
    """Fixture pour obtenir un DatabaseManager."""
    # Reset le singleton pour chaque test
    DatabaseManager._instance = None
    DatabaseManager._pool = None

    try:
        manager = DatabaseManager()
    except psycopg2.OperationalError as e:
        DatabaseManager._instance = None
        pytest.skip(f"PostgreSQL indisponible: {e}")

    yield manager

    manager.close_pool()
    DatabaseManager._instance = None
    DatabaseManager._pool = None


@pytest.fixture(scope="function")
def clean_database(db_manager):
    """
    Crée la table si besoin puis la vide avant chaque test.
    RESTART IDENTITY remet la séquence des IDs à 1.
    """
    with db_manager.get_cursor(dict_cursor=False) as cursor:
        cursor.execute(SCHEMA_PATH.read_text(encoding='utf-8'))
        cursor.execute("TRUNCATE TABLE manufacturers RESTART IDENTITY;")

    yield db_manager


@pytest.fixture
def manufacturers_repo(clean_database):
    """Fixture pour ManufacturersRepository."""
    return ManufacturersRepository(clean_database)


def fetch_is_deleted(db_manager, manufacturer_id):
    """Lit directement le flag is_deleted (non exposé par le modèle)."""
    row = db_manager.fetch_one(
        "SELECT is_deleted FROM manufacturers WHERE id = %s",
        (manufacturer_id,)
    )
    return row['is_deleted'] if row else None


# =====================================================
# TESTS - DatabaseManager
# =====================================================

class TestDatabaseManager:
    """Tests pour DatabaseManager."""

    def test_fetch_one(self, db_manager):
        result = db_manager.fetch_one("SELECT 1 AS value;")
        assert result == {'value': 1}

    def test_fetch_all(self, db_manager):
        results = db_manager.fetch_all("SELECT 1 UNION SELECT 2;")
        assert len(results) == 2

    def test_execute_query(self, clean_database):
        rows = clean_database.execute_query(
            "INSERT INTO manufacturers (name, country) VALUES (%s, %s)",
            ('Ford', 'USA')
        )
        assert rows == 1

    def test_cursor_rolls_back_on_error(self, clean_database):
        with pytest.raises(psycopg2.Error):
            with clean_database.get_cursor(dict_cursor=False) as cursor:
                cursor.execute(
                    "INSERT INTO manufacturers (name, country) VALUES (%s, %s)",
                    ('Rollback', 'Nowhere')
                )
                cursor.execute("SELECT * FROM missing_table")

        rows = clean_database.fetch_all(
            "SELECT * FROM manufacturers WHERE name = %s", ('Rollback',)
        )
        assert rows == []


# =====================================================
# TESTS - ManufacturersRepository
# =====================================================

class TestManufacturersRepository:
    """Tests pour ManufacturersRepository."""

    def test_create_then_get_by_id(self, manufacturers_repo):
        created = manufacturers_repo.create(Manufacturer(name='Honda', country='Japan'))

        assert created.id is not None
        assert manufacturers_repo.get_by_id(created.id) == created

    def test_create_defaults_is_deleted_false(self, manufacturers_repo, clean_database):
        created = manufacturers_repo.create(Manufacturer(name='Fiat', country='Italy'))

        assert fetch_is_deleted(clean_database, created.id) is False

    def test_get_by_id_missing(self, manufacturers_repo):
        assert manufacturers_repo.get_by_id(12345) is None

    def test_get_all_excludes_deleted(self, manufacturers_repo):
        bmw = manufacturers_repo.create(Manufacturer(name='BMW', country='Germany'))
        audi = manufacturers_repo.create(Manufacturer(name='Audi', country='Germany'))
        manufacturers_repo.delete(bmw.id)

        ids = {m.id for m in manufacturers_repo.get_all()}

        assert ids == {audi.id}

    def test_get_all_empty(self, manufacturers_repo):
        assert manufacturers_repo.get_all() == []

    def test_update_existing(self, manufacturers_repo):
        created = manufacturers_repo.create(Manufacturer(name='Renault', country='France'))

        updated = manufacturers_repo.update(
            Manufacturer(id=created.id, name='Renault Group', country='France')
        )

        assert updated is not None
        assert manufacturers_repo.get_by_id(created.id) == Manufacturer(
            id=created.id, name='Renault Group', country='France'
        )

    def test_update_keeps_is_deleted(self, manufacturers_repo, clean_database):
        created = manufacturers_repo.create(Manufacturer(name='Saab', country='Sweden'))
        manufacturers_repo.delete(created.id)

        manufacturers_repo.update(Manufacturer(id=created.id, name='Saab', country='Norway'))

        assert fetch_is_deleted(clean_database, created.id) is True

    def test_update_missing_returns_none(self, manufacturers_repo):
        assert manufacturers_repo.update(
            Manufacturer(id=999, name='Ghost', country='Nowhere')
        ) is None

    def test_delete_missing_returns_false(self, manufacturers_repo):
        assert manufacturers_repo.delete(999) is False

    def test_full_lifecycle(self, manufacturers_repo):
        """Scénario complet : Toyota, du create au delete logique."""
        toyota = manufacturers_repo.create(Manufacturer(name='Toyota', country='Japan'))
        assert toyota.id == 1

        assert manufacturers_repo.get_by_id(1) == Manufacturer(id=1, name='Toyota', country='Japan')

        updated = manufacturers_repo.update(Manufacturer(id=1, name='Toyota', country='USA'))
        assert updated == Manufacturer(id=1, name='Toyota', country='USA')

        assert 1 in {m.id for m in manufacturers_repo.get_all()}

        assert manufacturers_repo.delete(1) is True

        assert 1 not in {m.id for m in manufacturers_repo.get_all()}
        # Toujours lisible par ID après suppression logique
        assert manufacturers_repo.get_by_id(1) == Manufacturer(id=1, name='Toyota', country='USA')


# =====================================================
# EXECUTION
# =====================================================

if __name__ == '__main__':
    pytest.main([__file__, '-v', '--tb=short'])
