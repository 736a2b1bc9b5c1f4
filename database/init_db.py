#!/usr/bin/env python3
"""
Script d'initialisation de la base de données PostgreSQL.

Ce script :
1. Lit le fichier schema.sql
2. Se connecte à PostgreSQL
3. Exécute le schéma (table manufacturers et son index)
4. Vérifie que la table attendue est présente
"""

import sys
from pathlib import Path
from dotenv import load_dotenv
import psycopg2
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT

# Ajouter le répertoire parent au path pour importer les modules du projet
sys.path.insert(0, str(Path(__file__).parent.parent))

from manufacturer_store.config import DatabaseConfig  # noqa: E402

# Charger les variables d'environnement
load_dotenv()

EXPECTED_TABLES = {'manufacturers'}


def get_db_connection_params():
    """Récupère les paramètres de connexion depuis la configuration."""
    return DatabaseConfig().connection_params()


def test_connection(conn_params):
    """Test la connexion à PostgreSQL."""
    print("\n📡 Test de connexion à PostgreSQL...")
    print(f"   Host: {conn_params['host']}:{conn_params['port']}")
    print(f"   Database: {conn_params['database']}")
    print(f"   User: {conn_params['user']}")

    try:
        conn = psycopg2.connect(**conn_params)
        cursor = conn.cursor()

        cursor.execute("SELECT version();")
        version = cursor.fetchone()[0]
        print(f"\n✅ Connexion réussie!")
        print(f"   PostgreSQL version: {version.split(',')[0]}")

        cursor.close()
        conn.close()
        return True

    except psycopg2.Error as e:
        print(f"\n❌ Erreur de connexion: {e}")
        print("\n💡 Vérifiez que :")
        print("   1. PostgreSQL est démarré")
        print(f"   2. La base de données '{conn_params['database']}' existe")
        print("   3. Les variables DB_* dans .env sont correctes")
        return False


def read_schema_file():
    """Lit le contenu du fichier schema.sql."""
    schema_path = Path(__file__).parent / 'schema.sql'

    if not schema_path.exists():
        raise FileNotFoundError(f"Fichier schema.sql non trouvé: {schema_path}")

    with open(schema_path, 'r', encoding='utf-8') as f:
        return f.read()


def execute_schema(conn_params, schema_sql):
    """Exécute le schéma SQL sur la base de données."""
    print("\n🔨 Exécution du schéma SQL...")

    conn = None
    cursor = None

    try:
        conn = psycopg2.connect(**conn_params)
        conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        cursor = conn.cursor()
        cursor.execute(schema_sql)

        print("✅ Schéma exécuté avec succès!")
        return True

    except psycopg2.Error as e:
        print(f"❌ Erreur lors de l'exécution du schéma: {e}")
        return False

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


def verify_tables(conn_params):
    """Vérifie que la table manufacturers a été créée."""
    print("\n🔍 Vérification des tables créées...")

    conn = None
    cursor = None

    try:
        conn = psycopg2.connect(**conn_params)
        cursor = conn.cursor()

        cursor.execute("""
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = 'public'
            AND table_type = 'BASE TABLE'
            ORDER BY table_name;
        """)
        found_tables = {table[0] for table in cursor.fetchall()}

        missing = EXPECTED_TABLES - found_tables
        if missing:
            print(f"\n⚠️  Tables manquantes: {', '.join(sorted(missing))}")
            return False

        cursor.execute("SELECT COUNT(*) FROM manufacturers WHERE is_deleted = false;")
        active_count = cursor.fetchone()[0]
        print("\n✅ Table manufacturers présente!")
        print(f"   {active_count} constructeur(s) actif(s)")
        return True

    except psycopg2.Error as e:
        print(f"❌ Erreur lors de la vérification: {e}")
        return False

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


def print_summary(conn_params):
    """Affiche un résumé des prochaines étapes."""
    print("\n" + "="*60)
    print("🎉 Initialisation terminée avec succès!")
    print("="*60)
    print("\n📝 Prochaines étapes:")
    print(f"   1. Voir le schéma: psql -h {conn_params['host']} -U {conn_params['user']} "
          f"-d {conn_params['database']} -c '\\d manufacturers'")
    print("   2. Lancer le scénario de démonstration: python run_manufacturers.py demo")
    print()


def main():
    """Fonction principale."""
    print("="*60)
    print("🚀 Initialisation de la Base de Données PostgreSQL")
    print("="*60)

    conn_params = get_db_connection_params()

    if not test_connection(conn_params):
        print("\n❌ Arrêt du script en raison d'une erreur de connexion.")
        sys.exit(1)

    try:
        schema_sql = read_schema_file()
        print(f"\n📄 Fichier schema.sql chargé ({len(schema_sql)} caractères)")
    except FileNotFoundError as e:
        print(f"\n❌ {e}")
        sys.exit(1)

    if not execute_schema(conn_params, schema_sql):
        print("\n❌ Arrêt du script en raison d'une erreur d'exécution.")
        sys.exit(1)

    if not verify_tables(conn_params):
        print("\n⚠️  Des problèmes ont été détectés lors de la vérification.")
        sys.exit(1)

    print_summary(conn_params)


if __name__ == "__main__":
    main()
