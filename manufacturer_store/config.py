"""Database configuration using Pydantic."""

from typing import Dict, Any

from pydantic_settings import BaseSettings


class DatabaseConfig(BaseSettings):
    """Configuration for the PostgreSQL connection pool."""

    # Connection
    host: str = "localhost"
    port: int = 5432
    name: str = "mydb"
    user: str = "postgres"
    password: str = "postgres"

    # Pool sizing
    pool_min_size: int = 1
    pool_max_size: int = 10

    def connection_params(self) -> Dict[str, Any]:
        """Keyword arguments accepted by psycopg2.connect() and the pool."""
        return {
            'host': self.host,
            'port': self.port,
            'database': self.name,
            'user': self.user,
            'password': self.password
        }

    class Config:
        env_file = ".env"
        env_prefix = "DB_"
        case_sensitive = False
        extra = "ignore"
