"""Database configuration for the open-dora service."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from sqlalchemy.engine import URL, make_url


@dataclass
class DatabaseConfig:
    """Connection settings of the DevLake database."""
    host: str = "localhost"
    port: int = 3306
    user: str = "merico"
    password: Optional[str] = None
    database: str = "lake"
    driver: str = "mysql+pymysql"

    # A full SQLAlchemy URL takes precedence over the discrete settings
    database_url: Optional[str] = None

    @property
    def url(self) -> URL:
        """SQLAlchemy URL for these settings."""
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DatabaseConfig":
        """
        Build the configuration from environment variables.

        Reads ``DEVLAKE_DATABASE_URL`` or the discrete ``DEVLAKE_DB_HOST``,
        ``DEVLAKE_DB_PORT``, ``DEVLAKE_DB_USER``, ``DEVLAKE_DB_PASSWORD`` and
        ``DEVLAKE_DB_NAME`` variables.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get("DEVLAKE_DB_HOST", defaults.host),
            port=int(env.get("DEVLAKE_DB_PORT", defaults.port)),
            user=env.get("DEVLAKE_DB_USER", defaults.user),
            password=env.get("DEVLAKE_DB_PASSWORD", defaults.password),
            database=env.get("DEVLAKE_DB_NAME", defaults.database),
            database_url=env.get("DEVLAKE_DATABASE_URL") or None,
        )
