"""Connection settings for the PostgreSQL server receiving metrics.

This module provides:
- The immutable ``ConnectionConfig`` built from the host configuration.
- Assembly of the keyword arguments handed to the database driver.
"""

from dataclasses import dataclass, field

from snap_postgresql.config.constants import (
    DEFAULT_HOSTNAME,
    DEFAULT_PORT,
    SSL_MODE,
)


@dataclass(frozen=True)
class ConnectionConfig:
    """Settings for one publish call.

    Attributes:
        username (str): Login role.
        password (str): Login password. Hidden from ``repr``.
        database (str): Database receiving the metrics.
        table_name (str): Table receiving the metrics, optionally
            schema-qualified (``"schema.table"``).
        hostname (str): Server host name or address.
        port (int): Server port.

    """

    username: str
    password: str = field(repr=False)
    database: str
    table_name: str
    hostname: str = DEFAULT_HOSTNAME
    port: int = DEFAULT_PORT

    def connection_kwargs(self) -> dict:
        """Return the keyword arguments for ``psycopg2.connect``.

        Returns:
            dict: Host, port, credentials, database name and SSL mode.

        """
        return {
            "host": self.hostname,
            "port": self.port,
            "user": self.username,
            "password": self.password,
            "dbname": self.database,
            "sslmode": SSL_MODE,
        }
