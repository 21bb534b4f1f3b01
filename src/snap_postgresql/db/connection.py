"""Opening PostgreSQL connections for a single publish call.

Connections are never pooled or cached: each publish opens one, pings it and
closes it before returning.
"""
import logging

import psycopg2
from psycopg2.extensions import connection as Connection

from snap_postgresql.config.connection import ConnectionConfig
from snap_postgresql.config.constants import ERR_MSG_CONNECTION, PING_QUERY
from snap_postgresql.errors import StoreConnectionError

logger = logging.getLogger(__name__)


def _connection_error(config: ConnectionConfig, reason: object) -> StoreConnectionError:
    return StoreConnectionError(ERR_MSG_CONNECTION.format(
        hostname=config.hostname,
        port=config.port,
        database=config.database,
        reason=reason,
    ))


def open_connection(config: ConnectionConfig) -> Connection:
    """Open an autocommit connection and make sure the server answers.

    Every statement issued on the returned connection commits on its own, so
    rows inserted before a failure in the same publish call stay written.

    Args:
        config (ConnectionConfig): Server location and credentials.

    Returns:
        psycopg2.extensions.connection: A live connection. The caller closes it.

    Raises:
        StoreConnectionError: If the connection cannot be opened or the ping
            fails. No connection is left open in that case.

    """
    try:
        conn = psycopg2.connect(**config.connection_kwargs())
    except psycopg2.Error as exc:
        raise _connection_error(config, exc) from exc

    try:
        conn.autocommit = True
        with conn.cursor() as cursor:
            cursor.execute(PING_QUERY)
    except psycopg2.Error as exc:
        conn.close()
        raise _connection_error(config, exc) from exc

    logger.debug("Connected to %s:%s/%s", config.hostname, config.port, config.database)
    return conn
