"""Schema manager for the PostgreSQL publisher.

This module is responsible for creating the table that receives metrics when
an insert finds it missing. It provides the `ensure_table` function, which
creates:

- The metrics table with its fixed four-column layout
- The ``key_index`` secondary index on ``key_column``

Creation happens as a side effect of a failed insert; the insert itself is
not retried, so the table is used from the next publish call on.
"""
import logging

import psycopg2
from psycopg2.extensions import cursor as Cursor

from snap_postgresql.errors import TableCreationError
from .metrics import create_key_index, create_metrics_table

logger = logging.getLogger(__name__)


def ensure_table(cursor: Cursor, table_name: str) -> None:
    """Create the metrics table and its key index.

    Args:
        cursor (psycopg2.extensions.cursor): An open PostgreSQL cursor on an
            autocommit connection.
        table_name (str): Name of the table to create.

    Raises:
        TableCreationError: If either statement fails, including when the
            index name is already taken.

    """
    try:
        create_metrics_table(cursor, table_name)
        create_key_index(cursor, table_name)
    except psycopg2.Error as exc:
        raise TableCreationError(table_name, exc) from exc
    logger.info("Created table '%s' with index on key_column", table_name)
