"""Schema definition for the metrics table.

Defines creation logic for the table (and its key index) that the PostgreSQL
publisher writes one row per metric into. The table name is configurable, so
every statement quotes it as an identifier.
"""
from psycopg2 import sql
from psycopg2.extensions import cursor as Cursor

from snap_postgresql.config.constants import KEY_INDEX_NAME


def table_identifier(table_name: str) -> sql.Identifier:
    """Quote a table name, splitting ``schema.table`` into its parts.

    Parts are folded to lower case first, the way PostgreSQL folds unquoted
    names, so ``"Info"`` addresses the same table as ``info``.
    """
    return sql.Identifier(*(part.lower() for part in table_name.split(".")))


def create_metrics_table(cursor: Cursor, table_name: str) -> None:
    """Create the metrics table if it does not exist.

    Args:
        cursor (psycopg2.extensions.cursor): An open PostgreSQL cursor.
        table_name (str): Name of the table to create.

    """
    cursor.execute(sql.SQL("""
        CREATE TABLE IF NOT EXISTS {table} (
            id SERIAL PRIMARY KEY,
            time_posted timestamp with time zone,
            key_column VARCHAR(200),
            value_column VARCHAR(200)
        )
    """).format(table=table_identifier(table_name)))


def create_key_index(cursor: Cursor, table_name: str) -> None:
    """Create the index on ``key_column``.

    The index name is fixed, so this fails if an index with that name already
    exists in the schema.

    Args:
        cursor (psycopg2.extensions.cursor): An open PostgreSQL cursor.
        table_name (str): Name of the indexed table.

    """
    cursor.execute(sql.SQL("CREATE INDEX {index} ON {table} (key_column)").format(
        index=sql.Identifier(KEY_INDEX_NAME),
        table=table_identifier(table_name),
    ))
