"""PostgreSQL-backed implementation of the metrics publisher plugin.

This module implements the publish cycle invoked by the host: decode the
serialized batch, open a connection, encode every metric and insert it as a
row. A missing table is created on the spot, but the publish call that hit
it still fails; the table is used from the next call on.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any

import psycopg2
import psycopg2.errors
from psycopg2 import sql

# Plugin configuration and setup
from snap_postgresql.config.connection import ConnectionConfig
from snap_postgresql.config.constants import ERR_MSG_QUERY, INSERT_COLUMNS
from snap_postgresql.config.policy import ConfigPolicy, build_config_policy

# Publish pipeline
from snap_postgresql.db.connection import open_connection
from snap_postgresql.errors import MissingTableError, PublisherError, QueryError
from snap_postgresql.logging_config import get_logger
from snap_postgresql.meta import PluginMeta, meta
from snap_postgresql.models.metric import Metric
from snap_postgresql.schema.metrics import table_identifier
from snap_postgresql.schema.schema_manager import ensure_table
from snap_postgresql.wire.decoder import decode_batch


def rfc3339_now() -> str:
    """Return the local wall-clock time formatted as RFC 3339."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


def insert_statement(table_name: str) -> sql.Composed:
    """Build the INSERT for one metric row into ``table_name``.

    The row id comes from the table's sequence; time, key and value are bound
    parameters.
    """
    return sql.SQL("INSERT INTO {table} ({columns}) VALUES (DEFAULT, %s, %s, %s)").format(
        table=table_identifier(table_name),
        columns=sql.SQL(", ").join(sql.Identifier(column) for column in INSERT_COLUMNS),
    )


class PostgreSQLPublisher:
    """Publisher plugin writing each metric as a row in a PostgreSQL table."""

    def __init__(
        self,
        connection_factory: Callable[[ConnectionConfig], Any] | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize the publisher.

        The configuration policy is built and validated here, once, so a bad
        rule declaration fails at plugin load rather than on a publish call.

        Args:
            connection_factory (Callable | None): Opens a connection for a
                ``ConnectionConfig``. Defaults to ``open_connection``.
            logger (logging.Logger | None): Logger owned by the host. Defaults
                to the module logger.

        Raises:
            ConfigError: If the configuration policy is inconsistent.

        """
        self._connect = connection_factory or open_connection
        self._logger = logger or get_logger(__name__)
        self._policy = build_config_policy()

    @staticmethod
    def meta() -> PluginMeta:
        """Return the plugin identity and content types."""
        return meta()

    def get_config_policy(self) -> ConfigPolicy:
        """Return the configuration options this plugin accepts."""
        return self._policy

    def publish(self, content_type: str, content: bytes | str, config: Mapping[str, Any]) -> None:
        """Decode a serialized batch and write every metric to PostgreSQL.

        Args:
            content_type (str): Content type declared by the host.
            content (bytes | str): The serialized batch.
            config (Mapping[str, Any]): Option name to value, as declared by
                the configuration policy.

        Raises:
            UnknownContentTypeError: If the content type is not accepted.
            DecodeError: If the batch is malformed.
            PublisherError: Any error raised by ``write_metrics``.

        """
        self._logger.info("Publishing started")
        try:
            metrics = decode_batch(content_type, content)
        except PublisherError as exc:
            self._logger.error("Error decoding batch: content_type=%s error=%s", content_type, exc)
            raise
        self.write_metrics(metrics, config)

    def write_metrics(self, metrics: Sequence[Metric], config: Mapping[str, Any]) -> None:
        """Insert decoded metrics, one row each, in order.

        The first failure aborts the call. Rows inserted before it stay
        committed.

        Args:
            metrics (Sequence[Metric]): The batch to write.
            config (Mapping[str, Any]): Option name to value.

        Raises:
            ConfigError: If the configuration does not satisfy the policy.
            StoreConnectionError: If the server cannot be reached. No query
                is issued.
            UnsupportedTypeError: If a metric value cannot be encoded.
            MissingTableError: If the table did not exist. It has been
                created by the time this is raised.
            TableCreationError: If the table was missing and creating it
                failed.
            QueryError: If an insert failed for any other reason.

        """
        try:
            connection_config = self._policy.process(config)
        except PublisherError as exc:
            self._logger.error("Error processing configuration: options=%s error=%s",
                               sorted(config), exc)
            raise

        try:
            conn = self._connect(connection_config)
        except PublisherError as exc:
            self._logger.error(
                "Error connecting to %s:%s/%s: %s",
                connection_config.hostname,
                connection_config.port,
                connection_config.database,
                exc,
            )
            raise

        table_name = connection_config.table_name
        self._logger.info("Publishing %d metrics to table '%s'", len(metrics), table_name)
        try:
            self._insert_rows(conn, metrics, table_name)
        except PublisherError as exc:
            self._logger.error("Error publishing to table '%s': %s", table_name, exc)
            raise
        finally:
            conn.close()
        self._logger.info("Published %d metrics to table '%s'", len(metrics), table_name)

    def _insert_rows(self, conn: Any, metrics: Sequence[Metric], table_name: str) -> None:
        time_posted = rfc3339_now()
        statement = insert_statement(table_name)

        with conn.cursor() as cursor:
            for metric in metrics:
                key = metric.key
                value = metric.metric_value().encode()
                try:
                    cursor.execute(statement, (time_posted, key, value))
                except psycopg2.errors.UndefinedTable as exc:
                    self._logger.warning("Table '%s' does not exist, creating it", table_name)
                    ensure_table(cursor, table_name)
                    raise MissingTableError(table_name) from exc
                except psycopg2.Error as exc:
                    raise QueryError(
                        ERR_MSG_QUERY.format(table_name=table_name, reason=exc),
                    ) from exc
                self._logger.debug("Inserted %s=%s", key, value)
