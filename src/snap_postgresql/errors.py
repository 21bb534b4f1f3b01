"""Exception taxonomy for the PostgreSQL publisher plugin.

Every failure of a publish call is reported to the host as one of these
exceptions. Driver exceptions are chained as ``__cause__``.
"""

from snap_postgresql.config.constants import (
    ERR_MSG_CONFIG,
    ERR_MSG_MISSING_TABLE,
    ERR_MSG_TABLE_CREATION,
    ERR_MSG_UNKNOWN_CONTENT_TYPE,
    ERR_MSG_UNSUPPORTED_TYPE,
)


class PublisherError(Exception):
    """Base class for every error raised by the publisher."""


class UnknownContentTypeError(PublisherError):
    """The host sent content in a format the plugin does not accept."""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(ERR_MSG_UNKNOWN_CONTENT_TYPE.format(content_type=content_type))


class DecodeError(PublisherError):
    """The serialized batch is malformed."""


class ConfigError(PublisherError):
    """The host configuration is missing options or has mistyped values."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__(ERR_MSG_CONFIG.format(problems="; ".join(self.problems)))


class StoreConnectionError(PublisherError):
    """Opening or pinging the PostgreSQL connection failed."""


class UnsupportedTypeError(PublisherError):
    """A metric value has a type outside the supported set."""

    def __init__(self, type_name: str, message: str | None = None):
        self.type_name = type_name
        super().__init__(message or ERR_MSG_UNSUPPORTED_TYPE.format(type_name=type_name))


class QueryError(PublisherError):
    """A statement failed for a reason other than a missing table."""


class MissingTableError(QueryError):
    """The insert hit a missing table.

    The table has already been created when this is raised; the failed insert
    is not retried.
    """

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(ERR_MSG_MISSING_TABLE.format(table_name=table_name))


class TableCreationError(PublisherError):
    """Creating the metrics table or its index failed."""

    def __init__(self, table_name: str, reason: object):
        self.table_name = table_name
        super().__init__(ERR_MSG_TABLE_CREATION.format(table_name=table_name, reason=reason))
