"""Constants used throughout the PostgreSQL publisher plugin.

This module centralizes all static configuration values, such as plugin
identity, content types, table layout, config option names, and error
messages.
"""

# ─────────────────────────────────────────────
# Plugin Identity
# ─────────────────────────────────────────────
PLUGIN_NAME = "postgresql"
PLUGIN_VERSION = 9
PLUGIN_TYPE = "publisher"

# ─────────────────────────────────────────────
# Content Types
# ─────────────────────────────────────────────
SNAP_JSON_CONTENT_TYPE = "snap.json"
ACCEPTED_CONTENT_TYPES = (SNAP_JSON_CONTENT_TYPE,)
RETURNED_CONTENT_TYPES = (SNAP_JSON_CONTENT_TYPE,)

# ─────────────────────────────────────────────
# Table Layout
# ─────────────────────────────────────────────
KEY_INDEX_NAME = "key_index"
INSERT_COLUMNS = ("id", "time_posted", "key_column", "value_column")

# ─────────────────────────────────────────────
# Encoding
# ─────────────────────────────────────────────
NAMESPACE_SEPARATOR = "."
SEQUENCE_SEPARATOR = ", "
TRUE_STRING = "1"
NAN_STRING = "NaN"
POS_INF_STRING = "+Inf"
NEG_INF_STRING = "-Inf"
FALSE_STRING = "0"

# ─────────────────────────────────────────────
# Config Options
# ─────────────────────────────────────────────
OPT_USERNAME = "username"
OPT_PASSWORD = "password"
OPT_DATABASE = "database"
OPT_TABLE_NAME = "table_name"
OPT_HOSTNAME = "hostname"
OPT_PORT = "port"

DEFAULT_HOSTNAME = "localhost"
DEFAULT_PORT = 5432
SSL_MODE = "disable"
PING_QUERY = "SELECT 1"

# ─────────────────────────────────────────────
# Error Messages
# ─────────────────────────────────────────────
ERR_MSG_UNKNOWN_CONTENT_TYPE = "Unknown content type '{content_type}'"

ERR_MSG_DECODE = "Error decoding {content_type} content: {reason}"

ERR_MSG_CONNECTION = (
    "Cannot connect to PostgreSQL at {hostname}:{port} "
    "(database '{database}'): {reason}"
)

ERR_MSG_UNSUPPORTED_TYPE = (
    "Unsupported type {type_name} (currently supported data types: bool, "
    "int, int8, int16, int32, int64, uint, uint8, uint16, uint32, uint64, "
    "float32, float64, string, []int, []int8, []int16, []int32, []int64, "
    "[]uint, []uint8, []uint16, []uint32, []uint64, []float32, []float64, "
    "[]string)"
)

ERR_MSG_VALUE_OUT_OF_RANGE = "Value {value!r} does not fit data type {data_type}"

ERR_MSG_MISSING_TABLE = (
    "Table '{table_name}' does not exist; it has been created and will be "
    "used on the next publish"
)

ERR_MSG_TABLE_CREATION = "Cannot create table '{table_name}': {reason}"

ERR_MSG_QUERY = "Query against table '{table_name}' failed: {reason}"

ERR_MSG_CONFIG = "Invalid plugin configuration: {problems}"
