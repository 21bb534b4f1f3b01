"""Publish synthetic metrics to a local PostgreSQL through the publisher plugin.

Connection settings come from SNAP_POSTGRESQL_* environment variables. The
first run against an empty database fails with a missing-table error and
creates the table; run it again to see the rows land.
"""

import os
import random
from datetime import datetime, timezone

from snap_postgresql.config.constants import SNAP_JSON_CONTENT_TYPE
from snap_postgresql.errors import MissingTableError
from snap_postgresql.logging_config import setup_logging
from snap_postgresql.models.metric import Metric
from snap_postgresql.publisher import PostgreSQLPublisher
from snap_postgresql.wire.decoder import encode_batch


def random_metrics():
    """Generate one metric per supported value shape."""
    now = datetime.now(timezone.utc)
    return [
        Metric(namespace=("intel", "cpu", "load"), timestamp=now,
               data=round(random.uniform(0, 4), 3), data_type="float64"),
        Metric(namespace=("intel", "mem", "free"), timestamp=now,
               data=random.randint(0, 2 ** 32), data_type="uint64", unit="B"),
        Metric(namespace=("intel", "net", "up"), timestamp=now, data=True),
        Metric(namespace=("intel", "host", "name"), timestamp=now, data="node-1"),
        Metric(namespace=("intel", "disk", "iops"), timestamp=now,
               data=[random.randint(0, 500) for _ in range(4)]),
        Metric(namespace=("intel", "disk", "mounts"), timestamp=now,
               data=["/", "/var", "/home"]),
    ]


setup_logging(level="DEBUG")

config = {
    "hostname": os.environ.get("SNAP_POSTGRESQL_HOST", "localhost"),
    "port": int(os.environ.get("SNAP_POSTGRESQL_PORT", "5432")),
    "username": os.environ.get("SNAP_POSTGRESQL_USER", "postgres"),
    "password": os.environ.get("SNAP_POSTGRESQL_PASSWORD", ""),
    "database": os.environ.get("SNAP_POSTGRESQL_DB", "snap_test"),
    "table_name": os.environ.get("SNAP_POSTGRESQL_TABLE", "info"),
}

publisher = PostgreSQLPublisher()
try:
    publisher.publish(SNAP_JSON_CONTENT_TYPE, encode_batch(random_metrics()), config)
except MissingTableError as exc:
    print(f"{exc}. Run the script again.")
