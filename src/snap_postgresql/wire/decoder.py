"""Decoding of serialized metric batches received from the host.

The only accepted content type is ``snap.json``: a JSON array of metric
objects, each carrying its namespace, timestamp, tags, unit, value and an
optional declared value type.
"""

from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from snap_postgresql.config.constants import ACCEPTED_CONTENT_TYPES, ERR_MSG_DECODE
from snap_postgresql.errors import DecodeError, UnknownContentTypeError
from snap_postgresql.models.metric import Metric

_BATCH_ADAPTER = TypeAdapter(list[Metric])


def decode_batch(content_type: str, content: bytes | str) -> list[Metric]:
    """Decode a serialized batch into metrics.

    Args:
        content_type (str): Content type declared by the host.
        content (bytes | str): The serialized batch.

    Returns:
        list[Metric]: The metrics, in the order they were serialized.

    Raises:
        UnknownContentTypeError: If ``content_type`` is not accepted. Nothing
            is decoded in that case.
        DecodeError: If the content is malformed.

    """
    if content_type not in ACCEPTED_CONTENT_TYPES:
        raise UnknownContentTypeError(content_type)

    try:
        return _BATCH_ADAPTER.validate_json(content)
    except ValidationError as exc:
        raise DecodeError(
            ERR_MSG_DECODE.format(content_type=content_type, reason=exc),
        ) from exc


def encode_batch(metrics: Sequence[Metric]) -> bytes:
    """Serialize metrics into the ``snap.json`` wire format."""
    return _BATCH_ADAPTER.dump_json(list(metrics))
