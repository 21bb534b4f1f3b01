"""Rendering of metric namespaces into the stored key."""

from collections.abc import Iterable

from snap_postgresql.config.constants import NAMESPACE_SEPARATOR


def encode_namespace(segments: Iterable[str]) -> str:
    """Join namespace segments into the dotted key stored in ``key_column``.

    Args:
        segments (Iterable[str]): Ordered namespace path segments.

    Returns:
        str: The segments joined with ``"."``.

    """
    return NAMESPACE_SEPARATOR.join(segments)
