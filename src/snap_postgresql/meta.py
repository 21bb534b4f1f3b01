"""Static plugin identity advertised to the host."""

from dataclasses import dataclass

from snap_postgresql.config.constants import (
    ACCEPTED_CONTENT_TYPES,
    PLUGIN_NAME,
    PLUGIN_TYPE,
    PLUGIN_VERSION,
    RETURNED_CONTENT_TYPES,
)


@dataclass(frozen=True)
class PluginMeta:
    name: str
    version: int
    plugin_type: str
    accepted_content_types: tuple[str, ...]
    returned_content_types: tuple[str, ...]


def meta() -> PluginMeta:
    """Return the metadata the host uses to route batches to this plugin."""
    return PluginMeta(
        name=PLUGIN_NAME,
        version=PLUGIN_VERSION,
        plugin_type=PLUGIN_TYPE,
        accepted_content_types=ACCEPTED_CONTENT_TYPES,
        returned_content_types=RETURNED_CONTENT_TYPES,
    )
