"""Declaration and processing of the plugin's configuration options.

The host reads the policy to know which options exist, which are required,
their types and defaults, and then hands a flat mapping of option name to
value to every publish call. This module provides helpers to:
- Declare typed rules and collect them into a ``ConfigPolicy``.
- Build the policy for this plugin.
- Validate a host mapping and turn it into a ``ConnectionConfig``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from snap_postgresql.config.connection import ConnectionConfig
from snap_postgresql.config.constants import (
    DEFAULT_HOSTNAME,
    DEFAULT_PORT,
    OPT_DATABASE,
    OPT_HOSTNAME,
    OPT_PASSWORD,
    OPT_PORT,
    OPT_TABLE_NAME,
    OPT_USERNAME,
)
from snap_postgresql.errors import ConfigError


def _matches(value: Any, value_type: type) -> bool:
    # bool is an int subclass but never a valid integer option
    return isinstance(value, value_type) and not isinstance(value, bool)


@dataclass(frozen=True)
class ConfigRule:
    """A single typed configuration option.

    Raises:
        ConfigError: If the default does not match ``value_type``.

    """

    name: str
    value_type: type
    required: bool
    default: Any = None
    description: str = ""

    def __post_init__(self):
        if self.default is not None and not _matches(self.default, self.value_type):
            raise ConfigError([
                f"default for '{self.name}' must be {self.value_type.__name__}, "
                f"got {type(self.default).__name__}",
            ])

    @property
    def type_name(self) -> str:
        return "integer" if self.value_type is int else "string"


def string_rule(name: str, required: bool, default: str | None = None,
                description: str = "") -> ConfigRule:
    return ConfigRule(name, str, required, default, description)


def integer_rule(name: str, required: bool, default: int | None = None,
                 description: str = "") -> ConfigRule:
    return ConfigRule(name, int, required, default, description)


class ConfigPolicy:
    """Ordered collection of configuration rules."""

    def __init__(self):
        self._rules: dict[str, ConfigRule] = {}

    def add(self, *rules: ConfigRule) -> "ConfigPolicy":
        """Register rules, rejecting duplicate option names.

        Raises:
            ConfigError: If a rule with the same name is already registered.

        """
        for rule in rules:
            if rule.name in self._rules:
                raise ConfigError([f"duplicate rule '{rule.name}'"])
            self._rules[rule.name] = rule
        return self

    @property
    def rules(self) -> list[ConfigRule]:
        return list(self._rules.values())

    def get(self, name: str) -> ConfigRule:
        return self._rules[name]

    def apply(self, config: Mapping[str, Any]) -> dict[str, Any]:
        """Validate a host mapping against the rules and fill defaults.

        Options not declared by the policy are ignored.

        Args:
            config (Mapping[str, Any]): Option name to value, as supplied by
                the host.

        Returns:
            dict[str, Any]: One entry per declared option that has a value.

        Raises:
            ConfigError: Listing every missing or mistyped option.

        """
        processed: dict[str, Any] = {}
        problems: list[str] = []
        for rule in self._rules.values():
            value = config.get(rule.name)
            if value is None:
                value = rule.default
            if value is None:
                if rule.required:
                    problems.append(f"required option '{rule.name}' is missing")
                continue
            if not _matches(value, rule.value_type):
                problems.append(
                    f"option '{rule.name}' must be {rule.type_name}, "
                    f"got {type(value).__name__}",
                )
                continue
            processed[rule.name] = value

        if problems:
            raise ConfigError(problems)
        return processed

    def process(self, config: Mapping[str, Any]) -> ConnectionConfig:
        """Validate a host mapping and build the connection settings.

        Raises:
            ConfigError: If the mapping does not satisfy the policy.

        """
        values = self.apply(config)
        return ConnectionConfig(
            username=values[OPT_USERNAME],
            password=values[OPT_PASSWORD],
            database=values[OPT_DATABASE],
            table_name=values[OPT_TABLE_NAME],
            hostname=values[OPT_HOSTNAME],
            port=values[OPT_PORT],
        )


def build_config_policy() -> ConfigPolicy:
    """Return the configuration policy of the PostgreSQL publisher.

    Returns:
        ConfigPolicy: Rules for username, password, database, table_name,
            hostname and port.

    """
    return ConfigPolicy().add(
        string_rule(OPT_USERNAME, True,
                    description="Username to login to the PostgreSQL server"),
        string_rule(OPT_PASSWORD, True,
                    description="Password to login to the PostgreSQL server"),
        string_rule(OPT_DATABASE, True,
                    description="The PostgreSQL database that data will be pushed to"),
        string_rule(OPT_TABLE_NAME, True,
                    description="The PostgreSQL table within the database where "
                                "information will be stored"),
        string_rule(OPT_HOSTNAME, True, DEFAULT_HOSTNAME,
                    description="The PostgreSQL server ip or domain name"),
        integer_rule(OPT_PORT, True, DEFAULT_PORT,
                     description="The PostgreSQL server port number"),
    )
