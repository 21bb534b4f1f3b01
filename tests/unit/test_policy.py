"""test_policy.py.

Unit tests for the snap_postgresql.config.policy module.
"""

import pytest

from snap_postgresql.config.connection import ConnectionConfig
from snap_postgresql.config.policy import (
    ConfigPolicy,
    build_config_policy,
    integer_rule,
    string_rule,
)
from snap_postgresql.errors import ConfigError


def test_policy_declares_six_options():
    policy = build_config_policy()
    names = [rule.name for rule in policy.rules]
    assert names == ["username", "password", "database", "table_name", "hostname", "port"]
    assert all(rule.required for rule in policy.rules)
    assert all(rule.description for rule in policy.rules)
    assert policy.get("hostname").default == "localhost"
    assert policy.get("port").default == 5432
    assert policy.get("port").value_type is int


def test_process_fills_defaults():
    config = build_config_policy().process({
        "username": "postgres",
        "password": "secret",
        "database": "snap_test",
        "table_name": "info",
    })
    assert config == ConnectionConfig(
        username="postgres",
        password="secret",
        database="snap_test",
        table_name="info",
        hostname="localhost",
        port=5432,
    )


def test_process_ignores_unknown_options(host_config):
    config = build_config_policy().process({**host_config, "extra": 1})
    assert config.hostname == "db.example"


def test_process_reports_every_problem():
    with pytest.raises(ConfigError) as exc_info:
        build_config_policy().process({"username": "postgres", "port": "5432"})
    problems = exc_info.value.problems
    assert "required option 'password' is missing" in problems
    assert "required option 'database' is missing" in problems
    assert "required option 'table_name' is missing" in problems
    assert "option 'port' must be integer, got str" in problems


def test_bool_is_not_an_integer(host_config):
    with pytest.raises(ConfigError):
        build_config_policy().process({**host_config, "port": True})


def test_rule_with_mistyped_default_fails_at_build_time():
    with pytest.raises(ConfigError):
        integer_rule("port", True, "5432")


def test_duplicate_rule_is_rejected():
    policy = ConfigPolicy().add(string_rule("username", True))
    with pytest.raises(ConfigError):
        policy.add(string_rule("username", False))


def test_password_is_hidden_from_repr(host_config):
    config = build_config_policy().process({**host_config, "password": "hunter2"})
    assert "hunter2" not in repr(config)
    assert config.connection_kwargs() == {
        "host": "db.example",
        "port": 5432,
        "user": "postgres",
        "password": "hunter2",
        "dbname": "snap_test",
        "sslmode": "disable",
    }
