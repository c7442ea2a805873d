"""Tests for client configuration."""

import pytest

from nsot_client.config import ClientConfig

ENV = {
    "NSOT_EMAIL": "env@example.com",
    "NSOT_SECRET": "env-secret",
    "NSOT_URL": "http://env.test/api",
}


def test_reads_environment():
    config = ClientConfig.from_env(environ=ENV)
    assert config == ClientConfig("env@example.com", "env-secret", "http://env.test/api")


def test_explicit_arguments_take_precedence():
    config = ClientConfig.from_env("me@example.com", url="http://nsot.test/api/", environ=ENV)

    assert config.email == "me@example.com"
    assert config.secret == "env-secret"
    assert config.url == "http://nsot.test/api"


@pytest.mark.parametrize("missing", sorted(ENV))
def test_missing_value(missing):
    env = {key: value for key, value in ENV.items() if key != missing}
    with pytest.raises(ValueError):
        ClientConfig.from_env(environ=env)


def test_is_immutable():
    config = ClientConfig.from_env(environ=ENV)
    with pytest.raises(AttributeError):
        config.email = "other@example.com"


def test_secret_not_in_repr():
    assert "env-secret" not in repr(ClientConfig.from_env(environ=ENV))
