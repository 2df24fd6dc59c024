import pickle

import pytest

from reeln.errors import (
    ConfigError,
    ConfigExistsError,
    ConfigFormatError,
    ConfigNotFoundError,
    InvalidConfigError,
)


@pytest.mark.parametrize(
    ("cls", "prefix"),
    [
        (ConfigNotFoundError, "config not found"),
        (InvalidConfigError, "invalid config"),
        (ConfigFormatError, "json error"),
        (ConfigExistsError, "config already exists"),
    ],
)
def test_message_prefix(cls, prefix):
    err = cls("/tmp/config.json")
    assert str(err) == f"{prefix}: /tmp/config.json"
    assert err.detail == "/tmp/config.json"


@pytest.mark.parametrize(
    "cls", [ConfigNotFoundError, InvalidConfigError, ConfigFormatError, ConfigExistsError]
)
def test_subclasses_caught_as_config_error(cls):
    err = cls("detail")
    caught = None
    try:
        raise err
    except ConfigError as exc:
        caught = exc
    assert caught is err
    assert caught.detail == "detail"
    assert str(caught).endswith(": detail")


def test_base_error_message_is_detail():
    assert str(ConfigError("boom")) == "boom"


def test_already_exists_message_mentions_already_exists():
    assert "already exists" in str(ConfigExistsError("/x/config.json"))


def test_error_survives_pickle():
    err = ConfigNotFoundError("/nonexistent/config.json")
    restored = pickle.loads(pickle.dumps(err))
    assert type(restored) is ConfigNotFoundError
    assert str(restored) == str(err)