"""Exceptions raised while loading, parsing and saving configuration."""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for every configuration error."""

    prefix = ""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix}: {self.detail}"
        return self.detail


class ConfigNotFoundError(ConfigError):
    """The configuration file does not exist."""

    prefix = "config not found"


class InvalidConfigError(ConfigError):
    """The configuration is structurally valid but semantically wrong."""

    prefix = "invalid config"


class ConfigFormatError(ConfigError):
    """The configuration could not be parsed or has values of the wrong type."""

    prefix = "json error"


class ConfigExistsError(ConfigError):
    """A configuration file already exists where a new one was to be written."""

    prefix = "config already exists"