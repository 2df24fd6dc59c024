"""Configuration data model with JSON-compatible (de)serialisation."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from reeln.errors import ConfigFormatError

_U32_MAX = 2**32 - 1

_Check = Callable[[Any, str], Any]


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _type_error(key: str, expected: str, value: Any) -> ConfigFormatError:
    return ConfigFormatError(
        f"invalid type for '{key}': expected {expected}, got {_type_name(value)}"
    )


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise _type_error(what, "an object", data)
    return data


def _as_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise _type_error(key, "a string", value)
    return value


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise _type_error(key, "a boolean", value)
    return value


def _as_u32(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_error(key, "an unsigned integer", value)
    if not 0 <= value <= _U32_MAX:
        raise ConfigFormatError(f"value {value} for '{key}' is out of range")
    return value


def _as_float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _type_error(key, "a number", value)
    return float(value)


def _as_path(value: Any, key: str) -> Path:
    return Path(_as_str(value, key))


def _as_str_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list):
        raise _type_error(key, "an array", value)
    return [_as_str(item, f"{key}[{i}]") for i, item in enumerate(value)]


def _optional(check: _Check) -> _Check:
    def checked(value: Any, key: str) -> Any:
        return None if value is None else check(value, key)

    return checked


def _get(data: Mapping[str, Any], key: str, check: _Check, default: Any = None) -> Any:
    if key not in data:
        return default
    return check(data[key], key)


@dataclass
class VideoConfig:
    """Default encoder settings."""

    codec: str = "libx264"
    preset: str = "medium"
    crf: int = 18
    audio_codec: str = "aac"
    audio_bitrate: str = "128k"

    @classmethod
    def from_dict(cls, data: Any) -> VideoConfig:
        data = _mapping(data, "video")
        return cls(
            codec=_get(data, "codec", _as_str, "libx264"),
            preset=_get(data, "preset", _as_str, "medium"),
            crf=_get(data, "crf", _as_u32, 18),
            audio_codec=_get(data, "audio_codec", _as_str, "aac"),
            audio_bitrate=_get(data, "audio_bitrate", _as_str, "128k"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "codec": self.codec,
            "preset": self.preset,
            "crf": self.crf,
            "audio_codec": self.audio_codec,
            "audio_bitrate": self.audio_bitrate,
        }


@dataclass
class PathConfig:
    """Where replays are read from and games are written to."""

    source_dir: Path | None = None
    source_glob: str = "Replay_*.mkv"
    output_dir: Path | None = None
    temp_dir: Path | None = None

    @classmethod
    def from_dict(cls, data: Any) -> PathConfig:
        data = _mapping(data, "paths")
        return cls(
            source_dir=_get(data, "source_dir", _optional(_as_path)),
            source_glob=_get(data, "source_glob", _as_str, "Replay_*.mkv"),
            output_dir=_get(data, "output_dir", _optional(_as_path)),
            temp_dir=_get(data, "temp_dir", _optional(_as_path)),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.source_dir is not None:
            result["source_dir"] = str(self.source_dir)
        result["source_glob"] = self.source_glob
        if self.output_dir is not None:
            result["output_dir"] = str(self.output_dir)
        if self.temp_dir is not None:
            result["temp_dir"] = str(self.temp_dir)
        return result


@dataclass
class PluginsConfig:
    """Plugin selection and per-plugin settings."""

    enabled: list[str] = field(default_factory=list)
    disabled: list[str] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)
    registry_url: str = ""
    enforce_hooks: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> PluginsConfig:
        data = _mapping(data, "plugins")
        settings = _get(data, "settings", lambda v, k: dict(_mapping(v, k)), {})
        return cls(
            enabled=_get(data, "enabled", _as_str_list, []),
            disabled=_get(data, "disabled", _as_str_list, []),
            settings=copy.deepcopy(settings),
            registry_url=_get(data, "registry_url", _as_str, ""),
            enforce_hooks=_get(data, "enforce_hooks", _as_bool, True),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.enabled:
            result["enabled"] = list(self.enabled)
        if self.disabled:
            result["disabled"] = list(self.disabled)
        if self.settings:
            result["settings"] = copy.deepcopy(self.settings)
        if self.registry_url:
            result["registry_url"] = self.registry_url
        result["enforce_hooks"] = self.enforce_hooks
        return result


@dataclass
class BrandingConfig:
    """Branding overlay settings."""

    enabled: bool = True
    template: str = "builtin:branding"
    duration: float = 5.0

    @classmethod
    def from_dict(cls, data: Any) -> BrandingConfig:
        data = _mapping(data, "branding")
        return cls(
            enabled=_get(data, "enabled", _as_bool, True),
            template=_get(data, "template", _as_str, "builtin:branding"),
            duration=_get(data, "duration", _as_float, 5.0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "template": self.template,
            "duration": self.duration,
        }


@dataclass
class OrchestrationConfig:
    """How rendering and uploading are scheduled."""

    upload_bitrate_kbps: int = 0
    sequential: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> OrchestrationConfig:
        data = _mapping(data, "orchestration")
        return cls(
            upload_bitrate_kbps=_get(data, "upload_bitrate_kbps", _as_u32, 0),
            sequential=_get(data, "sequential", _as_bool, True),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.upload_bitrate_kbps != 0:
            result["upload_bitrate_kbps"] = self.upload_bitrate_kbps
        result["sequential"] = self.sequential
        return result


@dataclass
class SpeedSegment:
    """A playback speed that holds until a given time (or to the end)."""

    speed: float
    until: float | None = None

    @classmethod
    def from_dict(cls, data: Any) -> SpeedSegment:
        data = _mapping(data, "speed_segment")
        if "speed" not in data:
            raise ConfigFormatError("missing field 'speed'")
        return cls(
            speed=_as_float(data["speed"], "speed"),
            until=_get(data, "until", _optional(_as_float)),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"speed": self.speed}
        if self.until is not None:
            result["until"] = self.until
        return result


def _as_segments(value: Any, key: str) -> list[SpeedSegment]:
    if not isinstance(value, list):
        raise _type_error(key, "an array", value)
    return [SpeedSegment.from_dict(item) for item in value]


_RENDER_FIELDS: tuple[tuple[str, _Check], ...] = (
    ("width", _as_u32),
    ("height", _as_u32),
    ("crop_mode", _as_str),
    ("anchor_x", _as_float),
    ("anchor_y", _as_float),
    ("pad_color", _as_str),
    ("scale", _as_float),
    ("smart", _as_bool),
    ("speed", _as_float),
    ("speed_segments", _as_segments),
    ("lut", _as_str),
    ("subtitle_template", _as_str),
    ("codec", _as_str),
    ("preset", _as_str),
    ("crf", _as_u32),
    ("audio_codec", _as_str),
    ("audio_bitrate", _as_str),
)


@dataclass
class RenderProfile:
    """A named set of render overrides; unset fields inherit the defaults."""

    name: str = ""
    width: int | None = None
    height: int | None = None
    crop_mode: str | None = None
    anchor_x: float | None = None
    anchor_y: float | None = None
    pad_color: str | None = None
    scale: float | None = None
    smart: bool | None = None
    speed: float | None = None
    speed_segments: list[SpeedSegment] | None = None
    lut: str | None = None
    subtitle_template: str | None = None
    codec: str | None = None
    preset: str | None = None
    crf: int | None = None
    audio_codec: str | None = None
    audio_bitrate: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> RenderProfile:
        data = _mapping(data, "render_profile")
        values = {key: _get(data, key, _optional(check)) for key, check in _RENDER_FIELDS}
        return cls(name=_get(data, "name", _as_str, ""), **values)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.name:
            result["name"] = self.name
        for key, _ in _RENDER_FIELDS:
            value = getattr(self, key)
            if value is None:
                continue
            if key == "speed_segments":
                value = [segment.to_dict() for segment in value]
            result[key] = value
        return result


@dataclass
class IterationConfig:
    """Maps event types to the render profiles applied to them."""

    mappings: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> IterationConfig:
        data = _mapping(data, "iterations")
        return cls({key: _as_str_list(value, key) for key, value in data.items()})

    def to_dict(self) -> dict[str, Any]:
        return {key: list(value) for key, value in self.mappings.items()}

    def profiles_for_event(self, event_type: str) -> list[str]:
        """Profiles for an event type, falling back to the "default" entry."""
        profiles = self.mappings.get(event_type)
        if profiles is None:
            profiles = self.mappings.get("default", [])
        return list(profiles)


@dataclass(frozen=True)
class EventTypeEntry:
    """A configured event type, written either as a bare name or as an object.

    ``detailed`` records the object form; it is implied when ``team_specific``.
    """

    name: str
    team_specific: bool = False
    detailed: bool = False

    def __post_init__(self) -> None:
        if self.team_specific and not self.detailed:
            object.__setattr__(self, "detailed", True)

    @classmethod
    def from_json(cls, data: Any) -> EventTypeEntry:
        if isinstance(data, str):
            return cls(data)
        if isinstance(data, Mapping):
            name = data.get("name")
            team_specific = data.get("team_specific", False)
            if isinstance(name, str) and isinstance(team_specific, bool):
                return cls(name, team_specific, detailed=True)
        raise ConfigFormatError(
            "data did not match any variant of event type entry: "
            'expected a string or {"name": ..., "team_specific": ...}'
        )

    def to_json(self) -> str | dict[str, Any]:
        if self.detailed:
            return {"name": self.name, "team_specific": self.team_specific}
        return self.name


def _as_event_types(value: Any, key: str) -> list[EventTypeEntry]:
    if not isinstance(value, list):
        raise _type_error(key, "an array", value)
    return [EventTypeEntry.from_json(item) for item in value]


def _as_profiles(value: Any, key: str) -> dict[str, RenderProfile]:
    mapping = _mapping(value, key)
    return {name: RenderProfile.from_dict(profile) for name, profile in mapping.items()}


def _section(loader: Callable[[Any], Any]) -> _Check:
    return lambda value, key: loader(value)


@dataclass
class AppConfig:
    """The complete application configuration."""

    config_version: int = 1
    sport: str = "generic"
    event_types: list[EventTypeEntry] = field(default_factory=list)
    video: VideoConfig = field(default_factory=VideoConfig)
    paths: PathConfig = field(default_factory=PathConfig)
    render_profiles: dict[str, RenderProfile] = field(default_factory=dict)
    iterations: IterationConfig = field(default_factory=IterationConfig)
    branding: BrandingConfig = field(default_factory=BrandingConfig)
    orchestration: OrchestrationConfig = field(default_factory=OrchestrationConfig)
    plugins: PluginsConfig = field(default_factory=PluginsConfig)

    @classmethod
    def from_dict(cls, data: Any) -> AppConfig:
        data = _mapping(data, "config")
        return cls(
            config_version=_get(data, "config_version", _as_u32, 1),
            sport=_get(data, "sport", _as_str, "generic"),
            event_types=_get(data, "event_types", _as_event_types, []),
            video=_get(data, "video", _section(VideoConfig.from_dict), VideoConfig()),
            paths=_get(data, "paths", _section(PathConfig.from_dict), PathConfig()),
            render_profiles=_get(data, "render_profiles", _as_profiles, {}),
            iterations=_get(
                data, "iterations", _section(IterationConfig.from_dict), IterationConfig()
            ),
            branding=_get(
                data, "branding", _section(BrandingConfig.from_dict), BrandingConfig()
            ),
            orchestration=_get(
                data,
                "orchestration",
                _section(OrchestrationConfig.from_dict),
                OrchestrationConfig(),
            ),
            plugins=_get(data, "plugins", _section(PluginsConfig.from_dict), PluginsConfig()),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "config_version": self.config_version,
            "sport": self.sport,
        }
        if self.event_types:
            result["event_types"] = [entry.to_json() for entry in self.event_types]
        result["video"] = self.video.to_dict()
        result["paths"] = self.paths.to_dict()
        if self.render_profiles:
            result["render_profiles"] = {
                name: profile.to_dict() for name, profile in self.render_profiles.items()
            }
        result["iterations"] = self.iterations.to_dict()
        result["branding"] = self.branding.to_dict()
        result["orchestration"] = self.orchestration.to_dict()
        result["plugins"] = self.plugins.to_dict()
        return result