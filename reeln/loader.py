"""Loading, saving, merging, overriding and validating configuration files."""

from __future__ import annotations

import copy
import json
import os
import re
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any

from reeln.errors import ConfigFormatError, ConfigNotFoundError
from reeln.model import AppConfig

CURRENT_CONFIG_VERSION = 1
"""The newest config version this package understands."""

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")

_SECTIONS = (
    "video",
    "paths",
    "render_profiles",
    "iterations",
    "branding",
    "orchestration",
    "plugins",
)


def default_config() -> AppConfig:
    """Return an ``AppConfig`` with every default applied."""
    return AppConfig()


def _read_json(path: Path) -> Any:
    content = path.read_text(encoding="utf-8")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigFormatError(f"{exc.msg} at line {exc.lineno} column {exc.colno}") from exc


def load_config(path: str | os.PathLike[str], profile: str | None = None) -> AppConfig:
    """Load a config file, deep-merging ``config.<profile>.json`` on top if present."""
    path = Path(path)
    if not path.exists():
        raise ConfigNotFoundError(str(path))
    base = _read_json(path)

    if profile is not None:
        profile_path = path.parent / f"config.{profile}.json"
        if profile_path.exists():
            base = deep_merge(base, _read_json(profile_path))

    return AppConfig.from_dict(base)


def save_config(config: AppConfig, path: str | os.PathLike[str]) -> Path:
    """Write the config as pretty JSON via a temporary file and an atomic rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    text = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    tmp_path = path.with_name(f"{path.stem}.json.tmp")
    tmp_path.write_text(text, encoding="utf-8")
    os.replace(tmp_path, path)
    return path


def deep_merge(base: Any, overlay: Any) -> Any:
    """Merge ``overlay`` into ``base`` in place (overlay wins) and return ``base``.

    Nothing happens unless both values are objects.
    """
    if not (isinstance(base, MutableMapping) and isinstance(overlay, Mapping)):
        return base
    for key, value in overlay.items():
        current = base.get(key)
        if isinstance(value, Mapping) and isinstance(current, MutableMapping):
            deep_merge(current, value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def _parse_u32(text: str) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None


def apply_env_overrides(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> None:
    """Apply ``REELN_*`` environment variables to ``config`` in place."""
    env = os.environ if environ is None else environ

    if "REELN_SPORT" in env:
        config.sport = env["REELN_SPORT"]

    if "REELN_VIDEO_CODEC" in env:
        config.video.codec = env["REELN_VIDEO_CODEC"]
    if "REELN_VIDEO_PRESET" in env:
        config.video.preset = env["REELN_VIDEO_PRESET"]
    if "REELN_VIDEO_CRF" in env:
        crf = _parse_u32(env["REELN_VIDEO_CRF"])
        if crf is not None:
            config.video.crf = crf
    if "REELN_VIDEO_AUDIO_CODEC" in env:
        config.video.audio_codec = env["REELN_VIDEO_AUDIO_CODEC"]
    if "REELN_VIDEO_AUDIO_BITRATE" in env:
        config.video.audio_bitrate = env["REELN_VIDEO_AUDIO_BITRATE"]

    if "REELN_PATHS_SOURCE_DIR" in env:
        config.paths.source_dir = Path(env["REELN_PATHS_SOURCE_DIR"])
    if "REELN_PATHS_OUTPUT_DIR" in env:
        config.paths.output_dir = Path(env["REELN_PATHS_OUTPUT_DIR"])
    if "REELN_PATHS_TEMP_DIR" in env:
        config.paths.temp_dir = Path(env["REELN_PATHS_TEMP_DIR"])
    if "REELN_PATHS_SOURCE_GLOB" in env:
        config.paths.source_glob = env["REELN_PATHS_SOURCE_GLOB"]


def _is_unsigned(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= _U64_MAX


def _event_type_name(item: Any) -> str | None:
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping) and isinstance(item.get("name"), str):
        return item["name"]
    return None


def validate_config(data: Any) -> list[str]:
    """Check raw config JSON and return a list of warnings; never raises."""
    if not isinstance(data, Mapping):
        return []
    warnings: list[str] = []

    if "config_version" in data:
        version = data["config_version"]
        if _is_unsigned(version):
            if version > CURRENT_CONFIG_VERSION:
                warnings.append(
                    f"config_version {version} is newer than supported version "
                    f"{CURRENT_CONFIG_VERSION}"
                )
        else:
            warnings.append("config_version must be an integer")

    warnings.extend(
        f"'{section}' must be an object"
        for section in _SECTIONS
        if section in data and not isinstance(data[section], Mapping)
    )

    event_types = data.get("event_types")
    if "event_types" in data:
        if isinstance(event_types, list):
            warnings.extend(
                f'event_types[{i}] must be a string or {{"name": ..., "team_specific": ...}}'
                for i, item in enumerate(event_types)
                if _event_type_name(item) is None
            )
        else:
            warnings.append("'event_types' must be an array")

    if isinstance(event_types, list) and event_types:
        names = {name for name in map(_event_type_name, event_types) if name is not None}
        iterations = data.get("iterations")
        if isinstance(iterations, Mapping):
            warnings.extend(
                f"iterations references type '{key}' not listed in event_types"
                for key in iterations
                if key != "default" and key not in names
            )

    return warnings