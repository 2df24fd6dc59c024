# reeln

Configuration handling for replay video workflows. It provides typed config
models, platform-appropriate config locations, layered profile overlays,
`REELN_*` environment overrides and validation that reports warnings instead
of raising.

## Installation

Run this from the project directory:

```
pip install .
```

Requires Python 3.10 or newer. The only runtime dependency is `platformdirs`.

## Modules

- `reeln.model` holds the config dataclasses and their JSON conversion.
- `reeln.loader` loads, saves, merges, overrides and validates configs.
- `reeln.paths` gives the config and data locations.
- `reeln.errors` holds the exception classes.

## Config locations

```python
from reeln.paths import config_dir, data_dir, default_config_path, resolve_config_path

config_dir()                       # platformdirs user config dir / "reeln"
data_dir()                         # platformdirs user data dir / "reeln"
default_config_path()              # <config_dir>/config.json
default_config_path("dev")         # <config_dir>/config.dev.json
resolve_config_path("x.json")      # an explicit path wins when given
resolve_config_path(None, "prod")  # otherwise <config_dir>/config.prod.json
```

## Loading and saving

```python
from reeln.loader import load_config, save_config, apply_env_overrides

config = load_config("config.json", "dev")
apply_env_overrides(config)
save_config(config, "config.json")
```

`load_config` reads the base file. When a profile is named, it also looks for
`config.<profile>.json` in the same directory. If that file exists, it is
deep-merged on top of the base file. Keys missing from the file take their
defaults.

`load_config` raises these errors:

- `ConfigNotFoundError` when the base file is missing.
- `ConfigFormatError` when the JSON is malformed or a value has the wrong
  type, for example a string where an unsigned integer is expected.

`save_config` creates parent directories as needed. It writes pretty-printed
JSON to `<stem>.json.tmp` next to the target, renames that file over the
target, and returns the target path.

`deep_merge(base, overlay)` merges nested objects in place, with the overlay
winning on conflicts, and returns `base`. It does nothing unless both values
are mappings.

`default_config()` returns an `AppConfig` with every default applied.

## Environment overrides

`apply_env_overrides(config, environ=None)` changes the config in place. It
reads the following variables:

| Variable                    | Field                                   |
|-----------------------------|-----------------------------------------|
| `REELN_SPORT`               | `sport`                                 |
| `REELN_VIDEO_CODEC`         | `video.codec`                           |
| `REELN_VIDEO_PRESET`        | `video.preset`                          |
| `REELN_VIDEO_CRF`           | `video.crf` (ignored unless an unsigned 32-bit integer) |
| `REELN_VIDEO_AUDIO_CODEC`   | `video.audio_codec`                     |
| `REELN_VIDEO_AUDIO_BITRATE` | `video.audio_bitrate`                   |
| `REELN_PATHS_SOURCE_DIR`    | `paths.source_dir`                      |
| `REELN_PATHS_OUTPUT_DIR`    | `paths.output_dir`                      |
| `REELN_PATHS_TEMP_DIR`      | `paths.temp_dir`                        |
| `REELN_PATHS_SOURCE_GLOB`   | `paths.source_glob`                     |

By default the variables come from `os.environ`. Pass a mapping as `environ`
to use other values.

## Validation

```python
from reeln.loader import validate_config

warnings = validate_config({"config_version": 99, "video": "bad"})
```

`validate_config` works on raw JSON data. It never raises. It returns a list
of warning strings, and it reports these problems:

- A `config_version` that is not an unsigned integer.
- A `config_version` newer than `CURRENT_CONFIG_VERSION`, which is 1.
- Any of the sections `video`, `paths`, `render_profiles`, `iterations`,
  `branding`, `orchestration` or `plugins` that is not an object.
- An `event_types` value that is not an array.
- Entries in `event_types` that are neither a string nor an object with a
  string `name`.
- Keys in `iterations` other than `"default"` that do not appear in a
  non-empty `event_types` list.

## Models

`AppConfig` and its sections are dataclasses with `from_dict` and `to_dict`.
The sections are `VideoConfig`, `PathConfig`, `RenderProfile` (with
`SpeedSegment`), `IterationConfig`, `BrandingConfig`, `OrchestrationConfig`
and `PluginsConfig`. When serialising, `to_dict` leaves out empty lists and
maps, unset optional fields, an empty `registry_url` and an
`upload_bitrate_kbps` of zero.

`EventTypeEntry.from_json` accepts two forms:

- A plain string such as `"goal"`.
- An object such as `{"name": "goal", "team_specific": true}`.

`to_json` writes the entry back in the same form it was read in.

`IterationConfig.profiles_for_event` returns the profiles for an event type.
If the event type has no mapping of its own, it falls back to the `"default"`
mapping. If neither exists, it returns an empty list.

## Errors

All errors derive from `ConfigError`:

- `ConfigNotFoundError`
- `InvalidConfigError`
- `ConfigFormatError`
- `ConfigExistsError`

## What this package does not do

This package is a library only. It has no command-line tool. It does not
create a first-time config from sport presets. It does not probe, cut,
render or upload video itself. It only describes and stores the settings
that such tools would use.