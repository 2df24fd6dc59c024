import json
from pathlib import Path

import pytest

from reeln.errors import ConfigFormatError
from reeln.model import (
    AppConfig,
    BrandingConfig,
    EventTypeEntry,
    IterationConfig,
    OrchestrationConfig,
    PathConfig,
    PluginsConfig,
    RenderProfile,
    SpeedSegment,
    VideoConfig,
)


def test_video_config_defaults():
    v = VideoConfig()
    assert v.codec == "libx264"
    assert v.preset == "medium"
    assert v.crf == 18
    assert v.audio_codec == "aac"
    assert v.audio_bitrate == "128k"


def test_path_config_defaults():
    p = PathConfig()
    assert p.source_dir is None
    assert p.source_glob == "Replay_*.mkv"
    assert p.output_dir is None
    assert p.temp_dir is None


def test_plugins_config_defaults():
    p = PluginsConfig()
    assert p.enabled == []
    assert p.disabled == []
    assert p.settings == {}
    assert p.registry_url == ""
    assert p.enforce_hooks is True


def test_branding_config_defaults():
    b = BrandingConfig()
    assert b.enabled is True
    assert b.template == "builtin:branding"
    assert b.duration == 5.0


def test_orchestration_config_defaults():
    o = OrchestrationConfig()
    assert o.upload_bitrate_kbps == 0
    assert o.sequential is True


def test_app_config_defaults():
    c = AppConfig()
    assert c.config_version == 1
    assert c.sport == "generic"
    assert c.render_profiles == {}


def test_iteration_config_profiles_for_event_exact():
    ic = IterationConfig({"goal": ["vertical"], "default": ["standard"]})
    assert ic.profiles_for_event("goal") == ["vertical"]


def test_iteration_config_profiles_for_event_fallback():
    ic = IterationConfig({"default": ["standard"]})
    assert ic.profiles_for_event("unknown") == ["standard"]


def test_iteration_config_profiles_for_event_empty():
    assert IterationConfig().profiles_for_event("anything") == []


def test_iteration_config_profiles_returns_copy():
    ic = IterationConfig({"goal": ["vertical"]})
    profiles = ic.profiles_for_event("goal")
    profiles.append("extra")
    assert ic.profiles_for_event("goal") == ["vertical"]


def test_speed_segment_serialize():
    data = SpeedSegment(speed=2.0, until=10.0).to_dict()
    assert data["speed"] == 2.0
    assert data["until"] == 10.0


def test_speed_segment_without_until():
    data = SpeedSegment(speed=1.5).to_dict()
    assert data["speed"] == 1.5
    assert "until" not in data


def test_speed_segment_missing_speed():
    with pytest.raises(ConfigFormatError):
        SpeedSegment.from_dict({"until": 3.0})


def test_render_profile_minimal_serialize():
    data = RenderProfile(name="test").to_dict()
    assert data == {"name": "test"}
    assert "width" not in data
    assert "codec" not in data


def test_render_profile_full_roundtrip():
    rp = RenderProfile(
        name="full",
        width=1920,
        height=1080,
        crop_mode="center",
        anchor_x=0.5,
        anchor_y=0.5,
        pad_color="#000000",
        scale=1.0,
        smart=True,
        speed=1.5,
        speed_segments=[SpeedSegment(speed=2.0, until=5.0)],
        lut="cinematic.cube",
        subtitle_template="{event}",
        codec="libx265",
        preset="slow",
        crf=20,
        audio_codec="opus",
        audio_bitrate="192k",
    )
    restored = RenderProfile.from_dict(json.loads(json.dumps(rp.to_dict())))
    assert restored == rp


def test_app_config_roundtrip():
    config = AppConfig()
    text = json.dumps(config.to_dict(), indent=2)
    assert AppConfig.from_dict(json.loads(text)) == config


def test_app_config_from_empty_json():
    config = AppConfig.from_dict(json.loads("{}"))
    assert config.config_version == 1
    assert config.sport == "generic"
    assert config.video.codec == "libx264"


def test_app_config_partial_json():
    config = AppConfig.from_dict(json.loads('{"sport": "hockey", "video": {"crf": 22}}'))
    assert config.sport == "hockey"
    assert config.video.crf == 22
    assert config.video.codec == "libx264"
    assert config.video.preset == "medium"


def test_plugins_config_with_settings():
    p = PluginsConfig.from_dict(
        json.loads(
            '{"enabled": ["plugin-a"], "settings": {"plugin-a": {"key": "value"}},'
            ' "enforce_hooks": false}'
        )
    )
    assert p.enabled == ["plugin-a"]
    assert p.enforce_hooks is False
    assert "plugin-a" in p.settings


def test_path_config_with_paths():
    p = PathConfig.from_dict(
        {"source_dir": "/tmp/replays", "output_dir": "/tmp/output", "temp_dir": "/tmp/work"}
    )
    assert p.source_dir == Path("/tmp/replays")
    assert p.output_dir == Path("/tmp/output")
    assert p.temp_dir == Path("/tmp/work")


def test_skip_serializing_if():
    val = AppConfig().to_dict()
    assert "render_profiles" not in val
    assert "upload_bitrate_kbps" not in val["orchestration"]


def test_upload_bitrate_serialized_when_nonzero():
    assert OrchestrationConfig(upload_bitrate_kbps=1).to_dict()["upload_bitrate_kbps"] == 1
    assert "upload_bitrate_kbps" not in OrchestrationConfig(upload_bitrate_kbps=0).to_dict()


def test_event_type_entry_simple():
    entry = EventTypeEntry("goal")
    assert entry.name == "goal"
    assert entry.team_specific is False
    assert entry.to_json() == "goal"


def test_event_type_entry_full():
    entry = EventTypeEntry("goal", team_specific=True)
    assert entry.name == "goal"
    assert entry.team_specific is True


def test_event_type_entry_full_default_team_specific():
    entry = EventTypeEntry.from_json(json.loads('{"name": "save"}'))
    assert entry.name == "save"
    assert entry.team_specific is False


def test_event_type_entry_simple_from_string_json():
    entry = EventTypeEntry.from_json(json.loads('"goal"'))
    assert entry.name == "goal"
    assert entry.team_specific is False


def test_event_type_entry_full_roundtrip():
    entry = EventTypeEntry("goal", team_specific=True)
    restored = EventTypeEntry.from_json(json.loads(json.dumps(entry.to_json())))
    assert restored == entry


def test_event_type_entry_missing_name_rejected():
    with pytest.raises(ConfigFormatError):
        EventTypeEntry.from_json({"team_specific": True})


def test_app_config_event_types_roundtrip_full():
    config = AppConfig(
        event_types=[
            EventTypeEntry("goal", team_specific=True),
            EventTypeEntry("timeout", team_specific=False, detailed=True),
        ]
    )
    text = json.dumps(config.to_dict(), indent=2)
    assert AppConfig.from_dict(json.loads(text)).event_types == config.event_types


def test_app_config_event_types_skip_serializing_when_empty():
    assert "event_types" not in AppConfig().to_dict()


def test_app_config_event_types_from_simple_strings():
    config = AppConfig.from_dict({"event_types": ["goal", "assist"]})
    assert len(config.event_types) == 2
    assert config.event_types[0].name == "goal"
    assert config.event_types[0].team_specific is False


def test_app_config_event_types_from_full_objects():
    config = AppConfig.from_dict(
        json.loads(
            '{"event_types": [{"name": "goal", "team_specific": true}, {"name": "timeout"}]}'
        )
    )
    assert len(config.event_types) == 2
    assert config.event_types[0].name == "goal"
    assert config.event_types[0].team_specific is True
    assert config.event_types[1].name == "timeout"
    assert config.event_types[1].team_specific is False


def test_app_config_event_types_mixed_format():
    config = AppConfig.from_dict(
        json.loads('{"event_types": ["clip", {"name": "goal", "team_specific": true}]}')
    )
    assert len(config.event_types) == 2
    assert config.event_types[0].name == "clip"
    assert config.event_types[0].team_specific is False
    assert config.event_types[1].name == "goal"
    assert config.event_types[1].team_specific is True


def test_app_config_event_types_missing_defaults_empty():
    assert AppConfig.from_dict({"sport": "hockey"}).event_types == []


@pytest.mark.parametrize(
    "data",
    [
        {"video": {"crf": "high"}},
        {"video": {"crf": -1}},
        {"video": "invalid"},
        {"sport": 5},
        {"event_types": "goal"},
        {"branding": {"enabled": "yes"}},
    ],
)
def test_app_config_wrong_types_rejected(data):
    with pytest.raises(ConfigFormatError):
        AppConfig.from_dict(data)


def test_app_config_non_object_rejected():
    with pytest.raises(ConfigFormatError):
        AppConfig.from_dict([1, 2, 3])


def test_app_config_unknown_keys_ignored():
    config = AppConfig.from_dict({"sport": "hockey", "unknown": {"a": 1}})
    assert config.sport == "hockey"


def test_render_profiles_and_iterations_roundtrip():
    config = AppConfig(
        render_profiles={
            "player-overlay": RenderProfile(
                name="player-overlay", subtitle_template="builtin:goal_overlay"
            )
        },
        iterations=IterationConfig({"goal": ["player-overlay"]}),
    )
    restored = AppConfig.from_dict(json.loads(json.dumps(config.to_dict())))
    assert restored == config
    assert restored.iterations.profiles_for_event("goal") == ["player-overlay"]