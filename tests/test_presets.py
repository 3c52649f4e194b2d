import json

import pytest

from visualsync.messages import PatternData
from visualsync.presets import (
    PresetModel,
    TubePreset,
    TubePresetModel,
    read_presets,
    save_presets,
)


def _model():
    return TubePresetModel(
        name="intro",
        id=4,
        tube_presets={
            "aa:bb": TubePreset(delay=100, group=1),
            "cc:dd": TubePreset(delay=0, group=2),
        },
    )


def test_preset_model_name():
    assert PresetModel("x").name == "x"


def test_to_json_layout():
    obj = _model().to_json()
    assert obj["name"] == "intro"
    assert obj["id"] == 4
    assert obj["tubes"]["aa:bb"] == {"delay": 100, "group": 1}


def test_json_round_trip_keeps_settings():
    model = _model()
    loaded = TubePresetModel.from_json(model.to_json())
    assert loaded.name == model.name
    assert loaded.id == model.id
    assert {k: (p.delay, p.group) for k, p in loaded.tube_presets.items()} == {
        k: (p.delay, p.group) for k, p in model.tube_presets.items()
    }


def test_from_json_fills_alternating_pattern():
    loaded = TubePresetModel.from_json({"name": "a", "id": 1, "tubes": {"m": {"delay": 1, "group": 0}}})
    pattern = loaded.tube_presets["m"].pattern.pattern
    assert pattern[0::2] == [0xFF] * 16
    assert pattern[1::2] == [0x00] * 16


def test_from_json_defaults_for_missing_and_non_numeric():
    loaded = TubePresetModel.from_json({"tubes": {"m": {"delay": "soon", "group": 1.5}}})
    assert loaded.name == ""
    assert loaded.id == 0
    assert (loaded.tube_presets["m"].delay, loaded.tube_presets["m"].group) == (0, 0)


def test_new_model_has_empty_pattern():
    assert TubePresetModel("x").pattern == PatternData()


def test_read_missing_file_gives_empty_presets(tmp_path):
    presets = read_presets(TubePresetModel, tmp_path / "missing.json")
    assert len(presets) == 100
    assert all(p.name == "empty" for p in presets)
    assert [p.id for p in presets] == list(range(100))


def test_read_non_array_gives_nothing(tmp_path):
    path = tmp_path / "p.json"
    path.write_text(json.dumps({"name": "x"}))
    assert read_presets(TubePresetModel, path) == []


def test_read_invalid_json_gives_nothing(tmp_path):
    path = tmp_path / "p.json"
    path.write_text("{not json")
    assert read_presets(TubePresetModel, path) == []


def test_save_and_read_round_trip(tmp_path):
    path = tmp_path / "p.json"
    models = [_model(), TubePresetModel("second", 5)]
    save_presets(models, path)
    loaded = read_presets(TubePresetModel, path)
    assert [m.to_json() for m in loaded] == [m.to_json() for m in models]


def test_save_into_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        save_presets([_model()], tmp_path / "nope" / "p.json")