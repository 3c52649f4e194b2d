"""Preset models and their JSON files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .messages import PatternData

log = logging.getLogger(__name__)

EMPTY_PRESET_COUNT = 100


def _to_int(value: Any) -> int:
    """Read a JSON number as an integer, 0 for anything else."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _alternating_pattern() -> PatternData:
    return PatternData([0xFF if step % 2 == 0 else 0x00 for step in range(PatternData.SIZE)])


@dataclass
class PresetModel:
    """A named preset."""

    name: str = ""


@dataclass
class TubePreset:
    """Per-tube delay, group and pattern."""

    delay: int = 0
    group: int = 0
    pattern: PatternData = field(default_factory=PatternData)


@dataclass
class TubePresetModel(PresetModel):
    """A preset holding the settings of every tube, keyed by MAC address."""

    id: int = 0
    tube_presets: Dict[str, TubePreset] = field(default_factory=dict)
    pattern: PatternData = field(default_factory=PatternData)

    def to_json(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id,
            "tubes": {
                key: {"delay": preset.delay, "group": preset.group}
                for key, preset in sorted(self.tube_presets.items())
            },
        }

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "TubePresetModel":
        tubes = obj.get("tubes")
        if not isinstance(tubes, dict):
            tubes = {}
        presets = {}
        for key in sorted(tubes):
            value = tubes[key] if isinstance(tubes[key], dict) else {}
            presets[key] = TubePreset(
                delay=_to_int(value.get("delay")),
                group=_to_int(value.get("group")),
                pattern=_alternating_pattern(),
            )
        name = obj.get("name")
        return cls(
            name=name if isinstance(name, str) else "",
            id=_to_int(obj.get("id")),
            tube_presets=presets,
        )


def read_presets(model_type, file_path) -> List[Any]:
    """Load presets from a JSON array; an unreadable file yields empty presets."""
    try:
        raw = Path(file_path).read_bytes()
    except OSError:
        log.debug("Failed to open %s for reading", file_path)
        return [model_type("empty", index) for index in range(EMPTY_PRESET_COUNT)]
    try:
        document = json.loads(raw)
    except ValueError:
        return []
    if not isinstance(document, list):
        return []
    return [model_type.from_json(value) for value in document if isinstance(value, dict)]


def save_presets(presets, file_path) -> None:
    """Write presets as a JSON array."""
    document = [preset.to_json() for preset in presets]
    Path(file_path).write_text(json.dumps(document, indent=4), encoding="utf-8")
    log.debug("JSON saved to %s", file_path)