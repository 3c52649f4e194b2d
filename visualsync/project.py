"""Project files: a named set of timed text events."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


def _require(data: Dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


@dataclass
class EventModel:
    """A text event placed on a lane of the timeline."""

    start: float = 0.0
    duration: float = 0.0
    lane: int = 0
    text: str = ""
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "duration": self.duration,
            "text": self.text,
            "lane": self.lane,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventModel":
        return cls(
            start=float(_require(data, "start")),
            duration=float(_require(data, "duration")),
            text=str(_require(data, "text")),
            lane=int(_require(data, "lane")),
        )

    def __str__(self) -> str:
        return f"{self.start:g} - {self.duration:g}"


@dataclass
class ProjectModel:
    """A project: its name, tempo and events."""

    name: str = ""
    bpm: int = 0
    events: List[EventModel] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "bpm": self.bpm,
            "events": [event.to_dict() for event in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectModel":
        events = _require(data, "events")
        if not isinstance(events, list):
            raise ValueError("field 'events' must be a list")
        return cls(
            name=str(_require(data, "name")),
            bpm=int(_require(data, "bpm")),
            events=[EventModel.from_dict(event) for event in events],
        )

    def save(self, path) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path) -> "ProjectModel":
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))

    def __str__(self) -> str:
        lines = "".join(f"{event}\n" for event in self.events)
        return f"Project: \n{self.name}:\n{lines}"