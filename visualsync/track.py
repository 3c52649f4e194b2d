"""Timeline tracks and selections of tracks, with their mouse editing rules.

A track is drawn inside a view that provides:

* ``zoom``: the horizontal zoom factor,
* ``bar_width()``: the width of one bar in scene units at zoom 1,
* ``grid_snap_interval``: grid subdivisions per bar,
* ``snap_to_grid``: whether moved tracks snap to the grid,
* ``build_event_list()``: called after a track was changed by the mouse.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

BAR_RESOLUTION = 100
LANE_HEIGHT = 35
TRACK_HEIGHT = 30
EDGE_GRAB_WIDTH = 10
LANE_SNAP_THRESHOLD = 15
SNAP_TOLERANCE = 25.0
RAISED_Z = 101
DEFAULT_Z = 0

Point = Tuple[float, float]


class HoverState(enum.Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"


class EditMode(enum.Enum):
    NONE = "none"
    MOVE = "move"
    RESIZE_LEFT = "resize_left"
    RESIZE_RIGHT = "resize_right"


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def snap_x(x: float, grid_width: float, tolerance: float = SNAP_TOLERANCE) -> float:
    """Snap ``x`` to the nearest grid line if it lies within ``tolerance``."""
    if grid_width <= 0:
        raise ValueError("grid width must be positive")
    snapped = _round_half_away(x / grid_width) * grid_width
    return snapped if abs(x - snapped) <= tolerance else x


class Track:
    """A text event drawn as a box on a lane of the timeline."""

    def __init__(self, start: float, duration: float, lane: int, color: Any,
                 text: str, view: Any) -> None:
        self.view = view
        self.start_time = float(start)
        self.duration = float(duration)
        self.color = color
        self.outline_color = color
        self.text = text
        self.height = TRACK_HEIGHT
        self.mode = EditMode.NONE
        self.hover_state = HoverState.NONE
        self.z_value = DEFAULT_Z
        self.selected = False
        self.group: Optional["TrackGroup"] = None
        self.x = self.start_time * BAR_RESOLUTION * view.zoom
        self.y = float(lane * LANE_HEIGHT)
        self.old_pos: Point = self.scene_pos
        self.old_mouse_pos: Point = (0.0, 0.0)
        self.old_length = 0

    @property
    def scene_pos(self) -> Point:
        if self.group is None:
            return (self.x, self.y)
        return (self.group.x + self.x, self.group.y + self.y)

    @property
    def lane(self) -> int:
        return int(int(self.y) / LANE_HEIGHT)

    def length(self) -> float:
        """The width of the track in scene units."""
        return self.duration * BAR_RESOLUTION * self.view.zoom

    def bounding_rect(self) -> Rect:
        return Rect(0.0, 0.0, self.length(), float(self.height))

    def update_position(self) -> None:
        """Place the track at its start time for the current zoom."""
        self.x = self.start_time * BAR_RESOLUTION * self.view.zoom

    def calculate_start_time(self) -> None:
        """Derive the start time from the track's position in the scene."""
        self.start_time = self.scene_pos[0] / BAR_RESOLUTION / self.view.zoom

    def hover(self, x: float) -> HoverState:
        """Update the hover state for a pointer at item-local ``x``."""
        if x > self.length() - EDGE_GRAB_WIDTH:
            self.hover_state = HoverState.RIGHT
        elif x < EDGE_GRAB_WIDTH:
            self.hover_state = HoverState.LEFT
        else:
            self.hover_state = HoverState.NONE
        return self.hover_state

    def press(self, x: float, y: float) -> EditMode:
        """Start editing at scene point (x, y) according to the hover state."""
        if self.hover_state is HoverState.NONE:
            self.mode = EditMode.MOVE
            self.z_value = RAISED_Z
        elif self.hover_state is HoverState.LEFT:
            self.mode = EditMode.RESIZE_LEFT
        else:
            self.mode = EditMode.RESIZE_RIGHT
        self.old_mouse_pos = (x, y)
        self.old_pos = self.scene_pos
        self.old_length = int(self.length())
        return self.mode

    def _move_to(self, x: float, y: float) -> None:
        old_x, old_y = self.old_pos
        y_diff = int(y - old_y)
        dx = int(x - self.old_mouse_pos[0])
        new_x, new_y = old_x, old_y

        if abs(y_diff) > LANE_SNAP_THRESHOLD:
            new_y = old_y + int(y_diff / LANE_HEIGHT) * LANE_HEIGHT

        target_x = old_x + dx
        if self.view.snap_to_grid:
            grid_width = self.view.bar_width() * self.view.zoom / self.view.grid_snap_interval
            new_x = snap_x(target_x, grid_width)
        else:
            new_x = target_x

        if target_x < 0:
            new_x = 0.0
        if new_y < 0:
            new_y = 0.0
        self.x, self.y = new_x, new_y

    def _resize_left(self, x: float) -> None:
        dx = int(x - self.old_mouse_pos[0])
        if self.old_length - dx <= 0:
            return
        zoom = self.view.zoom
        if self.old_pos[0] + dx >= 0:
            self.x = self.old_pos[0] + dx
            self.duration = (self.old_length - dx) / zoom / BAR_RESOLUTION
        else:
            self.x = 0.0
            self.duration = (self.old_length + self.old_mouse_pos[0]) / zoom / BAR_RESOLUTION

    def move(self, x: float, y: float, local_x: Optional[float] = None) -> None:
        """Drag to scene point (x, y); ``local_x`` is the pointer's item-local x."""
        if self.mode is EditMode.MOVE:
            self._move_to(x, y)
        elif self.mode is EditMode.RESIZE_LEFT:
            self._resize_left(x)
        elif self.mode is EditMode.RESIZE_RIGHT:
            if local_x is None:
                local_x = x - self.scene_pos[0]
            if local_x > 0:
                self.duration = local_x / self.view.zoom / BAR_RESOLUTION

    def release(self, x: float, y: float) -> bool:
        """Finish editing; return whether the track changed."""
        self.mode = EditMode.NONE
        self.old_mouse_pos = (x, y)
        changed = self.old_pos != self.scene_pos or self.length() != self.old_length
        self.old_pos = self.scene_pos
        self.calculate_start_time()
        self.z_value = DEFAULT_Z
        if changed:
            self.view.build_event_list()
        return changed

    def clone(self) -> "Track":
        """A new track with the same timing, lane, colour and text."""
        return Track(self.start_time, self.duration, self.lane, self.color, self.text, self.view)


class TrackGroup:
    """A selection of tracks that is moved as one."""

    def __init__(self, zoom_level: float = 1.0) -> None:
        self.zoom_level = float(zoom_level)
        self.x = 0.0
        self.y = 0.0
        self.z_value = DEFAULT_Z
        self.pressed = False
        self.tracks: List[Track] = []
        self.old_pos: Point = (0.0, 0.0)
        self.old_mouse_pos: Point = (0.0, 0.0)

    def add(self, track: Track) -> None:
        """Add a track, keeping its position in the scene."""
        scene_x, scene_y = track.scene_pos
        track.group = self
        track.x = scene_x - self.x
        track.y = scene_y - self.y
        track.selected = True
        self.tracks.append(track)

    def bounding_rect(self) -> Rect:
        """The rectangle around all tracks, in group coordinates."""
        if not self.tracks:
            return Rect(0.0, 0.0, 0.0, 0.0)
        rects = [
            Rect(track.x, track.y, track.length(), float(track.height))
            for track in self.tracks
        ]
        left = min(rect.left for rect in rects)
        top = min(rect.top for rect in rects)
        right = max(rect.right for rect in rects)
        bottom = max(rect.bottom for rect in rects)
        return Rect(left, top, right - left, bottom - top)

    def set_zoom_level(self, zoom_level: float) -> None:
        """Rescale the group's position to a new zoom level."""
        self.x = (self.x / self.zoom_level) * zoom_level
        self.zoom_level = float(zoom_level)

    def press(self, x: float, y: float) -> None:
        self.z_value = RAISED_Z
        self.pressed = True
        self.old_mouse_pos = (x, y)
        self.old_pos = (self.x, self.y)

    def move(self, x: float, y: float) -> None:
        """Drag the group horizontally, keeping it right of the scene origin."""
        if not self.pressed:
            return
        dx = int(x - self.old_mouse_pos[0])
        rect = self.bounding_rect()
        if rect.left + dx < 0:
            self.x = -rect.left
        else:
            self.y = self.old_pos[1]
            self.x = self.old_pos[0] + dx
        for track in self.tracks:
            track.calculate_start_time()

    def release(self, x: float, y: float) -> None:
        self.pressed = False
        self.old_mouse_pos = (x, y)
        self.old_pos = (self.x, self.y)
        self.z_value = DEFAULT_Z