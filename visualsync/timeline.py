"""The timeline: text events on lanes, played back against a looping clock."""

from __future__ import annotations

import logging
import math
import time
from typing import List, Optional

from .processor import EventProcessor
from .project import EventModel
from .track import BAR_RESOLUTION, LANE_HEIGHT, Rect, Track, TrackGroup

log = logging.getLogger(__name__)

DEFAULT_DURATION = 500.0
DEFAULT_BPM = 100
DEFAULT_BARS = 400
DEFAULT_GRID_SNAP_INTERVAL = 4
MIN_ZOOM = 0.1
MAX_ZOOM = 10.0
ZOOM_DIVISOR = 1000.0
CLEAR_TEXT = " "


class _PlaybackClock:
    """A pausable clock in seconds that wraps around at its duration."""

    def __init__(self, duration: float) -> None:
        self.duration = duration
        self.paused = False
        self._position = 0.0
        self._anchor = time.monotonic()

    def current(self) -> float:
        position = self._position
        if not self.paused:
            position += time.monotonic() - self._anchor
        if self.duration > 0:
            position %= self.duration
        return position

    def set_paused(self, paused: bool) -> None:
        if paused == self.paused:
            return
        if paused:
            self._position = self.current()
        else:
            self._anchor = time.monotonic()
        self.paused = paused

    def set_current(self, position: float) -> None:
        self._position = position
        self._anchor = time.monotonic()


def _intersects(a: Rect, b: Rect) -> bool:
    return a.left < b.right and a.right > b.left and a.top < b.bottom and a.bottom > b.top


class TimeLine:
    """Tracks laid out on lanes, with selection, clipboard and playback.

    During playback, ``check_time`` sends the text of each event that has
    started to the processor, and a single space once it has ended.
    """

    snap_to_grid = True

    def __init__(self, processor: EventProcessor) -> None:
        self.processor = processor
        self.follow_time = False
        self.zoom = 1.0
        self.bpm = DEFAULT_BPM
        self.bars = DEFAULT_BARS
        self.grid_snap_interval = DEFAULT_GRID_SNAP_INTERVAL
        self.track_time = 0.0
        self.paused = False
        self.tracks: List[Track] = []
        self.selected: List[Track] = []
        self.selection_group: Optional[TrackGroup] = None
        self.clipboard_group: Optional[TrackGroup] = None
        self.events: List[EventModel] = []
        self.active_events: List[EventModel] = []
        self._next_event = 0
        self._clock = _PlaybackClock(DEFAULT_DURATION)

    @property
    def current_time(self) -> float:
        """The playback position in seconds."""
        return self._clock.current()

    @property
    def indicator_x(self) -> float:
        """The scene x of the playback indicator."""
        return self.current_time * BAR_RESOLUTION * self.zoom

    def bar_width(self) -> float:
        """The width of one bar in scene units at zoom 1."""
        return 100 * (60.0 / self.bpm)

    def update(self) -> None:
        """Recompute the number of bars from the track length and tempo."""
        self.bars = int(math.ceil(self.track_time) * (self.bpm / 60.0))

    def set_bpm(self, bpm: int) -> None:
        if bpm <= 0:
            raise ValueError(f"bpm must be positive, got {bpm!r}")
        self.bpm = bpm
        self.update()

    def set_track_time(self, time: float) -> None:
        """Set the length of the track in seconds."""
        if time < 0:
            raise ValueError(f"track time must not be negative, got {time!r}")
        if time != self.track_time:
            self._clock.duration = time
            self.track_time = time
            self.update()

    def set_time(self, time: float) -> None:
        """Jump playback to ``time`` seconds."""
        if time < 0:
            raise ValueError(f"time must not be negative, got {time!r}")
        self._clock.set_paused(True)
        self._clock.set_current(time)
        if not self.paused:
            self._clock.set_paused(False)

    def set_paused(self, paused: bool) -> None:
        self.paused = paused
        self._clock.set_paused(paused)

    def add_item(self, start: float, length: float, lane: int, text: str, color) -> Track:
        track = Track(start, length, lane, color, text, self)
        self.tracks.append(track)
        return track

    def clear(self) -> None:
        self.tracks.clear()

    def build_event_list(self) -> None:
        """Rebuild the playback events from the tracks, sorted by start."""
        self.active_events.clear()
        self.events = sorted(
            (
                EventModel(
                    start=track.start_time,
                    duration=track.duration,
                    lane=int(int(track.scene_pos[1]) / LANE_HEIGHT),
                    text=track.text,
                )
                for track in self.tracks
            ),
            key=lambda event: event.start,
        )
        now = self.current_time
        self._next_event = 0
        while self._next_event < len(self.events) and self.events[self._next_event].start < now:
            self._next_event += 1

    def check_time(self, now: Optional[float] = None) -> None:
        """End expired events and start at most one due event at ``now`` seconds."""
        if now is None:
            now = self.current_time
        still_active = []
        for event in self.active_events:
            if event.start + event.duration < now:
                self.processor.text_event(CLEAR_TEXT)
            else:
                still_active.append(event)
        self.active_events = still_active

        if self._next_event < len(self.events) and self.events[self._next_event].start < now:
            event = self.events[self._next_event]
            self.active_events.append(event)
            self.processor.text_event(event.text)
            self._next_event += 1

    def zoom_by(self, delta: float) -> None:
        """Change the zoom by a wheel delta, keeping it within its limits."""
        self.zoom = min(max(self.zoom + delta / ZOOM_DIVISOR, MIN_ZOOM), MAX_ZOOM)
        for track in self.tracks:
            track.update_position()
        if self.selection_group is not None:
            self.selection_group.set_zoom_level(self.zoom)

    @staticmethod
    def _dissolve(group: Optional[TrackGroup]) -> None:
        if group is None:
            return
        for track in group.tracks:
            scene_x, scene_y = track.scene_pos
            track.group = None
            track.x, track.y = scene_x, scene_y
            track.selected = False
        group.tracks.clear()

    def _clear_selection(self) -> None:
        self._dissolve(self.selection_group)
        self.selection_group = None

    def _clear_clipboard(self) -> None:
        self._dissolve(self.clipboard_group)
        self.clipboard_group = None

    def select(self, x0: float, y0: float, x1: float, y1: float) -> List[Track]:
        """Select every track touching the rectangle between two scene points."""
        self._clear_clipboard()
        self._clear_selection()
        area = Rect(min(x0, x1), min(y0, y1), abs(x1 - x0), abs(y1 - y0))
        self.selected = [
            track
            for track in self.tracks
            if _intersects(Rect(*track.scene_pos, track.length(), float(track.height)), area)
        ]
        if self.selected:
            group = TrackGroup(self.zoom)
            for track in self.selected:
                group.add(track)
            self.selection_group = group
        return list(self.selected)

    def delete_selection(self) -> List[Track]:
        """Remove the selected tracks and return them."""
        if self.selection_group is None:
            return []
        removed = list(self.selection_group.tracks)
        self.tracks = [track for track in self.tracks if track not in removed]
        self.selection_group = None
        self.selected = []
        log.debug("%d tracks left", len(self.tracks))
        return removed

    def copy(self) -> List[Track]:
        """Copy clones of the selected tracks into the clipboard."""
        group = TrackGroup(self.zoom)
        for track in self.selected:
            group.add(track.clone())
        self.clipboard_group = group
        return list(group.tracks)

    def paste(self, x: float) -> List[Track]:
        """Place the clipboard at scene ``x`` and add its tracks to the timeline."""
        if self.clipboard_group is None:
            return []
        self._clear_selection()
        self.clipboard_group.x = x / self.zoom
        pasted = list(self.clipboard_group.tracks)
        for track in pasted:
            track.calculate_start_time()
            if track not in self.tracks:
                self.tracks.append(track)
        return pasted