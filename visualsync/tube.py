"""Simulated LED tube and the per-tube control holding its delay and group."""

from __future__ import annotations

import math
import random
import threading
import time
from typing import Callable, List, Optional, Sequence, Tuple

from .messages import ConfigData

TUBE_SLOTS = 20
SLOT_SIZE = 0.05
DECAY_STEP = 0.1
TIME_STEP = 0.05
SPIN_MINIMUM = 0
SPIN_MAXIMUM = 1000
DEFAULT_COLOR = (0, 0, 255)

Color = Tuple[int, int, int]
Scheduler = Callable[[int, Callable[[], None]], None]


def _timer_scheduler(delay_ms: int, callback: Callable[[], None]) -> None:
    timer = threading.Timer(delay_ms / 1000.0, callback)
    timer.daemon = True
    timer.start()


class TubeSimulation:
    """A preview of one tube: twenty LED segments with fading brightness."""

    def __init__(self, seed=None) -> None:
        self._random = random.Random(seed)
        self.sizes: List[float] = [0.0] * TUBE_SLOTS
        self.brightness: List[float] = [0.0] * TUBE_SLOTS
        self.color: Color = DEFAULT_COLOR
        self.effect = ConfigData()
        self.peaked = False
        self.time = 0.0
        self.time_ref = time.monotonic()

    @property
    def color_vector(self) -> Tuple[float, float, float]:
        """The current colour with each channel scaled to 0..1."""
        return tuple(channel / 255.0 for channel in self.color)

    def set_effect(self, effect: ConfigData) -> None:
        self.effect = effect

    def sync(self, now: Optional[float] = None) -> None:
        """Restart the animation clock at ``now`` seconds."""
        self.time_ref = time.monotonic() if now is None else now

    def set_peaked(self, color: Sequence[int]) -> None:
        """Light every segment at a random level and switch to ``color``."""
        red, green, blue = (int(channel) for channel in color)
        for channel in (red, green, blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channels must be in 0..255, got {tuple(color)!r}")
        self.peaked = True
        self.brightness = [self._random.randint(0, 255) / 255.0 for _ in range(TUBE_SLOTS)]
        self.color = (red, green, blue)

    def step(self, now: Optional[float] = None) -> List[float]:
        """Advance one frame at ``now`` seconds and return the segment brightness."""
        current = time.monotonic() if now is None else now
        elapsed_ms = int((current - self.time_ref) * 1000.0)
        self.sizes = [SLOT_SIZE] * TUBE_SLOTS

        if self.effect.led_mode == 0:
            lit = int(math.sin(elapsed_ms / 100.0) * 10.0) + 10
            self.brightness = [1.0 if index == lit else 0.0 for index in range(TUBE_SLOTS)]

        self.brightness = [level - DECAY_STEP if level > 0.0 else 0.0 for level in self.brightness]
        self.time += TIME_STEP
        return list(self.brightness)


def _clamp_spin(value: int) -> int:
    return min(max(int(value), SPIN_MINIMUM), SPIN_MAXIMUM)


class TubeControl:
    """Controls for one tube: its MAC address, delay in ms and group.

    ``scheduler`` is called with a delay in milliseconds and a callback to run
    after that delay.
    """

    def __init__(self, mac: str, tube: Optional[TubeSimulation] = None,
                 scheduler: Optional[Scheduler] = None) -> None:
        self.mac = mac
        self.tube = tube if tube is not None else TubeSimulation()
        self._scheduler = scheduler if scheduler is not None else _timer_scheduler
        self._delay = 0
        self._group = 0
        self.on_value_changed: List[Callable[[], None]] = []
        self.on_delay_changed: List[Callable[[], None]] = []
        self.on_group_changed: List[Callable[[], None]] = []

    def _notify(self, specific: List[Callable[[], None]]) -> None:
        for callback in self.on_value_changed:
            callback()
        for callback in specific:
            callback()

    @property
    def delay(self) -> int:
        return self._delay

    @delay.setter
    def delay(self, value: int) -> None:
        value = _clamp_spin(value)
        if value != self._delay:
            self._delay = value
            self._notify(self.on_delay_changed)

    @property
    def group(self) -> int:
        return self._group

    @group.setter
    def group(self, value: int) -> None:
        value = _clamp_spin(value)
        if value != self._group:
            self._group = value
            self._notify(self.on_group_changed)

    def set_effect(self, effect: ConfigData) -> None:
        self.tube.set_effect(effect)

    def sync(self) -> None:
        """Restart the tube's clock after this tube's delay."""
        self._scheduler(self._delay, self.tube.sync)

    def set_peaked(self, color: Sequence[float], group: int) -> None:
        """Flash the tube in ``color`` (channels 0..1) if it belongs to ``group``."""
        if group != self._group:
            return
        rgb = tuple(int(channel * 255) for channel in color)
        self._scheduler(self._delay, lambda: self.tube.set_peaked(rgb))