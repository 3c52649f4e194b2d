"""Input controls: a lockable slider and a preset button with long press."""

from __future__ import annotations

import enum
import time
from typing import Callable, List, Optional

ACTIVE_STYLE = "padding :5px; background-color: red"
INACTIVE_STYLE = "padding :5px; background-color: gray"


class Slider:
    """An integer slider with +/- steps and a lock against external updates."""

    def __init__(self, name: str, minimum: int = 0, maximum: int = 100) -> None:
        if minimum > maximum:
            raise ValueError("minimum must not exceed maximum")
        self.name = name
        self._minimum = minimum
        self._maximum = maximum
        self._value = minimum
        self._label = str(self._value)
        self.locked = False
        self.on_value_changed: List[Callable[[], None]] = []
        self.on_released: List[Callable[[], None]] = []

    @property
    def minimum(self) -> int:
        return self._minimum

    @minimum.setter
    def minimum(self, value: int) -> None:
        self._minimum = value
        self._maximum = max(self._maximum, value)
        self._apply(self._value, notify=True)

    @property
    def maximum(self) -> int:
        return self._maximum

    @maximum.setter
    def maximum(self, value: int) -> None:
        self._maximum = value
        self._minimum = min(self._minimum, value)
        self._apply(self._value, notify=True)

    @property
    def value(self) -> int:
        return self._value

    def _apply(self, value: int, notify: bool) -> None:
        clamped = min(max(value, self._minimum), self._maximum)
        if clamped == self._value:
            return
        self._value = clamped
        if notify:
            self._label = str(self._value)
            for callback in self.on_value_changed:
                callback()

    def set_value(self, value: int) -> None:
        """Set the value silently, unless the slider is locked.

        The label keeps showing the value from before the change.
        """
        if self.locked:
            return
        self._label = str(self._value)
        self._apply(value, notify=False)

    def _released(self) -> None:
        for callback in self.on_released:
            callback()

    def increment(self) -> None:
        self._apply(self._value + 1, notify=True)
        self._released()

    def decrement(self) -> None:
        self._apply(self._value - 1, notify=True)
        self._released()

    def pct(self) -> float:
        """The value as a fraction of the maximum."""
        return self._value / self._maximum

    def label_text(self) -> str:
        return self._label


class ButtonEvent(enum.Enum):
    RELEASED_INSTANTLY = "released_instantly"
    LONG_PRESSED = "long_pressed"


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class PresetButton:
    """A button bound to a preset that tells a short click from a long press."""

    def __init__(self, model, long_press_ms: float = 500) -> None:
        self.model = model
        self.long_press_ms = long_press_ms
        self.active = False
        self._pressed_at: Optional[float] = None

    @property
    def text(self) -> str:
        return self.model.name

    def press(self, at: Optional[float] = None) -> None:
        """Start a press at time ``at`` in milliseconds."""
        self._pressed_at = _now_ms() if at is None else at

    def release(self, at: Optional[float] = None) -> Optional[ButtonEvent]:
        """End the press and report which kind it was; None without a press."""
        if self._pressed_at is None:
            return None
        now = _now_ms() if at is None else at
        elapsed = now - self._pressed_at
        self._pressed_at = None
        if elapsed < self.long_press_ms:
            return ButtonEvent.RELEASED_INSTANTLY
        return ButtonEvent.LONG_PRESSED

    def set_active(self, active: bool) -> None:
        self.active = active

    def style_sheet(self) -> str:
        return ACTIVE_STYLE if self.active else INACTIVE_STYLE