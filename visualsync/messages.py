"""Binary payloads exchanged with the tubes over the wireless link."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, List


def _check_byte(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be an integer in 0..255, got {value!r}")


def _check_byte_array(name: str, values, length: int) -> List[int]:
    values = list(values)
    if len(values) != length:
        raise ValueError(f"{name} must hold exactly {length} values, got {len(values)}")
    for value in values:
        _check_byte(name, value)
    return values


@dataclass
class PeakData:
    """A peak detected in the audio, broadcast to a tube group."""

    SIZE: ClassVar[int] = 3

    hue: int = 0
    sat: int = 0
    group: int = 0

    def __post_init__(self) -> None:
        for name in ("hue", "sat", "group"):
            _check_byte(name, getattr(self, name))

    def pack(self) -> bytes:
        return bytes((self.hue, self.sat, self.group))


@dataclass
class SyncRequest:
    """Request that all tubes reset their animation clock."""

    SIZE: ClassVar[int] = 2

    a: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        _check_byte("a", self.a)
        _check_byte("b", self.b)

    def pack(self) -> bytes:
        return bytes((self.a, self.b))


@dataclass
class UpdateRequest:
    """Request that the tubes look for a firmware update."""

    SIZE: ClassVar[int] = 4

    a: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.a, bool) or not isinstance(self.a, int) or not 0 <= self.a <= 0xFFFFFFFF:
            raise ValueError(f"a must be an unsigned 32-bit integer, got {self.a!r}")

    def pack(self) -> bytes:
        return struct.pack("<I", self.a)


@dataclass
class DmxData:
    """Five DMX channel values: red, green, blue, white and brightness."""

    SIZE: ClassVar[int] = 5

    channels: List[int] = field(default_factory=lambda: [0] * 5)

    def __post_init__(self) -> None:
        self.channels = _check_byte_array("channels", self.channels, self.SIZE)

    def pack(self) -> bytes:
        return bytes(self.channels)


_CONFIG_FIELDS = (
    "tube_id",
    "led_mode",
    "speed_factor",
    "brightness",
    "parameter1",
    "parameter2",
    "parameter3",
    "modifiers",
    "offset",
    "group",
)


@dataclass
class ConfigData:
    """Effect configuration for one tube."""

    SIZE: ClassVar[int] = len(_CONFIG_FIELDS)

    tube_id: int = 0
    led_mode: int = 0
    speed_factor: int = 0
    brightness: int = 0
    parameter1: int = 0
    parameter2: int = 0
    parameter3: int = 0
    modifiers: int = 0
    offset: int = 0
    group: int = 0

    def __post_init__(self) -> None:
        for name in _CONFIG_FIELDS:
            _check_byte(name, getattr(self, name))

    def pack(self) -> bytes:
        return bytes(getattr(self, name) for name in _CONFIG_FIELDS)

    @classmethod
    def from_bytes(cls, data) -> "ConfigData":
        """Decode a configuration; fields missing from a short payload are zero."""
        data = bytes(data)
        if len(data) > cls.SIZE:
            raise ValueError(f"configuration payload is {len(data)} bytes, at most {cls.SIZE} allowed")
        return cls(*data.ljust(cls.SIZE, b"\0"))

    def __str__(self) -> str:
        return f"[tube_id = {self.tube_id}led_mode = {self.led_mode}, offset = {self.offset}]"


@dataclass
class SyncData:
    """Group and delay offset for up to 32 tubes."""

    SLOTS: ClassVar[int] = 32
    SIZE: ClassVar[int] = 64

    group: List[int] = field(default_factory=lambda: [0] * 32)
    offset: List[int] = field(default_factory=lambda: [0] * 32)

    def __post_init__(self) -> None:
        self.group = _check_byte_array("group", self.group, self.SLOTS)
        self.offset = _check_byte_array("offset", self.offset, self.SLOTS)

    def pack(self) -> bytes:
        return bytes(self.group) + bytes(self.offset)


@dataclass
class PatternData:
    """A 32-step LED pattern."""

    SIZE: ClassVar[int] = 32

    pattern: List[int] = field(default_factory=lambda: [0] * 32)

    def __post_init__(self) -> None:
        self.pattern = _check_byte_array("pattern", self.pattern, self.SIZE)

    def pack(self) -> bytes:
        return bytes(self.pattern)

    def __str__(self) -> str:
        return f"[led_mode = {self.pattern[0]}]"


@dataclass
class TextData:
    """A NUL-terminated text message of at most 49 bytes."""

    SIZE: ClassVar[int] = 50

    data: str = ""

    def __post_init__(self) -> None:
        self._encoded()

    def _encoded(self) -> bytes:
        raw = self.data.encode("utf-8")
        if len(raw) >= self.SIZE:
            raise ValueError(f"text is {len(raw)} bytes, at most {self.SIZE - 1} allowed")
        return raw

    def pack(self) -> bytes:
        return self._encoded().ljust(self.SIZE, b"\0")