"""Turns timeline and audio events into packets for the tubes."""

from __future__ import annotations

import colorsys
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from .messages import (
    ConfigData,
    DmxData,
    PeakData,
    SyncData,
    SyncRequest,
    TextData,
    UpdateRequest,
)

log = logging.getLogger(__name__)

MAC_LENGTH = 6
BROADCAST_MAC = bytes([0xFF] * MAC_LENGTH)

Sender = Callable[[bytes, bytes], None]
Registry = Callable[[], Iterable]


def _mac(mac) -> bytes:
    raw = bytes(mac)
    if len(raw) != MAC_LENGTH:
        raise ValueError(f"a MAC address has {MAC_LENGTH} bytes, got {len(raw)}")
    return raw


def mac_to_string(mac) -> str:
    """Format a MAC address as colon-separated upper-case hex."""
    return ":".join(f"{byte:02X}" for byte in _mac(mac))


class EventProcessor(ABC):
    """Something that reacts to text events from the timeline."""

    @abstractmethod
    def text_event(self, data: str) -> None:
        """Handle a text event."""


class TextEventReceiver(ABC):
    """Something that is told about every text sent to the tubes."""

    @abstractmethod
    def text_event(self, text: str) -> None:
        """Handle a text event."""


def _default_master_config() -> ConfigData:
    return ConfigData(
        tube_id=0,
        led_mode=255,
        speed_factor=5,
        brightness=20,
        parameter1=10,
        parameter2=0,
        parameter3=0,
    )


class WifiEventProcessor(EventProcessor):
    """Builds tube packets and hands them to a sender.

    ``send`` is called with the packed payload and the destination MAC.
    ``registry`` returns the MAC addresses of the known tubes, in order.
    """

    send_delay = 0.01

    def __init__(self, my_mac, send: Sender, registry: Optional[Registry] = None) -> None:
        self.my_mac = _mac(my_mac)
        self._send = send
        self._registry = registry if registry is not None else (lambda: [])
        self.master_config = _default_master_config()
        self.tube_offsets: List[int] = []
        self.tube_groups: List[int] = []
        self._receivers: List[TextEventReceiver] = []

    def _macs(self) -> List[bytes]:
        return [_mac(mac) for mac in self._registry()]

    def _pause(self) -> None:
        if self.send_delay > 0:
            time.sleep(self.send_delay)

    def _transmit(self, payload: bytes, dst_mac=BROADCAST_MAC) -> None:
        self._send(payload, _mac(dst_mac))

    def handle_packet(self, src_mac, data) -> None:
        """React to a packet received from a tube."""
        src = _mac(src_mac)
        data = bytes(data)
        if len(data) == 6:
            config = ConfigData.from_bytes(data)
            log.info("Got config: %d", config.led_mode)
        if len(data) == 1:
            log.info("Got hello from tube: %s", mac_to_string(src))
            self.send_config_to(src)
        else:
            log.info("%s", " ".join(f"{byte:02X}" for byte in data))

    def register_receiver(self, receiver: TextEventReceiver) -> None:
        self._receivers.append(receiver)

    def text_event(self, data: str) -> None:
        """Pass the text to every receiver, then broadcast it."""
        log.debug("%s", data)
        for receiver in self._receivers:
            receiver.text_event(data)
        self._transmit(TextData(data).pack())

    def peak_event(self, hue: int, sat: int, group: int) -> None:
        self._transmit(PeakData(hue, sat, group).pack())
        self._pause()

    def send_dmx(self, hue: int, sat: int, brightness: int, group: int) -> None:
        """Broadcast a DMX colour built from hue and saturation in 0..255."""
        self._pause()
        red, green, blue = colorsys.hsv_to_rgb(hue / 255.0, sat / 255.0, 1.0)
        channels = [int(red * 255), int(green * 255), int(blue * 255), 0, brightness]
        self._transmit(DmxData(channels).pack())

    def send_config(self) -> None:
        """Send the master configuration to every known tube, numbered in order."""
        for index, mac in enumerate(self._macs()):
            tube_config = replace(self.master_config, tube_id=index)
            self._transmit(tube_config.pack(), mac)
            log.info("Sending%s to %s", tube_config, mac_to_string(mac))
        self.send_sync()

    def send_sync_config(self) -> None:
        """Broadcast the group and offset of every tube."""
        for name, values in (("offsets", self.tube_offsets), ("groups", self.tube_groups)):
            if len(values) > SyncData.SLOTS:
                raise ValueError(f"at most {SyncData.SLOTS} tube {name}, got {len(values)}")
        offsets = [value & 0xFF for value in self.tube_offsets]
        groups = [value & 0xFF for value in self.tube_groups]
        sync = SyncData(
            group=groups + [0] * (SyncData.SLOTS - len(groups)),
            offset=offsets + [0] * (SyncData.SLOTS - len(offsets)),
        )
        self._transmit(sync.pack())
        self.send_sync()

    def send_config_to(self, dst_mac) -> None:
        """Send the master configuration to one tube, with its own offset."""
        dst = _mac(dst_mac)
        tube_config = self.master_config
        macs = self._macs()
        if dst in macs:
            index = macs.index(dst)
            if index < len(self.tube_offsets):
                tube_config = replace(tube_config, offset=self.tube_offsets[index] & 0xFF)
        self._transmit(tube_config.pack(), dst)
        log.info("Sending%s to %s", tube_config, mac_to_string(dst))
        self.send_sync()

    def send_sync(self) -> None:
        self._transmit(SyncRequest().pack())

    def send_update_message(self) -> None:
        self._transmit(UpdateRequest().pack())

    def send_update_message_to(self, dst_mac) -> None:
        self._transmit(UpdateRequest().pack(), dst_mac)