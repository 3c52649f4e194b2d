"""Control of a Linux network interface: bring it up or down, set monitor mode."""

from __future__ import annotations

import fcntl
import logging
import socket
import struct

log = logging.getLogger(__name__)

IFNAMSIZ = 16
SIOCGIFFLAGS = 0x8913
SIOCSIFFLAGS = 0x8914
SIOCSIWMODE = 0x8B06
SIOCGIWMODE = 0x8B07
IFF_UP = 0x1
IFF_RUNNING = 0x40
IW_MODE_MONITOR = 6

_IFREQ = "=16sH22x"
_IWREQ = "=16sI12x"


class NetDevice:
    """A named network interface."""

    def __init__(self, interface: str) -> None:
        name = interface.encode()
        if not name or len(name) >= IFNAMSIZ:
            raise ValueError(f"invalid interface name {interface!r}")
        self.interface = interface
        self._name = name

    @staticmethod
    def _socket() -> socket.socket:
        return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def _read_flags(self, sock) -> int:
        result = fcntl.ioctl(sock.fileno(), SIOCGIFFLAGS, struct.pack(_IFREQ, self._name, 0))
        return struct.unpack(_IFREQ, bytes(result))[1]

    def set_interface(self, up: bool) -> None:
        """Bring the interface up or down; raises OSError on failure."""
        with self._socket() as sock:
            flags = self._read_flags(sock)
            flags = flags | IFF_UP if up else flags & ~IFF_UP & 0xFFFF
            fcntl.ioctl(sock.fileno(), SIOCSIFFLAGS, struct.pack(_IFREQ, self._name, flags))
        log.info("Interface %s is now %s.", self.interface, "up" if up else "down")

    def enable_monitor_mode(self) -> None:
        """Switch the wireless interface to monitor mode; raises OSError on failure."""
        with self._socket() as sock:
            fcntl.ioctl(sock.fileno(), SIOCSIWMODE, struct.pack(_IWREQ, self._name, IW_MODE_MONITOR))
        log.info("Monitor mode set on %s", self.interface)

    def check_interface(self) -> bool:
        """Return whether the interface flags can be read."""
        try:
            with self._socket() as sock:
                flags = self._read_flags(sock)
                log.debug(
                    "%s is %s and %s",
                    self.interface,
                    "UP" if flags & IFF_UP else "DOWN",
                    "RUNNING" if flags & IFF_RUNNING else "NOT RUNNING",
                )
                try:
                    fcntl.ioctl(sock.fileno(), SIOCGIWMODE, struct.pack(_IWREQ, self._name, 0))
                except OSError as error:
                    log.debug("SIOCGIWMODE failed (maybe not a wireless interface): %s", error)
        except OSError:
            return False
        return True