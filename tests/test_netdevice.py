import struct
from unittest import mock

import pytest

from visualsync import netdevice
from visualsync.netdevice import NetDevice


class FakeIoctl:
    def __init__(self, flags=0, fail=()):
        self.flags = flags
        self.fail = set(fail)
        self.calls = []

    def __call__(self, fd, request, arg):
        self.calls.append((request, bytes(arg)))
        if request in self.fail:
            raise OSError("ioctl failed")
        if request == netdevice.SIOCGIFFLAGS:
            return struct.pack("=16sH22x", bytes(arg)[:16], self.flags)
        return arg

    def sent(self, request):
        return [arg for req, arg in self.calls if req == request]


@pytest.fixture
def fake_socket():
    with mock.patch("socket.socket") as factory:
        yield factory


def test_rejects_long_name():
    with pytest.raises(ValueError):
        NetDevice("x" * 16)


def test_rejects_empty_name():
    with pytest.raises(ValueError):
        NetDevice("")


def test_set_interface_up_sets_flag(fake_socket):
    fake = FakeIoctl(flags=netdevice.IFF_RUNNING)
    device = NetDevice("wlan0")
    with mock.patch("fcntl.ioctl", fake):
        device.set_interface(True)
        assert device.check_interface() is True
    (buf,) = fake.sent(netdevice.SIOCSIFFLAGS)
    name, flags = struct.unpack("=16sH22x", buf)
    assert name.rstrip(b"\0") == b"wlan0"
    assert flags == netdevice.IFF_RUNNING | netdevice.IFF_UP


def test_set_interface_down_clears_flag(fake_socket):
    fake = FakeIoctl(flags=netdevice.IFF_RUNNING | netdevice.IFF_UP)
    device = NetDevice("wlan0")
    with mock.patch("fcntl.ioctl", fake):
        device.set_interface(False)
        assert device.check_interface() is True
    (buf,) = fake.sent(netdevice.SIOCSIFFLAGS)
    assert struct.unpack("=16sH22x", buf)[1] == netdevice.IFF_RUNNING


def test_set_interface_raises_when_flags_unreadable(fake_socket):
    fake = FakeIoctl(fail={netdevice.SIOCGIFFLAGS})
    with mock.patch("fcntl.ioctl", fake):
        with pytest.raises(OSError):
            NetDevice("wlan0").set_interface(True)
    assert fake.sent(netdevice.SIOCSIFFLAGS) == []


def test_enable_monitor_mode_sends_mode(fake_socket):
    fake = FakeIoctl()
    device = NetDevice("wlan1")
    with mock.patch("fcntl.ioctl", fake):
        device.enable_monitor_mode()
        assert device.check_interface() is True
    (buf,) = fake.sent(netdevice.SIOCSIWMODE)
    name, mode = struct.unpack("=16sI12x", buf)
    assert name.rstrip(b"\0") == b"wlan1"
    assert mode == netdevice.IW_MODE_MONITOR


def test_enable_monitor_mode_failure_raises(fake_socket):
    fake = FakeIoctl(fail={netdevice.SIOCSIWMODE})
    with mock.patch("fcntl.ioctl", fake):
        with pytest.raises(OSError):
            NetDevice("wlan1").enable_monitor_mode()


def test_check_interface_true_even_if_not_wireless(fake_socket):
    fake = FakeIoctl(flags=netdevice.IFF_UP, fail={netdevice.SIOCGIWMODE})
    with mock.patch("fcntl.ioctl", fake):
        assert NetDevice("eth0").check_interface() is True


def test_check_interface_false_when_flags_fail(fake_socket):
    fake = FakeIoctl(fail={netdevice.SIOCGIFFLAGS})
    with mock.patch("fcntl.ioctl", fake):
        assert NetDevice("eth0").check_interface() is False


def test_check_interface_false_when_socket_fails(fake_socket):
    fake_socket.side_effect = OSError("no socket")
    assert NetDevice("eth0").check_interface() is False