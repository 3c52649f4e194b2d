import pytest

from visualsync.messages import (
    ConfigData,
    DmxData,
    PatternData,
    PeakData,
    SyncData,
    SyncRequest,
    TextData,
    UpdateRequest,
)


def test_peak_data_packs_fields_in_order():
    assert PeakData(hue=10, sat=20, group=3).pack() == bytes([10, 20, 3])


def test_peak_data_rejects_out_of_range():
    with pytest.raises(ValueError):
        PeakData(hue=256)


def test_sync_request_size():
    assert len(SyncRequest().pack()) == SyncRequest.SIZE == 2


def test_update_request_is_little_endian():
    assert UpdateRequest(a=1).pack() == b"\x01\x00\x00\x00"


def test_update_request_rejects_negative():
    with pytest.raises(ValueError):
        UpdateRequest(a=-1)


def test_dmx_data_round_trip():
    channels = [1, 2, 3, 0, 200]
    assert list(DmxData(channels).pack()) == channels


def test_dmx_data_requires_five_channels():
    with pytest.raises(ValueError):
        DmxData([1, 2, 3])


def test_config_data_round_trip():
    config = ConfigData(tube_id=2, led_mode=255, speed_factor=5, brightness=20, parameter1=10, offset=7, group=1)
    packed = config.pack()
    assert len(packed) == ConfigData.SIZE == 10
    assert ConfigData.from_bytes(packed) == config


def test_config_data_short_payload_zero_fills():
    config = ConfigData.from_bytes(bytes([4, 9, 1, 2, 3, 5]))
    assert config.tube_id == 4
    assert config.led_mode == 9
    assert config.parameter3 == 0
    assert config.group == 0


def test_config_data_too_long_payload():
    with pytest.raises(ValueError):
        ConfigData.from_bytes(bytes(11))


def test_config_data_str():
    assert str(ConfigData(tube_id=3, led_mode=1, offset=4)) == "[tube_id = 3led_mode = 1, offset = 4]"


def test_sync_data_places_groups_before_offsets():
    groups = list(range(32))
    offsets = [100] * 32
    packed = SyncData(group=groups, offset=offsets).pack()
    assert len(packed) == SyncData.SIZE
    assert list(packed[:32]) == groups
    assert list(packed[32:]) == offsets


def test_pattern_data_str_uses_first_step():
    pattern = [7] + [0] * 31
    assert str(PatternData(pattern)) == "[led_mode = 7]"


def test_pattern_data_wrong_length():
    with pytest.raises(ValueError):
        PatternData([0] * 31)


def test_text_data_is_nul_padded():
    packed = TextData("hello").pack()
    assert len(packed) == TextData.SIZE
    assert packed.rstrip(b"\0") == b"hello"


def test_text_data_too_long():
    with pytest.raises(ValueError):
        TextData("x" * 50)