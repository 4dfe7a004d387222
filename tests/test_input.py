import pytest

from vanillapad.enums import BatteryStatus, Button
from vanillapad.input import (
    InputState,
    pack_float,
    resolve_axis_value,
    scale_x_touch_value,
    scale_y_touch_value,
    unpack_float,
)


def test_axis_centre():
    assert resolve_axis_value(0, 0, 0, False) == 2048
    assert resolve_axis_value(0, 0, 0, True) == 2048


@pytest.mark.parametrize("axis", [-32768, -12000, -1, 1, 500, 20000, 32767])
def test_axis_flip_is_mirror(axis):
    plain = resolve_axis_value(axis, 0, 0, False)
    flipped = resolve_axis_value(axis, 0, 0, True)
    assert plain + flipped == 4096


def test_axis_is_monotonic():
    values = [resolve_axis_value(a, 0, 0, False) for a in range(-32768, 32768, 997)]
    assert values == sorted(values)


def test_axis_digital_overrides():
    centre = resolve_axis_value(0, 0, 0, False)
    assert resolve_axis_value(0, 32767, 0, False) < centre
    assert resolve_axis_value(0, 0, 32767, False) > centre
    assert resolve_axis_value(0, -32767, 0, False) == resolve_axis_value(0, 32767, 0, False)


def test_touch_scaling_order_and_range():
    xs = [scale_x_touch_value(x) for x in range(854)]
    ys = [scale_y_touch_value(y) for y in range(480)]
    assert xs == sorted(xs)
    assert ys == sorted(ys, reverse=True)
    assert all(0 <= v < 4096 for v in xs + ys)


def test_float_bits():
    assert unpack_float(0x3F800000) == 1.0
    for value in (0.0, -2.5, 9.75, 1.0e-3):
        assert unpack_float(pack_float(value)) == pytest.approx(value, rel=1e-6)
    assert pack_float(-1.0) < 0


def test_idle_packet_layout():
    packet = InputState().build_packet(0)
    assert len(packet) == 128
    assert packet[127] == 215
    assert packet[2:4] == b"\x00\x00"
    assert packet[80] == 0


def test_sequence_id_big_endian():
    state = InputState()
    assert state.build_packet(0x1234)[0:2] == (0x1234).to_bytes(2, "big")
    assert state.build_packet(0x10005)[0:2] == (5).to_bytes(2, "big")


def test_button_masks():
    state = InputState()
    state.set_button(Button.A, 1)
    state.set_button(Button.TV, 1)
    state.set_button(Button.L3, 1)
    packet = state.build_packet(0)
    assert int.from_bytes(packet[2:4], "big") == 0x8000
    assert packet[80] == 0x80 | 0x20


def test_stick_bytes_match_axis_resolution():
    state = InputState()
    state.set_button(Button.AXIS_L_X, 16000)
    state.set_button(Button.AXIS_R_Y, -9000)
    packet = state.build_packet(0)
    assert int.from_bytes(packet[6:8], "little") == resolve_axis_value(16000, 0, 0, False)
    assert int.from_bytes(packet[12:14], "little") == resolve_axis_value(-9000, 0, 0, True)


def test_volume_and_accelerometer():
    state = InputState()
    state.set_button(Button.AXIS_VOLUME, 200)
    state.set_button(Button.SENSOR_ACCEL_X, 1.0)
    state.set_button(Button.SENSOR_ACCEL_Z, 1.0)
    packet = state.build_packet(0)
    assert packet[14] == 200
    assert int.from_bytes(packet[15:17], "little", signed=True) == 800
    assert int.from_bytes(packet[17:19], "little", signed=True) == -800


def test_gyro_sign_and_isolation():
    state = InputState()
    base = state.build_packet(0)
    assert base[21:30] == bytes(9)
    state.set_button(Button.SENSOR_GYRO_ROLL, 0.5)
    state.set_button(Button.SENSOR_GYRO_YAW, -0.5)
    packet = state.build_packet(0)
    bits = int.from_bytes(packet[21:30], "little")
    roll = bits & 0xFFFFFF
    yaw = (bits >> 48) & 0xFFFFFF
    assert (bits >> 24) & 0xFFFFFF == 0
    assert roll > 0 and roll < 0x800000
    assert roll + yaw == 1 << 24
    assert packet[:21] == base[:21] and packet[30:] == base[30:]


def test_battery_status_only_changes_last_touch_point():
    state = InputState()
    charging = state.build_packet(0)
    state.set_battery_status(BatteryStatus.HIGH)
    high = state.build_packet(0)
    differing = [i for i, (a, b) in enumerate(zip(charging, high)) if a != b]
    assert differing
    assert all(72 <= i < 74 for i in differing)


def test_touch_changes_only_touchscreen():
    state = InputState()
    idle = state.build_packet(0)
    state.set_touch(400, 200)
    touched = state.build_packet(0)
    assert touched[:36] == idle[:36]
    assert touched[76:] == idle[76:]
    assert touched[36:76] != idle[36:76]
    state.set_touch(-1, 200)
    assert state.build_packet(0) == idle


def test_invalid_button_rejected():
    state = InputState()
    with pytest.raises(ValueError):
        state.set_button(Button.COUNT, 1)
    with pytest.raises(ValueError):
        state.set_button(-1, 1)