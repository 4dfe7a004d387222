"""Gamepad input state and the input report sent to the console."""

from __future__ import annotations

import math
import struct
import threading
from typing import Dict, List, Tuple, Union

from .enums import BatteryStatus, Button

PACKET_SIZE = 128
FW_VERSION_NEG = 215

_TOUCH_OFFSET = 36
_TOUCH_POINTS = 10

_BUTTON_BITS = (
    (Button.A, 0x8000),
    (Button.B, 0x4000),
    (Button.X, 0x2000),
    (Button.Y, 0x1000),
    (Button.L, 0x0020),
    (Button.R, 0x0010),
    (Button.ZL, 0x0080),
    (Button.ZR, 0x0040),
    (Button.MINUS, 0x0004),
    (Button.PLUS, 0x0008),
    (Button.HOME, 0x0002),
    (Button.LEFT, 0x0800),
    (Button.RIGHT, 0x0400),
    (Button.DOWN, 0x0100),
    (Button.UP, 0x0200),
)

_EXTRA_BUTTON_BITS = (
    (Button.L3, 0x80),
    (Button.R3, 0x40),
    (Button.TV, 0x20),
)

_RAD_TO_DEG = 180.0 / math.pi


def _f32(x: float) -> float:
    """Round a Python float to single precision."""
    try:
        return struct.unpack("<f", struct.pack("<f", x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


_GYRO_UNIT = _f32(_f32(200.0 * 6.0) / 154000.0)


def _to_c_int(x: float) -> int:
    if math.isnan(x):
        return 0
    if math.isinf(x):
        return -(1 << 31) if x < 0 else (1 << 31) - 1
    return max(-(1 << 31), min((1 << 31) - 1, int(x)))


def _wrap_signed(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def resolve_axis_value(axis: float, neg: float, pos: float, flip: bool) -> int:
    """Map a signed 16-bit stick value plus digital overrides to the 12-bit wire range."""
    axis = _f32(axis)
    val = _f32(axis / 32768.0) if axis < 0 else _f32(axis / 32767.0)
    neg = _f32(abs(_f32(neg)) / 32767.0)
    pos = _f32(abs(_f32(pos)) / 32767.0)
    val = _f32(val - neg)
    val = _f32(val + pos)
    if flip:
        val = -val
    return (_to_c_int(_f32(val * 1024)) + 2048) & 0xFFFF


def scale_x_touch_value(v: int) -> int:
    """Scale a screen x coordinate (0-853) to touch units with a 2.5% margin each side."""
    scale_percent = 95
    v = _cdiv(v * 4096 * scale_percent, 854)
    v = _cdiv(v, 100)
    return v + (4096 * (100 - scale_percent)) // 200


def scale_y_touch_value(v: int) -> int:
    """Scale a screen y coordinate (0-479) to touch units, inverted."""
    scale_percent = 92
    v = _cdiv(v * 4096 * scale_percent, 480)
    v = _cdiv(v, 100)
    v += (4096 * (100 - 90)) // 200
    return 4096 - v


def unpack_float(x: int) -> float:
    """Reinterpret the bits of a 32-bit integer as a float."""
    return struct.unpack("<f", struct.pack("<I", x & 0xFFFFFFFF))[0]


def pack_float(f: float) -> int:
    """Reinterpret a float's single-precision bits as a signed 32-bit integer."""
    return struct.unpack("<i", struct.pack("<f", f))[0]


class InputState:
    """Current buttons, axes, sensors, touch point and battery status.

    Sensor entries hold the bit pattern of a float; passing a Python
    float to :meth:`set_button` stores that pattern.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._buttons: List[int] = [0] * Button.COUNT
        self._touch: Tuple[int, int] = (-1, -1)
        self._battery = int(BatteryStatus.CHARGING)

    def set_button(self, button: int, value: Union[int, float]) -> None:
        """Set a button (non-zero is pressed), axis or sensor value."""
        index = int(button)
        if not 0 <= index < Button.COUNT:
            raise ValueError(f"unknown button {button}")
        if isinstance(value, float):
            stored = pack_float(value)
        else:
            stored = _wrap_signed(int(value), 32)
        with self._lock:
            self._buttons[index] = stored

    def set_touch(self, x: int, y: int) -> None:
        """Set the touch point in screen coordinates; -1 on either axis releases it."""
        with self._lock:
            self._touch = (int(x), int(y))

    def set_battery_status(self, status: int) -> None:
        with self._lock:
            self._battery = int(status)

    def _touch_bytes(self, touch: Tuple[int, int], battery: int) -> List[int]:
        extras: Dict[Tuple[int, int], int] = {(9, 0): battery & 0x7}
        pad = 0
        values = (0, 0)
        x, y = touch
        if x >= 0 and y >= 0:
            pad = 1
            values = (scale_x_touch_value(x) & 0xFFF, scale_y_touch_value(y) & 0xFFF)
            extras.update({(0, 1): 2, (1, 0): 7, (1, 1): 3})
        return [
            pad << 15 | extras.get((point, axis), 0) << 12 | values[axis]
            for point in range(_TOUCH_POINTS)
            for axis in (0, 1)
        ]

    def build_packet(self, seq_id: int) -> bytes:
        """Build the 128-byte input report carrying the current state."""
        with self._lock:
            buttons = list(self._buttons)
            touch = self._touch
            battery = self._battery

        packet = bytearray(PACKET_SIZE)

        mask = 0
        for button, bit in _BUTTON_BITS:
            if buttons[button]:
                mask |= bit
        struct.pack_into(">HH", packet, 0, seq_id & 0xFFFF, mask)

        sticks = (
            resolve_axis_value(buttons[Button.AXIS_L_X], buttons[Button.AXIS_L_LEFT],
                               buttons[Button.AXIS_L_RIGHT], False),
            resolve_axis_value(buttons[Button.AXIS_L_Y], buttons[Button.AXIS_L_UP],
                               buttons[Button.AXIS_L_DOWN], True),
            resolve_axis_value(buttons[Button.AXIS_R_X], buttons[Button.AXIS_R_LEFT],
                               buttons[Button.AXIS_R_RIGHT], False),
            resolve_axis_value(buttons[Button.AXIS_R_Y], buttons[Button.AXIS_R_UP],
                               buttons[Button.AXIS_R_DOWN], True),
        )
        struct.pack_into("<4H", packet, 6, *sticks)

        packet[14] = buttons[Button.AXIS_VOLUME] & 0xFF

        def accel(button: Button, factor: int) -> int:
            value = _f32(unpack_float(buttons[button]) * factor)
            return _wrap_signed(_to_c_int(value), 16)

        struct.pack_into(
            "<3h", packet, 15,
            accel(Button.SENSOR_ACCEL_Z, 800),
            accel(Button.SENSOR_ACCEL_X, -800),
            accel(Button.SENSOR_ACCEL_Y, -800),
        )

        def gyro(button: Button) -> int:
            value = unpack_float(buttons[button]) * _RAD_TO_DEG / _GYRO_UNIT
            return _to_c_int(value) & 0xFFFFFF

        gyro_bits = (
            gyro(Button.SENSOR_GYRO_ROLL)
            | gyro(Button.SENSOR_GYRO_PITCH) << 24
            | gyro(Button.SENSOR_GYRO_YAW) << 48
        )
        packet[21:30] = gyro_bits.to_bytes(9, "little")

        struct.pack_into(
            "<20H", packet, _TOUCH_OFFSET, *self._touch_bytes(touch, battery)
        )

        extra = 0
        for button, bit in _EXTRA_BUTTON_BITS:
            if buttons[button]:
                extra |= bit
        packet[80] = extra

        packet[127] = FW_VERSION_NEG
        return bytes(packet)