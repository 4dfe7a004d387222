"""Public constants, enumerations and the library error type."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

ADDRESS_LOCAL = 0xFFFFFFFF


class Button(IntEnum):
    A = 0
    B = 1
    X = 2
    Y = 3
    L = 4
    R = 5
    ZL = 6
    ZR = 7
    MINUS = 8
    PLUS = 9
    HOME = 10
    TV = 11
    L3 = 12
    R3 = 13
    LEFT = 14
    RIGHT = 15
    DOWN = 16
    UP = 17
    AXIS_L_X = 18
    AXIS_L_Y = 19
    AXIS_R_X = 20
    AXIS_R_Y = 21
    AXIS_L_LEFT = 22
    AXIS_L_UP = 23
    AXIS_L_RIGHT = 24
    AXIS_L_DOWN = 25
    AXIS_R_LEFT = 26
    AXIS_R_UP = 27
    AXIS_R_RIGHT = 28
    AXIS_R_DOWN = 29
    AXIS_VOLUME = 30
    SENSOR_ACCEL_X = 31
    SENSOR_ACCEL_Y = 32
    SENSOR_ACCEL_Z = 33
    SENSOR_GYRO_PITCH = 34
    SENSOR_GYRO_YAW = 35
    SENSOR_GYRO_ROLL = 36
    COUNT = 37


class EventType(IntEnum):
    NONE = 0
    VIDEO = 1
    AUDIO = 2
    VIBRATE = 3
    SYNC = 4
    ERROR = 5
    MIC = 6


class Region(IntEnum):
    JAPAN = 0
    AMERICA = 1
    EUROPE = 2
    CHINA = 3
    SOUTH_KOREA = 4
    TAIWAN = 5
    AUSTRALIA = 6


class BatteryStatus(IntEnum):
    CHARGING = 0
    UNKNOWN = 1
    VERY_LOW = 2
    LOW = 3
    MEDIUM = 4
    HIGH = 5
    FULL = 6


class ErrorCode(IntEnum):
    SUCCESS = 0
    GENERIC = -1
    UNKNOWN_COMMAND = -2
    INVALID_ARGUMENT = -3
    PIPE_UNRESPONSIVE = -4
    OUT_OF_MEMORY = -5
    BUSY = -6
    BAD_SOCKET = -7
    NO_CONNECTION = -8
    SHUTDOWN = -9
    CONNECTED = -10
    DISCONNECTED = -11


class VanillaError(Exception):
    """An error carrying one of the library's error codes."""

    def __init__(self, code: int, message: Optional[str] = None) -> None:
        try:
            self.code: int = ErrorCode(code)
        except ValueError:
            self.code = int(code)
        if message is None:
            name = self.code.name if isinstance(self.code, ErrorCode) else "UNKNOWN"
            message = f"{name} ({int(self.code)})"
        self.message = message
        super().__init__(message)