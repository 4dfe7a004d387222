"""Bit helpers, checksums, timing, interrupt flag and logging."""

from __future__ import annotations

import signal
import sys
import threading
import time
from typing import Callable, Optional

_MASK32 = 0xFFFFFFFF

Logger = Callable[[str], None]


def _default_logger(message: str) -> None:
    sys.stdout.write(message)
    sys.stdout.flush()


class _LogSink:
    """Holds the logger that all log output is routed to."""

    def __init__(self, logger: Optional[Logger]) -> None:
        self.logger = logger

    def emit(self, message: str) -> None:
        logger = self.logger
        if logger is not None:
            logger(message)


_sink = _LogSink(_default_logger)


def install_logger(logger: Optional[Logger]) -> None:
    """Route all log output to ``logger``; ``None`` silences logging."""
    if logger is not None and not callable(logger):
        raise TypeError(f"logger must be callable or None, got {type(logger).__name__}")
    _sink.logger = logger


def log(message: str) -> None:
    """Log a message followed by a newline."""
    _sink.emit(message)
    _sink.emit("\n")


def log_no_newline(message: str) -> None:
    """Log a message without appending a newline."""
    _sink.emit(message)


class Interrupt:
    """A thread-safe cancellation flag, optionally raised by SIGINT."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def is_set(self) -> bool:
        return self._event.is_set()

    def set(self) -> None:
        self._event.set()

    def clear(self) -> None:
        self._event.clear()

    def _on_signal(self, signum, frame) -> None:
        log("INTERRUPT SIGNAL RECEIVED, CANCELLING...")
        self._event.set()

    def install_handler(self) -> None:
        """Clear the flag and make SIGINT set it."""
        self.clear()
        signal.signal(signal.SIGINT, self._on_signal)

    def uninstall_handler(self) -> None:
        """Restore the default SIGINT behaviour."""
        signal.signal(signal.SIGINT, signal.SIG_DFL)


def reverse_bits(value: int, bit_count: int) -> int:
    """Reverse the lowest ``bit_count`` bits of a 32-bit value."""
    if not 0 <= bit_count <= 32:
        raise ValueError(f"bit_count must be between 0 and 32, got {bit_count}")
    reversed32 = int(f"{value & _MASK32:032b}"[::-1], 2)
    return reversed32 >> (32 - bit_count)


def crc16(data: bytes) -> int:
    """Reflected CRC-16 (poly 0x8408, init 0xFFFF, no final xor)."""
    crc = 0xFFFF
    for byte in bytes(data):
        crc ^= byte
        for _ in range(8):
            crc = (crc >> 1) ^ (0x8408 if crc & 1 else 0)
    return crc


def get_millis() -> int:
    """Wall-clock time in milliseconds, with nanoseconds rounded."""
    ns = time.time_ns()
    seconds, nanos = divmod(ns, 1_000_000_000)
    millis = round(nanos / 1.0e6)
    if millis > 999:
        seconds += 1
        millis = 0
    return seconds * 1000 + millis


def hex_string(data: bytes) -> str:
    """Render bytes as contiguous upper-case hex digits."""
    return bytes(data).hex().upper()