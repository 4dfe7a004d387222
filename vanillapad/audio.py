"""Gamepad audio packets and the microphone send queue."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import List, Optional

from .enums import EventType
from .events import Event

TYPE_AUDIO = 0
TYPE_VIDEO = 1

HEADER_SIZE = 8
MAX_PAYLOAD_SIZE = 2048
MIC_PAYLOAD_SIZE = 512
MIC_FORMAT = 6
MIC_QUEUE_SIZE = 8192


@dataclass(frozen=True)
class AudioHeader:
    """The 8-byte header in front of every audio packet.

    On the wire the fields are packed most significant bit first:
    format (3 bits), mono (1), vibrate (1), type (1), seq_id (10),
    payload_size (16) and timestamp (32).
    """

    format: int
    mono: bool
    vibrate: bool
    type: int
    seq_id: int
    payload_size: int
    timestamp: int


def decode_audio_header(data: bytes) -> AudioHeader:
    """Decode the first 8 bytes of an audio packet."""
    raw = bytes(data)
    if len(raw) < HEADER_SIZE:
        raise ValueError(
            f"audio header needs {HEADER_SIZE} bytes, got {len(raw)}"
        )
    word = int.from_bytes(raw[:4], "big")
    return AudioHeader(
        format=(word >> 29) & 0x7,
        mono=bool((word >> 28) & 1),
        vibrate=bool((word >> 27) & 1),
        type=(word >> 26) & 1,
        seq_id=(word >> 16) & 0x3FF,
        payload_size=word & 0xFFFF,
        timestamp=int.from_bytes(raw[4:8], "big"),
    )


def _pack_header(header: AudioHeader) -> bytes:
    word = (
        (header.format & 0x7) << 29
        | int(bool(header.mono)) << 28
        | int(bool(header.vibrate)) << 27
        | (header.type & 1) << 26
        | (header.seq_id & 0x3FF) << 16
        | (header.payload_size & 0xFFFF)
    )
    return word.to_bytes(4, "big") + (header.timestamp & 0xFFFFFFFF).to_bytes(4, "big")


def encode_mic_packet(payload: bytes, seq_id: int) -> bytes:
    """Build a microphone packet: mono, format 6, no timestamp, 10-bit sequence id."""
    body = bytes(payload)
    if len(body) > MAX_PAYLOAD_SIZE:
        raise ValueError(
            f"payload of {len(body)} bytes exceeds {MAX_PAYLOAD_SIZE}"
        )
    header = AudioHeader(
        format=MIC_FORMAT,
        mono=True,
        vibrate=False,
        type=TYPE_AUDIO,
        seq_id=seq_id & 0x3FF,
        payload_size=len(body),
        timestamp=0,
    )
    return _pack_header(header) + body


def parse_audio_packet(data: bytes) -> List[Event]:
    """Turn a packet received from the console into the events it produces.

    Audio packets yield an AUDIO event when they carry a payload, and
    always a VIBRATE event holding the vibrate flag. Video-format packets
    yield nothing.
    """
    raw = bytes(data)
    header = decode_audio_header(raw)
    if header.type == TYPE_VIDEO:
        return []
    events: List[Event] = []
    if header.payload_size:
        payload = raw[HEADER_SIZE:HEADER_SIZE + header.payload_size]
        events.append(Event(EventType.AUDIO, payload))
    events.append(Event(EventType.VIBRATE, bytes([int(header.vibrate)])))
    return events


class MicQueue:
    """A bounded byte queue for microphone audio.

    Writes never block; when the queue overflows, the oldest bytes are
    dropped. Readers take fixed-size payloads and block until enough data
    has arrived, the timeout runs out, or the queue is closed.
    """

    def __init__(self, capacity: int = MIC_QUEUE_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._buffer = bytearray()
        self._closed = False
        self._cond = threading.Condition()

    def write(self, data: bytes) -> None:
        """Append data, discarding the oldest bytes beyond capacity."""
        with self._cond:
            self._buffer.extend(data)
            overflow = len(self._buffer) - self.capacity
            if overflow > 0:
                del self._buffer[:overflow]
            self._cond.notify_all()

    def available(self) -> int:
        """Number of bytes waiting to be read."""
        with self._cond:
            return len(self._buffer)

    def read_payload(
        self, size: int = MIC_PAYLOAD_SIZE, timeout: Optional[float] = None
    ) -> Optional[bytes]:
        """Take ``size`` bytes; ``None`` on timeout or once the queue is closed."""
        if not 1 <= size <= self.capacity:
            raise ValueError(
                f"size must be between 1 and {self.capacity}, got {size}"
            )
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self._closed and len(self._buffer) < size:
                if deadline is None:
                    self._cond.wait()
                else:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        return None
                    self._cond.wait(remaining)
            if self._closed:
                return None
            payload = bytes(self._buffer[:size])
            del self._buffer[:size]
            return payload

    def close(self) -> None:
        """Wake every reader; further reads return ``None``."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()