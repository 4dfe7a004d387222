"""Decoding of gamepad video packets and reassembly into H.264 access units."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Union

from .h264 import START_CODE, generate_pps_params, generate_sps_params, slice_header
from .util import log

HEADER_SIZE = 16
EXTENDED_HEADER_SIZE = 8
QUEUE_MAX = 1024
MAX_PAYLOAD_SIZE = 2048

_IDR_MARKER = 0x80


@dataclass(frozen=True)
class VideoPacket:
    """One video packet as received from the console.

    The first four bytes hold, most significant bit first: magic (4 bits),
    packet_type (2), seq_id (10), init, frame_begin, chunk_end, frame_end,
    has_timestamp (1 each) and payload_size (11). A 32-bit timestamp and
    an 8-byte extended header follow, then the payload.
    """

    magic: int
    packet_type: int
    seq_id: int
    init: bool
    frame_begin: bool
    chunk_end: bool
    frame_end: bool
    has_timestamp: bool
    payload_size: int
    timestamp: int
    extended_header: bytes
    payload: bytes

    @property
    def is_idr(self) -> bool:
        """True when the extended header marks an instantaneous decoder refresh."""
        return _IDR_MARKER in self.extended_header


def decode_video_packet(data: bytes) -> VideoPacket:
    """Decode a raw video packet.

    The payload is cut to ``payload_size`` bytes, or to what was received
    if the packet is shorter than that.
    """
    raw = bytes(data)
    if len(raw) < HEADER_SIZE:
        raise ValueError(f"video packet needs {HEADER_SIZE} bytes, got {len(raw)}")
    word = int.from_bytes(raw[:4], "big")
    payload_size = word & 0x7FF
    return VideoPacket(
        magic=(word >> 28) & 0xF,
        packet_type=(word >> 26) & 0x3,
        seq_id=(word >> 16) & 0x3FF,
        init=bool((word >> 15) & 1),
        frame_begin=bool((word >> 14) & 1),
        chunk_end=bool((word >> 13) & 1),
        frame_end=bool((word >> 12) & 1),
        has_timestamp=bool((word >> 11) & 1),
        payload_size=payload_size,
        timestamp=int.from_bytes(raw[4:8], "big"),
        extended_header=raw[8:HEADER_SIZE],
        payload=raw[HEADER_SIZE:HEADER_SIZE + payload_size],
    )


def _append_escaped(out: bytearray, data: bytes) -> None:
    """Append ``data``, inserting emulation-prevention bytes after 00 00."""
    for byte in data:
        if byte <= 3 and len(out) >= 2 and out[-2] == 0 and out[-1] == 0:
            out.append(3)
        out.append(byte)


class FrameAssembler:
    """Collects video packets into complete frames.

    ``send_idr_request`` is called, with no arguments, whenever a fresh
    keyframe must be asked of the console: when a frame begins without a
    complete frame before it and is not itself a keyframe, and on the next
    packet after :meth:`queue_idr`.
    """

    def __init__(self, send_idr_request: Optional[Callable[[], None]] = None) -> None:
        self._send_idr_request = send_idr_request
        self._idr_lock = threading.Lock()
        self._idr_queued = False
        self._segments: Dict[int, VideoPacket] = {}
        self._seq: Optional[int] = None
        self._seq_end: Optional[int] = None
        self._complete_frame = False
        self.frame_decode_num = 0

    def queue_idr(self) -> None:
        """Ask for a keyframe request to go out with the next packet."""
        with self._idr_lock:
            self._idr_queued = True

    def _request_idr(self) -> None:
        log("SENDING IDR")
        if self._send_idr_request is not None:
            self._send_idr_request()

    def _frame_indices(self) -> Iterator[int]:
        index = self._seq
        while True:
            yield index
            if index == self._seq_end:
                return
            index = (index + 1) % QUEUE_MAX

    def handle_packet(self, data: Union[bytes, VideoPacket]) -> Optional[bytes]:
        """Take one packet; return an Annex B access unit once a frame is complete."""
        packet = data if isinstance(data, VideoPacket) else decode_video_packet(data)
        is_idr = packet.is_idr

        if packet.frame_begin:
            self._seq = packet.seq_id
            self._seq_end = None
            self._segments.clear()
            self.frame_decode_num = (self.frame_decode_num + 1) & 0xFF
            if not self._complete_frame and not is_idr:
                self._request_idr()
                return None
            self._complete_frame = False

        with self._idr_lock:
            queued = self._idr_queued
            self._idr_queued = False
        if queued:
            self._request_idr()

        self._segments[packet.seq_id] = packet
        if packet.frame_end:
            self._seq_end = packet.seq_id

        if self._seq is None or self._seq_end is None:
            return None

        segments: List[VideoPacket] = []
        for index in self._frame_indices():
            segment = self._segments.get(index)
            if segment is None:
                log(f"damn, incomplete frame (missing {index})")
                return None
            segments.append(segment)

        self._complete_frame = True

        out = bytearray()
        if is_idr:
            out += START_CODE + generate_sps_params() + generate_pps_params()
        out += START_CODE + slice_header(is_idr, self.frame_decode_num)

        first = segments[0].payload
        out += first[:2]
        _append_escaped(out, first[2:])
        for segment in segments[1:]:
            _append_escaped(out, segment.payload)
        return bytes(out)