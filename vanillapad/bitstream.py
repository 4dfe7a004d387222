"""MSB-first bit writer with Exp-Golomb coding, used for H.264 headers."""

from __future__ import annotations

from typing import Optional, Union

_BYTE = 8
_MAX_UNSIGNED_GOLOMB = (1 << 64) - 2

Buffer = Union[bytearray, memoryview]


class BitWriter:
    """Write bit fields, most significant bit first, into a byte buffer.

    With ``buffer`` left as ``None`` the writer owns a bytearray that grows
    as needed. A caller-supplied buffer is written in place, and a write
    past its end raises ``IndexError``.

    A single write that straddles a byte boundary keeps only the bits that
    fit in the byte where it starts: the bits that spill over are dropped
    and the following byte is cleared. The parameter sets this package
    emits are produced with exactly that behaviour.
    """

    def __init__(self, buffer: Optional[Buffer] = None, bit_index: int = 0) -> None:
        if bit_index < 0:
            raise ValueError(f"bit_index must not be negative, got {bit_index}")
        self._growable = buffer is None
        self.buffer: Buffer = bytearray() if buffer is None else buffer
        self.bit_index = bit_index

    def _ensure(self, index: int) -> None:
        if index < len(self.buffer):
            return
        if not self._growable:
            raise IndexError(
                f"write at byte {index} exceeds buffer of {len(self.buffer)} bytes"
            )
        self.buffer.extend(bytes(index + 1 - len(self.buffer)))

    def write_bits(self, value: int, bit_width: int) -> None:
        """Write the low ``bit_width`` (1 to 8) bits of ``value``."""
        if not 1 <= bit_width <= _BYTE:
            raise ValueError(f"bit_width must be between 1 and 8, got {bit_width}")
        if not 0 <= value < (1 << bit_width):
            raise ValueError(f"value {value} does not fit in {bit_width} bits")

        byte_offset, local_offset = divmod(self.bit_index, _BYTE)
        self._ensure(byte_offset)
        remainder = _BYTE - local_offset
        shifted = (value << (_BYTE - bit_width)) >> local_offset

        buf = self.buffer
        buf[byte_offset] = (buf[byte_offset] >> remainder) << remainder
        if byte_offset + 1 < len(buf):
            buf[byte_offset + 1] = 0
        buf[byte_offset] |= shifted

        self.bit_index += bit_width

    def write_exp_golomb(self, value: int) -> None:
        """Write ``value`` as an unsigned Exp-Golomb code, ue(v)."""
        if not 0 <= value <= _MAX_UNSIGNED_GOLOMB:
            raise ValueError(f"value out of range for ue(v): {value}")

        code = value + 1
        bit_width = code.bit_length()
        leading_zeros = bit_width - 1

        for done in range(0, leading_zeros, _BYTE):
            self.write_bits(0, min(_BYTE, leading_zeros - done))

        total_bytes = -(-bit_width // _BYTE)
        partial = bit_width % _BYTE
        for i in range(total_bytes):
            count = partial if i == 0 and partial else min(bit_width, _BYTE)
            chunk = (code >> ((total_bytes - 1 - i) * _BYTE)) & 0xFF
            self.write_bits(chunk, count)

    def write_signed_exp_golomb(self, value: int) -> None:
        """Write ``value`` as a signed Exp-Golomb code, se(v)."""
        code = 2 * value - 1 if value > 0 else -2 * value
        self.write_exp_golomb(code)

    def align(self) -> None:
        """Pad with zero bits up to the next byte boundary."""
        rest = self.bit_index % _BYTE
        if rest:
            self.write_bits(0, _BYTE - rest)