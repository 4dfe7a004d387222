# vanillapad

Building blocks for acting as a console's wireless gamepad. The package
covers the packet formats at the bit level, the H.264 parameter sets and
slice headers that wrap the console's video stream, audio packet parsing
and microphone packet building, the gamepad's input report, and a bounded
event queue for handing decoded data to a front end.

The package depends only on the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `vanillapad.util`

- `reverse_bits(value, bit_count)`: reverses the lowest `bit_count` bits
  (0 to 32) of a 32-bit value. `bit_count` outside that range raises
  `ValueError`.
- `crc16(data)`: reflected CRC-16 with polynomial 0x8408, initial value
  0xFFFF and no final xor.
- `get_millis()`: wall-clock time in milliseconds.
- `hex_string(data)`: bytes as contiguous upper-case hex digits.
- `log(message)`, `log_no_newline(message)`: write to the installed
  logger, which is standard output by default.
- `install_logger(logger)`: route log output to any callable taking one
  string. `None` silences logging, and anything else that is not callable
  raises `TypeError`.
- `Interrupt`: a thread-safe cancellation flag with `set()`, `clear()` and
  `is_set()`. `install_handler()` clears it and makes SIGINT set it, and
  `uninstall_handler()` restores the default SIGINT behaviour.

### `vanillapad.enums`

`Button` (buttons, stick axes, volume and motion sensors, with `COUNT`),
`EventType`, `Region`, `BatteryStatus` and `ErrorCode` as `IntEnum`s, and
`ADDRESS_LOCAL`. `VanillaError(code, message=None)` is an exception that
carries `code`, an `ErrorCode` when the value is known and the plain
integer otherwise, and `message`.

### `vanillapad.bitstream`

`BitWriter(buffer=None, bit_index=0)` writes bits most significant first.
Its methods are `write_bits(value, bit_width)` for widths of 1 to 8,
`write_exp_golomb(value)` for ue(v), `write_signed_exp_golomb(value)` for
se(v), and `align()`.

Without a buffer, the writer grows its own `bytearray`. A caller's buffer
is written in place, and a write past its end raises `IndexError`. A single
`write_bits` call that crosses a byte boundary keeps only the bits that fit
in the starting byte and clears the byte after it. The parameter sets in
`h264` rely on that behaviour.

### `vanillapad.h264`

- `generate_sps_params()`: the sequence parameter set NAL unit, without a
  start code.
- `generate_pps_params()`: the picture parameter set, with its start code.
- `generate_h264_header()`: `START_CODE` followed by the SPS and the PPS.
- `slice_header(is_idr, frame_decode_num)`: the 4-byte slice header that
  goes before each frame's payload.

### `vanillapad.events`

`Event(type, data)` is a frozen dataclass with a `size` property.

`EventLoop(capacity=100)` holds up to `capacity` events and drops the
oldest one when it is full. It works between `start()` and `stop()`, and
can also be used as a context manager.

- `push(type, data)` returns the queued `Event`. It raises `VanillaError`
  with `ErrorCode.SHUTDOWN` when the loop is not active, and `ValueError`
  when `data` is larger than 65536 bytes.
- `poll()` returns the oldest event or `None`.
- `wait(timeout=None)` blocks until an event arrives. It returns `None` on
  timeout or when the loop stops.
- `pending()` counts the queued events.

`stop()` discards events that were not consumed and wakes every waiting
thread.

### `vanillapad.audio`

- `decode_audio_header(data)`: returns an `AudioHeader` from the first 8
  bytes of a packet.
- `parse_audio_packet(data)`: returns the events a packet from the console
  produces. An audio packet gives an `AUDIO` event when it has a payload,
  and always a `VIBRATE` event. A video-format packet gives nothing.
- `encode_mic_packet(payload, seq_id)`: builds a microphone packet (mono,
  format 6, zero timestamp, 10-bit sequence id) for a payload of at most
  2048 bytes.
- `MicQueue(capacity=8192)`: a byte queue whose writes never block and drop
  the oldest bytes when it overflows. `read_payload(size=512, timeout=None)`
  blocks until `size` bytes are available. It returns `None` on timeout or
  after `close()`. `available()` gives the number of buffered bytes.

### `vanillapad.input`

`InputState` holds the current state. Use `set_button(button, value)` for
buttons, axes and sensors; a Python float given for a sensor is stored as
its single-precision bit pattern. `set_touch(x, y)` sets the touch point,
and -1 on either axis releases it. `set_battery_status(status)` sets the
battery status.

`build_packet(seq_id)` returns the 128-byte input report. The helper
functions `resolve_axis_value`, `scale_x_touch_value`,
`scale_y_touch_value`, `unpack_float` and `pack_float` are public as well.

### `vanillapad.video`

- `decode_video_packet(data)`: returns a `VideoPacket`. Its `is_idr`
  property is true when the extended header marks a keyframe.
- `FrameAssembler(send_idr_request=None)`: collects packets by sequence id.
  `handle_packet(data)` accepts raw bytes or a `VideoPacket`. It returns an
  Annex B access unit with emulation-prevention bytes once a frame is
  complete, and `None` otherwise; keyframes are prefixed with the SPS and
  the PPS. `send_idr_request` is called to ask the console for a keyframe:
  when a frame starts without a complete frame before it and is not a
  keyframe itself, and on the next packet after `queue_idr()`.

## Example

```python
from vanillapad.enums import Button, EventType
from vanillapad.events import EventLoop
from vanillapad.h264 import generate_h264_header
from vanillapad.input import InputState

header = generate_h264_header()          # start code + SPS + PPS

state = InputState()
state.set_button(Button.A, 1)
state.set_touch(400, 200)
report = state.build_packet(seq_id=0)    # 128 bytes

with EventLoop(capacity=100) as loop:
    loop.push(EventType.VIBRATE, b"\x01")
    event = loop.poll()
```

## What it does not do

The package opens no sockets and starts no threads. It does not connect to
a console, pair with one, or talk to a wireless backend. It does not send
input reports on a timer or pace microphone packets. It has no command-line
program and no video or audio playback. Those parts are left to the
application, which can feed received bytes into `parse_audio_packet` and
`FrameAssembler`, and send what `InputState.build_packet` and
`encode_mic_packet` return.