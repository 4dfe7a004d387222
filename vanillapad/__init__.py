"""Gamepad protocol pieces: input reports, audio and video framing, H.264 headers, bit writing and an event queue."""

__version__ = "0.1.0"