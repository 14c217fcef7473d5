"""Telemetry frame layout, byte-wise codec and unit conversions."""
from __future__ import annotations

from dataclasses import dataclass

SYNC_H = 0xAA
SYNC_L = 0x55
SYNC_MARKER = bytes([SYNC_H, SYNC_L])
AXIS_COUNT = 6
AXIS_LEN = 6
HEADER_LEN = 3
FRAME_LEN = HEADER_LEN + AXIS_COUNT * AXIS_LEN

POSITION_SCALE = 100.0
VELOCITY_SCALE = 10.0
CURRENT_SCALE = 1000.0

INT16_MIN = -0x8000
INT16_MAX = 0x7FFF
UINT16_MAX = 0xFFFF


class FrameLengthError(ValueError):
    """Raised when a decode is attempted on anything but a full frame."""


def clamp_int(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))


def int16_to_u16(value: int) -> int:
    v = int(value)
    if v < INT16_MIN or v > INT16_MAX:
        raise ValueError(f"int16 out of range: {v}")
    return v & 0xFFFF


def u16_to_int16(value: int) -> int:
    v = int(value) & 0xFFFF
    return v - 0x10000 if v > INT16_MAX else v


def check_u16(value: int) -> int:
    v = int(value)
    if v < 0 or v > UINT16_MAX:
        raise ValueError(f"uint16 out of range: {v}")
    return v


def write_u16_le(buffer: bytearray, offset: int, value: int) -> None:
    buffer[offset] = value & 0xFF
    buffer[offset + 1] = (value >> 8) & 0xFF


def read_u16_le(data: bytes, offset: int) -> int:
    return data[offset] | (data[offset + 1] << 8)


def position_in_degrees(raw: int) -> float:
    return raw / POSITION_SCALE


def velocity_in_degrees_per_second(raw: int) -> float:
    return raw / VELOCITY_SCALE


def current_in_amperes(raw: int) -> float:
    return raw / CURRENT_SCALE


def degrees_to_raw(degrees: float) -> int:
    # int() truncates toward zero, then saturate to the field
    return clamp_int(int(degrees * POSITION_SCALE), INT16_MIN, INT16_MAX)


def degrees_per_second_to_raw(deg_s: float) -> int:
    return clamp_int(int(deg_s * VELOCITY_SCALE), INT16_MIN, INT16_MAX)


def amperes_to_raw(amperes: float) -> int:
    return clamp_int(int(amperes * CURRENT_SCALE), 0, UINT16_MAX)


@dataclass(frozen=True)
class AxisSample:
    position: int
    velocity: int
    current: int

    @property
    def position_deg(self) -> float:
        return position_in_degrees(self.position)

    @property
    def velocity_deg_s(self) -> float:
        return velocity_in_degrees_per_second(self.velocity)

    @property
    def current_a(self) -> float:
        return current_in_amperes(self.current)


@dataclass(frozen=True)
class Frame:
    """One sample of all six axes.

    Layout (39 bytes, multi-byte fields little-endian)::

        [0]     0xAA
        [1]     0x55
        [2]     sequence (wraps 255 -> 0)
        [3+6k]  axis k position, int16, 1/100 deg
        [5+6k]  axis k velocity, int16, 1/10 deg/s
        [7+6k]  axis k current, uint16, mA

    ``sync`` holds the two marker bytes exactly as read from the wire so a
    frame decoded from an arbitrary buffer can still be checked afterwards.
    """

    sequence: int
    axes: tuple[AxisSample, ...]
    sync: bytes = SYNC_MARKER

    def __post_init__(self) -> None:
        if len(self.axes) != AXIS_COUNT:
            raise ValueError(f"expected {AXIS_COUNT} axes, got {len(self.axes)}")
        if len(self.sync) != 2:
            raise ValueError(f"sync marker must be 2 bytes, got {len(self.sync)}")
        # accept lists from callers but keep the value immutable
        object.__setattr__(self, "axes", tuple(self.axes))
        object.__setattr__(self, "sync", bytes(self.sync))

    def pack(self) -> bytes:
        out = bytearray(FRAME_LEN)
        out[0] = self.sync[0]
        out[1] = self.sync[1]
        out[2] = int(self.sequence) & 0xFF
        offset = HEADER_LEN
        for axis in self.axes:
            write_u16_le(out, offset, int16_to_u16(axis.position))
            write_u16_le(out, offset + 2, int16_to_u16(axis.velocity))
            write_u16_le(out, offset + 4, check_u16(axis.current))
            offset += AXIS_LEN
        return bytes(out)

    @staticmethod
    def parse(data: bytes) -> Frame:
        if len(data) != FRAME_LEN:
            raise FrameLengthError(f"frame must be {FRAME_LEN} bytes, got {len(data)}")
        axes = []
        offset = HEADER_LEN
        for _ in range(AXIS_COUNT):
            axes.append(
                AxisSample(
                    position=u16_to_int16(read_u16_le(data, offset)),
                    velocity=u16_to_int16(read_u16_le(data, offset + 2)),
                    current=read_u16_le(data, offset + 4),
                )
            )
            offset += AXIS_LEN
        return Frame(sequence=int(data[2]), axes=tuple(axes), sync=bytes(data[0:2]))


def encode(frame: Frame) -> bytes:
    return frame.pack()


def decode(data: bytes) -> Frame:
    return Frame.parse(data)
