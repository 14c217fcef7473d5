import random

import pytest

from arm_telemetry.link.protocol import AXIS_COUNT, SYNC_H, SYNC_L, AxisSample, Frame


def make_frame(sequence=0, currents=None, position=0, velocity=0):
    """Frame with the same position/velocity on every axis."""
    if currents is None:
        currents = [1000] * AXIS_COUNT
    axes = tuple(
        AxisSample(position=position, velocity=velocity, current=c) for c in currents
    )
    return Frame(sequence=sequence, axes=axes)


def noise_bytes(count, seed=0):
    rng = random.Random(seed)
    out = bytearray()
    for _ in range(count):
        octet = rng.randrange(256)
        if octet in (SYNC_H, SYNC_L):
            octet = 0x00
        out.append(octet)
    return bytes(out)


@pytest.fixture
def frame_factory():
    return make_frame


@pytest.fixture
def noise_factory():
    return noise_bytes


@pytest.fixture
def sample_frame():
    axes = (
        AxisSample(position=1234, velocity=-56, current=6000),
        AxisSample(position=-9000, velocity=2500, current=0),
        AxisSample(position=32767, velocity=-32768, current=65535),
        AxisSample(position=-32768, velocity=32767, current=1),
        AxisSample(position=0, velocity=0, current=1500),
        AxisSample(position=-1, velocity=1, current=4999),
    )
    return Frame(sequence=200, axes=axes)
