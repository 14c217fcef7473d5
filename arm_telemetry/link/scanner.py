"""Frame boundary recovery over a noisy byte buffer."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from arm_telemetry.link.protocol import FRAME_LEN, SYNC_H, SYNC_L, Frame

LOG = logging.getLogger(__name__)


def find_sync(buffer: bytes, start: int = 0) -> int | None:
    i = max(0, int(start))
    last = len(buffer) - 1
    while i < last:
        if buffer[i] == SYNC_H and buffer[i + 1] == SYNC_L:
            return i
        i += 1
    return None


def extract_frame(buffer: bytes, offset: int) -> Frame | None:
    if offset < 0 or len(buffer) - offset < FRAME_LEN:
        return None
    return Frame.parse(bytes(buffer[offset : offset + FRAME_LEN]))


@dataclass(frozen=True)
class ScannedFrame:
    frame: Frame
    offset: int
    noise_before: int


class FrameScanner:
    """Single pass over an in-memory buffer.

    Every byte ends up either inside an emitted frame or in ``noise_bytes``;
    once iteration stops ``cursor == len(buffer)``.
    """

    def __init__(self, buffer: bytes):
        self._buffer = bytes(buffer)
        self.cursor = 0
        self.noise_bytes = 0
        self.frames = 0

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self._buffer)

    def _drain(self, reason: str) -> None:
        remaining = len(self._buffer) - self.cursor
        if remaining > 0:
            LOG.debug("%d trailing bytes counted as noise (%s)", remaining, reason)
            self.noise_bytes += remaining
        self.cursor = len(self._buffer)

    def next_frame(self) -> ScannedFrame | None:
        if self.exhausted:
            return None
        offset = find_sync(self._buffer, self.cursor)
        if offset is None:
            self._drain("no sync")
            return None
        frame = extract_frame(self._buffer, offset)
        if frame is None:
            self._drain("truncated frame")
            return None

        skipped = offset - self.cursor
        if skipped:
            LOG.debug("skipped %d noise bytes before offset %d", skipped, offset)
        self.noise_bytes += skipped
        self.cursor = offset + FRAME_LEN
        self.frames += 1
        return ScannedFrame(frame=frame, offset=offset, noise_before=skipped)

    def __iter__(self) -> Iterator[ScannedFrame]:
        while True:
            scanned = self.next_frame()
            if scanned is None:
                return
            yield scanned
