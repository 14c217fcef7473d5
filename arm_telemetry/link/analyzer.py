"""Frame validation, current alerts and sequence continuity."""
from __future__ import annotations

import logging
from typing import Callable

from arm_telemetry.link.models import Statistics
from arm_telemetry.link.protocol import SYNC_H, SYNC_L, AxisSample, Frame, current_in_amperes
from arm_telemetry.link.scanner import FrameScanner, ScannedFrame

LOG = logging.getLogger(__name__)

SEQUENCE_MODULO = 256

FrameHandler = Callable[[ScannedFrame, bool], None]


def is_frame_valid(frame: Frame) -> bool:
    return frame.sync[0] == SYNC_H and frame.sync[1] == SYNC_L


def is_axis_in_alert(axis: AxisSample, threshold_a: float) -> bool:
    return current_in_amperes(axis.current) > threshold_a


def sequence_delta(previous: int, current: int) -> int:
    delta = int(current) - int(previous)
    if delta < 0:
        delta += SEQUENCE_MODULO
    return delta


class TelemetryAnalyzer:
    """Consumes decoded frames in arrival order and keeps the running totals."""

    def __init__(self, threshold_a: float, stats: Statistics | None = None):
        self.threshold_a = float(threshold_a)
        self.stats = Statistics() if stats is None else stats

    def _track_sequence(self, sequence: int) -> None:
        stats = self.stats
        stats.sequence_min = min(stats.sequence_min, sequence)
        stats.sequence_max = max(stats.sequence_max, sequence)

        if stats.last_sequence is not None:
            delta = sequence_delta(stats.last_sequence, sequence)
            if delta != 1:
                stats.sequence_gaps += 1
                LOG.info("sequence jump %d -> %d", stats.last_sequence, sequence)
            stats.sequence_span += delta
        stats.last_sequence = sequence

    def analyze(self, frame: Frame) -> bool:
        if not is_frame_valid(frame):
            LOG.warning("frame with bad sync %s ignored", frame.sync.hex())
            return False

        stats = self.stats
        stats.valid_frames += 1
        self._track_sequence(frame.sequence)

        has_alert = False
        for index, axis in enumerate(frame.axes):
            if axis.current > stats.peak_current_ma[index]:
                stats.peak_current_ma[index] = axis.current
            if is_axis_in_alert(axis, self.threshold_a):
                has_alert = True
                stats.axis_alerts[index] += 1
                LOG.info(
                    "seq=%d axis %d current %.3f A > %.3f A",
                    frame.sequence,
                    index + 1,
                    axis.current_a,
                    self.threshold_a,
                )

        if has_alert:
            stats.alert_frames += 1
        return has_alert

    def analyze_buffer(self, buffer: bytes, on_frame: FrameHandler | None = None) -> Statistics:
        scanner = FrameScanner(buffer)
        self.stats.bytes_total += len(buffer)
        for scanned in scanner:
            has_alert = self.analyze(scanned.frame)
            if on_frame is not None:
                on_frame(scanned, has_alert)
        self.stats.noise_bytes += scanner.noise_bytes
        LOG.info(
            "scanned %d bytes: %d frames, %d noise bytes",
            len(buffer),
            scanner.frames,
            scanner.noise_bytes,
        )
        return self.stats


def analyze(frame: Frame, stats: Statistics, threshold_a: float) -> bool:
    return TelemetryAnalyzer(threshold_a, stats).analyze(frame)
