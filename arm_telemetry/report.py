"""Plain-text analysis report."""
from __future__ import annotations

from typing import TextIO

from arm_telemetry.link.analyzer import is_axis_in_alert
from arm_telemetry.link.models import Statistics
from arm_telemetry.link.scanner import ScannedFrame

RULE = "=" * 40
ALERT_MARK = " [!ALERT!]"


def header_lines(threshold_a: float) -> list[str]:
    return [f"Telemetry analysis - alert threshold: {threshold_a:.2f} A", RULE, ""]


def frame_lines(scanned: ScannedFrame, threshold_a: float, has_alert: bool = False) -> list[str]:
    frame = scanned.frame
    title = f"Frame #{frame.sequence} (offset {scanned.offset})"
    if has_alert:
        title += " ALERT"
    lines = [title]
    for index, axis in enumerate(frame.axes):
        line = (
            f"  Axis {index + 1}: {axis.position_deg:8.2f} deg | "
            f"{axis.velocity_deg_s:7.1f} deg/s | {axis.current_a:6.3f} A"
        )
        if is_axis_in_alert(axis, threshold_a):
            line += ALERT_MARK
        lines.append(line)
    lines.append("")
    return lines


def summary_lines(stats: Statistics) -> list[str]:
    lines = [
        RULE,
        "STATISTICS",
        RULE,
        f"Bytes read          : {stats.bytes_total}",
        f"Noise bytes         : {stats.noise_bytes}",
        f"Valid frames        : {stats.valid_frames}",
        f"Frames with alert   : {stats.alert_frames}",
    ]
    if stats.valid_frames > 0:
        lines += [
            f"Sequence min        : {stats.sequence_min}",
            f"Sequence max        : {stats.sequence_max}",
            f"Sequence gaps       : {stats.sequence_gaps}",
            f"Lost frames (est.)  : {stats.lost_frames}",
        ]
        for index, count in enumerate(stats.axis_alerts):
            if count:
                peak = stats.peak_current_ma[index] / 1000.0
                lines.append(f"Axis {index + 1} alerts       : {count} (peak {peak:.3f} A)")
    lines.append(RULE)
    return lines


class ReportWriter:
    """Text sink: one block per frame, then the summary."""

    def __init__(self, out: TextIO, threshold_a: float):
        self._out = out
        self.threshold_a = threshold_a

    def _emit(self, lines: list[str]) -> None:
        self._out.write("\n".join(lines) + "\n")

    def header(self) -> None:
        self._emit(header_lines(self.threshold_a))

    def frame(self, scanned: ScannedFrame, has_alert: bool = False) -> None:
        self._emit(frame_lines(scanned, self.threshold_a, has_alert))

    def summary(self, stats: Statistics) -> None:
        self._emit(summary_lines(stats))
        self._out.flush()
