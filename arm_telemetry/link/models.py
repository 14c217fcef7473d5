"""Shared state models for the simulator and analyzer."""
from __future__ import annotations

from dataclasses import dataclass, field

from arm_telemetry.link.protocol import AXIS_COUNT


@dataclass(frozen=True)
class AxisLimits:
    position_min_deg: float
    position_max_deg: float
    max_velocity_deg_s: float
    nominal_current_a: float


DEFAULT_AXIS_LIMITS = (
    AxisLimits(-170.0, 170.0, 250.0, 8.0),
    AxisLimits(-90.0, 110.0, 250.0, 6.0),
    AxisLimits(-80.0, 280.0, 250.0, 4.0),
    AxisLimits(-190.0, 190.0, 430.0, 2.0),
    AxisLimits(-120.0, 120.0, 430.0, 2.0),
    AxisLimits(-360.0, 360.0, 630.0, 1.5),
)


@dataclass
class SimulatorAxisState:
    position_deg: float = 0.0
    velocity_deg_s: float = 0.0
    target_position_deg: float = 0.0
    base_current_a: float = 0.0


def _per_axis() -> list[int]:
    return [0] * AXIS_COUNT


@dataclass
class Statistics:
    bytes_total: int = 0
    noise_bytes: int = 0
    valid_frames: int = 0
    alert_frames: int = 0
    sequence_min: int = 255
    sequence_max: int = 0
    sequence_span: int = 0
    sequence_gaps: int = 0
    last_sequence: int | None = None
    axis_alerts: list[int] = field(default_factory=_per_axis)
    peak_current_ma: list[int] = field(default_factory=_per_axis)

    @property
    def expected_frames(self) -> int:
        if self.valid_frames == 0:
            return 0
        return self.sequence_span + 1

    @property
    def lost_frames(self) -> int:
        return max(0, self.expected_frames - self.valid_frames)
