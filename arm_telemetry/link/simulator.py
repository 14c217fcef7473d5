"""Six-axis motion plant that produces telemetry frames and line noise."""
from __future__ import annotations

import logging
import random
from typing import Iterator, Sequence

from arm_telemetry.link.models import DEFAULT_AXIS_LIMITS, AxisLimits, SimulatorAxisState
from arm_telemetry.link.protocol import (
    AXIS_COUNT,
    SYNC_H,
    SYNC_L,
    AxisSample,
    Frame,
    amperes_to_raw,
    degrees_per_second_to_raw,
    degrees_to_raw,
)

LOG = logging.getLogger(__name__)

TARGET_TOLERANCE_DEG = 1.0
RETARGET_PROBABILITY = 0.02
TARGET_RANGE_RATIO = 0.8
POSITION_GAIN = 2.0
ACCEL_RATIO = 2.0
IDLE_CURRENT_RATIO = 0.1
CURRENT_NOISE_RATIO = 0.05
ALERT_CURRENT_MA = (5500.0, 8000.0)
NOISE_BURST = (1, 10)


class MotionSimulator:
    def __init__(
        self,
        frequency_hz: float = 100.0,
        noise_probability: float = 0.05,
        alert_probability: float = 0.02,
        limits: Sequence[AxisLimits] = DEFAULT_AXIS_LIMITS,
        rng: random.Random | None = None,
    ):
        if frequency_hz <= 0.0:
            raise ValueError(f"frequency must be positive, got {frequency_hz}")
        if len(limits) != AXIS_COUNT:
            raise ValueError(f"expected {AXIS_COUNT} axis limits, got {len(limits)}")
        self.dt = 1.0 / float(frequency_hz)
        self.noise_probability = float(noise_probability)
        self.alert_probability = float(alert_probability)
        self.limits = tuple(limits)
        self.rng = random.Random() if rng is None else rng
        self.sequence = 0
        self.axes = [
            SimulatorAxisState(base_current_a=lim.nominal_current_a * IDLE_CURRENT_RATIO)
            for lim in self.limits
        ]

    @classmethod
    def from_settings(cls, settings) -> MotionSimulator:
        return cls(
            frequency_hz=settings.frequency_hz,
            noise_probability=settings.noise_probability,
            alert_probability=settings.alert_probability,
            limits=settings.axis_limits(),
            rng=random.Random(settings.seed),
        )

    def new_target(self, index: int) -> None:
        lim = self.limits[index]
        self.axes[index].target_position_deg = self.rng.uniform(
            lim.position_min_deg * TARGET_RANGE_RATIO,
            lim.position_max_deg * TARGET_RANGE_RATIO,
        )

    def step_axis(self, index: int) -> None:
        axis = self.axes[index]
        lim = self.limits[index]

        error = axis.target_position_deg - axis.position_deg
        if abs(error) < TARGET_TOLERANCE_DEG:
            if self.rng.random() < RETARGET_PROBABILITY:
                self.new_target(index)
                error = axis.target_position_deg - axis.position_deg

        v_max = lim.max_velocity_deg_s
        desired = max(-v_max, min(v_max, error * POSITION_GAIN))

        dv_max = v_max * ACCEL_RATIO * self.dt
        dv = max(-dv_max, min(dv_max, desired - axis.velocity_deg_s))
        axis.velocity_deg_s += dv

        axis.position_deg += axis.velocity_deg_s * self.dt
        # hard stops: inelastic, velocity dropped on contact
        if axis.position_deg < lim.position_min_deg:
            axis.position_deg = lim.position_min_deg
            axis.velocity_deg_s = 0.0
        if axis.position_deg > lim.position_max_deg:
            axis.position_deg = lim.position_max_deg
            axis.velocity_deg_s = 0.0

        ratio = abs(axis.velocity_deg_s) / v_max
        base = lim.nominal_current_a * (IDLE_CURRENT_RATIO + (1.0 - IDLE_CURRENT_RATIO) * ratio)
        base += self.rng.gauss(0.0, base * CURRENT_NOISE_RATIO)
        axis.base_current_a = max(0.0, base)

    def next_frame(self) -> Frame:
        sequence = self.sequence
        self.sequence = (self.sequence + 1) & 0xFF

        alert_axis = -1
        alert_current = 0
        if self.rng.random() < self.alert_probability:
            alert_axis = self.rng.randrange(AXIS_COUNT)
            alert_current = int(self.rng.uniform(*ALERT_CURRENT_MA))
            LOG.debug("seq=%d injecting %d mA on axis %d", sequence, alert_current, alert_axis + 1)

        samples = []
        for index in range(AXIS_COUNT):
            self.step_axis(index)
            axis = self.axes[index]
            current = amperes_to_raw(axis.base_current_a)
            if index == alert_axis:
                current = alert_current
            samples.append(
                AxisSample(
                    position=degrees_to_raw(axis.position_deg),
                    velocity=degrees_per_second_to_raw(axis.velocity_deg_s),
                    current=current,
                )
            )
        return Frame(sequence=sequence, axes=tuple(samples))

    def noise(self) -> bytes:
        if self.rng.random() >= self.noise_probability:
            return b""
        count = self.rng.randint(*NOISE_BURST)
        out = bytearray()
        for _ in range(count):
            octet = self.rng.randrange(256)
            if octet in (SYNC_H, SYNC_L):
                octet = 0x00
            out.append(octet)
        LOG.debug("injecting %d noise bytes", count)
        return bytes(out)

    def next_chunk(self) -> bytes:
        """Optional noise burst followed by one encoded frame."""
        prefix = self.noise()
        return prefix + self.next_frame().pack()

    def chunks(self, count: int = 0) -> Iterator[bytes]:
        produced = 0
        while count == 0 or produced < count:
            yield self.next_chunk()
            produced += 1
