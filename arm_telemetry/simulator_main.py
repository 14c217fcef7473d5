"""Telemetry simulator: writes frames (and injected noise) to a byte sink.

    arm_simulator -n 100 > data.bin
    arm_simulator -r | arm_analyzer -
    arm_simulator --serial-port /dev/ttyUSB0 --baudrate 460800 -r
"""
import logging
import time

import click
from pydantic import ValidationError

from arm_telemetry.link.config import Settings
from arm_telemetry.link.simulator import MotionSimulator
from arm_telemetry.link.stream_io import STDIO, ByteSink

LOG = logging.getLogger(__name__)


def load_settings(**overrides) -> Settings:
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from exc


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def run(simulator: MotionSimulator, sink: ByteSink, count: int, realtime: bool) -> int:
    period = simulator.dt
    next_tick = time.monotonic()
    written = 0
    for chunk in simulator.chunks(count):
        sink.write(chunk)
        written += 1
        if realtime:
            next_tick += period
            delay = next_tick - time.monotonic()
            if delay > 0:
                time.sleep(delay)
            else:
                next_tick = time.monotonic()
    return written


@click.command()
@click.option("-n", "--count", "frame_count", type=int, default=None,
              help="Frames to generate (0 = unbounded). [default: 0]")
@click.option("-f", "--frequency", "frequency_hz", type=float, default=None,
              help="Frame rate in Hz. [default: 100]")
@click.option("-b", "--noise", "noise_probability", type=float, default=None,
              help="Probability of a noise burst before a frame. [default: 0.05]")
@click.option("-a", "--alert", "alert_probability", type=float, default=None,
              help="Probability of an injected current alert. [default: 0.02]")
@click.option("-r", "--realtime", is_flag=True,
              help="Pace output at the frame rate.")
@click.option("--seed", type=int, default=None, help="Seed for reproducible output.")
@click.option("-o", "--output", default=STDIO, show_default=True,
              help="Output file, '-' for stdout.")
@click.option("--serial-port", default=None, help="Write to a serial port / pyserial URL instead.")
@click.option("--baudrate", type=int, default=None, help="Serial baudrate. [default: 115200]")
@click.option("--log-level", default=None, help="Logging level on stderr. [default: WARNING]")
def cli(output, **options):
    """Generate 6-axis arm telemetry frames."""
    # an absent flag leaves the environment/default value in place
    options["realtime"] = options["realtime"] or None
    settings = load_settings(**options)
    setup_logging(settings.log_level)

    simulator = MotionSimulator.from_settings(settings)
    try:
        sink = ByteSink.open(output, settings.serial_port, settings.baudrate)
    except (OSError, ValueError) as exc:
        LOG.error("cannot open sink: %s", exc)
        raise click.ClickException(f"cannot open output: {exc}") from exc

    LOG.info(
        "simulating %s frames at %.1f Hz (noise=%.3f, alert=%.3f, seed=%s)",
        settings.frame_count or "unbounded",
        settings.frequency_hz,
        settings.noise_probability,
        settings.alert_probability,
        settings.seed,
    )
    written = 0
    try:
        written = run(simulator, sink, settings.frame_count, settings.realtime)
    except KeyboardInterrupt:
        LOG.info("interrupted")
    except BrokenPipeError:
        LOG.info("reader closed the pipe")
    finally:
        try:
            sink.close()
        except OSError as exc:
            LOG.error("closing sink failed: %s", exc)
    LOG.info("wrote %d frames (%d bytes) to %s", written, sink.bytes_written, sink.name)


def main():
    cli()


if __name__ == "__main__":
    main()
