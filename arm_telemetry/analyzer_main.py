"""Telemetry analyzer: recovers frames from a byte stream and reports on them.

    arm_analyzer data.bin
    arm_analyzer data.bin report.txt 4.5
    arm_simulator -n 10 | arm_analyzer -
"""
import logging
import sys

import click
from pydantic import ValidationError

from arm_telemetry.link.analyzer import TelemetryAnalyzer
from arm_telemetry.link.config import Settings
from arm_telemetry.link.stream_io import STDIO, read_source
from arm_telemetry.report import ReportWriter

LOG = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@click.command()
@click.argument("source")
@click.argument("output", required=False, default=None)
@click.argument("threshold", required=False, default=None, type=float)
@click.option("--log-level", default=None, help="Logging level on stderr. [default: WARNING]")
def cli(source, output, threshold, log_level):
    """Analyze SOURCE (a file, or '-' for stdin).

    The report goes to OUTPUT (default stdout). Any axis drawing more than
    THRESHOLD amperes (default 5.0) is flagged.
    """
    overrides = {"threshold_a": threshold, "log_level": log_level}
    try:
        settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from exc
    setup_logging(settings.log_level)

    try:
        buffer = read_source(source)
    except OSError as exc:
        LOG.error("cannot read %s: %s", source, exc)
        raise click.ClickException(f"cannot read {source}: {exc}") from exc
    if not buffer:
        LOG.error("no data read from %s", source)
        raise click.ClickException("no data read")

    out = None
    if output and output != STDIO:
        try:
            out = open(output, "w", encoding="utf-8")
        except OSError as exc:
            LOG.error("cannot create %s: %s", output, exc)
            raise click.ClickException(f"cannot create {output}: {exc}") from exc

    try:
        report = ReportWriter(out if out is not None else sys.stdout, settings.threshold_a)
        analyzer = TelemetryAnalyzer(settings.threshold_a)
        report.header()
        stats = analyzer.analyze_buffer(buffer, on_frame=report.frame)
        report.summary(stats)
    finally:
        if out is not None:
            out.close()

    if stats.lost_frames:
        LOG.warning("an estimated %d frames were lost", stats.lost_frames)


def main():
    cli()


if __name__ == "__main__":
    main()
