"""Six-axis arm telemetry link: frame codec, scanner, analyzer and simulator."""

__all__ = [
    "config",
    "protocol",
    "scanner",
    "analyzer",
    "simulator",
    "stream_io",
    "models",
]
