"""Byte source and byte sink for the telemetry stream."""
from __future__ import annotations

import logging
import sys
from typing import BinaryIO

import serial

LOG = logging.getLogger(__name__)

STDIO = "-"


def read_source(source: str, stdin: BinaryIO | None = None) -> bytes:
    """Read a whole file, or stdin when ``source`` is ``-``, into memory."""
    if source == STDIO:
        stream = sys.stdin.buffer if stdin is None else stdin
        data = stream.read()
        LOG.info("read %d bytes from stdin", len(data))
        return data
    with open(source, "rb") as f:
        data = f.read()
    LOG.info("read %d bytes from %s", len(data), source)
    return data


class ByteSink:
    def __init__(self, stream, closer=None, name: str = ""):
        self._stream = stream
        self._closer = closer
        self.name = name
        self.bytes_written = 0

    @classmethod
    def open(
        cls,
        path: str = STDIO,
        serial_port: str = "",
        baudrate: int = 115200,
        stdout: BinaryIO | None = None,
    ) -> ByteSink:
        if serial_port:
            port = serial.serial_for_url(serial_port, baudrate=int(baudrate))
            LOG.info("serial sink open on %s @ %d", serial_port, int(baudrate))
            return cls(port, port.close, serial_port)
        if path == STDIO:
            stream = sys.stdout.buffer if stdout is None else stdout
            return cls(stream, None, "stdout")
        f = open(path, "wb")
        LOG.info("file sink open on %s", path)
        return cls(f, f.close, path)

    def write(self, payload: bytes) -> None:
        self._stream.write(payload)
        flush = getattr(self._stream, "flush", None)
        if callable(flush):
            flush()
        self.bytes_written += len(payload)

    def close(self) -> None:
        if self._closer is not None:
            self._closer()
            self._closer = None

    def __enter__(self) -> ByteSink:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
