"""Concrete TensorSink implementations."""
import logging
import sys
from typing import TextIO

from sftensor.domain.interfaces.sink import TensorSink


class ConsoleSink(TensorSink):
    """Write each block of text on its own line to a stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """
        Initialize the ConsoleSink.

        Parameters
        ----------
        stream : TextIO | None, optional
            Destination stream. Defaults to ``sys.stdout`` looked up at write
            time, so redirection of stdout is honoured.
        """
        self._stream = stream

    def write(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        print(text, file=stream)


class LoggingSink(TensorSink):
    """Forward rendered text to a logger, one record per block."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def write(self, text: str) -> None:
        self.logger.log(self.level, text)
