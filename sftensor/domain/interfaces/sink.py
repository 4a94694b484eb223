"""
Tensor Sink Interface.

This module defines the abstract destination for rendered tensors. Rendering
itself is pure (see ``sftensor.domain.operations.formatting``); a sink decides
whether the text goes to the console, a logger, or a test recorder.
"""
from abc import ABC, abstractmethod


class TensorSink(ABC):
    """Abstract interface for writing rendered tensor text."""

    @abstractmethod
    def write(self, text: str) -> None:
        """
        Write one block of rendered text.

        Parameters
        ----------
        text : str
            Rendered text, possibly spanning several lines, without a trailing
            newline.
        """
        pass
