"""RecordingSink - in-memory TensorSink for testing.

Keeps every written block so tests can assert on exactly what a use-case
rendered, without capturing stdout.
"""
from sftensor.domain.interfaces.sink import TensorSink


class RecordingSink(TensorSink):
    """
    A sink that stores written text instead of displaying it.
    """
    def __init__(self):
        """
        Initialize RecordingSink internal state.

        Sets `writes` to an empty list; each call to `write` appends one entry.
        """
        self.writes: list[str] = []

    def write(self, text: str) -> None:
        self.writes.append(text)

    @property
    def text(self) -> str:
        """All written blocks joined by newlines, as a console would show them."""
        return "\n".join(self.writes)
