"""Test helpers — capture shell output in memory."""


class StringOutput:
    """An output sink that records every write."""

    def __init__(self) -> None:
        """Create an empty buffer."""
        self._chunks: list[str] = []

    def write(self, text: str) -> None:
        """Record *text*."""
        self._chunks.append(text)

    @property
    def chunks(self) -> list[str]:
        """Return each write separately (useful when order matters)."""
        return list(self._chunks)

    def clear(self) -> None:
        """Forget everything written so far."""
        self._chunks.clear()

    def take(self) -> str:
        """Return everything written so far and clear the buffer."""
        text = str(self)
        self.clear()
        return text

    def __str__(self) -> str:
        """Return everything written, concatenated."""
        return "".join(self._chunks)
