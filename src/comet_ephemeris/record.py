"""Fixed-width text records for tabulated ephemeris output."""

from __future__ import annotations

from typing import TextIO


class Record:
    """Line buffer: fields are joined by a single blank and truncated at max_length."""

    def __init__(self, max_length: int = 4096) -> None:
        self._fields: list[str] = []
        self._max_length = max_length

    def __len__(self) -> int:
        if not self._fields:
            return 0
        return sum(len(f) for f in self._fields) + len(self._fields) - 1

    def clear(self) -> None:
        """Drop all fields."""
        self._fields = []

    def append(self, field: str) -> None:
        """Append a field; a blank separates it from the previous one.

        Text past max_length is silently dropped.
        """
        used = len(self) + (1 if self._fields else 0)
        room = self._max_length - used
        if room <= 0:
            return
        self._fields.append(field[:room])

    def line(self) -> str:
        """Current record without trailing blanks."""
        return ' '.join(self._fields).rstrip()

    def write(self, stream: TextIO) -> None:
        """Write the record (if non-blank) followed by a newline, then clear it."""
        text = self.line()
        if text:
            stream.write(text + '\n')
        self.clear()
