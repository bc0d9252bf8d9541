"""In-memory conversion log for a single session."""
from collections import deque
from typing import Deque, Iterator, List, Optional

from currency_converter.models import ConversionRecord


class ConversionHistory:
    """Newest-first, append-only record of successful conversions."""

    def __init__(self) -> None:
        self._entries: Deque[ConversionRecord] = deque()

    def record(self, entry: ConversionRecord) -> None:
        self._entries.appendleft(entry)

    def list(self) -> List[ConversionRecord]:
        """Copy of every record, most recent first."""
        return list(self._entries)

    @property
    def latest(self) -> Optional[ConversionRecord]:
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ConversionRecord]:
        return iter(list(self._entries))
