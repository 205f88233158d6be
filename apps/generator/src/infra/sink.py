"""
NDJSON sink for generated records.

One compact JSON object per line, no enclosing array, so output can be
streamed and consumed line by line. Events and profiles go to separate
streams.
"""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional, Protocol, TextIO


class NdjsonRecord(Protocol):
    def to_json(self) -> str: ...


class NdjsonSink:
    """Writes records (events or profiles) as newline-delimited JSON."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._written = 0

    @property
    def written(self) -> int:
        return self._written

    def write(self, record: NdjsonRecord) -> None:
        self._stream.write(record.to_json())
        self._stream.write("\n")
        self._written += 1

    def write_all(self, records: Iterable[NdjsonRecord]) -> int:
        """
        Write every record, in order.

        Returns:
            Number of lines written by this call.
        """
        count = 0
        for record in records:
            self.write(record)
            count += 1
        self.flush()
        return count

    def flush(self) -> None:
        self._stream.flush()


@contextmanager
def open_ndjson_stream(path: Optional[str] = None) -> Iterator[TextIO]:
    """
    Yield an output stream for NDJSON records.

    Without a path this is stdout, which is flushed but never closed. With a
    path, parent directories are created and the file is truncated.
    """
    if path is None:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as stream:
        yield stream
