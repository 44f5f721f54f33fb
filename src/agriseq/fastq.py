"""Streaming FASTQ parser.

Records are built from every four non-blank lines (header, sequence,
separator, quality). The parser is permissive: malformed input never raises,
incomplete records simply carry empty fields.
"""

import gzip
import logging
from pathlib import Path
from typing import IO, Iterator, List, Optional, Union

from agriseq.models import RawRecord

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
_FIELDS = ("header", "sequence", "separator_line", "quality")


class FastqParser:
    """State of a single FASTQ pass.

    Create one instance per file; ``feed`` text chunks in order and call
    ``close`` once the stream is exhausted.
    """

    def __init__(self):
        self._buffer = ""
        self._line_count = 0
        self._current: Optional[RawRecord] = None
        self._closed = False

    def feed(self, chunk: str) -> List[RawRecord]:
        """Consume a chunk of text, returning the records it completed."""
        if self._closed:
            raise ValueError("parser already closed")
        self._buffer += chunk
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()  # trailing partial line
        completed = []
        for line in lines:
            rec = self._parse_line(line)
            if rec is not None:
                completed.append(rec)
        return completed

    def close(self) -> List[RawRecord]:
        """Flush the buffered partial line and any partial record."""
        if self._closed:
            return []
        self._closed = True
        completed = []
        if self._buffer.strip():
            rec = self._parse_line(self._buffer)
            if rec is not None:
                completed.append(rec)
        self._buffer = ""
        if self._current is not None and self._current.header:
            completed.append(self._current)
        self._current = None
        return completed

    def _parse_line(self, line: str) -> Optional[RawRecord]:
        stripped = line.strip()
        if not stripped:
            return None

        role = self._line_count % 4
        self._line_count += 1
        if role == 0:
            # Drop the '@' marker position
            self._current = RawRecord(header=stripped[1:])
            return None

        setattr(self._current, _FIELDS[role], stripped)
        if role == 3:
            rec, self._current = self._current, None
            return rec
        return None


def iter_records(stream: IO[str], chunk_size: int = CHUNK_SIZE) -> Iterator[RawRecord]:
    """Lazily parse FASTQ records from an open text stream."""
    parser = FastqParser()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        yield from parser.feed(chunk)
    yield from parser.close()


def open_text(path: Union[str, Path]) -> IO[str]:
    """Open a plain or gzip-compressed file for text reading."""
    path = str(path)
    if path.endswith(".gz"):
        return gzip.open(path, "rt", encoding="utf-8", errors="replace")
    return open(path, "rt", encoding="utf-8", errors="replace")


def read_fastq(path: Union[str, Path], chunk_size: int = CHUNK_SIZE) -> Iterator[RawRecord]:
    """Yield the records of a FASTQ file. Re-call to restart from the top."""
    logger.debug("Parsing FASTQ file %s", path)
    with open_text(path) as fh:
        yield from iter_records(fh, chunk_size)
