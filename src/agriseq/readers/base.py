"""Abstract base class for delimited-text readers."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Union

from agriseq.models import TabularRow

logger = logging.getLogger(__name__)


class TabularReader(ABC):
    delimiter: str = ","

    @abstractmethod
    def tokenize(self, fh: IO[str]) -> Iterator[List[str]]:
        """Split an open stream into lists of raw field values."""
        ...

    def read(self, path: Union[str, Path]) -> Iterator[TabularRow]:
        """Yield one row per data line. A missing file yields nothing."""
        path = Path(path)
        if not path.is_file():
            logger.warning("%s not found, skipping", path)
            return
        logger.debug("Reading %s with %s", path, type(self).__name__)
        # utf-8-sig drops the BOM that FAOSTAT exports start with
        with open(path, newline="", encoding="utf-8-sig", errors="replace") as fh:
            yield from rows_from_fields(self.tokenize(fh), self.delimiter)


def rows_from_fields(lines: Iterable[List[str]], delimiter: str = ",") -> Iterator[TabularRow]:
    """Zip field lists against the first non-blank line.

    A line is blank when it holds nothing but whitespace; a line of empty
    fields such as ``,,,`` still counts. Short rows are padded with "" and
    extra trailing fields are dropped.
    """
    headers = None
    for fields in lines:
        if not delimiter.join(fields).strip():
            continue
        if headers is None:
            headers = fields
            continue
        yield {
            name: fields[i] if i < len(fields) else ""
            for i, name in enumerate(headers)
        }
