"""Comma-delimited reader with double-quote escaping (FAOSTAT exports)."""

import csv
from typing import IO, Iterator, List

from agriseq.readers.base import TabularReader


class CSVReader(TabularReader):
    delimiter = ","

    def tokenize(self, fh: IO[str]) -> Iterator[List[str]]:
        # The csv module carries quote state across physical lines, so quoted
        # fields may contain embedded newlines.
        reader = csv.reader(fh, delimiter=self.delimiter, quotechar='"', doublequote=True,
                            skipinitialspace=True)
        for fields in reader:
            yield [f.strip() for f in fields]
