"""Tab-delimited reader for sample-mapping files."""

import csv
from typing import IO, Iterator, List

from agriseq.readers.base import TabularReader


class TSVReader(TabularReader):
    delimiter = "\t"

    def tokenize(self, fh: IO[str]) -> Iterator[List[str]]:
        # Plain tab split: quotes are ordinary characters here
        yield from csv.reader(fh, delimiter=self.delimiter, quoting=csv.QUOTE_NONE)
