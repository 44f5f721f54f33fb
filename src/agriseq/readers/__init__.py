"""Reader registry. Each input role is read with a fixed format."""

from pathlib import Path
from typing import Union

from agriseq.readers.base import TabularReader
from agriseq.readers.csv_reader import CSVReader
from agriseq.readers.tsv_reader import TSVReader

FAOSTAT = "FAOSTAT"
MAPPING = "mapping"

# input role -> reader class; the file name plays no part
READER_CLASSES = {
    FAOSTAT: CSVReader,
    MAPPING: TSVReader,
}


def reader_for_role(role: str) -> TabularReader:
    return READER_CLASSES[role]()


def read_csv(path: Union[str, Path]):
    return CSVReader().read(path)


def read_tsv(path: Union[str, Path]):
    return TSVReader().read(path)
