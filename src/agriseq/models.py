"""Record types shared by the parser, readers, merger and output writers."""

from dataclasses import dataclass, field
from typing import Dict

GENOMIC_SEQUENCE = "genomic_sequence"
AGRICULTURAL_STATISTICS = "agricultural_statistics"

OUTPUT_COLUMNS = [
    # identifiers
    "record_id",
    "data_type",
    "sequence_id",
    "source_file",
    # sequence features
    "sequence_length",
    "gc_content",
    "a_count",
    "t_count",
    "g_count",
    "c_count",
    "n_count",
    "quality_score_avg",
    "sequence_complexity",
    "has_ambiguous_bases",
    # mapping file
    "sample_name",
    "barcode",
    "experiment_design",
    "target_gene",
    "platform",
    # FAOSTAT
    "area",
    "item",
    "element",
    "year",
    "value",
    "unit",
]

# Ordered mapping of column name -> value, as produced by the tabular readers.
TabularRow = Dict[str, str]


@dataclass
class RawRecord:
    header: str = ""
    sequence: str = ""
    separator_line: str = ""
    quality: str = ""


@dataclass(frozen=True)
class SequenceFeatures:
    sequence_id: str
    header: str
    length: int
    gc_content: float
    a_count: int
    t_count: int
    g_count: int
    c_count: int
    n_count: int
    avg_quality: float
    complexity: int
    has_ambiguous: bool
    source_file: str = ""

    @property
    def base_counts(self) -> Dict[str, int]:
        return {
            "A": self.a_count,
            "T": self.t_count,
            "G": self.g_count,
            "C": self.c_count,
            "N": self.n_count,
        }


@dataclass(frozen=True)
class MergedRecord:
    """One row of the training table.

    The schema is the same for both data types; fields that belong to the
    other type keep their empty defaults.
    """

    record_id: str
    data_type: str
    sequence_id: str = ""
    source_file: str = ""
    sequence_length: int = 0
    gc_content: float = 0.0
    a_count: int = 0
    t_count: int = 0
    g_count: int = 0
    c_count: int = 0
    n_count: int = 0
    quality_score_avg: float = 0.0
    sequence_complexity: int = 0
    has_ambiguous_bases: int = 0
    sample_name: str = ""
    barcode: str = ""
    experiment_design: str = ""
    target_gene: str = ""
    platform: str = ""
    area: str = ""
    item: str = ""
    element: str = ""
    year: str = ""
    value: str = ""
    unit: str = ""

    def to_dict(self) -> dict:
        """Return the output columns in order, floats rendered to 2 decimals."""
        row = {}
        for col in OUTPUT_COLUMNS:
            val = getattr(self, col)
            row[col] = f"{val:.2f}" if isinstance(val, float) else val
        return row


@dataclass
class MergeSummary:
    total_records: int = 0
    sequence_records: int = 0
    faostat_records: int = 0
    avg_sequence_length: float = 0.0
    avg_gc_content: float = 0.0
    unique_sources: int = 0
    # Detail carried into the JSON report only
    min_length: int = 0
    max_length: int = 0
    avg_quality: float = 0.0
    by_type: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_records": self.total_records,
            "sequence_records": self.sequence_records,
            "faostat_records": self.faostat_records,
            "avg_sequence_length": self.avg_sequence_length,
            "avg_gc_content": self.avg_gc_content,
            "unique_sources": self.unique_sources,
        }
