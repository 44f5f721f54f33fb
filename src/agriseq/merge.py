"""Join sequence features with mapping and FAOSTAT rows into one flat table."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from agriseq.errors import NoDataAvailable
from agriseq.models import (
    AGRICULTURAL_STATISTICS,
    GENOMIC_SEQUENCE,
    MergedRecord,
    MergeSummary,
    SequenceFeatures,
    TabularRow,
)

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_COLUMNS = ("sample_name", "barcode")
MATCH_STRATEGIES = ("substring", "exact")

# merged field -> mapping-file column
MAPPING_FIELDS = {
    "sample_name": "sample_name",
    "barcode": "barcode",
    "experiment_design": "experiment_design_description",
    "target_gene": "target_gene",
    "platform": "platform",
}

# merged field -> FAOSTAT column
FAOSTAT_FIELDS = {
    "area": "Area",
    "item": "Item",
    "element": "Element",
    "year": "Year",
    "value": "Value",
    "unit": "Unit",
}


@dataclass
class MergeResult:
    records: List[MergedRecord] = field(default_factory=list)
    summary: MergeSummary = field(default_factory=MergeSummary)


class RecordMerger:
    """Best-effort join of sequence reads against the sample-mapping file.

    With the ``substring`` strategy an identifier that has no exact key in
    the lookup is compared against every key by containment in either
    direction, which is O(records x mapping rows).
    """

    def __init__(
        self,
        identity_columns: Sequence[str] = DEFAULT_IDENTITY_COLUMNS,
        strategy: str = "substring",
    ):
        if strategy not in MATCH_STRATEGIES:
            raise ValueError(f"Unknown match strategy: {strategy}")
        self.identity_columns = tuple(identity_columns)
        self.strategy = strategy

    def build_lookup(self, mapping_rows: Iterable[TabularRow]) -> Dict[str, TabularRow]:
        """Key every mapping row by each of its non-empty identity values.

        A later row with the same key replaces the earlier one.
        """
        lookup: Dict[str, TabularRow] = {}
        for row in mapping_rows:
            for col in self.identity_columns:
                key = row.get(col, "")
                if key:
                    lookup[key] = row
        return lookup

    def find_match(
        self, features: SequenceFeatures, lookup: Dict[str, TabularRow]
    ) -> Optional[TabularRow]:
        for ident in (features.sequence_id, features.header, features.source_file):
            if not ident:
                continue
            if ident in lookup:
                return lookup[ident]
            if self.strategy == "exact":
                continue
            for key, row in lookup.items():
                if key in ident or ident in key:
                    return row
        return None

    def merge(
        self,
        sequences: Iterable[SequenceFeatures],
        faostat_rows: Iterable[TabularRow],
        mapping_rows: Iterable[TabularRow] = (),
        faostat_source: str = "",
    ) -> MergeResult:
        sequences = list(sequences)
        faostat_rows = list(faostat_rows)
        if not sequences and not faostat_rows:
            raise NoDataAvailable("No sequence or FAOSTAT records to merge")

        lookup = self.build_lookup(mapping_rows)
        logger.info(
            "Merging %d sequences, %d FAOSTAT rows, %d mapping keys",
            len(sequences), len(faostat_rows), len(lookup),
        )

        records: List[MergedRecord] = []
        matched = 0
        for feat in sequences:
            mapping = self.find_match(feat, lookup) if lookup else None
            if mapping is not None:
                matched += 1
            records.append(
                self._sequence_record(f"record_{len(records) + 1}", feat, mapping)
            )
        for row in faostat_rows:
            records.append(
                self._faostat_record(f"record_{len(records) + 1}", row, faostat_source)
            )

        if sequences and lookup:
            logger.info("Matched %d of %d sequences to mapping rows", matched, len(sequences))

        return MergeResult(records=records, summary=summarize(records))

    @staticmethod
    def _sequence_record(
        record_id: str, feat: SequenceFeatures, mapping: Optional[TabularRow]
    ) -> MergedRecord:
        mapped = {
            name: (mapping.get(col, "") if mapping else "")
            for name, col in MAPPING_FIELDS.items()
        }
        return MergedRecord(
            record_id=record_id,
            data_type=GENOMIC_SEQUENCE,
            sequence_id=feat.sequence_id,
            source_file=feat.source_file,
            sequence_length=feat.length,
            gc_content=feat.gc_content,
            a_count=feat.a_count,
            t_count=feat.t_count,
            g_count=feat.g_count,
            c_count=feat.c_count,
            n_count=feat.n_count,
            quality_score_avg=feat.avg_quality,
            sequence_complexity=feat.complexity,
            has_ambiguous_bases=1 if feat.has_ambiguous else 0,
            **mapped,
        )

    @staticmethod
    def _faostat_record(record_id: str, row: TabularRow, source: str) -> MergedRecord:
        return MergedRecord(
            record_id=record_id,
            data_type=AGRICULTURAL_STATISTICS,
            source_file=source,
            **{name: row.get(col, "") for name, col in FAOSTAT_FIELDS.items()},
        )


def summarize(records: Sequence[MergedRecord]) -> MergeSummary:
    """Aggregate counts and sequence means over merged records."""
    seq = [r for r in records if r.data_type == GENOMIC_SEQUENCE]
    summary = MergeSummary(
        total_records=len(records),
        sequence_records=len(seq),
        faostat_records=sum(1 for r in records if r.data_type == AGRICULTURAL_STATISTICS),
        unique_sources=len({r.source_file for r in records}),
    )
    summary.by_type = {
        GENOMIC_SEQUENCE: summary.sequence_records,
        AGRICULTURAL_STATISTICS: summary.faostat_records,
    }
    if seq:
        summary.avg_sequence_length = sum(r.sequence_length for r in seq) / len(seq)
        summary.avg_gc_content = sum(r.gc_content for r in seq) / len(seq)

    lengths = [r.sequence_length for r in seq if r.sequence_length > 0]
    if lengths:
        summary.min_length, summary.max_length = min(lengths), max(lengths)
    qualities = [r.quality_score_avg for r in seq if r.quality_score_avg > 0]
    if qualities:
        summary.avg_quality = sum(qualities) / len(qualities)
    return summary

