"""Orchestrator: extracts, parses, ingests and merges, then writes outputs."""

import csv
import logging
import os
import zlib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Tuple, Union

from agriseq.errors import ExtractionError
from agriseq.extract import ArchiveExtractor, find_fastq_files
from agriseq.fastq import read_fastq
from agriseq.features import extract_features
from agriseq.merge import DEFAULT_IDENTITY_COLUMNS, MergeResult, RecordMerger
from agriseq.models import MergedRecord, MergeSummary, SequenceFeatures, TabularRow
from agriseq.output import write_csv, write_summary
from agriseq.readers import FAOSTAT, MAPPING, reader_for_role
from agriseq.sources import SourceResolver, is_url

logger = logging.getLogger(__name__)

WORK_DIR_ENV = "AGRISEQ_WORK_DIR"


@dataclass
class PipelineConfig:
    archive: str = "FASTQ.7z"
    extract_dir: str = "extracted_data"
    faostat: str = "FAOSTAT_data_en_6-23-2025.csv"
    mapping: str = "mapping_files/2097_mapping_file.txt"
    output: str = "MODEL_TRAINING_DATA.csv"
    summary: str = "data_summary.json"
    match_strategy: str = "substring"
    identity_columns: Tuple[str, ...] = DEFAULT_IDENTITY_COLUMNS
    skip_extract: bool = False
    work_dir: str = "."

    @classmethod
    def from_env(cls, **overrides) -> "PipelineConfig":
        """Build a config whose work_dir defaults to $AGRISEQ_WORK_DIR."""
        if not overrides.get("work_dir") and os.environ.get(WORK_DIR_ENV):
            overrides["work_dir"] = os.environ[WORK_DIR_ENV]
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return cls(**overrides)

    def locate(self, value: str) -> Union[str, Path]:
        """Resolve a configured location against work_dir (URLs pass through)."""
        if is_url(value):
            return value
        path = Path(value)
        return path if path.is_absolute() else Path(self.work_dir) / path


@dataclass
class PipelineResult:
    records: List[MergedRecord] = field(default_factory=list)
    summary: MergeSummary = field(default_factory=MergeSummary)
    report: dict = field(default_factory=dict)
    output_path: Optional[Path] = None
    summary_path: Optional[Path] = None
    fastq_files: List[str] = field(default_factory=list)


class DataPipeline:
    def __init__(self, config: PipelineConfig, resolver: Optional[SourceResolver] = None):
        self.config = config
        self._extract_dir = Path(config.locate(config.extract_dir))
        self._resolver = resolver or SourceResolver(Path(config.work_dir) / "downloads")
        self._merger = RecordMerger(
            identity_columns=config.identity_columns,
            strategy=config.match_strategy,
        )
        self._fastq_files: List[str] = []

    def extract_archive(self) -> None:
        """Unpack the archive; failure falls back to pre-extracted files."""
        if self.config.skip_extract:
            logger.info("Skipping archive extraction")
            return
        archive = self._resolver.resolve(self.config.locate(self.config.archive))
        if archive is None:
            logger.warning("Archive unavailable, checking for pre-extracted files...")
            return
        try:
            ArchiveExtractor(self._extract_dir).extract(archive)
        except ExtractionError as exc:
            logger.warning("Extraction failed, checking for pre-extracted files: %s", exc)

    def process_fastq_files(self) -> List[SequenceFeatures]:
        files = find_fastq_files(self._extract_dir)
        if not files:
            logger.warning("No FASTQ files found in %s", self._extract_dir)
            return []
        logger.info("Found %d FASTQ file(s)", len(files))

        all_features: List[SequenceFeatures] = []
        self._fastq_files = []
        for path in files:
            try:
                logger.info("Processing %s (%.2f MB)", path.name, path.stat().st_size / 1024 / 1024)
                # read_fastq builds a fresh parser for every file
                features = [
                    extract_features(rec, i, path.name)
                    for i, rec in enumerate(read_fastq(path), start=1)
                ]
            except (OSError, EOFError, UnicodeDecodeError, zlib.error):
                logger.error("Error processing %s", path, exc_info=True)
                continue
            logger.info("Extracted %d sequences from %s", len(features), path.name)
            self._fastq_files.append(path.name)
            all_features.extend(features)

        logger.info("Total sequences processed: %d", len(all_features))
        return all_features

    def read_table(self, source: str, role: str) -> Tuple[List[TabularRow], str]:
        """Load a FAOSTAT (CSV) or mapping (TSV) input; any failure yields no rows."""
        path = self._resolver.resolve(self.config.locate(source))
        if path is None:
            logger.warning("%s source unavailable, skipping", role)
            return [], ""
        try:
            rows = list(reader_for_role(role).read(path))
        except (OSError, csv.Error):
            logger.error("Error reading %s file %s", role, path, exc_info=True)
            return [], path.name
        logger.info("Loaded %d %s records", len(rows), role)
        return rows, path.name

    def run(self) -> PipelineResult:
        """Run every step. Raises NoDataAvailable when nothing could be loaded."""
        logger.info("Step 1: extracting %s", self.config.archive)
        self.extract_archive()

        logger.info("Step 2: processing FASTQ files")
        sequences = self.process_fastq_files()

        logger.info("Step 3: reading FAOSTAT data")
        faostat_rows, faostat_name = self.read_table(self.config.faostat, FAOSTAT)

        logger.info("Step 4: parsing mapping file")
        mapping_rows, _ = self.read_table(self.config.mapping, MAPPING)

        logger.info("Step 5: merging datasets")
        merged: MergeResult = self._merger.merge(
            sequences, faostat_rows, mapping_rows, faostat_source=faostat_name
        )

        logger.info("Step 6: writing outputs")
        output_path = Path(self.config.locate(self.config.output))
        summary_path = Path(self.config.locate(self.config.summary))
        for p in (output_path, summary_path):
            p.parent.mkdir(parents=True, exist_ok=True)
        write_csv(merged.records, str(output_path))
        report = write_summary(merged.summary, str(output_path), str(summary_path))

        return PipelineResult(
            records=merged.records,
            summary=merged.summary,
            report=report,
            output_path=output_path,
            summary_path=summary_path,
            fastq_files=list(self._fastq_files),
        )


class PipelineSession:
    """Holds the configuration and the latest processed dataset.

    One session is passed to whatever drives the pipeline (CLI run,
    dashboard) instead of keeping module-level state.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig.from_env()
        self.latest: Optional[PipelineResult] = None

    @property
    def has_data(self) -> bool:
        return self.latest is not None and bool(self.latest.records)

    def run(self, **overrides) -> PipelineResult:
        """Run the pipeline, optionally overriding config fields for this run."""
        if overrides:
            self.config = replace(self.config, **overrides)
        result = DataPipeline(self.config).run()
        self.latest = result
        return result
