"""Write merged records to CSV and the run summary to JSON."""

import csv
import io
import json
import logging
import os
from datetime import datetime, timezone
from typing import List, Optional

from agriseq.models import (
    AGRICULTURAL_STATISTICS,
    GENOMIC_SEQUENCE,
    MergedRecord,
    MergeSummary,
    OUTPUT_COLUMNS,
)

logger = logging.getLogger(__name__)


def _writer(fh) -> csv.DictWriter:
    return csv.DictWriter(
        fh,
        fieldnames=OUTPUT_COLUMNS,
        delimiter=",",
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
        extrasaction="ignore",
    )


def write_csv(records: List[MergedRecord], filepath: str) -> None:
    with open(filepath, "w", newline="", encoding="utf-8") as fh:
        writer = _writer(fh)
        writer.writeheader()
        for rec in records:
            writer.writerow(rec.to_dict())
    logger.info("Wrote %d records to %s", len(records), filepath)


def records_to_bytes(records: List[MergedRecord]) -> bytes:
    """Serialize records to CSV bytes (for the dashboard download button)."""
    buf = io.StringIO()
    writer = _writer(buf)
    writer.writeheader()
    for rec in records:
        writer.writerow(rec.to_dict())
    return buf.getvalue().encode("utf-8")


def build_report(
    summary: MergeSummary,
    output_file: str,
    timestamp: Optional[datetime] = None,
) -> dict:
    """Detailed key/value report of a run."""
    timestamp = timestamp or datetime.now(timezone.utc)
    size_mb = 0.0
    if output_file and os.path.isfile(output_file):
        size_mb = round(os.path.getsize(output_file) / (1024 * 1024), 2)

    report = summary.to_dict()
    report.update({
        "processing_timestamp": timestamp.isoformat(),
        "data_types": {
            GENOMIC_SEQUENCE: summary.by_type.get(GENOMIC_SEQUENCE, 0),
            AGRICULTURAL_STATISTICS: summary.by_type.get(AGRICULTURAL_STATISTICS, 0),
        },
        "sequence_stats": {
            "min_length": summary.min_length,
            "max_length": summary.max_length,
            "avg_quality": summary.avg_quality,
        },
        "file_info": {
            "output_file": os.path.basename(output_file) if output_file else "",
            "columns": list(OUTPUT_COLUMNS),
            "size_mb": size_mb,
        },
    })
    return report


def write_summary(
    summary: MergeSummary,
    output_file: str,
    filepath: str,
    timestamp: Optional[datetime] = None,
) -> dict:
    report = build_report(summary, output_file, timestamp)
    with open(filepath, "w", encoding="utf-8") as fh:
        json.dump(report, fh, indent=2)
        fh.write("\n")
    logger.info("Wrote summary to %s", filepath)
    return report
