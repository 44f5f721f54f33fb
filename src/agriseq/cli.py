"""Command-line interface for agriseq-merger."""

import argparse
import logging
import sys
from typing import List, Optional

from agriseq.core import PipelineConfig, PipelineSession
from agriseq.errors import NoDataAvailable
from agriseq.merge import MATCH_STRATEGIES


def build_parser() -> argparse.ArgumentParser:
    defaults = PipelineConfig()
    parser = argparse.ArgumentParser(
        prog="agriseq",
        description=(
            "Extract FASTQ reads, compute per-sequence features and merge them with "
            "FAOSTAT statistics and a sample-mapping file into one training CSV."
        ),
    )
    parser.add_argument(
        "--archive", type=str, default=None,
        help=f"FASTQ archive to unpack, path or URL (default: {defaults.archive})",
    )
    parser.add_argument(
        "--extract-dir", type=str, default=None,
        help=f"Directory the archive is unpacked into and scanned for FASTQ files "
             f"(default: {defaults.extract_dir})",
    )
    parser.add_argument(
        "--faostat", type=str, default=None,
        help=f"FAOSTAT CSV export, path or URL (default: {defaults.faostat})",
    )
    parser.add_argument(
        "--mapping", type=str, default=None,
        help=f"Tab-delimited sample-mapping file, path or URL (default: {defaults.mapping})",
    )
    parser.add_argument(
        "-o", "--output", type=str, default=None,
        help=f"Merged CSV output path (default: {defaults.output})",
    )
    parser.add_argument(
        "--summary", type=str, default=None,
        help=f"JSON summary report path (default: {defaults.summary})",
    )
    parser.add_argument(
        "--match", choices=list(MATCH_STRATEGIES), default=None, dest="match_strategy",
        help="How reads are matched to mapping rows (default: substring)",
    )
    parser.add_argument(
        "--skip-extract", action="store_true",
        help="Do not unpack the archive; use files already in the extraction directory",
    )
    parser.add_argument(
        "--work-dir", type=str, default=None,
        help="Directory relative paths resolve against (env: AGRISEQ_WORK_DIR)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable verbose/debug logging",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> PipelineConfig:
    return PipelineConfig.from_env(
        archive=args.archive,
        extract_dir=args.extract_dir,
        faostat=args.faostat,
        mapping=args.mapping,
        output=args.output,
        summary=args.summary,
        match_strategy=args.match_strategy,
        skip_extract=args.skip_extract or None,
        work_dir=args.work_dir,
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    session = PipelineSession(config_from_args(args))

    print("Starting data extraction and merging...")
    try:
        result = session.run()
    except NoDataAvailable as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    s = result.summary
    print("=" * 50)
    print("DATA PROCESSING SUMMARY")
    print("=" * 50)
    print(f"Total Records: {s.total_records}")
    print(f"Genomic Sequences: {s.sequence_records}")
    print(f"FAOSTAT Records: {s.faostat_records}")
    print(f"Average Sequence Length: {s.avg_sequence_length:.2f} bp")
    print(f"Average GC Content: {s.avg_gc_content:.2f}%")
    print(f"Unique Source Files: {s.unique_sources}")
    print("=" * 50)
    print(f"Training data: {result.output_path}")
    print(f"Summary: {result.summary_path}")


if __name__ == "__main__":
    main()
