"""Unpack the FASTQ archive and locate sequence files."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Union

from agriseq.errors import ExtractionError

logger = logging.getLogger(__name__)

FASTQ_SUFFIXES = (".fastq", ".fq", ".fastq.gz", ".fq.gz")


def _command_chain(archive: Path, dest: Path) -> List[List[str]]:
    return [
        ["7z", "x", str(archive), f"-o{dest}", "-y"],
        ["7za", "x", str(archive), f"-o{dest}", "-y"],
        # p7zip unpacks into its working directory; -k keeps the archive
        ["p7zip", "-d", "-k", str(archive)],
    ]


class ArchiveExtractor:
    def __init__(self, extract_dir: Union[str, Path]):
        self.extract_dir = Path(extract_dir)

    def extract(self, archive: Union[str, Path]) -> str:
        """Unpack ``archive`` into the extraction directory.

        External 7-Zip tools are tried first, then the standard library's
        unpacker. Returns the name of the method that succeeded.
        """
        archive = Path(archive).resolve()
        if not archive.is_file():
            raise ExtractionError(f"Archive not found: {archive}")
        self.extract_dir.mkdir(parents=True, exist_ok=True)
        dest = self.extract_dir.resolve()

        for cmd in _command_chain(archive, dest):
            tool = cmd[0]
            logger.info("Trying %s...", tool)
            try:
                proc = subprocess.run(
                    cmd, cwd=dest, capture_output=True, text=True, check=True
                )
            except OSError as exc:
                # missing or not executable
                logger.info("%s unavailable: %s", tool, exc)
                continue
            except subprocess.CalledProcessError as exc:
                logger.warning(
                    "%s failed with code %d: %s", tool, exc.returncode, (exc.stderr or "").strip()
                )
                continue
            logger.debug("%s output: %s", tool, proc.stdout.strip())
            logger.info("Extracted %s with %s", archive.name, tool)
            return tool

        try:
            shutil.unpack_archive(str(archive), str(dest))
        except (shutil.ReadError, ValueError) as exc:
            logger.warning("shutil.unpack_archive failed: %s", exc)
        else:
            logger.info("Extracted %s with shutil", archive.name)
            return "shutil"

        raise ExtractionError(
            "All extraction methods failed. Install 7-Zip or extract the archive manually."
        )


def is_fastq_name(name: str) -> bool:
    lowered = name.lower()
    return lowered.endswith(FASTQ_SUFFIXES) or "fastq" in lowered


def find_fastq_files(directory: Union[str, Path]) -> List[Path]:
    """Recursively list sequence files under ``directory`` in sorted order."""
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Extraction directory %s does not exist", directory)
        return []
    return sorted(p for p in directory.rglob("*") if p.is_file() and is_fastq_name(p.name))
