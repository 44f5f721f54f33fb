"""Per-read sequence descriptors."""

from typing import Dict

from agriseq.models import RawRecord, SequenceFeatures

PHRED_OFFSET = 33
KMER_SIZE = 3


def base_counts(sequence: str) -> Dict[str, int]:
    """Count A/T/G/C (case-sensitive); every other character counts as N."""
    counts = {"A": 0, "T": 0, "G": 0, "C": 0, "N": 0}
    for base in sequence:
        if base in ("A", "T", "G", "C"):
            counts[base] += 1
        else:
            counts["N"] += 1
    return counts


def gc_content(sequence: str) -> float:
    if not sequence:
        return 0.0
    gc = sum(1 for base in sequence if base in "GC")
    return round(gc / len(sequence) * 100, 2)


def average_quality(quality: str) -> float:
    """Mean Phred+33 score of a quality string, 0 when empty."""
    if not quality:
        return 0.0
    total = sum(ord(ch) - PHRED_OFFSET for ch in quality)
    return round(total / len(quality), 2)


def kmer_complexity(sequence: str, k: int = KMER_SIZE) -> int:
    """Number of distinct k-mers across all sliding positions."""
    if len(sequence) < k:
        return 0
    return len({sequence[i : i + k] for i in range(len(sequence) - k + 1)})


def extract_features(record: RawRecord, index: int, source_file: str = "") -> SequenceFeatures:
    """Compute the descriptors of one record.

    ``index`` is the 1-based position of the record within its file.
    """
    seq = record.sequence
    counts = base_counts(seq)
    return SequenceFeatures(
        sequence_id=f"seq_{index}",
        header=record.header,
        length=len(seq),
        gc_content=gc_content(seq),
        a_count=counts["A"],
        t_count=counts["T"],
        g_count=counts["G"],
        c_count=counts["C"],
        n_count=counts["N"],
        avg_quality=average_quality(record.quality),
        complexity=kmer_complexity(seq),
        has_ambiguous=counts["N"] > 0,
        source_file=source_file,
    )
