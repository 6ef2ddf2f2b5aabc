import csv
import logging
from os import PathLike
from typing import Iterable, Sequence, Union

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from alnwindows.engine.exceptions.alignment import ConfigurationError
from alnwindows.engine.structures.alignment import AlignmentStatistics, WindowDiversity

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("tab", "fasta")
MATCH_SYMBOL = "."


def normalize_output_format(out_format: str) -> str:
    normalized = out_format.lower()
    if normalized not in OUTPUT_FORMATS:
        raise ConfigurationError(f"Unknown output format \"{out_format}\" (expected one of {', '.join(OUTPUT_FORMATS)}, case-insensitive).")
    return normalized


def mark_differences(sequence: str, consensus: str) -> str:
    """Masks positions that agree with the consensus so only the differences remain visible."""
    marked = [MATCH_SYMBOL if symbol == consensus_symbol else symbol for symbol, consensus_symbol in zip(sequence, consensus)]
    # anything past the end of the consensus is kept as is
    marked.extend(sequence[len(consensus):])
    return "".join(marked)


def statistics_to_text(statistics: AlignmentStatistics) -> str:
    # 1-based starts, like the rest of the user-facing positions
    return (f"reference_start={statistics.reference_start + 1} reference_length={statistics.reference_length} "
            f"query_start={statistics.query_start + 1} query_length={statistics.query_length}")


def _write_unique_sequences_as_tab(unique_sequences: Sequence[tuple[str, int]], consensus_window: str, handle, query: Union[str, None]):
    writer = csv.writer(handle, delimiter="\t", lineterminator="\n")
    writer.writerow([consensus_window, "consensus"])
    if query is not None:
        writer.writerow([mark_differences(query, consensus_window), "query"])
    for sequence, count in unique_sequences:
        writer.writerow([mark_differences(sequence, consensus_window), count])


def _write_unique_sequences_as_fasta(unique_sequences: Sequence[tuple[str, int]], consensus_window: str, handle, query: Union[str, None], statistics: Union[AlignmentStatistics, None]):
    records = [SeqRecord(Seq(consensus_window), id="consensus", description="")]
    if query is not None:
        description = statistics_to_text(statistics) if statistics is not None else ""
        records.append(SeqRecord(Seq(query), id="query", description=description))
    for rank, (sequence, count) in enumerate(unique_sequences, start=1):
        records.append(SeqRecord(Seq(sequence), id=f"variant_{rank}", description=f"count={count}"))
    SeqIO.write(records, handle, "fasta")


def write_unique_sequences(
        unique_sequences: Sequence[tuple[str, int]],
        consensus_window: str,
        out_format: str,
        handle: Union[str, PathLike[str]],
        query: Union[str, None] = None,
        statistics: Union[AlignmentStatistics, None] = None):
    out_format = normalize_output_format(out_format)
    with open(handle, "w", newline='') as filehandle:
        if out_format == "tab":
            _write_unique_sequences_as_tab(unique_sequences, consensus_window, filehandle, query)
        else:
            _write_unique_sequences_as_fasta(unique_sequences, consensus_window, filehandle, query, statistics)
    logger.info("Wrote %d unique sequences as %s to %s", len(unique_sequences), out_format, handle)


def write_diversity_table(diversity: Iterable[WindowDiversity], handle: Union[str, PathLike[str]]):
    windows_written = 0
    with open(handle, "w", newline='') as filehandle:
        writer = csv.writer(filehandle, delimiter="\t", lineterminator="\n")
        writer.writerow(["position", "count"])
        for window in diversity:
            for count in window.counts:
                writer.writerow([window.window_start + 1, count])
            windows_written += 1
    logger.info("Wrote diversity counts for %d windows to %s", windows_written, handle)
