from typing import Sequence, Union

from alnwindows.engine.analysis.aligners import BiopythonLocalAlignmentEngine, LocalAlignmentEngine, localize_query
from alnwindows.engine.analysis.consensus import build_consensus, impute_sequence
from alnwindows.engine.analysis.windows import count_window_sequences, scan_windows, sort_by_count
from alnwindows.engine.exceptions.alignment import AlignmentError, FormatError, RangeError
from alnwindows.engine.structures.alignment import AlignmentRecord, AlignmentStatistics, WindowDiversity


class MultipleSequenceAlignment:
    """In-memory alignment of equal-length nucleotide sequences.

    The consensus is built once at construction. Imputing missing data rewrites the stored
    sequences against that consensus but never rebuilds it, so the consensus always reflects
    the alignment as it was read.
    """

    def __init__(self, records: Sequence[AlignmentRecord], source: str = "alignment"):
        if len(records) < 2:
            raise FormatError("an alignment must have at least two sequence records", source)
        alignment_length = len(records[0].sequence)
        for record in records:
            if len(record.sequence) != alignment_length:
                raise FormatError(f"all sequences must be the same length (\"{record.header}\" has {len(record.sequence)}, expected {alignment_length})", source)
        self._records = [AlignmentRecord(record.header, record.sequence) for record in records]
        self._consensus = build_consensus(self._sequences())

    def _sequences(self) -> list[str]:
        return [record.sequence for record in self._records]

    @property
    def records(self) -> tuple[AlignmentRecord, ...]:
        return tuple(AlignmentRecord(record.header, record.sequence) for record in self._records)

    @property
    def consensus(self) -> str:
        return self._consensus

    def headers(self) -> list[str]:
        return [record.header for record in self._records]

    def sequence_number(self) -> int:
        return len(self._records)

    def alignment_length(self) -> int:
        return len(self._records[0].sequence)

    def impute_missing(self):
        for record in self._records:
            record.sequence = impute_sequence(record.sequence, self._consensus)

    def extract_window(self, start: int, size: int) -> dict[str, int]:
        return count_window_sequences(self._sequences(), start, size)

    def extract_window_sorted(self, start: int, size: int) -> list[tuple[str, int]]:
        return sort_by_count(self.extract_window(start, size))

    def extract_consensus_window(self, start: int, size: int) -> str:
        if size < 1:
            raise ValueError(f"Window size must be positive (got {size}).")
        if start < 0 or start + size > len(self._consensus):
            raise RangeError(start, size, len(self._consensus))
        return self._consensus[start:start + size]

    def diversity_in_windows(self, window_size: int, step_size: int) -> list[WindowDiversity]:
        return scan_windows(self._sequences(), self.alignment_length(), window_size, step_size)

    def locate_query(self, query: str, engine: Union[LocalAlignmentEngine, None] = None) -> AlignmentStatistics:
        if engine is None:
            engine = BiopythonLocalAlignmentEngine()
        return localize_query(engine, query, self._consensus)

    def extract_query_window(self, query: str, engine: Union[LocalAlignmentEngine, None] = None) -> tuple[AlignmentStatistics, str, list[tuple[str, int]]]:
        """Finds the window best matching query and tallies its unique sequences.

        Returns the match statistics, the matched part of the query and the sorted table of
        unique sequences in the matching window.
        """
        statistics = self.locate_query(query, engine)
        if statistics.reference_length == 0:
            raise AlignmentError("The query has no matching window in the alignment consensus.")
        matched_query = query[statistics.query_start:statistics.query_start + statistics.query_length]
        unique_sequences = self.extract_window_sorted(statistics.reference_start, statistics.reference_length)
        return statistics, matched_query, unique_sequences
