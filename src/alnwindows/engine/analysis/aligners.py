from abc import ABC, abstractmethod
import logging
from typing import Union

from Bio.Align import PairwiseAligner
import numpy as np

from alnwindows.engine.exceptions.alignment import AlignmentError
from alnwindows.engine.structures.alignment import AlignmentStatistics, LocalAlignment

logger = logging.getLogger(__name__)


class LocalAlignmentEngine(ABC):

    @abstractmethod
    def align(self, reference: str, query: str) -> LocalAlignment:
        pass


def striped_smith_waterman_aligner() -> PairwiseAligner:
    # Default scores of the Striped Smith-Waterman library
    aligner = PairwiseAligner()
    aligner.mode = "local"
    aligner.match_score = 2
    aligner.mismatch_score = -2
    aligner.open_gap_score = -3
    aligner.extend_gap_score = -1
    return aligner


class BiopythonLocalAlignmentEngine(LocalAlignmentEngine):
    def __init__(self, aligner: Union[PairwiseAligner, None] = None):
        self._aligner = aligner if aligner is not None else striped_smith_waterman_aligner()

    def align(self, reference: str, query: str) -> LocalAlignment:
        if len(reference) == 0 or len(query) == 0:
            raise AlignmentError("Both the reference and the query must be non-empty to be aligned.")
        alignments = self._aligner.align(reference.upper(), query.upper())
        try:
            top_alignment = alignments[0]
        except IndexError:
            raise AlignmentError("No local alignment was found between the query and the reference.")
        # Row 0 holds reference coordinates, row 1 query coordinates
        coordinates = top_alignment.coordinates
        local_alignment = LocalAlignment(
            reference_start=int(np.min(coordinates[0])),
            reference_end=int(np.max(coordinates[0])),
            query_start=int(np.min(coordinates[1])),
            query_end=int(np.max(coordinates[1])),
            score=top_alignment.score # type: ignore
        )
        logger.debug("Top local alignment (score %s): reference [%d, %d), query [%d, %d)",
                     local_alignment.score,
                     local_alignment.reference_start, local_alignment.reference_end,
                     local_alignment.query_start, local_alignment.query_end)
        return local_alignment


def localize_query(engine: LocalAlignmentEngine, query: str, reference: str) -> AlignmentStatistics:
    """Locates the query's best local match in the reference and converts it to start/length form.

    Any coordinate that is negative or ends before it starts means the engine misbehaved, and
    the request fails with AlignmentError.
    """
    local_alignment = engine.align(reference, query)
    if local_alignment.reference_start < 0:
        raise AlignmentError("Matching reference start value cannot be negative.")
    if local_alignment.reference_end < local_alignment.reference_start:
        raise AlignmentError("Matching reference end must not precede its start.")
    if local_alignment.query_start < 0:
        raise AlignmentError("Query start value cannot be negative.")
    if local_alignment.query_end < local_alignment.query_start:
        raise AlignmentError("Query end must not precede its start.")
    return AlignmentStatistics(
        reference_start=local_alignment.reference_start,
        reference_length=local_alignment.reference_end - local_alignment.reference_start,
        query_start=local_alignment.query_start,
        query_length=local_alignment.query_end - local_alignment.query_start
    )
