from dataclasses import dataclass
from typing import Sequence

@dataclass
class AlignmentRecord:
    header: str
    sequence: str

@dataclass(frozen=True)
class LocalAlignment:
    reference_start: int
    reference_end: int
    query_start: int
    query_end: int
    score: float = 0

@dataclass(frozen=True)
class AlignmentStatistics:
    reference_start: int
    reference_length: int
    query_start: int
    query_length: int

@dataclass(frozen=True)
class WindowDiversity:
    window_start: int
    counts: Sequence[int]
