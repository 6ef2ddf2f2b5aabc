from typing import Iterable, Mapping, Sequence

from alnwindows.engine.exceptions.alignment import RangeError
from alnwindows.engine.structures.alignment import WindowDiversity


def count_window_sequences(sequences: Iterable[str], start: int, size: int) -> dict[str, int]:
    """Tallies the distinct substrings found at [start, start + size) across sequences.

    A start past the end of a sequence is an error, but a window that runs off the end is
    shortened to whatever remains. Keys keep the order in which each substring was first seen.
    """
    if size < 1:
        raise ValueError(f"Window size must be positive (got {size}).")
    table: dict[str, int] = {}
    for sequence in sequences:
        if start < 0 or start > len(sequence):
            raise RangeError(start, size, len(sequence))
        window = sequence[start:start + size]
        table[window] = table.get(window, 0) + 1
    return table


def sort_by_count(table: Mapping[str, int]) -> list[tuple[str, int]]:
    # sorted() is stable, so equal counts stay in first-seen order
    return sorted(table.items(), key=lambda item: item[1], reverse=True)


def scan_windows(sequences: Sequence[str], alignment_length: int, window_size: int, step_size: int) -> list[WindowDiversity]:
    """Counts unique sequences in windows sliding along the alignment.

    Windows are emitted while window_start + window_size is strictly less than the alignment
    length, so the final partial (or exactly end-aligned) window is never reported.
    """
    if window_size < 1:
        raise ValueError(f"Window size must be positive (got {window_size}).")
    if step_size < 1:
        raise ValueError(f"Step size must be positive (got {step_size}).")
    result = []
    window_start = 0
    while window_start + window_size < alignment_length:
        table = count_window_sequences(sequences, window_start, window_size)
        result.append(WindowDiversity(window_start, tuple(table.values())))
        window_start += step_size
    return result
