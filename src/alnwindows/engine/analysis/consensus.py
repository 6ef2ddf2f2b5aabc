from collections import Counter
from typing import Iterable

# Symbols that take part in the column vote.
CONSENSUS_NUCLEOTIDES = frozenset("AaCcTtGgNn-")
# Symbols left untouched by imputation. N/n counts as missing here.
STANDARD_NUCLEOTIDES = frozenset("AaCcTtGg-")
MISSING_CONSENSUS = "N"


def column_consensus(column: Iterable[str]) -> str:
    tally = Counter(symbol for symbol in column if symbol in CONSENSUS_NUCLEOTIDES)
    if not tally:
        return MISSING_CONSENSUS
    # Highest count wins, ties go to the lexicographically smallest symbol.
    return min(tally, key=lambda symbol: (-tally[symbol], symbol))


def build_consensus(sequences: Iterable[str]) -> str:
    """Majority-vote consensus over equal-length aligned sequences."""
    return "".join(column_consensus(column) for column in zip(*sequences))


def impute_sequence(sequence: str, consensus: str) -> str:
    """Replaces every non-standard symbol (N, IUPAC ambiguity codes, etc.) with the consensus symbol of its column."""
    return "".join(
        symbol if symbol in STANDARD_NUCLEOTIDES else consensus_symbol
        for symbol, consensus_symbol in zip(sequence, consensus)
    )
