from io import StringIO
import logging
from os import PathLike
from typing import Union

from Bio.SeqIO.FastaIO import SimpleFastaParser

from alnwindows.engine.analysis.msa import MultipleSequenceAlignment
from alnwindows.engine.exceptions.alignment import FormatError
from alnwindows.engine.structures.alignment import AlignmentRecord

logger = logging.getLogger(__name__)

FASTA_MARKER = ">"


def parse_fasta_records(text: str, source: str = "alignment") -> list[AlignmentRecord]:
    """Splits FASTA text into header and sequence records.

    Leading blank lines are skipped, but the first non-blank line has to be a header. Header
    labels lose their leading spaces and must not end up empty. Sequence lines, blank ones
    ignored, are joined without separators.
    """
    lines = text.splitlines(keepends=True)
    first_line = 0
    while first_line < len(lines) and not lines[first_line].strip():
        first_line += 1
    if first_line == len(lines):
        raise FormatError("all lines are empty", source)
    if not lines[first_line].startswith(FASTA_MARKER):
        raise FormatError(f"does not appear to be a FASTA file (no {FASTA_MARKER} on the first line)", source)
    records = []
    for title, sequence in SimpleFastaParser(StringIO("".join(lines[first_line:]))):
        header = title.lstrip(" ")
        if not header:
            raise FormatError("some non-space characters are required in a FASTA header", source)
        records.append(AlignmentRecord(header, sequence))
    return records


def parse_alignment(text: str, source: str = "alignment") -> MultipleSequenceAlignment:
    return MultipleSequenceAlignment(parse_fasta_records(text, source), source)


def read_fasta_text(handle: Union[str, PathLike[str]]) -> str:
    try:
        with open(handle, encoding="utf-8") as fasta_handle:
            return fasta_handle.read()
    except UnicodeDecodeError as e:
        raise FormatError(f"not a text FASTA file ({e.reason} at byte {e.start})", str(handle)) from e


def read_alignment(handle: Union[str, PathLike[str]]) -> MultipleSequenceAlignment:
    alignment = parse_alignment(read_fasta_text(handle), str(handle))
    logger.info("Read %d sequences of length %d from %s", alignment.sequence_number(), alignment.alignment_length(), handle)
    return alignment


def read_query(handle: Union[str, PathLike[str]]) -> str:
    records = parse_fasta_records(read_fasta_text(handle), str(handle))
    query = records[0]
    if not query.sequence:
        raise FormatError(f"query record \"{query.header}\" has no sequence", str(handle))
    if len(records) > 1:
        logger.warning("%s holds %d records, only the first (%s) is used as the query", handle, len(records), query.header)
    logger.info("Read query %s (%d bp) from %s", query.header, len(query.sequence), handle)
    return query.sequence
