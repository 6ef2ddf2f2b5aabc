import logging

from alnwindows.cli import program
from alnwindows.cli.settings import extract_settings_from_arguments
from alnwindows.engine.reading import read_alignment, read_query
from alnwindows.engine.writing import write_unique_sequences

logger = logging.getLogger(__name__)

parser = program.subparsers.add_parser(
    "extract",
    help="Extract the unique sequences (and their counts) found in one alignment window."
)

parser.add_argument(
    "--input-file", "-i",
    dest="input_file",
    required=True,
    type=str,
    help="The FASTA alignment to read."
)

parser.add_argument(
    "--start-position", "-s",
    dest="start_position",
    required=False,
    default=1,
    type=int,
    help="Window start position (1-based, defaults to the first nucleotide)."
)

parser.add_argument(
    "--window-size", "-w",
    dest="window_size",
    required=False,
    default=None,
    type=int,
    help="Window size in nucleotides. Required unless --query-sequence is given."
)

parser.add_argument(
    "--impute-missing",
    dest="impute_missing",
    action="store_true",
    default=False,
    help="Replace missing nucleotides (N, ambiguity codes) with the consensus nucleotide."
)

parser.add_argument(
    "--query-sequence", "-q",
    dest="query_file",
    required=False,
    default=None,
    type=str,
    help="A FASTA file with a query sequence. The window holding its best match is extracted, and --start-position and --window-size are ignored."
)

parser.add_argument(
    "--out-format", "-f",
    dest="out_format",
    required=False,
    default="tab",
    type=str,
    help="Output format, TAB or FASTA (case-insensitive, defaults to TAB)."
)

parser.add_argument(
    "--out-file", "-o",
    dest="out_file",
    required=True,
    type=str,
    help="The output file name."
)


def run(args):
    settings = extract_settings_from_arguments(args)
    alignment = read_alignment(settings.input_file)
    if settings.impute_missing:
        alignment.impute_missing()
    if settings.query_file is None:
        consensus_window = alignment.extract_consensus_window(settings.start_position, settings.window_size)
        unique_sequences = alignment.extract_window_sorted(settings.start_position, settings.window_size)
        write_unique_sequences(unique_sequences, consensus_window, settings.out_format, settings.out_file)
    else:
        query = read_query(settings.query_file)
        statistics, matched_query, unique_sequences = alignment.extract_query_window(query)
        logger.info("Query matched alignment positions %d-%d", statistics.reference_start + 1, statistics.reference_start + statistics.reference_length)
        consensus_window = alignment.extract_consensus_window(statistics.reference_start, statistics.reference_length)
        write_unique_sequences(unique_sequences, consensus_window, settings.out_format, settings.out_file, matched_query, statistics)

parser.set_defaults(func=run, parser=parser)
