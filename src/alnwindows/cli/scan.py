import logging

from alnwindows.cli import program
from alnwindows.cli.settings import scan_settings_from_arguments
from alnwindows.engine.reading import read_alignment
from alnwindows.engine.writing import write_diversity_table

logger = logging.getLogger(__name__)

parser = program.subparsers.add_parser(
    "scan",
    help="Count unique sequences in windows sliding along the alignment (homozygosity runs)."
)

parser.add_argument(
    "--input-file", "-i",
    dest="input_file",
    required=True,
    type=str,
    help="The FASTA alignment to read."
)

parser.add_argument(
    "--window-size", "-w",
    dest="window_size",
    required=True,
    type=int,
    help="Window size in nucleotides."
)

parser.add_argument(
    "--step-size", "-t",
    dest="step_size",
    required=True,
    type=int,
    help="Number of nucleotides the window moves each step."
)

parser.add_argument(
    "--impute-missing",
    dest="impute_missing",
    action="store_true",
    default=False,
    help="Replace missing nucleotides (N, ambiguity codes) with the consensus nucleotide."
)

parser.add_argument(
    "--out-file", "-o",
    dest="out_file",
    required=True,
    type=str,
    help="The output file name."
)


def run(args):
    settings = scan_settings_from_arguments(args)
    alignment = read_alignment(settings.input_file)
    if settings.impute_missing:
        alignment.impute_missing()
    diversity = alignment.diversity_in_windows(settings.window_size, settings.step_size)
    logger.info("Scanned %d windows of %d nucleotides", len(diversity), settings.window_size)
    write_diversity_table(diversity, settings.out_file)

parser.set_defaults(func=run, parser=parser)
