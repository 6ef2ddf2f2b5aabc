import argparse

root_parser = argparse.ArgumentParser(
    prog="alnwindows",
    description="Unique sequence counts in windows of a FASTA nucleotide alignment."
)
root_parser.add_argument(
    "--log-level",
    dest="log_level",
    required=False,
    default="WARNING",
    choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    help="Logging level (default: WARNING)."
)
subparsers = root_parser.add_subparsers(dest="command", required=True)
