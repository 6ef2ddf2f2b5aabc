import logging
import sys
from typing import Sequence, Union

from alnwindows.cli import extract, scan  # registers the subcommands
from alnwindows.cli.program import root_parser
from alnwindows.engine.exceptions.alignment import AlignmentAnalysisException

logger = logging.getLogger(__name__)


def run(argv: Union[Sequence[str], None] = None) -> int:
    args = root_parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    try:
        args.func(args)
    except (AlignmentAnalysisException, OSError) as e:
        logger.debug("Command failed", exc_info=e)
        print(f"ERROR: {e}", file=sys.stderr)
        args.parser.print_usage(sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
