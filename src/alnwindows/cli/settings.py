from argparse import Namespace
from dataclasses import dataclass
from typing import Union

from alnwindows.engine.exceptions.alignment import ConfigurationError
from alnwindows.engine.writing import normalize_output_format


@dataclass(frozen=True)
class ExtractSettings:
    input_file: str
    out_file: str
    out_format: str
    impute_missing: bool
    query_file: Union[str, None]
    window_size: Union[int, None]
    # 0-based, converted from the 1-based command line value
    start_position: int

@dataclass(frozen=True)
class ScanSettings:
    input_file: str
    out_file: str
    impute_missing: bool
    window_size: int
    step_size: int


def extract_settings_from_arguments(args: Namespace) -> ExtractSettings:
    out_format = normalize_output_format(args.out_format)
    if args.query_file is not None:
        # start position and window size come from the query match instead
        return ExtractSettings(args.input_file, args.out_file, out_format, args.impute_missing, args.query_file, None, 0)
    if args.window_size is None:
        raise ConfigurationError("--window-size specification is required when no --query-sequence is given.")
    if args.window_size < 1:
        raise ConfigurationError("Window size must be > 0.")
    if args.start_position < 1:
        raise ConfigurationError("Start position must be 1 or greater.")
    return ExtractSettings(args.input_file, args.out_file, out_format, args.impute_missing, None, args.window_size, args.start_position - 1)


def scan_settings_from_arguments(args: Namespace) -> ScanSettings:
    if args.window_size < 1:
        raise ConfigurationError("Window size must be > 0.")
    if args.step_size < 1:
        raise ConfigurationError("Step size must be > 0.")
    return ScanSettings(args.input_file, args.out_file, args.impute_missing, args.window_size, args.step_size)
