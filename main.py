#!/usr/bin/env python3
"""log-chains — rebuild ordered message chains from an unordered pipeline log."""

import json
import logging
import sys
from argparse import ArgumentParser

from logchain.aggregator import process_file
from logchain.config import LOG_LEVELS, Config, load_config, load_yaml_config
from logchain.formatter import FORMATS, get_formatter
from logchain.models import ParseStats
from logchain.reader import resolve_paths
from logchain.writer import process_and_write

LOG_FORMAT = "%(asctime)s [logchain] %(levelname)s %(message)s"

logger = logging.getLogger(__name__)


def _level(name: str) -> int:
    """Numeric level for a name already checked against LOG_LEVELS."""
    return logging.getLevelName(name.upper())


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="log-chains",
        description="Rebuild ordered message chains from an unordered pipeline log.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--input",
        help="Input log file (default: <input_dir>/<input_file> from config)",
    )
    parser.add_argument(
        "--output",
        help="Output report file (default: <input_dir>/<output_file> from config)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=FORMATS,
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the report instead of writing the output file",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Log parsing statistics when done",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: INFO, or log_level from config)",
    )
    return parser


def run(args, config: Config) -> int:
    """Execute one reconstruction run. Returns the process exit code."""
    output_format = args.output_format or config.output_format

    default_input, default_output = resolve_paths(
        config.input_dir, config.input_file, config.output_file
    )
    input_path = args.input or default_input
    output_path = args.output or default_output

    stats = ParseStats()
    logger.info("Reading logs from %s", input_path)
    try:
        if args.stdout:
            result = process_file(input_path, encoding=config.file_encoding, stats=stats)
            for line in get_formatter(output_format)(result):
                print(line)
        else:
            result = process_and_write(
                input_path,
                output_path,
                output_format=output_format,
                file_encoding=config.file_encoding,
                stats=stats,
            )
            logger.info("Parsed logs written to %s", output_path)
    except FileNotFoundError:
        logger.error("Input file '%s' not found.", input_path)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Exception while processing log file %s: %s", input_path, e)
        return 2

    if args.stats or config.stats:
        logger.info("Stats: %s", json.dumps(stats.to_dict()))
    logger.info("Reconstructed %d pipeline(s) from %d record(s)", len(result), stats.parsed)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=_level(args.log_level or "INFO"),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        config = load_config(load_yaml_config(args.config))
    except ValueError as e:
        parser.error(str(e))
    if not args.log_level:
        logging.getLogger().setLevel(_level(config.log_level))

    return run(args, config)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
