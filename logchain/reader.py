"""Input provider — raw log lines from disk."""

import os
from typing import Generator


def read_lines(filepath: str, encoding: str = "utf-8") -> Generator[str, None, None]:
    """Yield each line of *filepath* without its trailing newline.

    Raises FileNotFoundError if the file does not exist.
    """
    # checked eagerly so callers see the error before iterating
    if not os.path.isfile(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")
    return _iter_lines(filepath, encoding)


def _iter_lines(filepath: str, encoding: str) -> Generator[str, None, None]:
    with open(filepath, "r", encoding=encoding) as f:
        for line in f:
            yield line.rstrip("\r\n")


def resolve_paths(input_dir: str, input_file: str, output_file: str) -> tuple[str, str]:
    """Join the input/output file names onto a shared directory."""
    return os.path.join(input_dir, input_file), os.path.join(input_dir, output_file)
