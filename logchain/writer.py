"""Output sink — atomic report persistence."""

import logging
import os
import tempfile
from typing import Iterable

from logchain.aggregator import process_file
from logchain.formatter import Result, get_formatter
from logchain.models import ParseStats

logger = logging.getLogger(__name__)


def write_report(path: str, lines: Iterable[str]) -> None:
    """Write *lines* to *path* atomically (temp file + rename)."""
    out_dir = os.path.dirname(os.path.abspath(path))
    os.makedirs(out_dir, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(dir=out_dir, suffix=".tmp")
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def process_and_write(
    input_path: str,
    output_path: str,
    output_format: str = "text",
    file_encoding: str = "utf-8",
    stats: ParseStats | None = None,
) -> Result:
    """Reconstruct every pipeline in *input_path* and write the report to *output_path*."""
    formatter = get_formatter(output_format)
    result = process_file(input_path, encoding=file_encoding, stats=stats)
    write_report(output_path, formatter(result))
    logger.info("Wrote %d pipeline(s) to %s", len(result), output_path)
    return result
