"""Record parser for pipeline log lines.

Line format (whitespace-delimited, body bracketed and may contain spaces):
    <pipeline_id> <id> <encoding_tag> [<body>] <next_id>

Example:
    1 0 0 [first message] 1
    legacy-hex 2 1 [4d6f7262] -1
"""

import logging
from typing import Iterable

from logchain.decoder import decode
from logchain.models import EncodingType, ParseStats, Record

logger = logging.getLogger(__name__)

FIELD_COUNT = 5


def _extract_body(line: str, parts: list[str]) -> tuple[str, str] | None:
    """Return (raw_body, next_id), or None if no bracketed body exists.

    A single-token body like "[hello]" is used as-is. Otherwise the body
    spans the first '[' to the last ']' of the whole line and next_id is
    whatever follows the closing bracket.
    """
    token = parts[3]
    if token.startswith("[") and token.endswith("]"):
        return token[1:-1], parts[4].strip()

    start = line.find("[")
    end = line.rfind("]")
    if start < 0 or end <= start:
        return None
    return line[start + 1:end], line[end + 1:].strip()


def _extract_encoding(tag: str, line: str, log: logging.Logger,
                      stats: ParseStats | None) -> EncodingType:
    encoding = EncodingType.from_tag(tag)
    if encoding is None:
        log.warning("Unknown encoding type %r in %r", tag, line)
        if stats is not None:
            stats.unknown_encoding += 1
        return EncodingType.UNKNOWN
    return encoding


def parse_line(
    line: str,
    log: logging.Logger | None = None,
    stats: ParseStats | None = None,
) -> Record | None:
    """Parse a single log line into a Record. Returns None for blank or malformed lines."""
    log = log or logger
    stripped = line.strip()
    if not stripped:
        if stats is not None:
            stats.blank_lines += 1
        return None

    parts = stripped.split(maxsplit=FIELD_COUNT - 1)
    if len(parts) < FIELD_COUNT:
        log.warning("Skipping malformed log entry, not enough parts: %r", stripped)
        if stats is not None:
            stats.malformed += 1
        return None

    extracted = _extract_body(stripped, parts)
    if extracted is None:
        log.warning("Skipping malformed log entry, log body not found in %r", stripped)
        if stats is not None:
            stats.malformed += 1
        return None
    raw_body, next_id = extracted

    encoding = _extract_encoding(parts[2], stripped, log, stats)

    return Record(
        pipeline_id=parts[0],
        id=parts[1],
        encoding=encoding,
        raw_body=raw_body,
        decoded_body=decode(raw_body, encoding, log=log, stats=stats),
        next_id=next_id,
    )


def parse_lines(
    lines: Iterable[str],
    log: logging.Logger | None = None,
    stats: ParseStats | None = None,
) -> list[Record]:
    """Parse lines into records in file order.

    The first record seen for a (pipeline_id, id) pair wins; later
    duplicates are dropped. A line that raises is logged and skipped.
    """
    log = log or logger
    records: list[Record] = []
    seen: set[tuple[str, str]] = set()

    for line in lines:
        if stats is not None:
            stats.total_lines += 1
        try:
            record = parse_line(line, log=log, stats=stats)
        except Exception:
            log.exception("Exception while parsing log entry %r", line)
            if stats is not None:
                stats.errors += 1
            continue

        if record is None:
            continue
        if record.key in seen:
            log.debug("Dropping duplicate id %s in pipeline %s", record.id, record.pipeline_id)
            if stats is not None:
                stats.duplicates += 1
            continue

        seen.add(record.key)
        records.append(record)
        if stats is not None:
            stats.parsed += 1

    return records
