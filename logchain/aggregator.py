"""Pipeline aggregation: group records, rebuild chains, flatten per pipeline."""

import logging
from typing import Iterable, Sequence

from logchain.chains import build_chains
from logchain.models import ParseStats, Record
from logchain.parser import parse_lines
from logchain.reader import read_lines

logger = logging.getLogger(__name__)


def group_by_pipeline(records: Iterable[Record]) -> dict[str, list[Record]]:
    """Group records by pipeline_id, pipelines in descending id order."""
    groups: dict[str, list[Record]] = {}
    for record in records:
        groups.setdefault(record.pipeline_id, []).append(record)
    return {pid: groups[pid] for pid in sorted(groups, reverse=True)}


def process(records: Sequence[Record], log: logging.Logger | None = None) -> dict[str, list[Record]]:
    """Map pipeline_id -> flattened chains, in emission order.

    Pipelines without a discoverable endpoint are left out. A pipeline
    that fails unexpectedly is logged and left out too.
    """
    log = log or logger
    result: dict[str, list[Record]] = {}

    for pipeline_id, group in group_by_pipeline(records).items():
        try:
            chains = build_chains(group, pipeline_id=pipeline_id, log=log)
            if chains:
                result[pipeline_id] = [record for chain in chains for record in chain]
        except Exception:
            log.exception("Exception while processing pipeline %s", pipeline_id)

    return result


def process_lines(
    lines: Iterable[str],
    log: logging.Logger | None = None,
    stats: ParseStats | None = None,
) -> dict[str, list[Record]]:
    return process(parse_lines(lines, log=log, stats=stats), log=log)


def process_file(
    path: str,
    encoding: str = "utf-8",
    log: logging.Logger | None = None,
    stats: ParseStats | None = None,
) -> dict[str, list[Record]]:
    """Read a log file and reconstruct every pipeline in it."""
    return process_lines(read_lines(path, encoding=encoding), log=log, stats=stats)
