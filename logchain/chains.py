"""Chain reconstruction for a single pipeline.

Records only point forward (next_id), so chains are rebuilt backwards:
  1. Index every record by the id it points to (target -> predecessor).
  2. Endpoints are records with no successor: terminal ones (next_id == "-1")
     and dangling ones (next_id names a record that is not in the pipeline).
  3. From each endpoint, follow the index back until no predecessor is found.

Each chain is ordered chronologically last to first.
"""

import logging
from typing import Sequence

from logchain.models import Record

logger = logging.getLogger(__name__)


def build_predecessor_index(records: Sequence[Record]) -> dict[str, Record]:
    """Map next_id -> the first record pointing at it. Terminal records are skipped."""
    predecessors: dict[str, Record] = {}
    for record in records:
        if record.is_terminal:
            continue
        # first pointer wins; a later record sharing next_id is orphaned
        predecessors.setdefault(record.next_id, record)
    return predecessors


def find_endpoints(records: Sequence[Record], predecessors: dict[str, Record]) -> list[Record]:
    """Terminal endpoints first, then dangling ones; each class by descending id."""
    ids = {r.id for r in records}
    terminal = sorted((r for r in records if r.is_terminal), key=lambda r: r.id, reverse=True)
    dangling = sorted(
        (r for target, r in predecessors.items() if target not in ids),
        key=lambda r: r.id,
        reverse=True,
    )
    return terminal + dangling


def walk_back(endpoint: Record, predecessors: dict[str, Record]) -> list[Record]:
    chain = [endpoint]
    current_id = endpoint.id
    while current_id in predecessors:
        previous = predecessors[current_id]
        chain.append(previous)
        current_id = previous.id
    return chain


def build_chains(
    records: Sequence[Record],
    pipeline_id: str = "",
    log: logging.Logger | None = None,
) -> list[list[Record]]:
    """Rebuild every chain of one pipeline.

    Returns an empty list when no endpoint exists, which means the
    pipeline's pointers form a closed cycle (or the group is empty).
    """
    log = log or logger
    predecessors = build_predecessor_index(records)
    endpoints = find_endpoints(records, predecessors)

    if not endpoints:
        log.error("No last message found as a starting point, skipping pipeline %s", pipeline_id)
        return []

    return [walk_back(endpoint, predecessors) for endpoint in endpoints]
