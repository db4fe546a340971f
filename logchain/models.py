"""Log record schema shared by the parser, chain builder and output sink."""

from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any

# next_id value marking the chronological end of a sequence
SENTINEL = "-1"


class EncodingType(IntEnum):
    ASCII = 0
    HEXADECIMAL = 1
    UNKNOWN = -1

    @classmethod
    def from_tag(cls, tag: str) -> "EncodingType | None":
        """Map a wire tag ("0", "1") to a member. Returns None if unrecognized."""
        try:
            value = int(tag)
        except (TypeError, ValueError):
            return None
        if value in (cls.ASCII, cls.HEXADECIMAL):
            return cls(value)
        return None


@dataclass(frozen=True)
class Record:
    pipeline_id: str
    id: str
    encoding: EncodingType
    raw_body: str
    decoded_body: str
    next_id: str

    @property
    def is_terminal(self) -> bool:
        return self.next_id == SENTINEL

    @property
    def key(self) -> tuple[str, str]:
        return self.pipeline_id, self.id


@dataclass
class ParseStats:
    total_lines: int = 0
    blank_lines: int = 0
    parsed: int = 0
    malformed: int = 0
    duplicates: int = 0
    unknown_encoding: int = 0
    decode_failures: int = 0
    errors: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
