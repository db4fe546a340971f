"""Body decoders keyed by EncodingType."""

import binascii
import logging

from logchain.models import EncodingType, ParseStats

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    """Raised when a body cannot be decoded with its declared encoding."""


def decode_hex(raw_body: str) -> str:
    """Convert 2-char hex byte pairs to ASCII text.

    Bytes outside the 7-bit range render as '?'.
    Raises DecodeError on odd length or non-hex characters.
    """
    if len(raw_body) % 2:
        raise DecodeError(f"odd number of hex digits ({len(raw_body)})")
    try:
        data = binascii.unhexlify(raw_body)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(str(e)) from e
    return "".join(chr(b) if b < 0x80 else "?" for b in data)


def decode(
    raw_body: str,
    encoding: EncodingType,
    log: logging.Logger | None = None,
    stats: ParseStats | None = None,
) -> str:
    """Decode a raw body. Failures fall back to the raw text with a warning."""
    log = log or logger
    if encoding == EncodingType.HEXADECIMAL:
        try:
            return decode_hex(raw_body)
        except DecodeError as e:
            log.warning("Hex message text could not be decoded %r: %s", raw_body, e)
            if stats is not None:
                stats.decode_failures += 1
            return raw_body
    # ASCII and UNKNOWN pass through unchanged
    return raw_body
