"""Partial-hash alignment for the email body.

Everything before the cutoff is folded into a precomputed SHA-256 state, so
only the bytes from the cutoff onward travel into the circuit.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from .errors import SelectorNotFoundError

logger = structlog.get_logger()

SHA256_BLOCK_BYTES = 64
# 0x80 terminator byte plus the 64-bit message length
SHA256_PADDING_OVERHEAD = 1 + 8


@dataclass(frozen=True)
class ShaAlignment:
    """Where the carried part of the body starts and how long it is."""

    cutoff: int
    remaining_length: int
    selector_index: int | None = None


def compute_sha_alignment(body: bytes, selector: str | None = None) -> ShaAlignment:
    """Round the selector's offset down to a SHA-256 block boundary.

    Without a selector the whole body is carried (cutoff 0).  Raises
    :class:`SelectorNotFoundError` when the selector does not occur.
    """
    if not selector:
        return ShaAlignment(cutoff=0, remaining_length=len(body))

    selector_index = body.find(selector.encode("utf-8"))
    if selector_index == -1:
        raise SelectorNotFoundError(selector)

    cutoff = (selector_index // SHA256_BLOCK_BYTES) * SHA256_BLOCK_BYTES
    alignment = ShaAlignment(
        cutoff=cutoff,
        remaining_length=len(body) - cutoff,
        selector_index=selector_index,
    )
    logger.debug(
        "sha_alignment_computed",
        selector_index=selector_index,
        cutoff=cutoff,
        remaining_length=alignment.remaining_length,
    )
    return alignment


def sha_padded_length(message_length: int) -> int:
    """Smallest whole number of blocks that always fits *message_length* padded.

    Rounds ``message_length + 65`` up to the next 64-byte block: 64 for the
    trailing length block and 1 for the terminator bit.
    """
    return ((message_length + 63 + 65) // SHA256_BLOCK_BYTES) * SHA256_BLOCK_BYTES


def body_padding_target(max_body_length: int, body_length: int) -> int:
    """Padding target handed to the SHA-256 padder for the body."""
    return max(max_body_length, sha_padded_length(body_length))
