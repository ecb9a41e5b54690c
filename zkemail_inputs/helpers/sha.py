"""SHA-256 padding and partial (precomputed) hashing.

``hashlib`` does not expose the intermediate compression state, so the
compression function lives here.  It is only ever run over whole 64-byte
blocks of already padded data; finalization is left to the circuit.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from ..errors import SelectorNotFoundError

BLOCK_BYTES = 64

_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

_IV = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

_MASK32 = 0xFFFFFFFF


class PaddingOverflowError(ValueError):
    """The SHA-padded message does not fit the requested target length."""


class RemainingBodyTooLongError(ValueError):
    """The body remaining after the precompute cutoff exceeds the maximum."""


@dataclass(frozen=True)
class PartialShaResult:
    precomputed_sha: bytes
    body_remaining: bytes
    body_remaining_length: int


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK32


def _compress(state: tuple[int, ...], block: bytes) -> tuple[int, ...]:
    w = list(struct.unpack(">16I", block))
    for i in range(16, 64):
        s0 = _rotr(w[i - 15], 7) ^ _rotr(w[i - 15], 18) ^ (w[i - 15] >> 3)
        s1 = _rotr(w[i - 2], 17) ^ _rotr(w[i - 2], 19) ^ (w[i - 2] >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK32)

    a, b, c, d, e, f, g, h = state
    for i in range(64):
        s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = (e & f) ^ (~e & g)
        temp1 = (h + s1 + ch + _K[i] + w[i]) & _MASK32
        s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        temp2 = (s0 + maj) & _MASK32
        h, g, f, e, d, c, b, a = g, f, e, (d + temp1) & _MASK32, c, b, a, (temp1 + temp2) & _MASK32

    return tuple((x + y) & _MASK32 for x, y in zip(state, (a, b, c, d, e, f, g, h)))


def partial_sha(data: bytes) -> bytes:
    """Return the SHA-256 state after compressing *data* (whole blocks only)."""
    if len(data) % BLOCK_BYTES:
        raise ValueError(f"partial SHA input must be a multiple of {BLOCK_BYTES} bytes")
    state = _IV
    for offset in range(0, len(data), BLOCK_BYTES):
        state = _compress(state, data[offset:offset + BLOCK_BYTES])
    return struct.pack(">8I", *state)


def sha256_pad(message: bytes, max_sha_bytes: int) -> tuple[bytes, int]:
    """Apply SHA-256 padding, then zero-fill to *max_sha_bytes*.

    Returns ``(padded, padded_length)`` where ``padded_length`` is the length
    of the SHA padding proper, before the zero fill.
    """
    bit_length = len(message) * 8
    padded = bytearray(message)
    padded.append(0x80)
    while (len(padded) + 8) % BLOCK_BYTES:
        padded.append(0)
    padded += bit_length.to_bytes(8, byteorder="big")
    padded_length = len(padded)

    if padded_length > max_sha_bytes:
        raise PaddingOverflowError(
            f"Padded message is {padded_length} bytes long but max is {max_sha_bytes}"
        )
    padded += bytes(max_sha_bytes - padded_length)
    return bytes(padded), padded_length


def generate_partial_sha(
    body: bytes,
    body_length: int,
    selector_string: str | None = None,
    max_remaining_body_length: int = 1536,
) -> PartialShaResult:
    """Split a padded body at the block boundary preceding *selector_string*.

    *body* is the SHA-padded body and *body_length* its padded length.  The
    returned remainder is zero-filled to exactly *max_remaining_body_length*.
    """
    selector_index = 0
    if selector_string:
        selector_index = body.find(selector_string.encode("utf-8"), 0, body_length)
        if selector_index == -1:
            raise SelectorNotFoundError(selector_string)

    cutoff = (selector_index // BLOCK_BYTES) * BLOCK_BYTES
    body_remaining_length = body_length - cutoff
    if body_remaining_length > max_remaining_body_length:
        raise RemainingBodyTooLongError(
            f"Remaining body {body_remaining_length} after the selector is longer "
            f"than max ({max_remaining_body_length})"
        )

    remaining = body[cutoff:body_length]
    remaining += bytes(max_remaining_body_length - len(remaining))
    return PartialShaResult(
        precomputed_sha=partial_sha(body[:cutoff]),
        body_remaining=remaining,
        body_remaining_length=body_remaining_length,
    )


def u8_to_u32(data: bytes) -> list[int]:
    """Pack bytes into big-endian 32-bit words."""
    if len(data) % 4:
        raise ValueError("input length must be a multiple of 4")
    return list(struct.unpack(f">{len(data) // 4}I", data))
