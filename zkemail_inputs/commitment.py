"""RSA public key commitment.

Two packings of the 18 x 120-bit limb representation exist and they are not
interchangeable, so each is a named, versioned scheme and the caller chooses.

``paired-120-v1``
    Limb pairs ``(2i, 2i+1)`` become ``limb[2i] * 2^120 + limb[2i+1]``, for the
    modulus and the Barrett parameter separately.  Each 9-element vector is
    hashed and the commitment is ``hash([h_modulus, h_redc])``.

``rechunked-121-v1``
    The modulus limbs are read as one little-endian bitstream and re-sliced
    into 17 windows of 121 bits.  Windows are merged pairwise in base 2^121
    into 8 elements plus the last window as a 9th, hashed once.  The Barrett
    parameter is not committed to.
"""

from __future__ import annotations

from collections.abc import Sequence as SequenceABC
from enum import Enum

import structlog

from .errors import InvalidLimbCountError
from .helpers.bignum import LIMB_BITS, parse_limb
from .helpers.hashing import FieldHasher

logger = structlog.get_logger()

MODULUS_LIMBS = 18
CHUNK_BITS = LIMB_BITS + 1


class CommitmentScheme(str, Enum):
    """Bit packing used to commit to an RSA public key."""

    PAIRED_120 = "paired-120-v1"
    RECHUNKED_121 = "rechunked-121-v1"


DEFAULT_COMMITMENT_SCHEME = CommitmentScheme.PAIRED_120


def _validated_limbs(limbs: SequenceABC[str | int], name: str) -> list[int]:
    if len(limbs) != MODULUS_LIMBS:
        raise InvalidLimbCountError(name, MODULUS_LIMBS, len(limbs))
    values = [parse_limb(limb) for limb in limbs]
    for i, value in enumerate(values):
        if not 0 <= value < (1 << LIMB_BITS):
            raise ValueError(f"{name}[{i}] does not fit in {LIMB_BITS} bits")
    return values


def pack_paired_120(limbs: SequenceABC[int]) -> list[int]:
    """``limb[2i] * 2^120 + limb[2i+1]`` for i in 0..8."""
    return [(limbs[2 * i] << LIMB_BITS) + limbs[2 * i + 1] for i in range(MODULUS_LIMBS // 2)]


def rechunk_121(limbs: SequenceABC[int]) -> list[int]:
    """Re-slice 120-bit limbs into 17 contiguous 121-bit windows.

    Window j covers stream bits ``[121j, 121j + 121)``: the top ``120 - j``
    bits of limb j followed by the low ``j + 1`` bits of limb j + 1.
    """
    chunks = []
    for j in range(MODULUS_LIMBS - 1):
        low = limbs[j] >> j
        high = limbs[j + 1] & ((1 << (j + 1)) - 1)
        chunks.append(low | (high << (LIMB_BITS - j)))
    return chunks


def pack_rechunked_121(limbs: SequenceABC[int]) -> list[int]:
    """Merge 121-bit windows pairwise into 8 elements, plus the last window."""
    chunks = rechunk_121(limbs)
    merged = [chunks[2 * i] + (chunks[2 * i + 1] << CHUNK_BITS) for i in range(8)]
    merged.append(chunks[16])
    return merged


def hash_public_key(
    modulus_limbs: SequenceABC[str | int],
    redc_limbs: SequenceABC[str | int],
    hasher: FieldHasher,
    scheme: CommitmentScheme = DEFAULT_COMMITMENT_SCHEME,
) -> int:
    """Commit to an RSA public key given its limb representation.

    Both limb arrays must hold exactly 18 limbs, whichever scheme is used.
    Errors raised by *hasher* propagate unchanged.
    """
    modulus = _validated_limbs(modulus_limbs, "modulus_limbs")
    redc = _validated_limbs(redc_limbs, "redc_limbs")
    scheme = CommitmentScheme(scheme)

    if scheme is CommitmentScheme.PAIRED_120:
        modulus_hash = hasher.hash(pack_paired_120(modulus))
        redc_hash = hasher.hash(pack_paired_120(redc))
        commitment = hasher.hash([modulus_hash, redc_hash])
    else:
        commitment = hasher.hash(pack_rechunked_121(modulus))

    logger.debug("public_key_committed", scheme=scheme.value)
    return commitment
