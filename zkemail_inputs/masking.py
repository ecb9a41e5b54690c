"""Header/body masks.

Masks are caller-supplied and opaque here: the circuit zeroes every byte whose
mask bit is 0.  This module only checks coverage and renders the strings.
"""

from __future__ import annotations

from collections.abc import Sequence as SequenceABC

from .errors import InvalidMaskError


def build_mask(capacity: int, mask: SequenceABC[int] | None, *, name: str = "mask") -> list[str] | None:
    """Render *mask* for a buffer of *capacity* bytes, or ``None`` if no mask."""
    if mask is None:
        return None
    if len(mask) != capacity:
        raise InvalidMaskError(
            f"{name} has {len(mask)} entries but the buffer capacity is {capacity}"
        )
    return [str(bit) for bit in mask]


def apply_mask(storage: SequenceABC[str], mask: SequenceABC[str | int]) -> list[str]:
    """Reproduce the circuit's masking of *storage* (kept where the bit is 1)."""
    if len(mask) != len(storage):
        raise InvalidMaskError(
            f"mask has {len(mask)} entries but the buffer capacity is {len(storage)}"
        )
    return [byte if int(bit) == 1 else "0" for byte, bit in zip(storage, mask)]
