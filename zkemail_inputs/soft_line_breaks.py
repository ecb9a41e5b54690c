"""Quoted-printable soft line break removal on byte-string buffers."""

from __future__ import annotations

from collections.abc import Sequence as SequenceABC

from .models import BoundedVec

# "=", "\r", "\n" as decimal byte strings
SOFT_LINE_BREAK = ("61", "13", "10")


def remove_soft_line_breaks(storage: SequenceABC[str]) -> BoundedVec:
    """Drop every ``=\\r\\n`` triple and zero-pad back to the input length.

    The returned ``length`` counts the elements that were kept, padding
    included, so it is always ``len(storage) - 3 * removed``.
    """
    result: list[str] = []
    i = 0
    size = len(storage)
    while i < size:
        if i + 2 < size and tuple(storage[i:i + 3]) == SOFT_LINE_BREAK:
            i += 3
        else:
            result.append(storage[i])
            i += 1

    kept = len(result)
    result.extend("0" for _ in range(size - kept))
    return BoundedVec(storage=result, length=kept)
