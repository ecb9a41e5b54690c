"""Locate header fields and the email addresses inside them.

Offsets are byte offsets into the canonicalized header block, so matching is
done on ``bytes`` rather than decoded text.
"""

from __future__ import annotations

import re

from .errors import AddressNotFoundError, FieldNotFoundError
from .models import Sequence

ADDRESS_FIELDS = ("from", "to")

_ANGLE_ADDRESS = re.compile(rb"<([^>]+)>")
_BARE_ADDRESS = re.compile(rb"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def _field_pattern(field: str) -> re.Pattern[bytes]:
    # name is case-insensitive, content is not; a field always starts a line
    name = re.escape(field.encode("ascii"))
    return re.compile(rb"(?m)^(?i:" + name + rb"):[^\r\n]*")


def get_header_sequence(headers: bytes, field: str) -> Sequence:
    """Return the range of the first ``<field>:`` line, without its terminator.

    Raises :class:`FieldNotFoundError` if the field is absent.
    """
    match = _field_pattern(field).search(headers)
    if match is None:
        raise FieldNotFoundError(field)
    return Sequence(index=match.start(), length=match.end() - match.start())


def get_address_header_sequence(headers: bytes, field: str) -> tuple[Sequence, Sequence]:
    """Return ``(field_sequence, address_sequence)`` for an address field.

    Recognises ``Name <addr@host>`` (angle brackets win when present) and a
    bare ``addr@host``.  The address sequence is absolute within *headers*.
    """
    field_sequence = get_header_sequence(headers, field)
    # search only the value, after "<field>:"
    value_start = field_sequence.index + len(field) + 1
    line = headers[:field_sequence.end]

    match = _ANGLE_ADDRESS.search(line, value_start)
    if match is not None:
        start, end = match.span(1)
    else:
        match = _BARE_ADDRESS.search(line, value_start)
        if match is None:
            raise AddressNotFoundError(field)
        start, end = match.span()

    return field_sequence, Sequence(index=start, length=end - start)


def find_body_hash_index(headers: bytes, body_hash: str) -> int:
    """Return the offset of the ``bh=`` value inside the header block."""
    index = headers.find(body_hash.encode("ascii"))
    if index == -1:
        raise FieldNotFoundError("bh")
    return index
