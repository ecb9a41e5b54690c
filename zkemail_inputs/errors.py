"""Errors raised while generating circuit inputs.

Every failure is terminal for the invocation that raised it: the generator
never returns a partially populated record.
"""

from __future__ import annotations


class InputGenerationError(Exception):
    """Base class for all input-generation failures."""


class FieldNotFoundError(InputGenerationError):
    """A header field (or a value expected inside the header block) is absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f'Field "{field}" not found in header')
        self.field = field


class AddressNotFoundError(InputGenerationError):
    """The header field exists but carries no recognisable email address."""

    def __init__(self, field: str) -> None:
        super().__init__(f'Address not found in "{field}" field')
        self.field = field


class SelectorNotFoundError(InputGenerationError):
    """The SHA precompute selector does not occur in the body."""

    def __init__(self, selector: str) -> None:
        super().__init__(f'SHA precompute selector "{selector}" not found in the body')
        self.selector = selector


class MissingBodyDataError(InputGenerationError):
    """Body hash checking was requested but the body or its hash is missing."""


class InvalidLimbCountError(InputGenerationError):
    """A limb array handed to the key commitment has the wrong length."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        super().__init__(f"{name} must have exactly {expected} limbs, got {actual}")
        self.expected = expected
        self.actual = actual


class InvalidMaskError(InputGenerationError):
    """A caller-supplied mask does not cover the buffer it masks."""


class RemainderLengthMismatchError(InputGenerationError):
    """The partial-hash remainder disagrees with the computed alignment."""
