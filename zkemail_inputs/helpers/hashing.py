"""Field-element hash primitive used by the public key commitment."""

from __future__ import annotations

import abc
import hashlib
from collections.abc import Sequence as SequenceABC

# BN254 scalar field modulus (Noir / barretenberg native field)
BN254_FIELD_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617


class FieldHasher(abc.ABC):
    """Hash a vector of field elements to a single field element.

    Implementations are caller-owned; the commitment code never caches or
    shares them.
    """

    field_modulus: int = BN254_FIELD_MODULUS

    @abc.abstractmethod
    def hash(self, elements: SequenceABC[int]) -> int:
        """Return the hash of *elements* as an integer below ``field_modulus``."""
        ...

    def __call__(self, elements: SequenceABC[int]) -> int:
        return self.hash(elements)


class Sha256FieldHasher(FieldHasher):
    """Off-circuit stand-in: SHA-256 over 32-byte big-endian encodings, reduced mod p.

    Deterministic and collision resistant, but not the circuit's Poseidon;
    inject a Poseidon implementation when the commitment must match the
    circuit's return value.
    """

    def hash(self, elements: SequenceABC[int]) -> int:
        h = hashlib.sha256()
        for element in elements:
            if not 0 <= element < self.field_modulus:
                raise ValueError(f"element {element} is outside the scalar field")
            h.update(element.to_bytes(32, byteorder="big"))
        return int.from_bytes(h.digest(), byteorder="big") % self.field_modulus
