"""Data models for circuit input generation.

Leaf values handed to the circuit are decimal (or ``0x`` hex, for limbs)
strings; the models keep integer offsets and lengths and render the string
form in ``to_inputs``.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field, model_validator

InputValue = Union[str, list[str], dict[str, Union[str, list[str]]]]


# --- Buffers and byte ranges ---

class Sequence(BaseModel):
    """A byte range inside a specific buffer."""

    model_config = {"frozen": True}

    index: int = Field(ge=0, description="Absolute byte offset of the range")
    length: int = Field(ge=0, description="Number of bytes in the range")

    @property
    def end(self) -> int:
        return self.index + self.length

    def extract(self, buffer: bytes) -> bytes:
        """Return the bytes of *buffer* covered by this sequence."""
        if self.end > len(buffer):
            raise ValueError(
                f"Sequence [{self.index}, {self.end}) exceeds buffer of {len(buffer)} bytes"
            )
        return buffer[self.index:self.end]

    def to_inputs(self) -> dict[str, str]:
        return {"index": str(self.index), "length": str(self.length)}


class BoundedVec(BaseModel):
    """Fixed-capacity byte buffer with a separately tracked logical length.

    ``storage`` holds one decimal string per byte; entries past ``length``
    are zero padding.
    """

    storage: list[str] = Field(description="Byte values as decimal strings")
    length: int = Field(ge=0, description="Number of meaningful leading bytes")

    @model_validator(mode="after")
    def _length_within_capacity(self) -> BoundedVec:
        if self.length > len(self.storage):
            raise ValueError(
                f"length {self.length} exceeds capacity {len(self.storage)}"
            )
        return self

    @classmethod
    def from_bytes(cls, data: bytes, length: int) -> BoundedVec:
        return cls(storage=[str(b) for b in data], length=length)

    @property
    def capacity(self) -> int:
        return len(self.storage)

    def to_bytes(self) -> bytes:
        """Return the logical (unpadded) content as raw bytes."""
        return bytes(int(b) for b in self.storage[:self.length])

    def to_inputs(self) -> dict[str, Any]:
        return {"storage": list(self.storage), "len": str(self.length)}


class PublicKeyLimbs(BaseModel):
    """RSA modulus and its Barrett reduction parameter in limb form."""

    modulus: list[str] = Field(description="Modulus limbs, little-endian, hex strings")
    redc: list[str] = Field(description="Barrett reduction parameter limbs")

    def to_inputs(self) -> dict[str, list[str]]:
        return {"modulus": list(self.modulus), "redc": list(self.redc)}


# --- Collaborator results ---

class DKIMVerificationResult(BaseModel):
    """Outcome of DKIM verification consumed by the input generator."""

    headers: bytes = Field(description="Canonicalized signed header block")
    body: bytes | None = Field(default=None, description="Canonicalized body")
    body_hash: str | None = Field(default=None, description="Base64 value of the bh= tag")
    public_key: int = Field(description="RSA modulus of the signing key")
    signature: int = Field(description="RSA signature as an integer")
    modulus_bit_length: int | None = Field(
        default=None,
        description="Bit length the circuit expects for the modulus",
    )


# --- Circuit input record ---

class CircuitInputs(BaseModel):
    """Witness input record for the email verification circuit.

    Field declaration order is the emission order.  Optional fields left as
    ``None`` belong to features that were not requested and are never emitted.
    """

    header: BoundedVec
    pubkey: PublicKeyLimbs
    signature: list[str]
    dkim_header_sequence: Sequence
    # full or partial body hash verification
    body: BoundedVec | None = None
    body_hash_index: str | None = None
    # partial hash only
    partial_body_real_length: str | None = None
    partial_body_hash: list[str] | None = None
    # masking
    header_mask: list[str] | None = None
    body_mask: list[str] | None = None
    # quoted-printable soft line breaks removed
    decoded_body: BoundedVec | None = None
    # address extraction
    from_header_sequence: Sequence | None = None
    from_address_sequence: Sequence | None = None
    to_header_sequence: Sequence | None = None
    to_address_sequence: Sequence | None = None
    # public key commitment
    pubkey_hash: str | None = None

    def populated_fields(self) -> list[str]:
        return [name for name in type(self).model_fields if getattr(self, name) is not None]

    def to_inputs(self) -> dict[str, InputValue]:
        """Render the record as the ordered mapping the circuit consumes."""
        inputs: dict[str, InputValue] = {}
        for name in self.populated_fields():
            value = getattr(self, name)
            if isinstance(value, (BoundedVec, PublicKeyLimbs, Sequence)):
                inputs[name] = value.to_inputs()
            elif isinstance(value, list):
                inputs[name] = list(value)
            else:
                inputs[name] = value
        return inputs
