"""Tests for zkemail_inputs.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from zkemail_inputs.models import BoundedVec, CircuitInputs, PublicKeyLimbs, Sequence


class TestSequence:
    def test_extract(self):
        seq = Sequence(index=2, length=3)
        assert seq.end == 5
        assert seq.extract(b"abcdefg") == b"cde"

    def test_extract_out_of_range(self):
        with pytest.raises(ValueError, match="exceeds buffer"):
            Sequence(index=5, length=3).extract(b"abcdef")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            Sequence(index=-1, length=0)

    def test_frozen(self):
        seq = Sequence(index=0, length=1)
        with pytest.raises(ValidationError):
            seq.index = 3

    def test_to_inputs(self):
        assert Sequence(index=10, length=4).to_inputs() == {"index": "10", "length": "4"}


class TestBoundedVec:
    def test_from_bytes(self):
        vec = BoundedVec.from_bytes(b"hi\x00\x00", 2)
        assert vec.storage == ["104", "105", "0", "0"]
        assert vec.capacity == 4
        assert vec.to_bytes() == b"hi"

    def test_length_beyond_capacity(self):
        with pytest.raises(ValidationError, match="exceeds capacity"):
            BoundedVec(storage=["1"], length=2)

    def test_to_inputs(self):
        vec = BoundedVec.from_bytes(b"a\x00", 1)
        assert vec.to_inputs() == {"storage": ["97", "0"], "len": "1"}


class TestCircuitInputs:
    @pytest.fixture
    def inputs(self) -> CircuitInputs:
        return CircuitInputs(
            header=BoundedVec.from_bytes(b"h\x00", 1),
            pubkey=PublicKeyLimbs(modulus=["0x1"], redc=["0x2"]),
            signature=["0x3"],
            dkim_header_sequence=Sequence(index=0, length=1),
            to_header_sequence=Sequence(index=0, length=1),
            body_hash_index="9",
        )

    def test_populated_fields_in_declaration_order(self, inputs):
        assert inputs.populated_fields() == [
            "header",
            "pubkey",
            "signature",
            "dkim_header_sequence",
            "body_hash_index",
            "to_header_sequence",
        ]

    def test_to_inputs_omits_unrequested(self, inputs):
        rendered = inputs.to_inputs()
        assert list(rendered) == inputs.populated_fields()
        assert rendered["pubkey"] == {"modulus": ["0x1"], "redc": ["0x2"]}
        assert rendered["body_hash_index"] == "9"
        assert "body" not in rendered
