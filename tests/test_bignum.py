"""Tests for zkemail_inputs.helpers.bignum and helpers.hashing."""

from __future__ import annotations

import pytest

from zkemail_inputs.helpers.bignum import (
    barrett_reduction_parameter,
    bn_to_limb_str_array,
    bn_to_redc_limb_str_array,
    limbs_to_int,
    num_limbs,
    split_into_limbs,
)
from zkemail_inputs.helpers.hashing import BN254_FIELD_MODULUS, Sha256FieldHasher


class TestLimbs:
    def test_num_limbs(self):
        assert num_limbs(2048) == 18
        assert num_limbs(1024) == 9

    def test_little_endian(self):
        value = (7 << 240) | (5 << 120) | 3
        assert split_into_limbs(value)[:4] == [3, 5, 7, 0]

    def test_round_trip(self):
        value = (1 << 2047) + 12345678901234567890
        limbs = bn_to_limb_str_array(value)
        assert len(limbs) == 18
        assert all(limb.startswith("0x") for limb in limbs)
        assert limbs_to_int(limbs) == value

    def test_too_large(self):
        with pytest.raises(ValueError):
            split_into_limbs(1 << 1080, 1024)

    def test_negative(self):
        with pytest.raises(ValueError):
            split_into_limbs(-1)


class TestBarrettReduction:
    def test_parameter(self):
        modulus = 0b1011
        assert barrett_reduction_parameter(modulus) == (1 << 12) // modulus

    def test_redc_limbs(self):
        modulus = (1 << 2047) | 1
        redc = bn_to_redc_limb_str_array(modulus)
        assert len(redc) == 18
        assert limbs_to_int(redc) == (1 << 4100) // modulus

    def test_rejects_zero(self):
        with pytest.raises(ValueError):
            barrett_reduction_parameter(0)


class TestSha256FieldHasher:
    def test_output_in_field(self):
        result = Sha256FieldHasher().hash([1, 2, 3])
        assert 0 <= result < BN254_FIELD_MODULUS

    def test_order_matters(self):
        hasher = Sha256FieldHasher()
        assert hasher([1, 2]) != hasher([2, 1])

    def test_rejects_out_of_field(self):
        with pytest.raises(ValueError):
            Sha256FieldHasher().hash([BN254_FIELD_MODULUS])
