"""Big integer to 120-bit limb conversion for the noir bignum library."""

from __future__ import annotations

LIMB_BITS = 120
# extra bits in the Barrett reduction parameter
BARRETT_REDUCTION_OVERFLOW_BITS = 4


def num_limbs(num_bits: int) -> int:
    """Limbs needed for a *num_bits* modulus (2048 -> 18, 1024 -> 9)."""
    return num_bits // LIMB_BITS + 1


def split_into_limbs(value: int, num_bits: int = 2048) -> list[int]:
    """Split *value* into little-endian 120-bit limbs."""
    if value < 0:
        raise ValueError("value must be non-negative")
    count = num_limbs(num_bits)
    mask = (1 << LIMB_BITS) - 1
    limbs = [(value >> (LIMB_BITS * i)) & mask for i in range(count)]
    if value >> (LIMB_BITS * count):
        raise ValueError(f"value does not fit in {count} limbs of {LIMB_BITS} bits")
    return limbs


def barrett_reduction_parameter(modulus: int) -> int:
    """``floor(2^(2k + 4) / modulus)`` with k the bit length of *modulus*."""
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    k = modulus.bit_length()
    return (1 << (2 * k + BARRETT_REDUCTION_OVERFLOW_BITS)) // modulus


def bn_to_limb_str_array(value: int, num_bits: int = 2048) -> list[str]:
    return [hex(limb) for limb in split_into_limbs(value, num_bits)]


def bn_to_redc_limb_str_array(modulus: int, num_bits: int = 2048) -> list[str]:
    return bn_to_limb_str_array(barrett_reduction_parameter(modulus), num_bits)


def limbs_to_int(limbs: list[str] | list[int]) -> int:
    """Inverse of :func:`split_into_limbs`; accepts ints or ``0x`` strings."""
    value = 0
    for i, limb in enumerate(limbs):
        value |= parse_limb(limb) << (LIMB_BITS * i)
    return value


def parse_limb(limb: str | int) -> int:
    if isinstance(limb, int):
        return limb
    return int(limb, 0)
