"""Default implementations of the collaborators the generator depends on.

Each can be replaced: the generator only relies on their call contracts.
"""

from .bignum import bn_to_limb_str_array, bn_to_redc_limb_str_array
from .dkim_verifier import DKIMVerificationError, DKIMVerifier, fixed_dns, static_dns
from .hashing import BN254_FIELD_MODULUS, FieldHasher, Sha256FieldHasher
from .sha import (
    PaddingOverflowError,
    PartialShaResult,
    RemainingBodyTooLongError,
    generate_partial_sha,
    partial_sha,
    sha256_pad,
    u8_to_u32,
)

__all__ = [
    "BN254_FIELD_MODULUS",
    "DKIMVerificationError",
    "DKIMVerifier",
    "FieldHasher",
    "PaddingOverflowError",
    "PartialShaResult",
    "RemainingBodyTooLongError",
    "Sha256FieldHasher",
    "bn_to_limb_str_array",
    "bn_to_redc_limb_str_array",
    "fixed_dns",
    "generate_partial_sha",
    "partial_sha",
    "sha256_pad",
    "static_dns",
    "u8_to_u32",
]
