"""zkemail-inputs: witness input generation for ZK email verification circuits.

Public API re-exported here for convenience::

    from zkemail_inputs import InputGenerationArgs, generate_email_verifier_inputs, to_prover_toml
"""

from .alignment import ShaAlignment, body_padding_target, compute_sha_alignment, sha_padded_length
from .commitment import CommitmentScheme, hash_public_key
from .config import GeneratorSettings, InputGenerationArgs
from .errors import (
    AddressNotFoundError,
    FieldNotFoundError,
    InputGenerationError,
    InvalidLimbCountError,
    InvalidMaskError,
    MissingBodyDataError,
    RemainderLengthMismatchError,
    SelectorNotFoundError,
)
from .generator import (
    generate_email_verifier_inputs,
    generate_email_verifier_inputs_from_dkim_result,
)
from .locator import get_address_header_sequence, get_header_sequence
from .logging import setup_logging
from .masking import apply_mask, build_mask
from .models import (
    BoundedVec,
    CircuitInputs,
    DKIMVerificationResult,
    PublicKeyLimbs,
    Sequence,
)
from .serializer import to_prover_toml, write_prover_toml
from .soft_line_breaks import remove_soft_line_breaks

__all__ = [
    "AddressNotFoundError",
    "BoundedVec",
    "CircuitInputs",
    "CommitmentScheme",
    "DKIMVerificationResult",
    "FieldNotFoundError",
    "GeneratorSettings",
    "InputGenerationArgs",
    "InputGenerationError",
    "InvalidLimbCountError",
    "InvalidMaskError",
    "MissingBodyDataError",
    "PublicKeyLimbs",
    "RemainderLengthMismatchError",
    "SelectorNotFoundError",
    "Sequence",
    "ShaAlignment",
    "apply_mask",
    "body_padding_target",
    "build_mask",
    "compute_sha_alignment",
    "generate_email_verifier_inputs",
    "generate_email_verifier_inputs_from_dkim_result",
    "get_address_header_sequence",
    "get_header_sequence",
    "hash_public_key",
    "remove_soft_line_breaks",
    "setup_logging",
    "sha_padded_length",
    "to_prover_toml",
    "write_prover_toml",
]
