"""Circuit input generation for the email verification circuit.

Turns a verified email into the fixed-shape witness inputs: SHA-padded header
and body buffers, byte sequences locating header fields, partial-hash state,
masks, and the RSA key and signature in limb form.
"""

from __future__ import annotations

from typing import Any

import structlog

from .alignment import body_padding_target, compute_sha_alignment
from .commitment import hash_public_key
from .config import GeneratorSettings, InputGenerationArgs
from .errors import MissingBodyDataError, RemainderLengthMismatchError
from .helpers.bignum import bn_to_limb_str_array, bn_to_redc_limb_str_array
from .helpers.dkim_verifier import DKIMVerifier
from .helpers.hashing import FieldHasher
from .helpers.sha import PartialShaResult, generate_partial_sha, sha256_pad, u8_to_u32
from .locator import find_body_hash_index, get_address_header_sequence, get_header_sequence
from .masking import build_mask
from .models import BoundedVec, CircuitInputs, DKIMVerificationResult, PublicKeyLimbs
from .soft_line_breaks import remove_soft_line_breaks

logger = structlog.get_logger()


def generate_email_verifier_inputs(
    raw_email: bytes | str,
    args: InputGenerationArgs | None = None,
    *,
    verifier: DKIMVerifier | None = None,
    settings: GeneratorSettings | None = None,
    hasher: FieldHasher | None = None,
) -> CircuitInputs:
    """Verify *raw_email* with DKIM and generate its circuit inputs.

    Verification errors propagate unchanged; nothing is generated for an
    email whose signature does not verify.
    """
    settings = settings or GeneratorSettings()
    verifier = verifier or DKIMVerifier(timeout=settings.dns_timeout_seconds)
    result = verifier.verify(raw_email)
    return generate_email_verifier_inputs_from_dkim_result(
        result, args, settings=settings, hasher=hasher
    )


def generate_email_verifier_inputs_from_dkim_result(
    result: DKIMVerificationResult,
    args: InputGenerationArgs | None = None,
    *,
    settings: GeneratorSettings | None = None,
    hasher: FieldHasher | None = None,
) -> CircuitInputs:
    """Generate circuit inputs from an already verified email.

    Only the fields implied by *args* are populated.  Any failure aborts the
    whole call.
    """
    settings = settings or GeneratorSettings()
    args = (args or InputGenerationArgs()).resolve(settings)
    if args.pubkey_commitment is not None and hasher is None:
        raise ValueError("pubkey_commitment requires a FieldHasher")

    headers = result.headers
    modulus_bits = result.modulus_bit_length or settings.modulus_bit_length

    header_padded, _ = sha256_pad(headers, args.max_headers_length)
    logger.debug(
        "header_padded",
        header_length=len(headers),
        capacity=args.max_headers_length,
    )

    pubkey = PublicKeyLimbs(
        modulus=bn_to_limb_str_array(result.public_key, modulus_bits),
        redc=bn_to_redc_limb_str_array(result.public_key, modulus_bits),
    )
    fields: dict[str, Any] = {
        "header": BoundedVec.from_bytes(header_padded, len(headers)),
        "pubkey": pubkey,
        "signature": bn_to_limb_str_array(result.signature, modulus_bits),
        "dkim_header_sequence": get_header_sequence(headers, "dkim-signature"),
    }

    if not args.ignore_body_hash_check:
        fields.update(_body_inputs(result, args))

    fields["header_mask"] = build_mask(
        args.max_headers_length, args.header_mask, name="header_mask"
    )

    if args.extract_from:
        fields["from_header_sequence"], fields["from_address_sequence"] = (
            get_address_header_sequence(headers, "from")
        )
    if args.extract_to:
        fields["to_header_sequence"], fields["to_address_sequence"] = (
            get_address_header_sequence(headers, "to")
        )

    if args.pubkey_commitment is not None:
        commitment = hash_public_key(
            pubkey.modulus, pubkey.redc, hasher, args.pubkey_commitment
        )
        fields["pubkey_hash"] = str(commitment)

    inputs = CircuitInputs(**fields)
    logger.info(
        "circuit_inputs_generated",
        fields=inputs.populated_fields(),
        modulus_bits=modulus_bits,
    )
    return inputs


def _body_inputs(result: DKIMVerificationResult, args: InputGenerationArgs) -> dict[str, Any]:
    if result.body is None or not result.body_hash:
        raise MissingBodyDataError(
            "body and body_hash are required when ignore_body_hash_check is false"
        )

    body = result.body
    selector = args.sha_precompute_selector
    max_body_length = args.max_body_length

    body_hash_index = find_body_hash_index(result.headers, result.body_hash)
    alignment = compute_sha_alignment(body, selector)

    body_padded, body_padded_length = sha256_pad(
        body, body_padding_target(max_body_length, len(body))
    )
    partial = generate_partial_sha(
        body_padded, body_padded_length, selector, max_body_length
    )
    _check_remainder(partial, body_padded_length, alignment.cutoff, max_body_length)
    logger.debug(
        "body_padded",
        body_length=len(body),
        padded_length=body_padded_length,
        cutoff=alignment.cutoff,
        capacity=max_body_length,
    )

    body_vec = BoundedVec.from_bytes(partial.body_remaining, alignment.remaining_length)
    fields: dict[str, Any] = {
        "body": body_vec,
        "body_hash_index": str(body_hash_index),
    }

    if selector:
        fields["partial_body_real_length"] = str(len(body))
        # u32 words so the circuit does not have to repack the state
        fields["partial_body_hash"] = [str(word) for word in u8_to_u32(partial.precomputed_sha)]

    fields["body_mask"] = build_mask(body_vec.capacity, args.body_mask, name="body_mask")

    if args.remove_soft_line_breaks:
        decoded = remove_soft_line_breaks(body_vec.storage)
        logger.debug(
            "soft_line_breaks_removed",
            removed=(body_vec.capacity - decoded.length) // 3,
        )
        fields["decoded_body"] = decoded

    return fields


def _check_remainder(
    partial: PartialShaResult,
    padded_length: int,
    cutoff: int,
    capacity: int,
) -> None:
    """The remainder must start at *cutoff* and fill the body buffer exactly."""
    if len(partial.body_remaining) != capacity:
        raise RemainderLengthMismatchError(
            f"remainder buffer is {len(partial.body_remaining)} bytes, expected {capacity}"
        )
    if padded_length - partial.body_remaining_length != cutoff:
        raise RemainderLengthMismatchError(
            f"remainder of {partial.body_remaining_length} bytes does not start at "
            f"cutoff {cutoff} of a {padded_length}-byte padded body"
        )
