"""Command line entry point: generate Prover.toml inputs for an .eml file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .commitment import CommitmentScheme
from .config import GeneratorSettings, InputGenerationArgs
from .generator import generate_email_verifier_inputs
from .helpers.dkim_verifier import DKIMVerifier, fixed_dns
from .helpers.hashing import Sha256FieldHasher
from .logging import setup_logging
from .serializer import to_prover_toml, write_prover_toml


def read_mask_file(path: str) -> tuple[int, ...]:
    """Read a mask file: one 0/1 character per buffer slot, whitespace and commas ignored."""
    try:
        text = Path(path).read_text(encoding="ascii")
    except OSError as exc:
        raise argparse.ArgumentTypeError(f"cannot read mask file {path}: {exc}") from exc

    bits = [char for char in text if not char.isspace() and char != ","]
    if any(bit not in "01" for bit in bits):
        raise argparse.ArgumentTypeError(f"mask file {path} may only contain 0 and 1")
    return tuple(int(bit) for bit in bits)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zkemail_inputs",
        description="Generate ZK email verification circuit inputs from a DKIM-signed email.",
    )
    parser.add_argument("email", type=Path, help="Path to the raw .eml file")
    parser.add_argument("-o", "--output", type=Path, help="Write Prover.toml here (default: stdout)")
    parser.add_argument("--max-headers-length", type=int)
    parser.add_argument("--max-body-length", type=int)
    parser.add_argument("--ignore-body-hash-check", action="store_true")
    parser.add_argument("--sha-precompute-selector")
    parser.add_argument("--remove-soft-line-breaks", action="store_true")
    parser.add_argument("--extract-from", action="store_true")
    parser.add_argument("--extract-to", action="store_true")
    parser.add_argument(
        "--header-mask",
        type=read_mask_file,
        metavar="FILE",
        help="File of 0/1 entries, one per header buffer slot",
    )
    parser.add_argument(
        "--body-mask",
        type=read_mask_file,
        metavar="FILE",
        help="File of 0/1 entries, one per body buffer slot",
    )
    parser.add_argument(
        "--pubkey-commitment",
        choices=[scheme.value for scheme in CommitmentScheme],
        help="Also emit pubkey_hash (SHA-256 field hash, not the circuit's Poseidon)",
    )
    parser.add_argument(
        "--dkim-key-record",
        help="Use this DKIM TXT record instead of a DNS lookup (e.g. 'v=DKIM1; k=rsa; p=...')",
    )
    parser.add_argument("--log-level")
    parser.add_argument("--console-logs", action="store_true", help="Human-readable logs")
    return parser


def main(argv: list[str] | None = None) -> int:
    options = build_parser().parse_args(argv)
    settings = GeneratorSettings()
    setup_logging(settings, json=False if options.console_logs else None, level=options.log_level)

    args = InputGenerationArgs(
        ignore_body_hash_check=options.ignore_body_hash_check,
        sha_precompute_selector=options.sha_precompute_selector,
        max_headers_length=options.max_headers_length,
        max_body_length=options.max_body_length,
        remove_soft_line_breaks=options.remove_soft_line_breaks,
        header_mask=options.header_mask,
        body_mask=options.body_mask,
        extract_from=options.extract_from,
        extract_to=options.extract_to,
        pubkey_commitment=options.pubkey_commitment,
    )

    dnsfunc = fixed_dns(options.dkim_key_record) if options.dkim_key_record else None
    verifier = DKIMVerifier(dnsfunc, timeout=settings.dns_timeout_seconds)
    hasher = Sha256FieldHasher() if args.pubkey_commitment is not None else None

    inputs = generate_email_verifier_inputs(
        options.email.read_bytes(),
        args,
        verifier=verifier,
        settings=settings,
        hasher=hasher,
    )

    if options.output:
        write_prover_toml(options.output, inputs)
    else:
        sys.stdout.write(to_prover_toml(inputs) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
