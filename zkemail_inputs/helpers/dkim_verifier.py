"""DKIM verification adapter built on dkimpy.

Verifies the first DKIM-Signature of a message and hands back the exact
canonicalized bytes the signature covers, which is what the circuit hashes.
"""

from __future__ import annotations

import base64
import re
from collections.abc import Callable

import dkim
import structlog
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from cryptography.hazmat.primitives.serialization import (
    load_der_public_key,
    load_pem_public_key,
)
from dkim.canonicalization import CanonicalizationPolicy
from dkim.util import parse_tag_value

from ..models import DKIMVerificationResult

logger = structlog.get_logger()

DNSLookup = Callable[..., "bytes | str | None"]

_WHITESPACE = re.compile(rb"\s+")


class DKIMVerificationError(Exception):
    """The message carries no valid DKIM signature."""


class _CollectingHasher:
    """Stands in for a hashlib object to capture the signed header bytes."""

    def __init__(self) -> None:
        self._chunks: list[bytes] = []

    def update(self, data: bytes) -> None:
        self._chunks.append(data)

    def value(self) -> bytes:
        return b"".join(self._chunks)


def _default_dnsfunc(name: bytes, timeout: int = 5) -> bytes | None:
    from dkim.dnsplug import get_txt

    return get_txt(name, timeout=timeout)


def static_dns(records: dict[bytes, bytes]) -> DNSLookup:
    """Return a DNS lookup answering only from *records* (offline use, tests)."""

    def lookup(name: bytes | str, timeout: int = 5) -> bytes | None:
        if isinstance(name, str):
            name = name.encode("ascii")
        return records.get(name) or records.get(name.rstrip(b"."))

    return lookup


def fixed_dns(record: bytes | str) -> DNSLookup:
    """Return a DNS lookup answering every key query with *record*."""
    answer = record.encode("ascii") if isinstance(record, str) else record

    def lookup(name: bytes | str, timeout: int = 5) -> bytes:
        return answer

    return lookup


def parse_rsa_public_key(der: bytes) -> RSAPublicKey:
    """Load an RSA key from a DKIM ``p=`` value (SubjectPublicKeyInfo or PKCS#1)."""
    try:
        key = load_der_public_key(der)
    except ValueError:
        pem = (
            b"-----BEGIN RSA PUBLIC KEY-----\n"
            + base64.encodebytes(der)
            + b"-----END RSA PUBLIC KEY-----\n"
        )
        key = load_pem_public_key(pem)
    if not isinstance(key, RSAPublicKey):
        raise DKIMVerificationError("DKIM key record does not hold an RSA key")
    return key


class DKIMVerifier:
    """Verify a raw email and extract what the circuit needs from it.

    The DNS lookup is owned by the instance; pass :func:`static_dns` to run
    without network access.
    """

    def __init__(
        self,
        dnsfunc: DNSLookup | None = None,
        *,
        timeout: int = 5,
        min_key_bits: int = 1024,
    ) -> None:
        self._dnsfunc = dnsfunc or _default_dnsfunc
        self._timeout = timeout
        self._min_key_bits = min_key_bits

    def verify(self, raw_email: bytes | str) -> DKIMVerificationResult:
        message = raw_email.encode("utf-8") if isinstance(raw_email, str) else raw_email

        verifier = dkim.DKIM(message, minkey=self._min_key_bits, timeout=self._timeout)
        if not verifier.verify(dnsfunc=self._dnsfunc):
            raise DKIMVerificationError("DKIM signature verification failed")

        headers, body = dkim.rfc822_parse(message)
        sigheaders = [(k, v) for k, v in headers if k.lower() == b"dkim-signature"]
        if not sigheaders:
            raise DKIMVerificationError("message has no DKIM-Signature header")
        sigheader = sigheaders[0]
        sig = parse_tag_value(sigheader[1])

        canon_policy = CanonicalizationPolicy.from_c_value(sig.get(b"c", b"simple/simple"))
        include_headers = [h.lower() for h in re.split(rb"\s*:\s*", sig[b"h"].strip())]
        if b"from" in include_headers:
            include_headers.append(b"from")

        collector = _CollectingHasher()
        dkim.hash_headers(
            collector,
            canon_policy,
            canon_policy.canonicalize_headers(headers),
            include_headers,
            sigheader,
            sig,
        )
        signed_headers = collector.value()

        canonical_body = canon_policy.canonicalize_body(body)
        if b"l" in sig:
            canonical_body = canonical_body[:int(sig[b"l"])]

        public_key = self._load_public_key(sig[b"s"], sig[b"d"])
        signature = base64.b64decode(_WHITESPACE.sub(b"", sig[b"b"]))

        logger.info(
            "dkim_verified",
            domain=sig[b"d"].decode("ascii", "replace"),
            selector=sig[b"s"].decode("ascii", "replace"),
            header_length=len(signed_headers),
            body_length=len(canonical_body),
            key_size=public_key.key_size,
        )

        return DKIMVerificationResult(
            headers=signed_headers,
            body=canonical_body,
            body_hash=_WHITESPACE.sub(b"", sig[b"bh"]).decode("ascii"),
            public_key=public_key.public_numbers().n,
            signature=int.from_bytes(signature, byteorder="big"),
            modulus_bit_length=public_key.key_size,
        )

    def _load_public_key(self, selector: bytes, domain: bytes) -> RSAPublicKey:
        name = selector + b"._domainkey." + domain + b"."
        record = self._dnsfunc(name, timeout=self._timeout)
        if not record:
            raise DKIMVerificationError(f"missing public key: {name.decode('ascii', 'replace')}")
        if isinstance(record, str):
            record = record.encode("ascii")
        tags = parse_tag_value(record)
        return parse_rsa_public_key(base64.b64decode(tags[b"p"]))
