"""Shared test fixtures for the zkemail_inputs test suite."""

from __future__ import annotations

import base64
import logging

import dkim
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from zkemail_inputs.config import GeneratorSettings
from zkemail_inputs.helpers.dkim_verifier import DKIMVerifier, static_dns
from zkemail_inputs.models import DKIMVerificationResult

SELECTOR = b"test"
DOMAIN = b"example.com"
KEY_NAME = SELECTOR + b"._domainkey." + DOMAIN + b"."

SAMPLE_BODY = (
    b"A" * 400
    + b"Selector text here\r\n"
    + b"tail line\r\n" * 5
)

# Canonicalized header block as the verifier hands it over: the signature
# header comes last, without its b= value or trailing CRLF.
SAMPLE_HEADERS = (
    b"from:Alice Example <alice@example.com>\r\n"
    b"to:bob@example.org\r\n"
    b"subject:Hello there\r\n"
    b"dkim-signature:v=1; a=rsa-sha256; c=relaxed/relaxed; d=example.com; "
    b"s=test; h=from:to:subject; bh=c2FtcGxlLWJvZHktaGFzaA==; b="
)
SAMPLE_BODY_HASH = "c2FtcGxlLWJvZHktaGFzaA=="


def key_record(private_key: rsa.RSAPrivateKey) -> bytes:
    """DKIM TXT record publishing the public half of *private_key*."""
    der = private_key.public_key().public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return b"v=DKIM1; k=rsa; p=" + base64.b64encode(der)


def build_signed_email(
    private_key: rsa.RSAPrivateKey,
    *,
    body: bytes = SAMPLE_BODY,
    from_header: bytes = b"Alice Example <alice@example.com>",
    to_header: bytes = b"bob@example.org",
    subject: bytes = b"Hello there",
) -> bytes:
    """Build a raw email and sign it with relaxed/relaxed DKIM."""
    message = (
        b"From: " + from_header + b"\r\n"
        b"To: " + to_header + b"\r\n"
        b"Subject: " + subject + b"\r\n"
        b"\r\n"
        + body
    )
    pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    )
    signature = dkim.sign(
        message,
        SELECTOR,
        DOMAIN,
        pem,
        canonicalize=(b"relaxed", b"relaxed"),
        include_headers=[b"from", b"to", b"subject"],
    )
    return signature + message


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging replaces root handlers; undo it after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def verifier(private_key: rsa.RSAPrivateKey) -> DKIMVerifier:
    return DKIMVerifier(static_dns({KEY_NAME: key_record(private_key)}))


@pytest.fixture(scope="session")
def signed_email(private_key: rsa.RSAPrivateKey) -> bytes:
    return build_signed_email(private_key)


@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings(max_headers_length=512, max_body_length=1024)


@pytest.fixture
def dkim_result() -> DKIMVerificationResult:
    """A verification result built by hand, without any real signature."""
    modulus = (1 << 2047) | 0xC0FFEE1
    return DKIMVerificationResult(
        headers=SAMPLE_HEADERS,
        body=SAMPLE_BODY,
        body_hash=SAMPLE_BODY_HASH,
        public_key=modulus,
        signature=modulus // 3,
        modulus_bit_length=2048,
    )
