"""Tests for zkemail_inputs.locator."""

from __future__ import annotations

import pytest

from tests.conftest import SAMPLE_BODY_HASH, SAMPLE_HEADERS
from zkemail_inputs.errors import AddressNotFoundError, FieldNotFoundError
from zkemail_inputs.locator import (
    find_body_hash_index,
    get_address_header_sequence,
    get_header_sequence,
)


class TestGetHeaderSequence:
    def test_first_field(self):
        seq = get_header_sequence(SAMPLE_HEADERS, "from")
        assert seq.index == 0
        assert seq.extract(SAMPLE_HEADERS) == b"from:Alice Example <alice@example.com>"

    def test_excludes_line_terminator(self):
        seq = get_header_sequence(SAMPLE_HEADERS, "subject")
        assert seq.extract(SAMPLE_HEADERS) == b"subject:Hello there"
        assert SAMPLE_HEADERS[seq.end:seq.end + 2] == b"\r\n"

    def test_last_field_without_terminator(self):
        seq = get_header_sequence(SAMPLE_HEADERS, "dkim-signature")
        assert seq.end == len(SAMPLE_HEADERS)
        assert seq.extract(SAMPLE_HEADERS).startswith(b"dkim-signature:v=1;")

    def test_name_is_case_insensitive(self):
        headers = b"Subject:x\r\nFrom: Alice <alice@example.com>\r\n"
        seq = get_header_sequence(headers, "from")
        assert seq.index == len(b"Subject:x\r\n")

    def test_does_not_match_inside_other_field_names(self):
        headers = b"reply-to:x@y.com\r\nto:bob@example.org\r\n"
        seq = get_header_sequence(headers, "to")
        assert seq.index == len(b"reply-to:x@y.com\r\n")
        assert seq.extract(headers) == b"to:bob@example.org"

    def test_does_not_match_header_list_in_signature(self):
        headers = b"dkim-signature:v=1; h=from:to; b=\r\nto:bob@example.org"
        seq = get_header_sequence(headers, "to")
        assert seq.extract(headers) == b"to:bob@example.org"

    def test_missing_field(self):
        with pytest.raises(FieldNotFoundError, match='Field "cc" not found in header'):
            get_header_sequence(SAMPLE_HEADERS, "cc")


class TestGetAddressHeaderSequence:
    def test_angle_bracket_address(self):
        field, address = get_address_header_sequence(SAMPLE_HEADERS, "from")
        assert field.index == 0
        assert address.extract(SAMPLE_HEADERS) == b"alice@example.com"
        assert field.index <= address.index
        assert address.end <= field.end

    def test_bare_address(self):
        field, address = get_address_header_sequence(SAMPLE_HEADERS, "to")
        assert address.extract(SAMPLE_HEADERS) == b"bob@example.org"
        assert address.index == field.index + len(b"to:")

    def test_address_offsets_are_absolute(self):
        headers = b"subject:hi\r\nfrom:<first.last+tag@mail.example.co.uk>\r\n"
        _, address = get_address_header_sequence(headers, "from")
        assert address.extract(headers) == b"first.last+tag@mail.example.co.uk"

    def test_address_not_in_following_line(self):
        headers = b"to:undisclosed-recipients:;\r\ncc:carol@example.net\r\n"
        with pytest.raises(AddressNotFoundError):
            get_address_header_sequence(headers, "to")

    def test_missing_field(self):
        with pytest.raises(FieldNotFoundError):
            get_address_header_sequence(b"subject:hi\r\n", "from")


class TestFindBodyHashIndex:
    def test_points_at_value(self):
        index = find_body_hash_index(SAMPLE_HEADERS, SAMPLE_BODY_HASH)
        assert index == SAMPLE_HEADERS.find(b"bh=") + 3
        assert SAMPLE_HEADERS[index:index + len(SAMPLE_BODY_HASH)] == SAMPLE_BODY_HASH.encode()

    def test_missing_value(self):
        with pytest.raises(FieldNotFoundError):
            find_body_hash_index(SAMPLE_HEADERS, "bm90LXRoZXJl")
