"""Tests for query string and form encoding."""

from __future__ import annotations

import pytest

from cloudconvert_client.encoding import append_query, build_query, encode_value, split_form
from cloudconvert_client.models import UploadFile


class TestEncodeValue:
    """Tests for encode_value."""

    def test_true_encodes_as_one(self):
        """Should encode True as "1", not "true"."""
        assert encode_value(True) == "1"

    def test_false_and_none_encode_empty(self):
        """Should encode False and None as empty strings."""
        assert encode_value(False) == ""
        assert encode_value(None) == ""

    def test_numbers_use_str(self):
        """Should stringify numbers."""
        assert encode_value(42) == "42"
        assert encode_value(1.5) == "1.5"

    def test_rejects_upload_file(self):
        """Should refuse to encode a file attachment as a string."""
        with pytest.raises(TypeError):
            encode_value(UploadFile("/tmp/input.docx"))


class TestBuildQuery:
    """Tests for build_query."""

    def test_lowercases_keys(self):
        """Should lower-case every key."""
        assert build_query({"ApiKey": "k", "INPUTFORMAT": "docx"}) == "apikey=k&inputformat=docx"

    def test_percent_encodes_values(self):
        """Should percent-encode values form style."""
        query = build_query({"file": "https://example.com/a b.docx?x=1&y=2"})

        assert query == "file=https%3A%2F%2Fexample.com%2Fa+b.docx%3Fx%3D1%26y%3D2"

    def test_encodes_tilde(self):
        """Should escape "~" like the rest of the reserved characters."""
        assert build_query({"file": "https://example.com/~user/a.docx"}) == (
            "file=https%3A%2F%2Fexample.com%2F%7Euser%2Fa.docx"
        )

    def test_preserves_key_order(self):
        """Should keep the mapping's key order."""
        assert build_query({"b": "2", "a": "1", "c": "3"}) == "b=2&a=1&c=3"

    def test_encodes_wait_flag(self):
        """Should send wait=true as wait=1."""
        assert build_query({"wait": True}) == "wait=1"

    def test_empty_params(self):
        """Should produce an empty string for no parameters."""
        assert build_query({}) == ""


class TestAppendQuery:
    """Tests for append_query."""

    def test_appends_with_question_mark(self):
        assert append_query("https://api.example.com/convert", {"a": "1"}) == "https://api.example.com/convert?a=1"

    def test_appends_to_existing_query(self):
        """Should join with & when the URL already has a query."""
        assert append_query("https://api.example.com/x?foo=bar", {"a": "1"}) == "https://api.example.com/x?foo=bar&a=1"

    def test_leaves_url_untouched_without_params(self):
        assert append_query("https://host/process/abc", {}) == "https://host/process/abc"


class TestSplitForm:
    """Tests for split_form."""

    def test_separates_files_from_fields(self):
        """Should move UploadFile values into the files mapping."""
        upload = UploadFile("/tmp/input.docx")

        data, files = split_form({"ApiKey": "k", "File": upload, "wait": True})

        assert data == {"apikey": "k", "wait": "1"}
        assert files == {"file": upload}

    def test_no_files(self):
        data, files = split_form({"a": "1"})

        assert data == {"a": "1"}
        assert files == {}
