"""Tests for the path label and text helpers."""

from __future__ import annotations

import pytest

from nixmonitor.errors import PayloadEncodingError
from nixmonitor.utils.paths import label_for, store_path_base
from nixmonitor.utils.text import clean_log_line, ensure_printable, strip_ansi


class TestLabelFor:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/nix/store/abc123-hello-1.0.drv", "hello-1.0"),
            ("/nix/store/abc123-hello-1.0", "hello-1.0"),
            ("/nix/store/abc123-glibc-2.38-dev", "glibc-2.38-dev"),
            ("abc123-bare.drv", "bare"),
            ("noslash", ""),
            ("/a/b", ""),
            ("", ""),
            ("/nix/store/", ""),
            ("/nix/store/abc-", ""),
            ("/nix/store/abc-x.drv.drv", "x"),
            ("/x/h-a.drv.drv", "a"),
        ],
    )
    def test_label_for(self, path, expected):
        assert label_for(path) == expected

    def test_alias(self):
        assert store_path_base is label_for


class TestStripAnsi:
    def test_removes_color_codes(self):
        assert strip_ansi("\x1b[31;1merror:\x1b[0m oops") == "error: oops"

    def test_plain_text_unchanged(self):
        assert strip_ansi("make[1]: Entering directory") == "make[1]: Entering directory"

    def test_empty(self):
        assert strip_ansi("") == ""


class TestEnsurePrintable:
    def test_valid_text_passes(self):
        assert ensure_printable("héllo ✓") == "héllo ✓"

    def test_lone_surrogate_rejected(self):
        text = b"bad \xff byte".decode("utf-8", errors="surrogateescape")
        with pytest.raises(PayloadEncodingError):
            ensure_printable(text)

    def test_payload_error_is_unicode_error(self):
        assert issubclass(PayloadEncodingError, UnicodeError)

    def test_clean_log_line(self):
        assert clean_log_line("\x1b[32mok\x1b[0m") == "ok"
