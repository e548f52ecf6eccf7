"""Tests for command output text helpers."""

from sshsession_mcp.utils import decode_stream, strip_line_terminators


def test_strips_trailing_crlf_run() -> None:
    assert strip_line_terminators("done\r\n\r\n") == "done"


def test_keeps_interior_newlines() -> None:
    assert strip_line_terminators("line1\nline2\n") == "line1\nline2"


def test_keeps_trailing_spaces() -> None:
    assert strip_line_terminators("value  \n") == "value  "


def test_empty_string() -> None:
    assert strip_line_terminators("") == ""


def test_decode_stream_variants() -> None:
    assert decode_stream(None) == ""
    assert decode_stream(b"caf\xc3\xa9") == "café"
    assert decode_stream("text") == "text"
