"""Helpers for command output text."""

LINE_TERMINATORS = "\r\n"


def strip_line_terminators(text: str) -> str:
    """Remove only the trailing run of CR/LF characters.

    Example:
        >>> strip_line_terminators("done\\r\\nextra\\r\\n")
        'done\\r\\nextra'
    """
    return text.rstrip(LINE_TERMINATORS)


def decode_stream(data: str | bytes | None) -> str:
    """Normalize an asyncssh stdout/stderr value to text."""
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
