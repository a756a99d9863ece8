"""Unit tests for :mod:`orca.entrypoints.cli.helpers.messages`.

Glyphs follow the encoding of Click's *current* stderr stream, and every
message is written to stderr, never stdout.
"""

import io

import click
import pytest

from orca.entrypoints.cli.helpers.messages import error, glyph, success, warn


class FakeTTY(io.StringIO):
    """A text stream that mimics a TTY with a controllable encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        """Declared character encoding."""
        return self._encoding

    def isatty(self) -> bool:
        """Report a TTY so Click keeps ANSI styling."""
        return True


@pytest.fixture
def fake_stderr(monkeypatch):
    """Route Click's stderr lookups to a UTF-8 fake stream."""
    stream = FakeTTY("utf-8")
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
    return stream


def test_glyph_uses_emoji_when_encodable(fake_stderr):
    """UTF-8 streams get the emoji."""
    assert glyph("✅", "[OK]") == "✅"


def test_glyph_falls_back_to_ascii(fake_stderr):
    """ASCII streams get the fallback."""
    fake_stderr._encoding = "ascii"  # pylint: disable=protected-access
    assert glyph("✅", "[OK]") == "[OK]"


@pytest.mark.parametrize(
    "emit, marker",
    [(warn, "⚠️"), (success, "✅"), (error, "❌")],
    ids=["warn", "success", "error"],
)
def test_messages_go_to_stderr(capsys, emit, marker):
    """Messages land on stderr with their text and nothing on stdout."""
    emit("hello there")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "hello there" in captured.err
    assert marker in captured.err or "[" in captured.err
