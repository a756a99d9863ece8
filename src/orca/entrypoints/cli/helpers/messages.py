"""Terminal message helpers for the ORCA CLI.

Lines go to stderr so stdout stays free for command output, and glyphs fall
back to ASCII on terminals that cannot encode them.
"""

import click


def glyph(emoji: str, fallback: str) -> str:
    """Return ``emoji`` if stderr can encode it, otherwise ``fallback``."""
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        emoji.encode(encoding)
    except UnicodeEncodeError:
        return fallback
    return emoji


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to stderr."""
    click.secho(f"{glyph('⚠️', '[!]')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to stderr."""
    click.secho(f"{glyph('✅', '[OK]')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to stderr."""
    click.secho(f"{glyph('❌', '[X]')}  {msg}", fg="red", bold=True, err=True)
