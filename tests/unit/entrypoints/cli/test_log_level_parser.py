"""Unit tests for the CLI log level parser.

These tests exercise orca.entrypoints.cli.helpers.log_level_parser.parse_log_level,
covering defaults, override order, input normalization (commas/spaces),
case-insensitivity, and error handling for malformed input.
"""

import logging
import types

import click
import pytest

from orca.entrypoints.cli.helpers.log_level_parser import parse_log_level


def make_ctx():
    """Create a minimal Click context stub (the callback ignores it)."""
    return types.SimpleNamespace()


def test_empty_uses_defaults():
    """When no levels are provided, return the default library logger levels."""
    assert parse_log_level(make_ctx(), None, ()) == {"click_extra": logging.WARNING}


def test_repeated_flags_override_order():
    """Later repeated CLI flags override earlier ones for the same logger."""
    value = ("orca=INFO", "click_extra=ERROR", "orca=WARNING")
    out = parse_log_level(make_ctx(), None, value)
    assert out["orca"] == logging.WARNING
    assert out["click_extra"] == logging.ERROR


def test_envvar_string_with_commas_and_spaces():
    """Accept a plain string (e.g. from an env var) with commas and spaces."""
    out = parse_log_level(
        make_ctx(), None, "orca.dispatcher=INFO,  urllib3=WARNING rich=ERROR"
    )
    assert out["orca.dispatcher"] == logging.INFO
    assert out["urllib3"] == logging.WARNING
    assert out["rich"] == logging.ERROR


def test_case_insensitive_levels():
    """Level names should be parsed case-insensitively."""
    out = parse_log_level(make_ctx(), None, ("orca=info", "rich=WaRnInG"))
    assert out["orca"] == logging.INFO
    assert out["rich"] == logging.WARNING


@pytest.mark.parametrize("item", ["not-a-pair", "=INFO"])
def test_invalid_pair_raises(item):
    """Malformed NAME=LEVEL pairs should raise click.BadParameter."""
    with pytest.raises(click.BadParameter, match="Expected NAME=LEVEL"):
        parse_log_level(make_ctx(), None, (item,))


def test_invalid_level_raises():
    """Unknown level names should raise click.BadParameter."""
    with pytest.raises(click.BadParameter, match="Invalid log level"):
        parse_log_level(make_ctx(), None, ("orca=LOUD",))
