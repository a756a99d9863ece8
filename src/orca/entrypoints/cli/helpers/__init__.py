"""Helpers shared by the ORCA CLI commands."""

from .log_level_parser import parse_log_level
from .messages import error, success, warn
from .target import load_dispatcher, parse_target

__all__ = [
    "error",
    "load_dispatcher",
    "parse_log_level",
    "parse_target",
    "success",
    "warn",
]
