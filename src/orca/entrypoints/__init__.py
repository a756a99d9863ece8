"""Entrypoints exposing ORCA outside of Python code."""
