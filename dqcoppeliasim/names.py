"""Helpers for scene object names and argument checks."""

from __future__ import annotations

from typing import Sized


def starts_with_slash(name: str) -> bool:
    """Whether the first character of ``name`` is a slash."""
    return name.startswith("/")


def remove_first_slash(name: str) -> str:
    """``name`` without a leading slash, if it has one."""
    return name[1:] if starts_with_slash(name) else name


def standard_name(name: str, compatibility: bool) -> str:
    """The name with a leading slash, added only when ``compatibility`` is on."""
    if not starts_with_slash(name) and compatibility:
        return "/" + name
    return name


def check_sizes(first: Sized, second: Sized, error_message: str) -> int:
    """Raise ``ValueError`` unless both have the same length; return that length."""
    if len(first) != len(second):
        raise ValueError(error_message)
    return len(first)