"""Text helpers for the command line: splitting commands and tidying messages."""

from __future__ import annotations

__all__ = ["capitalize_first_rune", "split_command"]


def _is_lone_surrogate(ch: str) -> bool:
    return 0xD800 <= ord(ch) <= 0xDFFF


def capitalize_first_rune(s: str) -> str:
    """Return ``s`` with its first character upper-cased.

    Only a one-to-one case mapping is applied: a character whose upper-case
    form is several characters long is left as it is. An empty string, or
    one that starts with an undecodable byte, is returned unchanged.
    """
    if not s:
        return s
    first = s[0]
    if _is_lone_surrogate(first):
        return s
    upper = first.upper()
    if len(upper) != 1:
        return s
    return upper + s[1:]


def split_command(cmd: str) -> list[str]:
    """Split a command line into its whitespace-separated fields.

    Runs of whitespace count as one separator, and leading or trailing
    whitespace is ignored; an empty or blank command yields an empty list.
    """
    return cmd.split()