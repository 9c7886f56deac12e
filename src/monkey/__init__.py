"""Monkey language scanner and parser."""

from __future__ import annotations

__version__ = "0.1.0"


def check(source: str) -> list[str]:
    """Parse source and return its diagnostic messages (empty when clean)."""
    from monkey.parser import parse

    _, diagnostics = parse(source)
    return [d.message for d in diagnostics]
