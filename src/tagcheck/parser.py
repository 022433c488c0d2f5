"""Parser for constraint metadata lines.

Grammar:
    line  := spec ("," spec)*
    spec  := name | name "=" param

A backslash escapes a literal comma inside a parameter (``regexp=^a{3\\,10}``).
Whitespace around names and parameters is trimmed. The whole line ``-`` is the
skip marker and is handled before parsing.
"""

import re

from tagcheck.types import ConstraintSpec

SKIP_MARKER = "-"

_UNESCAPED_COMMA = re.compile(r"(?<!\\),")


def is_skip(metadata: str | None) -> bool:
    """Check if metadata marks a member (and its subtree) as skipped."""
    return metadata == SKIP_MARKER


def split_unescaped(line: str) -> list[str]:
    """Split on commas not preceded by a backslash, then unescape them."""
    return [part.replace("\\,", ",") for part in _UNESCAPED_COMMA.split(line)]


def parse_spec(metadata: str | None) -> list[ConstraintSpec]:
    """Parse one metadata line into ordered constraint specs.

    Parameters are not interpreted here; a malformed parameter is reported
    by the constraint function when it runs.

    Args:
        metadata: Raw metadata string (None or blank means no checks)

    Returns:
        Specs in the order they were written
    """
    if metadata is None or not metadata.strip():
        return []

    specs = []
    for part in split_unescaped(metadata):
        name, sep, param = part.partition("=")
        specs.append(ConstraintSpec(name=name.strip(), param=param.strip() if sep else ""))
    return specs
