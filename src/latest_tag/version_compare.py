"""
Ordering for version-like tag names.
"""

import re

VERSION_LIKE = re.compile(r"^[vr]?\d")

_SEGMENT = re.compile(r"\d+|[A-Za-z]+")

# Segment ranks: a number outranks the end of the version, which outranks a
# word, so 1.0.1 > 1.0 > 1.0-beta.
_WORD = 0
_END = 1
_NUMBER = 2


def looks_like_version(name: str) -> bool:
    """True for names such as 1.2, v1.2.3 or r42."""
    return VERSION_LIKE.match(name) is not None


def version_key(version: str) -> tuple:
    """
    Sort key for a version string.

    A single leading "v" or "r" is ignored. The rest is split into numeric
    and alphabetic runs; separators carry no weight. The raw string is the
    last element, so distinct strings never compare equal.
    """
    body = version[1:] if version[:1] in ("v", "r") else version

    segments: list[tuple[int, int, str]] = []
    for part in _SEGMENT.findall(body):
        if part.isdigit():
            segments.append((_NUMBER, int(part), ""))
        else:
            segments.append((_WORD, 0, part.lower()))
    segments.append((_END, 0, ""))

    return (tuple(segments), version)


def compare_versions(a: str, b: str) -> int:
    """Return -1, 0 or 1 as a is lower than, equal to or higher than b."""
    key_a = version_key(a)
    key_b = version_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0
