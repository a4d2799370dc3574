"""
Name grammar shared by template names and property names

    name       := name-start name-char*
    name-start := [a-z]                       (case-insensitive, Unicode folding)
    name-char  := [a-z0-9:_.-] | <Unicode ranges below>

The Unicode ranges loosely follow the HTML custom element name production
(https://html.spec.whatwg.org/multipage/custom-elements.html#valid-custom-element-name)
but stop at U+FFFF: the supplementary planes (U+10000-U+EFFFF) are not name
characters here.
"""

import string
from typing import Tuple


# Case-insensitive [a-z] also folds U+017F (long s) and U+212A (Kelvin sign)
NAME_START_CHARS: frozenset = frozenset(string.ascii_letters + "\u017f\u212a")

NAME_ASCII_CHARS: frozenset = frozenset(string.ascii_letters + string.digits + ":_.-")

# Inclusive (low, high) code point ranges, sorted
NAME_UNICODE_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x00C0, 0x00D6),
    (0x00D8, 0x00F6),
    (0x00F8, 0x02FF),
    (0x0370, 0x037D),
    (0x037F, 0x1FFF),
    (0x200C, 0x200D),
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
)


def nameStart_is(char: str) -> bool:
    """Check if a character may begin a name"""
    return char in NAME_START_CHARS


def nameChar_is(char: str) -> bool:
    """Check if a character may continue a name"""
    if char in NAME_ASCII_CHARS:
        return True
    if len(char) != 1:
        return False

    codepoint: int = ord(char)
    if codepoint < NAME_UNICODE_RANGES[0][0]:
        return False
    for low, high in NAME_UNICODE_RANGES:
        if codepoint < low:
            return False
        if codepoint <= high:
            return True
    return False


def name_scan(text: str, start: int) -> int:
    """
    Scan a name beginning at start

    Args:
        text: Text to scan
        start: Offset of the first candidate character

    Returns:
        Offset just past the name, or start itself when no valid
        name begins there

    Example:
        >>> name_scan('@x-on:click.shift="go"', 1)
        17
        >>> name_scan('@$bad', 1)
        1
    """
    if start >= len(text) or not nameStart_is(text[start]):
        return start

    end: int = start + 1
    while end < len(text) and nameChar_is(text[end]):
        end += 1
    return end


def name_isValid(name: str) -> bool:
    """Check if a whole string is a valid name"""
    return bool(name) and name_scan(name, 0) == len(name)
