"""
Parsing of hex address arguments.

Accepted forms, all case-insensitive:
    0400      bare hex
    0x0400    C style prefix
    $0400     Motorola style prefix
"""

from __future__ import annotations
from typing import Optional, Tuple
import re

from .config import ADDRESS_MAX, DEFAULT_START_ADDR
from .errors import AddressParseError

__all__ = ['parse_address', 'parse_optional_address']

_HEX_RE = re.compile(r'[0-9A-Fa-f]+')


def parse_address(text: str) -> int:
    """Parse hex text with optional 0x or $ prefix into a 16-bit address."""
    if text is None:
        raise AddressParseError(str(text), "no value given")
    s = text.strip()
    if s.startswith("0x") or s.startswith("0X"):
        s = s[2:]
    elif s.startswith("$"):
        s = s[1:]
    if not s:
        raise AddressParseError(text, "empty")
    if not _HEX_RE.fullmatch(s):
        raise AddressParseError(text)
    value = int(s, 16)
    if value > ADDRESS_MAX:
        raise AddressParseError(text, "does not fit in 16 bits")
    return value


def parse_optional_address(text: Optional[str],
                        default: int = DEFAULT_START_ADDR,
                        name: str = "start address") -> Tuple[int, Optional[str]]:
    """Parse an optional address argument without failing.

    Returns (address, warning). warning is None when text parsed cleanly or
    was not given; otherwise it describes the bad value and address is the
    default.
    """
    if text is None:
        return default, None
    try:
        return parse_address(text), None
    except AddressParseError as e:
        return default, (f"Unable to convert {name}: {text}, "
                         f"using default 0x{default:04x} ({e.reason}).")
