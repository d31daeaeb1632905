from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union


DATE_SENTINEL = "00000000"
INITIALS_SENTINEL = "XX"

# ASCII names only; the sequence field widens past 999.
CHILD_CODE_PATTERN = re.compile(r"^\d{8}-[A-Z]{2}-\d{3,}$")

DateLike = Union[date, datetime, str, None]


@dataclass(frozen=True)
class ChildCode:
    birth_date: Optional[date]
    initials: str
    sequence: int


def _upper_first(ch: str) -> str:
    # "ß".upper() == "SS"; keep a single code point per letter
    return ch.upper()[:1]


def initials_from_name(full_name: Optional[str]) -> str:
    """
    Two uppercase code points derived from a child's name:
      - two or more words: first letter of the first two words
      - one word: its first two letters ("A" is padded to "AX")
      - absent/blank: "XX"
    """
    if not full_name or not str(full_name).strip():
        return INITIALS_SENTINEL

    words = str(full_name).split()
    if len(words) >= 2:
        return _upper_first(words[0][0]) + _upper_first(words[1][0])

    head = "".join(_upper_first(ch) for ch in words[0][:2])
    return head.ljust(2, "X")


def date_part(birth_date: DateLike) -> str:
    """Birth date as YYYYMMDD, or the 00000000 sentinel when absent or unreadable."""
    if isinstance(birth_date, datetime):
        return birth_date.strftime("%Y%m%d")
    if isinstance(birth_date, date):
        return birth_date.strftime("%Y%m%d")
    if not isinstance(birth_date, str) or not birth_date.strip():
        return DATE_SENTINEL

    s = birth_date.strip()
    try:
        return date.fromisoformat(s[:10]).strftime("%Y%m%d")
    except ValueError:
        pass

    digits = re.sub(r"[-/.\s]", "", s)
    if _decode_date(digits) is not None:
        return digits
    return DATE_SENTINEL


def _sequence(sequence_number) -> int:
    try:
        n = int(sequence_number)
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(1, n)


def generate_child_code(
    full_name: Optional[str],
    birth_date: DateLike,
    sequence_number: int = 1,
) -> str:
    """
    Build the DDDDDDDD-II-SSS code printed on a child's records.

    Example: generate_child_code("Ari Ramadhan", "2025-01-13", 1) -> "20250113-AR-001"

    Never raises: bad inputs fall back to the 00000000 / XX sentinels and
    a sequence below 1 is clamped to 1. Sequences of 1000 or more widen
    the last field instead of being truncated.
    """
    return f"{date_part(birth_date)}-{initials_from_name(full_name)}-{_sequence(sequence_number):03d}"


def _decode_date(part: str) -> Optional[date]:
    if len(part) != 8 or not (part.isascii() and part.isdigit()):
        return None
    try:
        return date(int(part[:4]), int(part[4:6]), int(part[6:8]))
    except ValueError:
        return None


def parse_child_code(code: Optional[str]) -> Optional[ChildCode]:
    """
    Inverse of generate_child_code.

    Returns None when the code is empty, does not split into exactly three
    hyphen-separated segments, or has a non-numeric sequence. A sentinel or
    invalid date segment parses with birth_date=None.
    """
    if not code:
        return None

    parts = code.strip().split("-")
    if len(parts) != 3:
        return None

    date_seg, initials, seq_seg = parts
    if not (seq_seg.isascii() and seq_seg.isdigit()):
        return None

    return ChildCode(
        birth_date=_decode_date(date_seg),
        initials=initials,
        sequence=int(seq_seg),
    )
