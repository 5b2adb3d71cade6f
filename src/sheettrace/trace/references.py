"""A1 notation helpers and reference token matching."""

import re

A1_PATTERN = re.compile(r"([A-Za-z]+)([0-9]+)")


def col_letter_to_index(col: str) -> int:
    """Convert column letter(s) to 0-based index. A=0, B=1, ..., Z=25, AA=26, etc."""
    if not col or not col.isascii() or not col.isalpha():
        raise ValueError(f"Invalid column letters: {col!r}")
    result = 0
    for char in col.upper():
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result - 1


def index_to_col_letter(index: int) -> str:
    """Convert 0-based index to column letter(s)."""
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    result = ""
    index += 1
    while index > 0:
        index -= 1
        result = chr(ord("A") + (index % 26)) + result
        index //= 26
    return result


def split_cell_notation(cell: str) -> tuple[str, int]:
    """Split A1 notation into upper-case column letters and row number.

    Only plain references are accepted: no sheet prefix, no ``$`` markers
    and no ranges. Surrounding whitespace is ignored.
    """
    match = A1_PATTERN.fullmatch(cell.strip())
    if not match:
        raise ValueError(f"Invalid cell notation: {cell}")
    return match.group(1).upper(), int(match.group(2))


def reference_token_pattern(reference: str, case_sensitive: bool = True) -> re.Pattern:
    """
    Build a pattern matching ``reference`` as a whole token in formula text.

    Word boundaries are ASCII-only so letters, digits and underscore all
    count as part of a token: ``B7`` is not found inside ``B70`` or ``AB7``.
    """
    flags = re.ASCII
    if not case_sensitive:
        flags |= re.IGNORECASE
    return re.compile(rf"\b{re.escape(reference)}\b", flags)
