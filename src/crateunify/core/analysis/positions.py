from __future__ import annotations

"""
Source Position Conversion.

Turns the (line, column) positions reported by the grammar parser into
absolute byte offsets. Lines end at `\\n` only; a `\\r` before it belongs
to the line, matching how the parser counts rows.
"""

from typing import List


def build_line_starts(data: bytes) -> List[int]:
    """
    Compute the byte offset at which each line begins.

    Args:
        data: UTF-8 encoded source text.

    Returns:
        List[int]: Offset of line N (1-indexed) at index N-1.
    """
    starts = [0]
    index = data.find(b"\n")
    while index != -1:
        starts.append(index + 1)
        index = data.find(b"\n", index + 1)
    return starts


def position_to_offset(line_starts: List[int], total_length: int, line: int, column: int) -> int:
    """
    Convert a parser position into a byte offset.

    Args:
        line_starts: Table produced by build_line_starts.
        total_length: Byte length of the whole text.
        line: 1-indexed line number.
        column: 0-indexed byte column within that line.

    Returns:
        int: Absolute byte offset.

    Raises:
        ValueError: The position lies outside the text.
    """
    if line < 1 or line > len(line_starts):
        raise ValueError(f"Line {line} out of range (1..{len(line_starts)})")

    start = line_starts[line - 1]
    end = line_starts[line] - 1 if line < len(line_starts) else total_length
    if column < 0 or start + column > end:
        raise ValueError(f"Column {column} out of range for line {line}")

    return start + column
