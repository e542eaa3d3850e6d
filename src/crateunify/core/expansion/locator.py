from __future__ import annotations

"""
Module Declaration Locator.

Selects the bodyless `mod` declarations among a file's top-level items and
maps each terminator position to a byte offset in the original text.
"""

import logging
from typing import List, Optional, Sequence

from crateunify.core.analysis.positions import build_line_starts, position_to_offset
from crateunify.core.analysis.rust_parser import parse_items
from crateunify.domain.errors import ParseError
from crateunify.domain.models import ModuleDeclaration, ParsedItem

logger = logging.getLogger(__name__)


def locate_declarations(
        items: Sequence[ParsedItem],
        data: bytes,
        path: Optional[str] = None,
) -> List[ModuleDeclaration]:
    """
    Convert parsed items into module declarations with byte offsets.

    Modules with an inline body are skipped and not descended into.

    Args:
        items: Top-level items in source order.
        data: UTF-8 encoded source the items were parsed from.
        path: File the source came from, used in error reports.

    Returns:
        List[ModuleDeclaration]: Declarations in source order.

    Raises:
        ParseError: A reported position does not match the text.
    """
    line_starts = build_line_starts(data)
    declarations: List[ModuleDeclaration] = []

    for item in items:
        if not item.is_module_declaration:
            continue
        pos = item.terminator
        try:
            offset = position_to_offset(line_starts, len(data), pos.line, pos.column)
        except ValueError as e:
            raise _position_error(item, str(e), path) from e
        if data[offset:offset + 1] != b";":
            raise _position_error(item, f"no `;` at byte {offset}", path)
        if declarations and offset <= declarations[-1].terminator_offset:
            raise _position_error(item, f"out of source order at byte {offset}", path)
        declarations.append(ModuleDeclaration(name=item.name, terminator_offset=offset))

    return declarations


def _position_error(item: ParsedItem, reason: str, path: Optional[str]) -> ParseError:
    return ParseError(
        f"Declaration `{item.name}` in {path or '<memory>'}: {reason}",
        path=path,
        line=item.terminator.line,
        column=item.terminator.column,
    )


def find_module_declarations(text: str, path: Optional[str] = None) -> List[ModuleDeclaration]:
    """
    Parse a file's text and locate its bodyless module declarations.

    Raises:
        ParseError: The text is not valid Rust.
    """
    items = parse_items(text, path)
    declarations = locate_declarations(items, text.encode("utf-8"), path)
    if declarations:
        logger.debug(
            f"{path or '<memory>'}: found declarations "
            f"{', '.join(d.name for d in declarations)}"
        )
    return declarations
