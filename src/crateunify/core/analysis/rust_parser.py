from __future__ import annotations

"""
Rust Grammar Parser Adapter.

Wraps tree-sitter and its Rust grammar behind a narrow contract: given the
complete text of a Rust file, return its top-level items in source order,
with module items annotated by name, body presence and the position of the
terminating `;`. Invalid sources are rejected rather than parsed on a
best-effort basis.

The grammar accepts statements at the top level of a file, which Rust does
not; those are rejected here, except for macro invocations.

Known limitation: syntax newer than the installed tree-sitter-rust grammar
is reported as a ParseError. With tree-sitter-rust 0.24 this includes the
Rust 2024 `unsafe extern "C" { pub safe fn f(); }` form.
"""

import logging
from functools import lru_cache
from typing import Iterator, List, Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from crateunify.domain.errors import ParseError
from crateunify.domain.models import ParsedItem, SourcePosition

logger = logging.getLogger(__name__)

MOD_ITEM = "mod_item"
_RAW_IDENT_PREFIX = "r#"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_items(text: str, path: Optional[str] = None) -> List[ParsedItem]:
    """
    Parse Rust source text into its top-level items.

    Args:
        text: Complete source text of one file.
        path: File the text came from, used in error reports.

    Returns:
        List[ParsedItem]: Items in the order they appear in the file.

    Raises:
        ParseError: The text is not syntactically valid Rust.
    """
    tree = _new_parser().parse(text.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        raise _syntax_error(_first_error_node(root), path)

    for child in root.children:
        if _is_top_level_statement(child):
            raise _syntax_error(child, path)

    items = [_to_item(child) for child in root.children]
    logger.debug(f"Parsed {len(items)} top-level items from {path or '<memory>'}")
    return items


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

@lru_cache(maxsize=1)
def _rust_language() -> Language:
    return Language(tree_sitter_rust.language())


def _new_parser() -> Parser:
    return Parser(_rust_language())


def _to_item(node: Node) -> ParsedItem:
    """Project a tree-sitter node onto the ParsedItem contract."""
    if node.type != MOD_ITEM:
        return ParsedItem(kind=node.type)

    name_node = node.child_by_field_name("name")
    body_node = node.child_by_field_name("body")
    name = _identifier(name_node) if name_node is not None else None

    if body_node is not None:
        return ParsedItem(kind=MOD_ITEM, name=name, has_body=True)

    semi = _terminator(node)
    terminator = None
    if semi is not None:
        row, column = semi.start_point
        terminator = SourcePosition(line=row + 1, column=column)

    return ParsedItem(kind=MOD_ITEM, name=name, has_body=False, terminator=terminator)


def _identifier(node: Node) -> str:
    name = node.text.decode("utf-8")
    if name.startswith(_RAW_IDENT_PREFIX):
        return name[len(_RAW_IDENT_PREFIX):]
    return name


def _terminator(node: Node) -> Optional[Node]:
    for child in reversed(node.children):
        if child.type == ";":
            return child
    return None


def _is_top_level_statement(node: Node) -> bool:
    """Statements are only valid inside blocks; `m!(..);` is an item."""
    if node.type == "let_declaration":
        return True
    if node.type == "expression_statement":
        named = node.named_children
        return not (len(named) == 1 and named[0].type == "macro_invocation")
    return False


def _syntax_error(node: Optional[Node], path: Optional[str]) -> ParseError:
    line, column = (node.start_point[0] + 1, node.start_point[1]) if node is not None else (None, None)
    where = f" at line {line}, column {column}" if line is not None else ""
    return ParseError(
        f"Failed to parse module in: {path or '<memory>'} for `mod` declarations "
        f"(syntax error{where})",
        path=path,
        line=line,
        column=column,
    )


def _first_error_node(root: Node) -> Optional[Node]:
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def _walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal, so the first hit is the earliest in the file."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
