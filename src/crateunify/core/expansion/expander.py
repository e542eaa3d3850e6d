from __future__ import annotations

"""
Recursive Module Expander.

Flattens one file by replacing the `;` of every bodyless `mod` declaration
with the braced, recursively expanded content of the module's file. Text
outside the declarations is copied verbatim. The output is assembled left
to right from slices of the original buffer, so offsets captured before
splicing stay valid.
"""

import logging
from typing import List, Optional, Sequence

from crateunify.core.expansion.context import module_dir
from crateunify.core.expansion.locator import find_module_declarations
from crateunify.core.expansion.resolver import resolve_module
from crateunify.domain.constants import BLOCK_CLOSE_MARKER, BLOCK_OPEN_MARKER, DEFAULT_MAX_DEPTH
from crateunify.domain.errors import CycleError, UnifyError
from crateunify.domain.models import SourceUnit
from crateunify.infra.fs import canonical_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def expand(
        text: str,
        path: str,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        inlined: Optional[List[str]] = None,
) -> str:
    """
    Recursively expand the module declarations of one file.

    Args:
        text: Source text of the file.
        path: Path the text was read from; child modules resolve from it.
        max_depth: Deepest module nesting allowed below this file.
        inlined: If given, receives the path of every inlined file in
                 pre-order.

    Returns:
        str: The flattened source.

    Raises:
        ParseError, PathError, MissingModuleError, SourceIOError, CycleError:
            The first failure met, depth first, with the chain of files
            that led to it.
    """
    unit = SourceUnit(text=text, path=path)
    sink = inlined if inlined is not None else []
    return _expand_unit(unit, (canonical_path(path),), max_depth, sink)


def wrap_module_body(body: str) -> str:
    """Turn an expanded module body into the block that replaces its `;`."""
    return BLOCK_OPEN_MARKER + body + BLOCK_CLOSE_MARKER


# -----------------------------------------------------------------------------
# RECURSION
# -----------------------------------------------------------------------------

def _expand_unit(
        unit: SourceUnit,
        ancestors: Sequence[str],
        max_depth: int,
        inlined: List[str],
) -> str:
    try:
        directory = module_dir(unit.path)
        declarations = find_module_declarations(unit.text, unit.path)
        if not declarations:
            return unit.text

        data = unit.text.encode("utf-8")
        pieces: List[bytes] = []
        cursor = 0

        for decl in declarations:
            child = resolve_module(decl.name, directory)
            child_key = canonical_path(child.path)
            _check_recursion(decl.name, child, child_key, ancestors, max_depth)

            inlined.append(child.path)
            body = _expand_unit(child, (*ancestors, child_key), max_depth, inlined)

            pieces.append(data[cursor:decl.terminator_offset])
            pieces.append(wrap_module_body(body).encode("utf-8"))
            cursor = decl.terminator_offset + 1

        pieces.append(data[cursor:])
        logger.debug(f"Expanded {len(declarations)} module(s) into {unit.path}")
        return b"".join(pieces).decode("utf-8")

    except UnifyError as e:
        if e.path is None:
            e.path = unit.path
        raise e.add_context(unit.path)


def _check_recursion(
        name: str,
        child: SourceUnit,
        child_key: str,
        ancestors: Sequence[str],
        max_depth: int,
) -> None:
    if child_key in ancestors:
        raise CycleError(
            f"Module `{name}` resolves to {child.path}, which is already being expanded",
            module=name,
        )
    if len(ancestors) > max_depth:
        raise CycleError(
            f"Module `{name}` exceeds the maximum nesting depth of {max_depth}",
            module=name,
        )
