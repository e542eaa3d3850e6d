from __future__ import annotations

"""
Module Expansion Data Models.

Defines the transient records exchanged between the parser adapter, the
declaration locator and the recursive expander, plus the result object
returned to the interface layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# SOURCE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceUnit:
    """
    Text of one file together with the path it was read from.

    Attributes:
        text: Decoded UTF-8 content, line endings untouched.
        path: Filesystem path the text was read from.
    """
    text: str
    path: str


@dataclass(frozen=True)
class SourcePosition:
    """Line (1-indexed) and byte column (0-indexed) of a token."""
    line: int
    column: int


@dataclass(frozen=True)
class ParsedItem:
    """
    Top-level syntax item as reported by the grammar parser.

    Attributes:
        kind: Grammar node type (e.g. 'mod_item', 'function_item').
        name: Declared identifier for module items, None otherwise.
        has_body: True when a module item carries an inline `{ ... }` body.
        terminator: Position of the closing `;` of a bodyless module item.
    """
    kind: str
    name: Optional[str] = None
    has_body: bool = False
    terminator: Optional[SourcePosition] = None

    @property
    def is_module_declaration(self) -> bool:
        return self.kind == "mod_item" and not self.has_body and self.terminator is not None


@dataclass(frozen=True)
class ModuleDeclaration:
    """
    Bodyless `mod` declaration located in a file.

    Attributes:
        name: Module identifier as resolved on disk.
        terminator_offset: Byte index of the `;` within the original text.
    """
    name: str
    terminator_offset: int

# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class UnifyResult:
    """
    Outcome of flattening a whole crate.

    Attributes:
        root_file: Absolute path of the crate root file.
        crate_kind: 'bin' or 'lib'.
        output: Flattened source text.
        modules: Files inlined into the output, in pre-order.
    """
    root_file: str
    crate_kind: str
    output: str
    modules: List[str] = field(default_factory=list)
