from __future__ import annotations

"""
Domain Constants.

Centralizes the naming conventions of the Rust module system and the
markers used to turn a forward `mod` declaration into an inline block.
"""

from typing import Dict, FrozenSet

SOURCE_EXTENSION = ".rs"

# File stems that root their own directory's module tree
ENTRY_POINT_ALIASES: FrozenSet[str] = frozenset({"main", "lib", "mod"})

# Name of the aliased file inside a module directory (`<name>/mod.rs`)
DIRECTORY_MODULE_STEM = "mod"

CRATE_SOURCE_DIR = "src"
CRATE_KIND_BIN = "bin"
CRATE_KIND_LIB = "lib"

CRATE_ROOT_FILES: Dict[str, str] = {
    CRATE_KIND_BIN: "main" + SOURCE_EXTENSION,
    CRATE_KIND_LIB: "lib" + SOURCE_EXTENSION,
}

# Replace the declaration's `;` so that `mod a;` becomes `mod a { ... } `
BLOCK_OPEN_MARKER = " {\n"
BLOCK_CLOSE_MARKER = "\n} "

DEFAULT_MAX_DEPTH = 64
