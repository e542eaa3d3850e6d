from __future__ import annotations

"""
Directory Context Derivation.

Works out the directory a file's own child modules live in:

    src/main.rs      -> src/
    src/foo.rs       -> src/foo/
    src/foo/mod.rs   -> src/foo/
"""

import os

from crateunify.domain.constants import ENTRY_POINT_ALIASES
from crateunify.domain.errors import PathError


def module_dir(path: str) -> str:
    """
    Derive the directory that child module declarations resolve against.

    A bare file name is taken to live in the current directory.

    Args:
        path: Path of the file whose declarations are being resolved.

    Returns:
        str: The parent directory for entry-point aliases, otherwise the
             parent directory joined with the file stem.

    Raises:
        PathError: The path has no file name (and so no parent) or no stem.
    """
    parent, file_name = os.path.split(path)
    if not file_name:
        raise PathError(f"Failed to get parent directory of '{path}'", path=path)

    stem = os.path.splitext(file_name)[0]
    if not stem or stem in (os.curdir, os.pardir):
        raise PathError(f"Failed to convert file name '{path}' to a module name", path=path)

    parent = parent or os.curdir
    if stem in ENTRY_POINT_ALIASES:
        return parent
    return os.path.join(parent, stem)
