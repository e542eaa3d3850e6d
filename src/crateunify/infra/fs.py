from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization and strict source reading. Source files are
read as raw bytes and decoded as UTF-8 without newline translation, so the
text handed to the expander is byte-for-byte the file on disk.
"""

import os
from typing import Optional

from crateunify.domain.errors import SourceIOError
from crateunify.domain.models import SourceUnit

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def canonical_path(path: str) -> str:
    """Resolve symlinks and relative segments for identity comparisons."""
    return os.path.normcase(os.path.realpath(path))

# -----------------------------------------------------------------------------
# SOURCE READING API
# -----------------------------------------------------------------------------

def read_source(path: str) -> SourceUnit:
    """
    Read a source file strictly as UTF-8.

    Args:
        path: File to read.

    Returns:
        SourceUnit: Decoded text and the path it was read from.

    Raises:
        FileNotFoundError: The path does not exist (or a parent is not a
            directory). Left to the caller, which may try another candidate.
        SourceIOError: The file exists but cannot be read or decoded.
    """
    if os.path.isdir(path):
        raise FileNotFoundError(f"Not a file: {path}")

    try:
        with open(path, "rb") as f:
            data = f.read()
    except NotADirectoryError as e:
        raise FileNotFoundError(str(e)) from e
    except FileNotFoundError:
        raise
    except OSError as e:
        raise SourceIOError(f"Failed to read path {path}: {e}", path=path) from e

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceIOError(f"File {path} is not valid UTF-8: {e}", path=path) from e

    return SourceUnit(text=text, path=path)
