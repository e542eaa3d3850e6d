from __future__ import annotations

"""
Crate Unification Service.

Entry points used by the interface layer: pick the crate root file for the
requested crate kind, read it and run the recursive expander over it.
"""

import logging
import os
from typing import List

from crateunify.core.expansion.expander import expand
from crateunify.domain.constants import (
    CRATE_KIND_BIN,
    CRATE_ROOT_FILES,
    CRATE_SOURCE_DIR,
    DEFAULT_MAX_DEPTH,
)
from crateunify.domain.errors import SourceIOError, UnifyError
from crateunify.domain.models import UnifyResult
from crateunify.infra.fs import read_source

logger = logging.getLogger(__name__)


def crate_root_file(crate_path: str, crate_kind: str = CRATE_KIND_BIN) -> str:
    """
    Locate the root source file of a crate.

    Args:
        crate_path: Directory holding the crate's `src` folder.
        crate_kind: 'bin' for `src/main.rs`, 'lib' for `src/lib.rs`.

    Returns:
        str: Path of the crate root file (not checked for existence).

    Raises:
        ValueError: Unknown crate kind.
    """
    try:
        file_name = CRATE_ROOT_FILES[crate_kind]
    except KeyError:
        raise ValueError(f"Unknown crate kind '{crate_kind}'") from None
    return os.path.join(crate_path, CRATE_SOURCE_DIR, file_name)


def expand_file(path: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """
    Read a Rust file and return it with every module inlined.

    Raises:
        UnifyError: Any expansion failure.
    """
    return _expand_root(path, max_depth, [])


def unify_crate(
        crate_path: str,
        crate_kind: str = CRATE_KIND_BIN,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
) -> UnifyResult:
    """
    Flatten a whole crate into a single source text.

    Args:
        crate_path: Directory holding the crate's `src` folder.
        crate_kind: 'bin' or 'lib'.
        max_depth: Deepest module nesting allowed.

    Returns:
        UnifyResult: The flattened text and the files that were inlined.

    Raises:
        UnifyError: Any expansion failure.
    """
    root_file = os.path.abspath(crate_root_file(crate_path, crate_kind))
    logger.info(f"Unifying {crate_kind} crate rooted at {root_file}")

    modules: List[str] = []
    output = _expand_root(root_file, max_depth, modules)

    logger.info(f"Inlined {len(modules)} module file(s)")
    return UnifyResult(
        root_file=root_file,
        crate_kind=crate_kind,
        output=output,
        modules=modules,
    )


def _expand_root(path: str, max_depth: int, modules: List[str]) -> str:
    try:
        unit = read_source(path)
    except FileNotFoundError as e:
        raise SourceIOError(f"Failed to read path {path}: {e}", path=path) from e
    except UnifyError as e:
        raise e.add_context(path)

    return expand(unit.text, unit.path, max_depth=max_depth, inlined=modules)
