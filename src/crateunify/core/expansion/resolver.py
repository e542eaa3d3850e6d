from __future__ import annotations

"""
Module File Resolver.

Maps a module name to the file defining it. Candidates are tried in a fixed
order, `<dir>/<name>.rs` first and `<dir>/<name>/mod.rs` second, with no
case-insensitive or fuzzy fallback.
"""

import logging
import os
from typing import List

from crateunify.domain.constants import DIRECTORY_MODULE_STEM, SOURCE_EXTENSION
from crateunify.domain.errors import MissingModuleError
from crateunify.domain.models import SourceUnit
from crateunify.infra.fs import read_source

logger = logging.getLogger(__name__)


def candidate_paths(name: str, directory: str) -> List[str]:
    """List the files that may define module `name`, in priority order."""
    return [
        os.path.join(directory, name + SOURCE_EXTENSION),
        os.path.join(directory, name, DIRECTORY_MODULE_STEM + SOURCE_EXTENSION),
    ]


def resolve_module(name: str, directory: str) -> SourceUnit:
    """
    Find and read the file defining module `name`.

    Args:
        name: Declared module identifier.
        directory: Directory context of the declaring file.

    Returns:
        SourceUnit: Text and path of the first existing candidate.

    Raises:
        MissingModuleError: No candidate exists.
        SourceIOError: A candidate exists but cannot be read.
    """
    for candidate in candidate_paths(name, directory):
        try:
            unit = read_source(candidate)
        except FileNotFoundError:
            continue
        logger.debug(f"Resolved module `{name}` -> {candidate}")
        return unit

    raise MissingModuleError(name, directory)
