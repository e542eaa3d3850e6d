from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A helper to lay out Rust crates on disk and the reference mock crate.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------

# lib -> a (-> c), b/mod.rs (-> d)
MOCK_CRATE_FILES: Dict[str, str] = {
    "src/lib.rs": "mod a;\nmod b;\n\nfn lib() {}\n",
    "src/a.rs": "mod c;\n\nfn a() {}\n",
    "src/a/c.rs": "fn c() {}\n",
    "src/b/mod.rs": "mod d;\n\nfn b() {}\n",
    "src/b/d.rs": "fn d() {}\n",
}

_MOCK_CRATE_EXPANDED = """mod a {
mod c {
fn c() {}

} 

fn a() {}

} 
mod b {
mod d {
fn d() {}

} 

fn b() {}

} 

fn lib() {}
"""


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """
    Return a helper writing {relative_path: content} under tmp_path.

    Content is written as UTF-8 bytes so line endings are kept verbatim.
    """
    def _write(files: Dict[str, str]) -> Path:
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content.encode("utf-8"))
        return tmp_path

    return _write


@pytest.fixture
def mock_crate(write_tree: Callable[[Dict[str, str]], Path]) -> Path:
    """Create the reference mock crate and return its root directory."""
    return write_tree(MOCK_CRATE_FILES)


@pytest.fixture
def mock_crate_expanded() -> str:
    """Expected flattening of the mock crate's src/lib.rs."""
    return _MOCK_CRATE_EXPANDED
