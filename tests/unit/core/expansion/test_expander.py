from __future__ import annotations

"""
Unit tests for the recursive module expander.

Verifies:
1. The reference crate flattens to the exact expected text.
2. Text outside declarations survives byte for byte and in order.
3. Errors surface depth first with the chain of files that led to them.
4. Cycles and excessive nesting are rejected.
"""

import os
from pathlib import Path

import pytest

from crateunify.core.expansion.expander import expand, wrap_module_body
from crateunify.domain.errors import CycleError, MissingModuleError, ParseError


def _expand_path(path: Path, **kwargs) -> str:
    text = path.read_bytes().decode("utf-8")
    return expand(text, str(path), **kwargs)


# -----------------------------------------------------------------------------
# HAPPY PATH
# -----------------------------------------------------------------------------

def test_mock_crate_expansion(mock_crate: Path, mock_crate_expanded: str) -> None:
    assert _expand_path(mock_crate / "src" / "lib.rs") == mock_crate_expanded


def test_inlined_files_reported_in_pre_order(mock_crate: Path) -> None:
    inlined = []
    _expand_path(mock_crate / "src" / "lib.rs", inlined=inlined)

    src = mock_crate / "src"
    assert inlined == [
        str(src / "a.rs"),
        os.path.join(str(src / "a"), "c.rs"),
        os.path.join(str(src), "b", "mod.rs"),
        os.path.join(str(src / "b"), "d.rs"),
    ]


def test_source_without_declarations_is_unchanged(tmp_path: Path) -> None:
    text = "// mod not_this;\nfn main() {\n    let s = \"mod nor_this;\";\n}\n"
    assert expand(text, str(tmp_path / "main.rs")) == text


def test_expansion_is_idempotent_on_flattened_output(mock_crate: Path) -> None:
    flat = _expand_path(mock_crate / "src" / "lib.rs")
    assert expand(flat, str(mock_crate / "src" / "lib.rs")) == flat


def test_wrap_module_body() -> None:
    assert wrap_module_body("fn x() {}") == " {\nfn x() {}\n} "


def test_two_declarations_keep_order_and_gap(write_tree) -> None:
    gap = "\n\n/// docs between\nconst GAP: u8 = 1;\n\n"
    root = write_tree({
        "src/main.rs": "mod first;" + gap + "mod second;\nfn main() {}\n",
        "src/first.rs": "fn one() {}",
        "src/second.rs": "fn two() {}",
    })

    out = _expand_path(root / "src" / "main.rs")

    first = out.index(wrap_module_body("fn one() {}"))
    second = out.index(wrap_module_body("fn two() {}"))
    assert first < second
    assert out[first + len(wrap_module_body("fn one() {}")):second] == gap + "mod second"
    assert out.startswith("mod first {\n")
    assert out.endswith("\nfn main() {}\n")


def test_non_declaration_bytes_are_preserved(write_tree) -> None:
    main = "// «entête» ✓\r\nmod a;\r\n/* ü */\r\nfn main() {}\r\n"
    root = write_tree({
        "src/main.rs": main,
        "src/a.rs": "pub fn a() {} // ä\r\n",
    })

    out = _expand_path(root / "src" / "main.rs")

    head, tail = main.split(";", 1)
    assert out == head + wrap_module_body("pub fn a() {} // ä\r\n") + tail


def test_decorated_declarations_are_expanded(write_tree) -> None:
    root = write_tree({
        "src/lib.rs": "#[cfg(test)]\nmod tests;\npub(crate) mod util;\n",
        "src/tests.rs": "fn t() {}",
        "src/util.rs": "fn u() {}",
    })

    out = _expand_path(root / "src" / "lib.rs")

    assert out == (
        "#[cfg(test)]\nmod tests {\nfn t() {}\n} \n"
        "pub(crate) mod util {\nfn u() {}\n} \n"
    )


def test_inline_module_is_left_untouched(write_tree) -> None:
    lib = "mod inline {\n    mod not_resolved;\n}\nmod a;\n"
    root = write_tree({"src/lib.rs": lib, "src/a.rs": ""})

    out = _expand_path(root / "src" / "lib.rs")

    assert out == "mod inline {\n    mod not_resolved;\n}\nmod a {\n\n} \n"


def test_deep_hierarchy_resolves_relative_to_each_file(write_tree) -> None:
    root = write_tree({
        "src/main.rs": "mod a;\n",
        "src/a.rs": "mod b;\n",
        "src/a/b.rs": "mod c;\n",
        "src/a/b/c/mod.rs": "mod d;\n",
        "src/a/b/c/d.rs": "fn d() {}\n",
    })

    out = _expand_path(root / "src" / "main.rs")

    assert "fn d() {}" in out
    assert out.count(" {\n") == 4


# -----------------------------------------------------------------------------
# FAILURES
# -----------------------------------------------------------------------------

def test_missing_module_names_module_and_directory(write_tree) -> None:
    root = write_tree({"src/lib.rs": "mod a;\n", "src/a.rs": "mod gone;\n"})
    lib = root / "src" / "lib.rs"

    with pytest.raises(MissingModuleError) as exc:
        _expand_path(lib)

    err = exc.value
    assert err.module == "gone"
    assert err.directory == os.path.join(str(root / "src"), "a")
    assert err.path == str(root / "src" / "a.rs")
    assert err.chain == [str(root / "src" / "a.rs"), str(lib)]


def test_parse_error_in_child_carries_chain(write_tree) -> None:
    root = write_tree({"src/lib.rs": "mod a;\n", "src/a.rs": "fn broken( {\n"})
    lib = root / "src" / "lib.rs"

    with pytest.raises(ParseError) as exc:
        _expand_path(lib)

    child = str(root / "src" / "a.rs")
    assert exc.value.path == child
    assert exc.value.chain == [child, str(lib)]
    assert exc.value.describe().splitlines()[-2:] == [f"  -> {lib}", f"    -> {child}"]


def test_first_failure_wins_depth_first(write_tree) -> None:
    root = write_tree({
        "src/lib.rs": "mod a;\nmod missing_sibling;\n",
        "src/a.rs": "mod missing_child;\n",
    })

    with pytest.raises(MissingModuleError) as exc:
        _expand_path(root / "src" / "lib.rs")

    assert exc.value.module == "missing_child"


def test_self_referencing_module_raises_cycle_error(write_tree) -> None:
    root = write_tree({"src/lib.rs": "mod a;\n", "src/a/mod.rs": "mod b;\n"})
    try:
        os.symlink(root / "src" / "a", root / "src" / "a" / "b", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks unavailable")

    with pytest.raises(CycleError) as exc:
        _expand_path(root / "src" / "lib.rs")

    assert exc.value.module == "b"


def test_max_depth_limits_nesting(write_tree) -> None:
    root = write_tree({
        "src/lib.rs": "mod a;\n",
        "src/a.rs": "mod b;\n",
        "src/a/b.rs": "fn b() {}\n",
    })
    lib = root / "src" / "lib.rs"

    assert "fn b() {}" in _expand_path(lib, max_depth=2)
    with pytest.raises(CycleError):
        _expand_path(lib, max_depth=1)
