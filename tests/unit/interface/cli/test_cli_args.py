from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Mutual exclusion of --lib and --bin.
3. Handling of the cargo subcommand token.
"""

import pytest

from crateunify.interface.cli.args import args_to_overrides, build_parser, strip_subcommand


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_defaults_leave_everything_unset():
    overrides = args_to_overrides(parse_args([]))
    assert overrides == {"crate_path": None, "max_depth": None, "crate_kind": None}


def test_lib_flag_selects_lib_kind():
    assert args_to_overrides(parse_args(["--lib"]))["crate_kind"] == "lib"


def test_bin_flag_selects_bin_kind():
    assert args_to_overrides(parse_args(["--bin"]))["crate_kind"] == "bin"


def test_lib_and_bin_are_mutually_exclusive(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--lib", "--bin"])
    assert exc.value.code == 2
    assert "not allowed with" in capsys.readouterr().err


def test_path_and_depth_arguments():
    overrides = args_to_overrides(parse_args(["--path", "/crate", "--max-depth", "5"]))

    assert overrides["crate_path"] == "/crate"
    assert overrides["max_depth"] == 5


def test_strip_subcommand():
    assert strip_subcommand(["unify", "--lib"]) == ["--lib"]
    assert strip_subcommand(["--lib"]) == ["--lib"]
    assert strip_subcommand([]) == []
