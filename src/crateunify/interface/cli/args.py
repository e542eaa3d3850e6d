from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the cargo subcommand and translates the
parsed namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from crateunify.domain.constants import CRATE_KIND_BIN, CRATE_KIND_LIB

# cargo runs `cargo unify ...` as `cargo-unify unify ...`
SUBCOMMAND_NAME = "unify"

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the cargo-unify CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="cargo-unify",
        description="A tool to unify crates into one buildable file.",
    )

    # --- Crate Selection ---
    kind = p.add_mutually_exclusive_group()
    kind.add_argument(
        "--lib",
        action="store_true",
        help="Unify a lib crate (src/lib.rs).",
    )
    kind.add_argument(
        "--bin",
        action="store_true",
        help="Unify a bin crate (src/main.rs). This is the default.",
    )
    p.add_argument(
        "--path",
        dest="crate_path",
        default=None,
        help="Path to the crate root (where `src` is). Defaults to the current directory.",
    )

    # --- Expansion Limits ---
    p.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help="Maximum module nesting depth before giving up.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this (rotating) log file.",
    )

    return p


def strip_subcommand(argv: List[str]) -> List[str]:
    """Drop the leading subcommand token cargo passes to external tools."""
    if argv and argv[0] == SUBCOMMAND_NAME:
        return argv[1:]
    return argv

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset; None means unset.
    """
    overrides: Dict[str, Any] = {}

    overrides["crate_path"] = args.crate_path
    overrides["max_depth"] = args.max_depth

    crate_kind: Optional[str] = None
    if args.lib:
        crate_kind = CRATE_KIND_LIB
    elif args.bin:
        crate_kind = CRATE_KIND_BIN
    overrides["crate_kind"] = crate_kind

    return overrides
