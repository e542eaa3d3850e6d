from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, optional JSON file, command-line overrides), crate unification
and output. The flattened crate is the only thing written to stdout.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from crateunify.core.services.unifier import unify_crate
from crateunify.core.services.validator import validate_config
from crateunify.domain.config import load_config
from crateunify.domain.errors import UnifyError
from crateunify.infra.logging import LoggingConfig, configure_logging, get_logger
from crateunify.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_PATH = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    raw_argv = sys.argv[1:] if argv is None else list(argv)

    parser = cli_args.build_parser()
    args = parser.parse_args(cli_args.strip_subcommand(raw_argv))

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration...")

    base_conf = load_config(args.config_file)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    crate_path = clean_conf["crate_path"]
    if not os.path.isdir(crate_path):
        msg = f"Crate path does not exist or is not a directory: {crate_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_BAD_PATH

    try:
        result = unify_crate(
            crate_path,
            clean_conf["crate_kind"],
            max_depth=clean_conf["max_depth"],
        )
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except UnifyError as e:
        logger.error(f"Unification failed: {e.message}")
        print(f"ERROR: {e.describe()}", file=sys.stderr)
        return EXIT_FAILURE

    _write_output(result.output)
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge the non-None override values into the base configuration.
    """
    out = dict(base)
    for k in ("crate_path", "crate_kind", "max_depth"):
        if overrides.get(k) is not None:
            out[k] = overrides[k]
    return out


# -----------------------------------------------------------------------------
# OUTPUT
# -----------------------------------------------------------------------------

def _write_output(text: str) -> None:
    """
    Write the flattened crate to stdout as raw UTF-8 plus one newline.

    Bypasses the text layer so CRLF sources are not re-translated on Windows.
    """
    sys.stdout.flush()
    sys.stdout.buffer.write(text.encode("utf-8") + b"\n")
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    sys.exit(main())
