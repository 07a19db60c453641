from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from archinspector.domain.constants import APP_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the ArchInspector CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="archinspector",
        description="Explore a project tree and get AI-powered architectural explanations.",
    )

    # --- Source Selection ---
    source = p.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--repo",
        dest="repo_url",
        help="Public GitHub repository URL (https://github.com/owner/repo).",
    )
    source.add_argument(
        "--zip",
        dest="zip_path",
        help="Path to a .zip archive of the project.",
    )

    # --- Actions ---
    p.add_argument(
        "--tree",
        action="store_true",
        help="Print the bounded project outline.",
    )
    p.add_argument(
        "-e", "--explain",
        dest="explain_paths",
        action="append",
        default=[],
        metavar="PATH",
        help="Explain a file or folder by its tree path (repeatable).",
    )

    # --- Context Bounds ---
    p.add_argument("--max-depth", dest="max_depth", type=int, default=None,
                   help="Deepest tree level included in the outline.")
    p.add_argument("--max-children", dest="max_children", type=int, default=None,
                   help="Children listed per folder before summarizing.")
    p.add_argument("--no-collapse", action="store_true",
                   help="Keep a single top-level wrapper folder as the root.")

    # --- Provider ---
    p.add_argument("--model", dest="ai_model", default=None,
                   help="Text generation model identifier.")
    p.add_argument("--timeout", dest="request_timeout", type=int, default=None,
                   help="GitHub request timeout in seconds.")

    # --- Output & Diagnostics ---
    p.add_argument("--json", dest="json_output", action="store_true",
                   help="Emit results as JSON.")
    p.add_argument("--log-file", dest="log_file", default=None,
                   help="Also write logs to this file (defaults to the user data dir with --debug).")
    p.add_argument("--debug", action="store_true", help="Enable debug logging.")
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    return p

# -----------------------------------------------------------------------------
# NAMESPACE MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Map parsed arguments to configuration keys.

    Only explicitly provided values are returned, so unset flags never mask
    environment or default configuration.
    """
    overrides: Dict[str, Any] = {}

    for key in ("max_depth", "max_children", "ai_model", "request_timeout", "log_file"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    if args.no_collapse:
        overrides["collapse_single_root"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
