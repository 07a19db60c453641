from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, environment, CLI overrides), source analysis, optional outline
printing and node explanations. Acts as the headless front end of an
analysis session.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from archinspector.core.analysis.tree_renderer import render_tree_context
from archinspector.core.processing.explainer import Explainer
from archinspector.core.processing.strategies.google import GoogleGenAIStrategy
from archinspector.core.services.archive_reader import validate_archive_name
from archinspector.core.services.validator import validate_config
from archinspector.core.session import AnalysisSession, Explanation
from archinspector.domain.config import load_config
from archinspector.domain.errors import ArchInspectorError, InvalidInputError
from archinspector.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from archinspector.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, session: Optional[AnalysisSession] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.
        session: Pre-built session (used by tests to inject collaborators).

    Returns:
        int: 0 on success, 1 on analysis failure, 2 on invalid input.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Configuration: defaults <- environment <- CLI
    raw_conf = load_config()
    raw_conf.update(cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap (console on stderr, stdout stays machine-readable)
    # --debug without --log-file also keeps a file under the user data dir
    log_file = conf["log_file"] or (get_default_log_path() if args.debug else None)
    configure_logging(LoggingConfig(level=conf["log_level"], console=True, log_file=log_file))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    session = session or create_session(conf)

    # 3. Source analysis
    try:
        if args.zip_path:
            validate_archive_name(args.zip_path)
            tree = session.analyze_archive(args.zip_path)
        else:
            tree = session.analyze_repo(args.repo_url)
    except InvalidInputError as e:
        return _report_error(e, EXIT_INVALID_INPUT)
    except ArchInspectorError as e:
        return _report_error(e, EXIT_FAILURE)

    outline = ""
    if args.tree or not args.explain_paths:
        outline = render_tree_context(tree, None, conf["max_depth"], conf["max_children"])

    # 4. Explanations
    explanations: List[Explanation] = []
    exit_code = EXIT_OK
    for path in args.explain_paths:
        try:
            explanations.append(session.select(_resolve_path(session, path)))
        except InvalidInputError as e:
            exit_code = max(exit_code, _report_error(e, EXIT_INVALID_INPUT))
        except ArchInspectorError as e:
            exit_code = max(exit_code, _report_error(e, EXIT_FAILURE))

    # 5. Output rendering
    if args.json_output:
        print(json.dumps(_to_payload(tree.path, outline, explanations), ensure_ascii=False, indent=2))
    else:
        _print_human(outline, explanations)

    return exit_code


def create_session(conf: Dict[str, Any]) -> AnalysisSession:
    """Wire the default collaborators from a validated configuration."""
    explainer = Explainer(
        GoogleGenAIStrategy(api_key=conf["ai_api_key"] or None),
        model=conf["ai_model"],
        max_depth=conf["max_depth"],
        max_children=conf["max_children"],
    )
    return AnalysisSession(conf, explainer)

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _resolve_path(session: AnalysisSession, path: str) -> str:
    """
    Accept folder paths with or without their trailing slash.

    Paths relative to a collapsed root are also accepted by prefixing the
    root path.
    """
    tree = session.tree
    root_path = tree.path if tree is not None else ""
    candidates = [path, path.rstrip("/") + "/"]
    candidates += [root_path + c for c in candidates if not c.startswith(root_path)]
    for candidate in candidates:
        if session.find_node(candidate) is not None:
            return candidate
    return path


def _report_error(error: ArchInspectorError, code: int) -> int:
    logger.debug(f"{type(error).__name__}: {error.user_message}")
    print(f"ERROR: {error.user_message}", file=sys.stderr)
    return code


def _to_payload(root: str, outline: str, explanations: List[Explanation]) -> Dict[str, Any]:
    return {
        "root": root,
        "tree": outline,
        "explanations": [
            {
                "path": e.path,
                "kind": e.kind.value,
                "markdown": e.markdown,
                "segments": [asdict(s) for s in e.segments],
            }
            for e in explanations
        ],
    }


def _print_human(outline: str, explanations: List[Explanation]) -> None:
    if outline:
        print(outline, end="")
    for explanation in explanations:
        print(f"\n=== {explanation.path} ({explanation.kind.value}) ===\n")
        print(explanation.markdown.strip())

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
