#!/usr/bin/env python3
"""
Enumerate every maximum-pairing RNA secondary structure from the command line.

This script folds a sequence with the Nussinov algorithm and prints every
structure that reaches the optimal number of base pairs in dot-bracket notation.

Examples:
  - python -m rna_nussinov_fold --sequence GCGC
  - python -m rna_nussinov_fold --file hairpin.fa --min-loop 3 --json
  - python -m rna_nussinov_fold -vv --show-matrix --sequence GGGAAACCC
"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# --- Local Application Imports ---
from rna_nussinov_fold.errors import TooManyStructuresError
from rna_nussinov_fold.folding.nussinov.nussinov_fold import NussinovFoldResult, fold_sequence
from rna_nussinov_fold.rules import MIN_LOOP_LENGTH
from rna_nussinov_fold.utils.logging_utils import (
    DEFAULT_LOG_DIR,
    PACKAGE_LOGGERS,
    progress_logging,
    setup_logger,
)

logger = logging.getLogger(__name__)


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(verbose_level: int, log_file: Optional[str] = None) -> None:
    """
    Configures logging for the CLI and the folding modules.

    Parameters
    ----------
    verbose_level : int
        0 for WARNING, 1 for INFO, 2 or more for DEBUG.
    log_file : Optional[str]
        Explicit log file. Without it, a timestamped file under `var/log/` is
        created when verbosity is above 0.
    """
    level_map = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    log_level = level_map.get(min(verbose_level, 2), logging.INFO)

    should_log_to_file = (verbose_level > 0) or (log_file is not None)

    for logger_name in [__name__, *PACKAGE_LOGGERS]:
        setup_logger(
            logger_name,
            level=log_level,
            log_file=log_file,
            enable_file_logging=should_log_to_file,
        )

    if should_log_to_file and log_file is None:
        logger.info(f"Logs will be saved to: {DEFAULT_LOG_DIR.resolve()}")


# --------------------------
# Input Helpers
# --------------------------
def existing_file(path: str) -> str:
    """`argparse` type that only accepts paths to existing files."""
    if not Path(path).is_file():
        raise argparse.ArgumentTypeError("The provided file path doesn't exist")
    return path


def read_sequence_file(path: str) -> str:
    """
    Reads a sequence from a plain-text or FASTA file.

    Header lines (`>`) and comment lines (`;`) are skipped; the remaining lines
    are stripped and concatenated.
    """
    lines: List[str] = []
    with open(path, "r", encoding="utf-8") as handle:
        for line in handle:
            stripped = line.strip()
            if not stripped or stripped.startswith((">", ";")):
                continue
            lines.append(stripped)
    return "".join(lines)


def format_text_report(result: NussinovFoldResult, show_matrix: bool) -> str:
    """Builds the human-readable report printed to stdout."""
    lines = [
        f"Sequence Length : {len(result.sequence)}",
        f"Sequence : {result.sequence}",
        f"Minimal Loop Length : {result.min_loop_length}",
        f"Max Base Pairs : {result.max_pairs}",
        f"Optimal Structures : {len(result.structures)}",
    ]
    if show_matrix:
        lines.append("Value Matrix :")
        lines.append(str(result.state.values_as_array()))
    lines.append(str(result.sequence))
    lines.extend(result.dot_brackets)
    return "\n".join(lines)


# --------------------------
# Command-Line Interface
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nussinov-fold",
        description="Enumerate all maximum base-pairing RNA structures (Nussinov).",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-s", "--sequence", help="RNA sequence (A,C,G,U; case-insensitive)")
    source.add_argument("-f", "--file", type=existing_file,
                        help="Path to a text or FASTA file holding one sequence")

    parser.add_argument("--min-loop", type=int, default=MIN_LOOP_LENGTH,
                        help=f"Minimal loop length (default: {MIN_LOOP_LENGTH}).")
    parser.add_argument("--max-structures", type=int, default=None,
                        help="Abort if more optimal structures (paths with --all-paths) than this would be enumerated.")
    parser.add_argument("--all-paths", action="store_true",
                        help="Enumerate every optimal derivation before de-duplicating "
                             "(exponential on low-complexity input; combine with --max-structures).")
    parser.add_argument("--workers", type=int, default=1,
                        help="Threads per gap level during the matrix fill (default: 1).")
    parser.add_argument("--show-matrix", action="store_true",
                        help="Print the filled value matrix.")
    parser.add_argument("--json", action="store_true",
                        help="Emit JSON instead of human-readable text.")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/<module>_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress all output except the final result")
    return parser


def main(argv=None) -> int:
    """
    Parses command-line arguments and runs the prediction.

    Returns
    -------
    int
        0 on success, 2 for invalid input, 1 when enumeration is aborted or fails.
    """
    parser = build_parser()
    cli_args = parser.parse_args(argv)

    verbose_level = 0 if cli_args.quiet else cli_args.verbose
    setup_cli_logging(verbose_level, cli_args.log_file)

    raw_sequence = cli_args.sequence
    if cli_args.file is not None:
        logger.info(f"Reading sequence from: {cli_args.file}")
        raw_sequence = read_sequence_file(cli_args.file)

    try:
        with progress_logging([__name__, *PACKAGE_LOGGERS]):
            result = fold_sequence(
                raw_sequence,
                min_loop_length=cli_args.min_loop,
                max_structures=cli_args.max_structures,
                collapse_derivations=not cli_args.all_paths,
                workers=cli_args.workers,
                verbose=verbose_level > 0,
            )
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        if not cli_args.json:
            print(f"Error: {e}", file=sys.stderr)
        else:
            print(json.dumps({"error": str(e)}, indent=2))
        return 2
    except TooManyStructuresError as e:
        logger.error(f"Enumeration aborted: {e}")
        if not cli_args.json:
            print(f"Enumeration aborted: {e}", file=sys.stderr)
        else:
            print(json.dumps({"error": str(e)}, indent=2))
        return 1

    if cli_args.json:
        payload = {
            "sequence": str(result.sequence),
            "length": len(result.sequence),
            "min_loop_length": result.min_loop_length,
            "max_pairs": result.max_pairs,
            "structure_count": len(result.structures),
            "structures": result.dot_brackets,
        }
        if cli_args.show_matrix:
            payload["value_matrix"] = result.state.values_as_array().tolist()
        print(json.dumps(payload, indent=2))
    else:
        print(format_text_report(result, cli_args.show_matrix))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
