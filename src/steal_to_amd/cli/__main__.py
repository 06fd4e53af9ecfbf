"""
Main Entry Point for steal-to-amd CLI.

This module handles argument parsing and dispatches to the command handlers
in `steal_to_amd.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from steal_to_amd import __version__
from steal_to_amd.cli import handlers
from steal_to_amd.config import parse_cli_pairs


def _positive_int(value: str) -> int:
  number = int(value)
  if number < 1:
    raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
  return number


def _add_mapping_args(cmd: argparse.ArgumentParser) -> None:
  cmd.add_argument(
    "--map",
    nargs="*",
    default=None,
    metavar="NAME=TARGET",
    help="Extra exact-name mappings (e.g. lodash=vendor/lodash)",
  )
  cmd.add_argument(
    "--plugin",
    nargs="*",
    default=None,
    metavar="EXT=PREFIX",
    help="Extra extension-to-plugin mappings (e.g. .hbs!=hbs!)",
  )
  cmd.add_argument(
    "--config-dir",
    type=Path,
    default=None,
    help="Directory to start searching for pyproject.toml (default: first input)",
  )


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="steal-to-amd: Rewrite StealJS module headers as AMD define() calls")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Rewrite files in place")
  cmd_conv.add_argument("paths", nargs="+", type=Path, help="Input files or directories")
  cmd_conv.add_argument("--dry-run", action="store_true", help="Report changes without writing to disk")
  cmd_conv.add_argument("--diff", action="store_true", help="Print a unified diff for each changed file")
  cmd_conv.add_argument("--max-files", type=_positive_int, default=None, help="Process at most N files")
  cmd_conv.add_argument("--ignore", nargs="*", default=None, metavar="PREFIX", help="Extra path prefixes to skip")
  _add_mapping_args(cmd_conv)

  # --- Command: TRANSLATE ---
  cmd_tr = subparsers.add_parser("translate", help="Show how dependency ids are translated")
  cmd_tr.add_argument("names", nargs="+", help="StealJS dependency ids")
  _add_mapping_args(cmd_tr)

  # --- Command: AUDIT ---
  cmd_audit = subparsers.add_parser("audit", help="List steal() headers and their dependencies without writing")
  cmd_audit.add_argument("paths", nargs="+", type=Path, help="Input files or directories")
  cmd_audit.add_argument("--config-dir", type=Path, default=None, help="Directory to start searching for pyproject.toml")

  args = parser.parse_args(argv)

  if args.command == "convert":
    return handlers.handle_convert(
      args.paths,
      dry_run=args.dry_run,
      show_diff=args.diff,
      max_files=args.max_files,
      ignore=args.ignore,
      convert_map=parse_cli_pairs(args.map),
      extension_plugins=parse_cli_pairs(args.plugin),
      config_dir=args.config_dir,
    )

  elif args.command == "translate":
    return handlers.handle_translate(
      args.names,
      convert_map=parse_cli_pairs(args.map),
      extension_plugins=parse_cli_pairs(args.plugin),
      config_dir=args.config_dir,
    )

  elif args.command == "audit":
    return handlers.handle_audit(args.paths, config_dir=args.config_dir)

  return 0


if __name__ == "__main__":
  sys.exit(main())
