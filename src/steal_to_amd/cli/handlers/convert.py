"""
Convert Command Handler.

This module implements the logic for the `steal-to-amd convert` command.
It orchestrates:
1. Configuration loading (defaults, pyproject.toml, CLI overrides).
2. File collection.
3. Batch conversion with in-place writes.
4. Optional unified diffs and the summary report.
"""

import difflib
from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from steal_to_amd.config import RuntimeConfig
from steal_to_amd.core.batch import BatchConverter, BatchReport, collect_source_files
from steal_to_amd.utils.console import console, log_error, log_success, log_warning


def handle_convert(
  paths: List[Path],
  dry_run: bool = False,
  show_diff: bool = False,
  max_files: Optional[int] = None,
  ignore: Optional[List[str]] = None,
  convert_map: Optional[Dict[str, str]] = None,
  extension_plugins: Optional[Dict[str, str]] = None,
  config_dir: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      paths: Files or directories to convert in place.
      dry_run: If True, report what would change without writing.
      show_diff: If True, print a unified diff for every changed file.
      max_files: Cap on the number of files processed.
      ignore: Extra ignore prefixes appended to the configured ones.
      convert_map: Extra exact-name mappings.
      extension_plugins: Extra extension-to-plugin mappings.
      config_dir: Directory to start the pyproject.toml search from.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  missing = [p for p in paths if not p.exists()]
  for path in missing:
    log_error(f"Input not found: {escape(str(path))}")
  if missing:
    return 1

  if config_dir is None:
    config_dir = paths[0] if paths[0].is_dir() else paths[0].parent

  try:
    config = RuntimeConfig.load(
      convert_map=convert_map,
      extension_plugins=extension_plugins,
      extra_ignore_paths=ignore,
      max_files=max_files,
      search_path=config_dir,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  files = collect_source_files(paths)
  if not files:
    log_warning("No .js files found.")
    return 1

  originals: Dict[str, str] = {}
  if show_diff:
    for path in files:
      try:
        # Same newline handling as the batch run, so CRLF lines compare equal.
        with open(path, "rt", encoding="utf-8", newline="") as f:
          originals[str(path)] = f.read()
      except (OSError, UnicodeDecodeError):
        continue

  report = BatchConverter(config).run(files, dry_run=dry_run)

  if show_diff:
    for key in report.converted:
      if key in originals:
        _print_diff(key, originals[key], report.results[key].code)

  _print_batch_summary(report, dry_run)
  return 1 if report.failed else 0


def _print_diff(path: str, before: str, after: str) -> None:
  diff = difflib.unified_diff(
    before.splitlines(keepends=True),
    after.splitlines(keepends=True),
    fromfile=f"a/{path}",
    tofile=f"b/{path}",
  )
  console.print("".join(diff), markup=False, highlight=False, soft_wrap=True, end="")


def _print_batch_summary(report: BatchReport, dry_run: bool = False) -> None:
  """
  Renders a summary of the batch run to the console.

  Args:
      report: The finished batch report.
      dry_run: Whether files were left untouched on purpose.
  """
  verb = "would be converted" if dry_run else "converted"
  counts = (
    f"{len(report.converted)} {verb}, {len(report.unchanged)} unchanged, "
    f"{len(report.ignored)} ignored, {len(report.skipped)} skipped"
  )

  if not report.failed:
    log_success(f"Batch Complete: {counts}.")
    return

  table = Table(title="Conversion Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename in report.failed:
    res = report.results[filename]
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), "❌ Failed", escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {counts}, {len(report.failed)} failed.")
