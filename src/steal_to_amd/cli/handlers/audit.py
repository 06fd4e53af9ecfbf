"""
Audit Command Handler.

Dry-runs the batch converter and lists, per file, whether a steal() header was
found and how each dependency would be translated. Nothing is written.
"""

from pathlib import Path
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from steal_to_amd.config import RuntimeConfig
from steal_to_amd.core.batch import BatchConverter, collect_source_files
from steal_to_amd.utils.console import console, log_error, log_warning


def handle_audit(paths: List[Path], config_dir: Optional[Path] = None) -> int:
  """
  Reports the header status of every file under `paths`.

  Args:
      paths: Files or directories to inspect.
      config_dir: Directory to start the pyproject.toml search from.

  Returns:
      int: Exit code (1 if any input is missing or any file fails to convert).
  """
  missing = [p for p in paths if not p.exists()]
  for path in missing:
    log_error(f"Input not found: {escape(str(path))}")
  if missing:
    return 1

  if config_dir is None:
    config_dir = paths[0] if paths[0].is_dir() else paths[0].parent

  try:
    config = RuntimeConfig.load(search_path=config_dir)
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  files = collect_source_files(paths)
  if not files:
    log_warning("No .js files found.")
    return 1

  report = BatchConverter(config).run(files, dry_run=True)

  table = Table(title="Header Audit")
  table.add_column("File", style="cyan")
  table.add_column("Header", justify="center")
  table.add_column("Dependencies")

  for filename, res in report.results.items():
    if not res.success:
      table.add_row(escape(filename), "❌", escape("; ".join(res.errors)))
    elif not res.header_found:
      table.add_row(escape(filename), "-", "")
    else:
      deps = "\n".join(f"{d.original} -> {d.translated}" for d in res.dependencies)
      table.add_row(escape(filename), "✔", escape(deps))

  console.print(table)
  return 1 if report.failed else 0
