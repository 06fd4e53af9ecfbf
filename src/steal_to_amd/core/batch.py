"""
Batch Driver.

Runs the engine over many files and writes results back in place, honouring
the ignore-prefix list and the optional processing cap from `RuntimeConfig`.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field
from rich.markup import escape

from steal_to_amd.config import RuntimeConfig
from steal_to_amd.core.conversion_result import ConversionResult
from steal_to_amd.core.engine import ConversionEngine
from steal_to_amd.utils.console import log_error, log_info


def collect_source_files(paths: Iterable[Path], suffixes: Sequence[str] = (".js",)) -> List[Path]:
  """
  Expands directories into the source files beneath them.

  Files given explicitly are kept regardless of suffix.

  Args:
      paths: Files and/or directories.
      suffixes: File suffixes collected from directories.

  Returns:
      List[Path]: Files in the given order, directory contents sorted.
  """
  collected: List[Path] = []
  for path in paths:
    if path.is_dir():
      collected.extend(sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in suffixes))
    else:
      collected.append(path)
  return collected


class BatchReport(BaseModel):
  """
  Outcome of a batch run, keyed by the path as given.
  """

  results: Dict[str, ConversionResult] = Field(default_factory=dict)
  ignored: List[str] = Field(default_factory=list, description="Paths matching an ignore prefix.")
  skipped: List[str] = Field(default_factory=list, description="Paths left over once max_files was reached.")

  @property
  def converted(self) -> List[str]:
    return [path for path, res in self.results.items() if res.success and res.changed]

  @property
  def unchanged(self) -> List[str]:
    return [path for path, res in self.results.items() if res.success and not res.changed]

  @property
  def failed(self) -> List[str]:
    return [path for path, res in self.results.items() if not res.success]


class BatchConverter:
  """
  Applies a `ConversionEngine` to a list of files.
  """

  def __init__(
    self,
    config: Optional[RuntimeConfig] = None,
    engine: Optional[ConversionEngine] = None,
    base_dir: Optional[Path] = None,
  ):
    """
    Args:
        config: Defaults to the bundled tables.
        engine: Defaults to an engine built from `config`.
        base_dir: Directory that ignore prefixes are relative to (default: cwd).
    """
    self.config = config or RuntimeConfig()
    self.engine = engine or ConversionEngine(self.config)
    self.base_dir = base_dir

  def is_ignored(self, path: Path) -> bool:
    """
    True if the path's POSIX form starts with any ignore prefix.

    Absolute paths are also tried relative to `base_dir`, so `/repo/src/can/x.js`
    matches `src/can/` when run from `/repo`.
    """
    candidates = [path.as_posix()]
    if path.is_absolute():
      base = (self.base_dir or Path.cwd()).resolve()
      resolved = path.resolve()
      if resolved.is_relative_to(base):
        candidates.append(resolved.relative_to(base).as_posix())

    return any(c.startswith(prefix) for c in candidates for prefix in self.config.ignore_paths)

  def run(self, paths: Iterable[Path], dry_run: bool = False) -> BatchReport:
    """
    Converts each file, writing changed output back to the same path.

    Args:
        paths: Files to process, in order.
        dry_run: If True, never write to disk.

    Returns:
        BatchReport: Per-file results plus ignored/skipped paths.
    """
    report = BatchReport()
    processed = 0

    for path in paths:
      key = str(path)

      if self.config.max_files is not None and processed >= self.config.max_files:
        report.skipped.append(key)
        continue

      if self.is_ignored(path):
        log_info(f"Ignoring: [path]{escape(key)}[/path]")
        report.ignored.append(key)
        continue

      log_info(f"Processing: [path]{escape(key)}[/path]")
      report.results[key] = self._convert_file(path, dry_run)
      processed += 1

    return report

  def _convert_file(self, path: Path, dry_run: bool) -> ConversionResult:
    try:
      with open(path, "rt", encoding="utf-8", newline="") as f:
        code = f.read()
    except (OSError, UnicodeDecodeError) as e:
      log_error(f"Failed to read {escape(str(path))}: {escape(str(e))}")
      return ConversionResult(success=False, errors=[f"Read Error: {e}"])

    result = self.engine.run(code, label=str(path))

    if not result.success:
      log_error(f"Failed to convert {escape(str(path))}: {escape('; '.join(result.errors))}")
      return result

    if result.changed and not dry_run:
      try:
        with open(path, "wt", encoding="utf-8", newline="") as f:
          f.write(result.code)
      except OSError as e:
        log_error(f"Failed to write {escape(str(path))}: {escape(str(e))}")
        return ConversionResult(code=code, success=False, header_found=True, errors=[f"Write Error: {e}"])

    return result
