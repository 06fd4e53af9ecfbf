"""
Translate Command Handler.

Shows how dependency ids would be rewritten under the resolved mapping,
without touching any file.
"""

from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from steal_to_amd.config import RuntimeConfig
from steal_to_amd.core.translator import NameTranslator
from steal_to_amd.utils.console import console, log_error


def handle_translate(
  names: List[str],
  convert_map: Optional[Dict[str, str]] = None,
  extension_plugins: Optional[Dict[str, str]] = None,
  config_dir: Optional[Path] = None,
) -> int:
  """
  Prints one row per dependency id: steal name -> AMD name.

  Args:
      names: StealJS dependency ids.
      convert_map: Extra exact-name mappings.
      extension_plugins: Extra extension-to-plugin mappings.
      config_dir: Directory to start the pyproject.toml search from.

  Returns:
      int: Exit code.
  """
  try:
    config = RuntimeConfig.load(
      convert_map=convert_map,
      extension_plugins=extension_plugins,
      search_path=config_dir,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  translator = NameTranslator(config.mapping)

  table = Table(title="Dependency Translation")
  table.add_column("steal", style="cyan", no_wrap=True)
  table.add_column("define", style="magenta", no_wrap=True)
  for name in names:
    table.add_row(escape(name), escape(translator(name)))

  console.print(table)
  return 0
