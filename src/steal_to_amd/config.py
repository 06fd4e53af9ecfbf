"""
Runtime Configuration Store.

Holds the dependency-name mapping tables and the batch options consumed by the
engine. Values are resolved in three layers:

1. Package defaults (`steal_to_amd/data/defaults.json`).
2. `[tool.steal_to_amd]` in the nearest `pyproject.toml` (each key replaces
   the default wholesale).
3. Explicit overrides from code or the CLI.
"""

import json
import re
import sys
from importlib.resources import files
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from steal_to_amd.enums import QuoteStyle
from steal_to_amd.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

TOML_SECTION = "steal_to_amd"
DEFAULTS_FILE = "defaults.json"

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def resolve_data_dir() -> Path:
  """
  Locates the directory holding the bundled default tables.

  Prefers the directory next to this file (editable installs and tests) and
  falls back to package resources for installed distributions.

  Returns:
      Path: The absolute path to the 'data' directory.
  """
  local_path = Path(__file__).parent / "data"
  if (local_path / DEFAULTS_FILE).exists():
    return local_path

  return Path(str(files("steal_to_amd.data")))


def load_default_settings() -> Dict[str, Any]:
  """
  Reads the bundled defaults.

  Returns:
      Dict[str, Any]: A fresh dictionary; callers may mutate it.
  """
  with open(resolve_data_dir() / DEFAULTS_FILE, "rt", encoding="utf-8") as f:
    return json.load(f)


def _default_mapping() -> "NameMapping":
  defaults = load_default_settings()
  return NameMapping(
    convert_map=defaults.get("convert_map", {}),
    extension_plugins=defaults.get("extension_plugins", {}),
  )


def _default_ignore_paths() -> List[str]:
  return list(load_default_settings().get("ignore_paths", []))


class NameMapping(BaseModel):
  """
  The two read-only tables driving dependency-name translation.

  Dict insertion order is significant for `extension_plugins`: the first
  matching suffix wins.
  """

  model_config = ConfigDict(frozen=True)

  convert_map: Dict[str, str] = Field(default_factory=dict, description="Exact name -> target name.")
  extension_plugins: Dict[str, str] = Field(
    default_factory=dict, description="Bang suffix (e.g. '.mustache!') -> plugin prefix (e.g. 'mustache!')."
  )

  @classmethod
  def default(cls) -> "NameMapping":
    """
    Returns:
        NameMapping: The bundled CanJS/StealJS tables.
    """
    return _default_mapping()

  def merged(
    self,
    convert_map: Optional[Dict[str, str]] = None,
    extension_plugins: Optional[Dict[str, str]] = None,
  ) -> "NameMapping":
    """
    Returns a new mapping with extra entries layered over this one.

    Args:
        convert_map: Entries added to (or replacing within) the exact-name table.
        extension_plugins: Entries added to (or replacing within) the plugin table.

    Returns:
        NameMapping: The combined tables.
    """
    return NameMapping(
      convert_map={**self.convert_map, **(convert_map or {})},
      extension_plugins={**self.extension_plugins, **(extension_plugins or {})},
    )


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the conversion engine and batch driver.
  """

  mapping: NameMapping = Field(default_factory=_default_mapping, description="Dependency name tables.")
  ignore_paths: List[str] = Field(
    default_factory=_default_ignore_paths, description="Path prefixes excluded from batch runs."
  )
  max_files: Optional[int] = Field(None, ge=1, description="Stop after processing this many files.")
  source_loader: str = Field("steal", description="Loader identifier recognised in the header.")
  target_loader: str = Field("define", description="Loader identifier written in its place.")
  indent: str = Field("    ", description="Indentation unit for multiline dependency arrays.")
  quote_style: QuoteStyle = Field(QuoteStyle.SINGLE, description="Quote style of rewritten dependencies.")

  @field_validator("source_loader", "target_loader")
  @classmethod
  def validate_loader(cls, v: str) -> str:
    """
    Ensures loader names are plain JavaScript identifiers.

    Raises:
        ValueError: If the name cannot be used as a callee identifier.
    """
    v_clean = v.strip()
    if not _JS_IDENTIFIER.match(v_clean):
      raise ValueError(f"Invalid loader identifier: '{v}'")
    return v_clean

  @field_validator("indent")
  @classmethod
  def validate_indent(cls, v: str) -> str:
    """
    Raises:
        ValueError: If the indent is empty or contains non-whitespace characters.
    """
    if not v or v.strip():
      raise ValueError(f"Indent must be non-empty whitespace, got {v!r}")
    return v

  @classmethod
  def load(
    cls,
    convert_map: Optional[Dict[str, str]] = None,
    extension_plugins: Optional[Dict[str, str]] = None,
    extra_ignore_paths: Optional[List[str]] = None,
    max_files: Optional[int] = None,
    source_loader: Optional[str] = None,
    target_loader: Optional[str] = None,
    indent: Optional[str] = None,
    quote_style: Optional[QuoteStyle] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from defaults and pyproject.toml, then applies overrides.

    Args:
        convert_map: Extra exact-name entries merged into the resolved table.
        extension_plugins: Extra plugin entries merged into the resolved table.
        extra_ignore_paths: Prefixes appended to the resolved ignore list.
        max_files: Override for the processing cap.
        source_loader: Override for the recognised loader name.
        target_loader: Override for the emitted loader name.
        indent: Override for the indentation unit.
        quote_style: Override for the quote style.
        search_path: Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    settings = load_default_settings()
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())
    settings.update(toml_config)

    overrides = {
      "max_files": max_files,
      "source_loader": source_loader,
      "target_loader": target_loader,
      "indent": indent,
      "quote_style": quote_style,
    }
    for key, value in overrides.items():
      if value is not None:
        settings[key] = value

    mapping = NameMapping(
      convert_map=settings.get("convert_map", {}),
      extension_plugins=settings.get("extension_plugins", {}),
    ).merged(convert_map, extension_plugins)

    ignore_paths = list(settings.get("ignore_paths", []))
    ignore_paths.extend(extra_ignore_paths or [])

    scalars = {k: settings[k] for k in overrides if k in settings}
    return cls(mapping=mapping, ignore_paths=ignore_paths, **scalars)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts our section.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The section dict and the directory it was found in.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {toml_path}: {e}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOML_SECTION, {}), parent

  return {}, None


def parse_cli_pairs(items: Optional[List[str]]) -> Dict[str, str]:
  """
  Parses a list of 'key=value' strings into an ordered dictionary.

  Values stay strings; dependency names must not be coerced.

  Args:
      items (Optional[List[str]]): Raw CLI strings from argparse.

  Returns:
      Dict[str, str]: Parsed pairs in the order given.
  """
  if not items:
    return {}

  pairs: Dict[str, str] = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid pair: '{item}'. Expected 'key=value'.")
      continue

    key, value = item.split("=", 1)
    key = key.strip()
    if not key:
      log_warning(f"Ignoring pair with empty key: '{item}'.")
      continue
    pairs[key] = value.strip()

  return pairs
