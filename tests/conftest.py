"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A recording console fixture for asserting on CLI output.
- Small builders for configs with explicit mapping tables.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'steal_to_amd' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from steal_to_amd.config import NameMapping, RuntimeConfig  # noqa: E402
from steal_to_amd.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture
def recorded_console():
  """
  Routes console output and logging into a wide, in-memory recording console.

  Use `recorded_console.export_text()` to read everything printed.
  """
  capture = Console(record=True, width=200, file=io.StringIO(), color_system=None)
  set_console(capture)
  yield capture
  reset_console()


@pytest.fixture
def plain_mapping():
  """Tables small enough to reason about in assertions."""
  return NameMapping(
    convert_map={"jquery": "jquery", "can/util": "can/util/jquery"},
    extension_plugins={".mustache!": "mustache!", ".css!": "css!"},
  )


@pytest.fixture
def plain_config(plain_mapping):
  """A RuntimeConfig using `plain_mapping` and no ignore prefixes."""
  return RuntimeConfig(mapping=plain_mapping, ignore_paths=[])
