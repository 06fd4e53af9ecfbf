"""
Tests for RuntimeConfig validation and the CLI pair parser.
"""

import pytest

from steal_to_amd.config import (
  NameMapping,
  RuntimeConfig,
  load_default_settings,
  parse_cli_pairs,
  resolve_data_dir,
)
from steal_to_amd.enums import QuoteStyle


def test_defaults(tmp_path):
  config = RuntimeConfig.load(search_path=tmp_path)

  assert config.source_loader == "steal"
  assert config.target_loader == "define"
  assert config.indent == "    "
  assert config.quote_style is QuoteStyle.SINGLE
  assert config.max_files is None
  assert config.ignore_paths == ["src/can/", "src/documentjs/", "src/funcunit/", "src/steal/"]


def test_bundled_defaults_file():
  assert (resolve_data_dir() / "defaults.json").exists()

  settings = load_default_settings()
  assert settings["convert_map"]["can/util"] == "can/util/jquery"
  assert list(settings["extension_plugins"])[0] == ".css!"


def test_load_default_settings_returns_fresh_copy():
  first = load_default_settings()
  first["convert_map"].clear()
  assert load_default_settings()["convert_map"]


@pytest.mark.parametrize("field", ["source_loader", "target_loader"])
@pytest.mark.parametrize("value", ["", "1abc", "define()", "a-b"])
def test_invalid_loader_names(field, value):
  with pytest.raises(ValueError):
    RuntimeConfig(**{field: value})


def test_loader_names_are_stripped():
  assert RuntimeConfig(target_loader=" require ").target_loader == "require"
  assert RuntimeConfig(source_loader="$steal").source_loader == "$steal"


@pytest.mark.parametrize("indent", ["", "ab", " x "])
def test_invalid_indent(indent):
  with pytest.raises(ValueError):
    RuntimeConfig(indent=indent)


def test_invalid_max_files():
  with pytest.raises(ValueError):
    RuntimeConfig(max_files=0)


def test_quote_style_from_string():
  assert RuntimeConfig(quote_style="double").quote_style is QuoteStyle.DOUBLE


def test_name_mapping_merge_keeps_order():
  base = NameMapping(extension_plugins={".css!": "css!", ".ejs!": "ejs!"})
  merged = base.merged(extension_plugins={".ejs!": "tmpl!", ".hbs!": "hbs!"})

  assert list(merged.extension_plugins.items()) == [(".css!", "css!"), (".ejs!", "tmpl!"), (".hbs!", "hbs!")]
  assert base.extension_plugins[".ejs!"] == "ejs!"


def test_name_mapping_is_frozen():
  mapping = NameMapping()
  with pytest.raises(ValueError):
    mapping.convert_map = {}


def test_parse_cli_pairs():
  pairs = parse_cli_pairs(["jquery=vendor/jquery", " lodash = lib/lodash ", "a=b=c"])
  assert pairs == {"jquery": "vendor/jquery", "lodash": "lib/lodash", "a": "b=c"}


def test_parse_cli_pairs_skips_malformed(recorded_console):
  assert parse_cli_pairs(["novalue", "=x", "ok=1"]) == {"ok": "1"}
  assert parse_cli_pairs(None) == {}

  output = recorded_console.export_text()
  assert "Ignoring invalid pair: 'novalue'" in output
  assert "empty key" in output
