"""
Tests for the top-level `steal_to_amd.convert` helper.
"""

import pytest

import steal_to_amd


def test_convert_with_default_tables():
  code = "steal('can/util', './list.ejs!', function(can, list) {});"
  assert steal_to_amd.convert(code) == "define(['can/util/jquery', 'ejs!./list.ejs'], function(can, list) {});"


def test_convert_with_extra_tables():
  code = "steal('lodash', 'tpl.hbs!', function(_, tpl) {});"
  result = steal_to_amd.convert(code, convert_map={"lodash": "vendor/lodash"}, extension_plugins={".hbs!": "hbs!"})
  assert result == "define(['vendor/lodash', 'hbs!tpl.hbs'], function(_, tpl) {});"


def test_convert_passthrough():
  code = "module.exports = 1;\n"
  assert steal_to_amd.convert(code) == code


def test_convert_raises_on_failure():
  with pytest.raises(ValueError, match="Conversion failed"):
    steal_to_amd.convert("steal(dep, function() {});")


def test_translate_name_exported():
  mapping = steal_to_amd.NameMapping.default()
  assert steal_to_amd.translate_name("funcunit/qunit", mapping) == "qunit"
  assert steal_to_amd.translate_name("app/todo", mapping) == "app/todo/todo"
