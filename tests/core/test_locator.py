"""
Tests for the Header Locator.

Verifies that only direct, top-level calls to the loader identifier qualify.
"""

from steal_to_amd.core.locator import find_loader_call, find_loader_calls
from steal_to_amd.core.parsing import parse_program


def test_finds_top_level_call():
  program = parse_program("steal('jquery', function($) {});\n")
  call = find_loader_call(program)

  assert call is not None
  assert program.text_of(call.callee) == "steal"
  assert [a.type for a in call.args[:1]] == ["string"]
  assert len(call.args) == 2


def test_skips_leading_comments_and_statements():
  source = "/*global steal:false */\n'use strict';\nvar x = 1;\nsteal('a', function() {});\n"
  program = parse_program(source)
  call = find_loader_call(program)

  assert call is not None
  assert program.line_of(call.statement) == 3


def test_no_call_returns_none():
  program = parse_program("define(['a'], function(a) {});\n")
  assert find_loader_call(program) is None


def test_nested_calls_do_not_count():
  sources = [
    "if (ready) { steal('a', function() {}); }\n",
    "foo(steal('a', function() {}));\n",
    "var x = steal('a', function() {});\n",
    "(function() { steal('a', function() {}); })();\n",
  ]
  for source in sources:
    assert find_loader_call(parse_program(source)) is None, source


def test_member_and_renamed_callees_do_not_count():
  for source in ["steal.dev.log('x');\n", "window.steal('a');\n", "stealx('a');\n"]:
    assert find_loader_call(parse_program(source)) is None, source


def test_reference_without_call_does_not_count():
  assert find_loader_call(parse_program("steal;\nfoo(steal);\n")) is None


def test_first_of_many_is_authoritative():
  program = parse_program("steal('a', function() {});\nsteal('b', function() {});\n")
  calls = find_loader_calls(program)

  assert len(calls) == 2
  assert find_loader_call(program).statement.start_byte == calls[0].statement.start_byte
  assert program.line_of(calls[1].statement) == 1


def test_custom_loader_name():
  program = parse_program("require('a', function() {});\n")
  assert find_loader_call(program) is None
  assert find_loader_call(program, loader_name="require") is not None


def test_comments_inside_arguments_are_collected_separately():
  program = parse_program("steal(\n  'a', // first\n  'b',\n  function() {}\n);\n")
  call = find_loader_call(program)

  assert [a.type for a in call.args][:2] == ["string", "string"]
  assert len(call.args) == 3
  assert [program.text_of(c) for c in call.comments] == ["// first"]
