"""
Tests for the tree-sitter backed Program service.
"""

import pytest

from steal_to_amd.core.parsing import parse_program


def test_print_without_edits_is_identity():
  source = "// header\n\nvar a = 1;   /* odd   spacing */\nfunction f( x ){ return x }\n"
  program = parse_program(source)
  assert program.print() == source


def test_statements_skip_top_level_comments():
  program = parse_program("// one\nvar a = 1;\n/* two */\nfoo();\n")
  assert [s.type for s in program.statements] == ["variable_declaration", "expression_statement"]


def test_replace_node_and_range():
  program = parse_program("foo(1, 2);\n")
  call = program.statements[0].named_children[0]
  callee = call.child_by_field_name("function")

  program.replace_node(callee, "bar")
  program.replace_range(call.end_byte, call.end_byte, ".then(done)")

  assert program.print() == "bar(1, 2).then(done);\n"


def test_edits_are_applied_in_offset_order():
  source = "a; b; c;\n"
  program = parse_program(source)
  a, b, c = program.statements

  program.replace_node(c.named_children[0], "z")
  program.replace_node(a.named_children[0], "x")

  assert program.print() == "x; b; z;\n"


def test_overlapping_edits_rejected():
  program = parse_program("foo(bar);\n")
  program.replace_range(0, 5, "baz(")
  with pytest.raises(ValueError):
    program.replace_range(3, 7, "qux")


def test_invalid_range_rejected():
  program = parse_program("x;\n")
  with pytest.raises(ValueError):
    program.replace_range(2, 1, "")
  with pytest.raises(ValueError):
    program.replace_range(0, 100, "")


def test_multibyte_source_round_trips():
  source = "var s = 'héllo';\nfoo();\n"
  program = parse_program(source)
  stmt = program.statements[1]
  program.replace_node(stmt.named_children[0], "bar()")
  assert program.print() == "var s = 'héllo';\nbar();\n"


def test_line_helpers():
  program = parse_program("if (x) {\n    foo(\n      1);\n}\n")
  block = program.statements[0].child_by_field_name("consequence")
  inner = block.named_children[0]

  assert program.line_of(inner) == 1
  assert program.end_line_of(inner) == 2
  assert program.line_indent(inner) == "    "


def test_syntax_error_names_position():
  with pytest.raises(SyntaxError) as exc:
    parse_program("steal('a', function( {\n")
  assert "Invalid JavaScript at line" in str(exc.value)
