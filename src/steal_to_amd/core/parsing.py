"""
JavaScript Parse/Print Service.

Wraps tree-sitter to give the rewriter a concrete syntax tree with exact byte
ranges, plus an edit log that is replayed over the original bytes when the
program is printed. Regions that were not edited come back byte-for-byte, so
formatting and comments outside the rewritten header are preserved.
"""

from dataclasses import dataclass
from typing import Iterator, List

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser, Tree

JS_LANGUAGE = Language(tsjs.language())

COMMENT_TYPE = "comment"


@dataclass(frozen=True)
class Edit:
  """A pending replacement of the byte range [start, end)."""

  start: int
  end: int
  text: str


class Program:
  """
  One parsed source file plus the edits queued against it.

  Created fresh for every transformation and discarded after `print()`.
  """

  def __init__(self, source: str, tree: Tree):
    self.source = source
    self.tree = tree
    self._source_bytes = source.encode("utf-8")
    self._edits: List[Edit] = []

  @property
  def root(self) -> Node:
    return self.tree.root_node

  @property
  def statements(self) -> List[Node]:
    """
    Top-level statements in source order (comments excluded).
    """
    return [node for node in self.root.named_children if node.type != COMMENT_TYPE]

  @property
  def newline(self) -> str:
    """Line terminator used by the source (CRLF or LF)."""
    return "\r\n" if "\r\n" in self.source else "\n"

  @property
  def edits(self) -> List[Edit]:
    return list(self._edits)

  def text_of(self, node: Node) -> str:
    return self._source_bytes[node.start_byte : node.end_byte].decode("utf-8")

  def line_of(self, node: Node) -> int:
    """0-based row of the node's first token."""
    return node.start_point[0]

  def end_line_of(self, node: Node) -> int:
    """0-based row of the node's last token."""
    return node.end_point[0]

  def line_indent(self, node: Node) -> str:
    """
    Returns the leading whitespace of the line the node starts on.

    Args:
        node: Any node of this program.

    Returns:
        str: Spaces/tabs preceding the first non-blank character of that line.
    """
    line_start = self._source_bytes.rfind(b"\n", 0, node.start_byte) + 1
    line = self._source_bytes[line_start : node.start_byte].decode("utf-8")
    return line[: len(line) - len(line.lstrip(" \t"))]

  def replace_node(self, node: Node, text: str) -> None:
    self.replace_range(node.start_byte, node.end_byte, text)

  def replace_range(self, start: int, end: int, text: str) -> None:
    """
    Queues a replacement of the byte range [start, end).

    Args:
        start: First byte offset replaced.
        end: Byte offset one past the last replaced byte.
        text: Replacement text.

    Raises:
        ValueError: If the range is invalid or overlaps a queued edit.
    """
    if start < 0 or end < start or end > len(self._source_bytes):
      raise ValueError(f"Invalid edit range [{start}, {end})")

    for edit in self._edits:
      if start < edit.end and edit.start < end:
        raise ValueError(f"Edit [{start}, {end}) overlaps queued edit [{edit.start}, {edit.end})")
      # Two insertions at the same offset have no defined order.
      if start == end == edit.start == edit.end:
        raise ValueError(f"Duplicate insertion at offset {start}")

    self._edits.append(Edit(start, end, text))

  def print(self) -> str:
    """
    Serialises the program with all queued edits applied.

    Returns:
        str: The source text.
    """
    if not self._edits:
      return self.source

    chunks: List[bytes] = []
    cursor = 0
    for edit in sorted(self._edits, key=lambda e: (e.start, e.end)):
      chunks.append(self._source_bytes[cursor : edit.start])
      chunks.append(edit.text.encode("utf-8"))
      cursor = edit.end
    chunks.append(self._source_bytes[cursor:])

    return b"".join(chunks).decode("utf-8")


def iter_nodes(node: Node) -> Iterator[Node]:
  """
  Pre-order traversal over `node` and all its descendants.
  """
  stack = [node]
  while stack:
    current = stack.pop()
    yield current
    stack.extend(reversed(current.children))


def _first_error(root: Node) -> Node:
  for node in iter_nodes(root):
    if node.type == "ERROR" or node.is_missing:
      return node
  return root


def parse_program(text: str) -> Program:
  """
  Parses JavaScript source into a Program.

  Args:
      text (str): Source text of one file.

  Returns:
      Program: The parsed program with an empty edit log.

  Raises:
      SyntaxError: If the source does not parse cleanly.
  """
  parser = Parser(JS_LANGUAGE)
  tree = parser.parse(text.encode("utf-8"))

  if tree.root_node.has_error:
    bad = _first_error(tree.root_node)
    row, column = bad.start_point[0], bad.start_point[1]
    raise SyntaxError(f"Invalid JavaScript at line {row + 1}, column {column + 1}")

  return Program(text, tree)
