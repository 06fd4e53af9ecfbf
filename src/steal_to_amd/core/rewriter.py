"""
Dependency Rewriter.

Turns a located ``steal(...)`` header into an AMD ``define(...)`` header:

    steal('can/control', './helper', function(Control, helper) { ... });

becomes

    define(['can/control', './helper'], function(Control, helper) { ... });

The dependency array keeps the original layout: arguments written on one line
stay on one line, arguments spread over several lines are emitted one per
line. Only the callee and the dependency run are edited; the factory function
and everything after it are left byte-for-byte intact.
"""

import re
from typing import Callable, List, Optional, Tuple

from tree_sitter import Node

from steal_to_amd.core.conversion_result import DependencyRewrite
from steal_to_amd.core.locator import LoaderCall
from steal_to_amd.core.parsing import Program
from steal_to_amd.enums import DependencyLayout, QuoteStyle

FUNCTION_TYPES = frozenset({"function_expression", "function", "generator_function"})
STRING_TYPE = "string"

_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = {"\n", "\r\n", "\r", "\u2028", "\u2029"}
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_LONE_SURROGATE_RE = re.compile(r"[\ud800-\udfff]")


class RewriteError(ValueError):
  """
  Raised when the header cannot be rewritten (e.g. a non-literal dependency).

  Attributes:
      line: 1-based line of the offending node.
      column: 1-based column of the offending node.
  """

  def __init__(self, message: str, line: int, column: int):
    super().__init__(f"{message} (line {line}, column {column})")
    self.line = line
    self.column = column


def _unescape(match: "re.Match[str]") -> str:
  esc = match.group(1)
  if esc.startswith("u{"):
    return chr(int(esc[2:-1], 16))
  if len(esc) == 5 and esc[0] == "u":
    return chr(int(esc[1:], 16))
  if len(esc) == 3 and esc[0] == "x":
    return chr(int(esc[1:], 16))
  if esc in _LINE_CONTINUATIONS:
    return ""
  return _SIMPLE_ESCAPES.get(esc, esc)


def decode_string_literal(raw: str) -> str:
  """
  Returns the value of a quoted JavaScript string literal.

  Args:
      raw: The literal as written, quotes included.

  Returns:
      str: The decoded value.
  """
  value = _ESCAPE_RE.sub(_unescape, raw[1:-1])
  # Escaped surrogate pairs ('\ud83d\ude00') decode to one code point.
  return value.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def encode_string_literal(value: str, quote_style: QuoteStyle = QuoteStyle.SINGLE) -> str:
  """
  Renders `value` as a JavaScript string literal.

  Args:
      value: The string value.
      quote_style: Which quote character to wrap it in.

  Returns:
      str: The literal text, quotes included.
  """
  quote = quote_style.char
  body = value.replace("\\", "\\\\").replace(quote, "\\" + quote)
  body = body.replace("\n", "\\n").replace("\r", "\\r")
  body = body.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
  body = _LONE_SURROGATE_RE.sub(lambda m: f"\\u{ord(m.group(0)):04x}", body)
  return f"{quote}{body}{quote}"


class DependencyRewriter:
  """
  Rewrites the argument list of a loader call in place.

  Attributes:
      translator: Maps a source dependency id to its target id.
      target_loader: Identifier written over the callee.
      indent: Indentation unit for multiline arrays.
      quote_style: Quote style of the emitted dependency literals.
  """

  def __init__(
    self,
    translator: Callable[[str], str],
    target_loader: str = "define",
    indent: str = "    ",
    quote_style: QuoteStyle = QuoteStyle.SINGLE,
  ):
    self.translator = translator
    self.target_loader = target_loader
    self.indent = indent
    self.quote_style = quote_style

  def split_arguments(self, call: LoaderCall) -> Tuple[List[Node], Optional[Node]]:
    """
    Separates dependency arguments from the trailing factory function.

    Returns:
        Tuple[List[Node], Optional[Node]]: (dependencies, factory or None)
    """
    args = list(call.args)
    if args and args[-1].type in FUNCTION_TYPES:
      return args[:-1], args[-1]
    return args, None

  def detect_layout(self, program: Program, deps: List[Node]) -> DependencyLayout:
    """
    Inline when the first and last dependency start on the same line.
    """
    if deps and program.line_of(deps[0]) == program.line_of(deps[-1]):
      return DependencyLayout.INLINE
    return DependencyLayout.MULTILINE

  def rewrite(self, program: Program, call: LoaderCall) -> List[DependencyRewrite]:
    """
    Queues the edits turning `call` into an AMD header.

    Every dependency is validated before the first edit is queued, so a
    failure leaves `program` untouched.

    Args:
        program: The program owning `call`.
        call: The located loader call.

    Returns:
        List[DependencyRewrite]: One record per dependency, in source order.

    Raises:
        RewriteError: If a dependency is not a string literal.
    """
    deps, factory = self.split_arguments(call)

    originals = [self._string_value(program, dep) for dep in deps]
    translated = [self.translator(value) for value in originals]
    items = [encode_string_literal(value, self.quote_style) for value in translated]

    region_start = call.open_paren.end_byte
    if factory is not None:
      region_end = factory.start_byte
    elif deps:
      region_end = deps[-1].end_byte
    else:
      region_end = call.arguments.children[-1].start_byte

    comments = [c for c in call.comments if c.start_byte >= region_start and c.end_byte <= region_end]
    leading, trailing, tail = self._attach_comments(program, deps, comments)

    layout = self.detect_layout(program, deps)
    if any(program.text_of(c).startswith("//") for c in comments):
      layout = DependencyLayout.MULTILINE

    array = self.render_array(
      items, layout, program.line_indent(call.statement), leading, trailing, tail, newline=program.newline
    )
    if factory is not None:
      array += ", "

    program.replace_node(call.callee, self.target_loader)
    program.replace_range(region_start, region_end, array)

    return [
      DependencyRewrite(original=orig, translated=new, line=program.line_of(dep) + 1)
      for dep, orig, new in zip(deps, originals, translated)
    ]

  def render_array(
    self,
    items: List[str],
    layout: DependencyLayout,
    base_indent: str = "",
    leading: Optional[List[List[str]]] = None,
    trailing: Optional[List[List[str]]] = None,
    tail: Optional[List[str]] = None,
    newline: str = "\n",
  ) -> str:
    """
    Renders the dependency array literal.

    Args:
        items: Already-quoted dependency literals.
        layout: Inline or one-per-line.
        base_indent: Indentation of the header statement.
        leading: Per item, comments emitted before it.
        trailing: Per item, comments emitted after it on the same line.
        tail: Comments emitted after the last item.
        newline: Line terminator for the multiline layout.

    Returns:
        str: The array literal text.
    """
    leading = leading or [[] for _ in items]
    trailing = trailing or [[] for _ in items]
    tail = tail or []

    if not items and not tail:
      return "[]"

    last = len(items) - 1

    if layout is DependencyLayout.INLINE:
      tokens: List[str] = []
      for i, item in enumerate(items):
        tokens.extend(leading[i])
        tokens.append(item if i == last else item + ",")
        tokens.extend(trailing[i])
      tokens.extend(tail)
      return "[" + " ".join(tokens) + "]"

    pad = base_indent + self.indent
    lines = ["["]
    for i, item in enumerate(items):
      lines.extend(pad + comment for comment in leading[i])
      line = pad + (item if i == last else item + ",")
      if trailing[i]:
        line += " " + " ".join(trailing[i])
      lines.append(line)
    lines.extend(pad + comment for comment in tail)
    lines.append(base_indent + "]")
    return newline.join(lines)

  def _attach_comments(
    self, program: Program, deps: List[Node], comments: List[Node]
  ) -> Tuple[List[List[str]], List[List[str]], List[str]]:
    """
    Assigns each comment to the dependency it belongs with.

    A comment on the same line as the end of the preceding dependency trails
    it; otherwise it leads the next dependency, or falls into the tail.
    """
    leading: List[List[str]] = [[] for _ in deps]
    trailing: List[List[str]] = [[] for _ in deps]
    tail: List[str] = []

    for comment in comments:
      text = program.text_of(comment)
      prev_idx = max((i for i, d in enumerate(deps) if d.end_byte <= comment.start_byte), default=None)
      next_idx = min((i for i, d in enumerate(deps) if d.start_byte >= comment.end_byte), default=None)

      if prev_idx is not None and program.line_of(comment) == program.end_line_of(deps[prev_idx]):
        trailing[prev_idx].append(text)
      elif next_idx is not None:
        leading[next_idx].append(text)
      else:
        tail.append(text)

    return leading, trailing, tail

  def _string_value(self, program: Program, node: Node) -> str:
    if node.type != STRING_TYPE:
      snippet = program.text_of(node).splitlines()[0][:60] if program.text_of(node) else node.type
      raise RewriteError(
        f"Dependency is not a string literal: {snippet}",
        line=node.start_point[0] + 1,
        column=node.start_point[1] + 1,
      )
    return decode_string_literal(program.text_of(node))
