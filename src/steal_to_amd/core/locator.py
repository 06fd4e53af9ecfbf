"""
Header Locator.

Finds the module header: a top-level expression statement that calls the
source loader identifier directly, e.g. ``steal('jquery', function($) {...});``.
Calls nested inside other expressions or blocks are not headers.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from tree_sitter import Node

from steal_to_amd.core.parsing import COMMENT_TYPE, Program


@dataclass
class LoaderCall:
  """
  A located loader invocation.

  Attributes:
      statement: The enclosing top-level expression statement.
      call: The `call_expression` node.
      callee: The identifier being called (renamed by the rewriter).
      arguments: The parenthesised `arguments` node.
      args: Argument expressions in source order.
      comments: Comment nodes sitting directly inside the argument list.
  """

  statement: Node
  call: Node
  callee: Node
  arguments: Node
  args: List[Node] = field(default_factory=list)
  comments: List[Node] = field(default_factory=list)

  @property
  def open_paren(self) -> Node:
    return self.arguments.children[0]


def _as_loader_call(program: Program, statement: Node, loader_name: str) -> Optional[LoaderCall]:
  if statement.type != "expression_statement":
    return None

  expressions = [n for n in statement.named_children if n.type != COMMENT_TYPE]
  if not expressions or expressions[0].type != "call_expression":
    return None

  call = expressions[0]
  callee = call.child_by_field_name("function")
  arguments = call.child_by_field_name("arguments")

  if callee is None or callee.type != "identifier" or program.text_of(callee) != loader_name:
    return None
  if arguments is None or arguments.type != "arguments":
    return None

  args = [n for n in arguments.named_children if n.type != COMMENT_TYPE]
  comments = [n for n in arguments.named_children if n.type == COMMENT_TYPE]
  return LoaderCall(statement=statement, call=call, callee=callee, arguments=arguments, args=args, comments=comments)


def find_loader_calls(program: Program, loader_name: str = "steal") -> List[LoaderCall]:
  """
  Returns every top-level loader call, in source order.

  Args:
      program: The parsed file.
      loader_name: Identifier of the source convention's loader.

  Returns:
      List[LoaderCall]: Possibly empty.
  """
  calls = []
  for statement in program.statements:
    loader_call = _as_loader_call(program, statement, loader_name)
    if loader_call is not None:
      calls.append(loader_call)
  return calls


def find_loader_call(program: Program, loader_name: str = "steal") -> Optional[LoaderCall]:
  """
  Returns the authoritative (first) top-level loader call, or None.
  """
  calls = find_loader_calls(program, loader_name)
  return calls[0] if calls else None
