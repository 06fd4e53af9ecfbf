"""
Post-print touch-up for lint directives.

JSHint/JSLint headers such as ``/*global steal:false, can:true */`` declare
the loader as a known global. After the header is rewritten the directive must
name the new loader instead. Comment internals are not part of the syntax
tree, so this runs on the printed text.
"""

import re

COMMENT_CLOSE = "*/"
_GLOBAL_OPENER = re.compile(r"/\*\s*global\b")


def rewrite_global_directive(code: str, source_name: str = "steal", target_name: str = "define") -> str:
  """
  Renames the first ``<source>:false`` entry found in a ``/*global`` block.

  Args:
      code: Printed source text.
      source_name: Loader identifier to replace.
      target_name: Loader identifier to write.

  Returns:
      str: The text with at most one directive entry renamed.
  """
  pattern = re.compile(rf"\b{re.escape(source_name)}:( ?false)")
  chunks = code.split(COMMENT_CLOSE)

  for index, chunk in enumerate(chunks):
    opener = _GLOBAL_OPENER.search(chunk)
    if not opener:
      continue
    head, directive = chunk[: opener.start()], chunk[opener.start() :]
    rewritten, count = pattern.subn(lambda m: f"{target_name}:{m.group(1)}", directive, count=1)
    if count:
      chunks[index] = head + rewritten
      break

  return COMMENT_CLOSE.join(chunks)
