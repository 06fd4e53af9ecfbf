"""
Orchestration Engine for steal() -> define() conversion.

The pipeline for one source text:

1.  **Parse** the JavaScript into a `Program` (tree-sitter).
2.  **Locate** the first top-level loader call. No call means the file is not a
    StealJS module and is returned unchanged.
3.  **Rewrite** the callee and dependency list (`DependencyRewriter`), each
    dependency translated through the `NameTranslator`.
4.  **Print** the program, replaying the queued edits over the original text.
5.  **Touch up** the ``/*global steal:false */`` lint directive.

Failures are reported on the returned `ConversionResult`; the input text is
never partially rewritten.
"""

from typing import Optional

from rich.markup import escape

from steal_to_amd.config import RuntimeConfig
from steal_to_amd.core.conversion_result import ConversionResult
from steal_to_amd.core.locator import find_loader_calls
from steal_to_amd.core.parsing import parse_program
from steal_to_amd.core.rewriter import DependencyRewriter, RewriteError
from steal_to_amd.core.touchup import rewrite_global_directive
from steal_to_amd.core.translator import NameTranslator
from steal_to_amd.utils.console import log_info, log_warning


class ConversionEngine:
  """
  Converts single source texts. Holds only read-only configuration, so one
  instance can be reused across files.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Args:
        config (RuntimeConfig, optional): Defaults to the bundled tables.
    """
    self.config = config or RuntimeConfig()
    self.translator = NameTranslator(self.config.mapping)
    self.rewriter = DependencyRewriter(
      self.translator,
      target_loader=self.config.target_loader,
      indent=self.config.indent,
      quote_style=self.config.quote_style,
    )

  def run(self, code: str, label: str = "<string>") -> ConversionResult:
    """
    Executes the full conversion pipeline.

    Args:
        code (str): The input source string.
        label (str): Name used in log messages (usually the file path).

    Returns:
        ConversionResult: Object containing the output code and status.
    """
    try:
      program = parse_program(code)
    except SyntaxError as e:
      return ConversionResult(code=code, errors=[f"Parse Error: {e}"], success=False)

    calls = find_loader_calls(program, self.config.source_loader)
    if not calls:
      log_info(f"No {self.config.source_loader} header found in [path]{escape(label)}[/path]")
      return ConversionResult(code=code)

    if len(calls) > 1:
      log_warning(
        f"{escape(label)}: only the first of {len(calls)} top-level {self.config.source_loader}() calls is converted"
      )

    try:
      dependencies = self.rewriter.rewrite(program, calls[0])
    except RewriteError as e:
      return ConversionResult(code=code, errors=[f"Rewrite Error: {e}"], success=False, header_found=True)

    final_code = rewrite_global_directive(program.print(), self.config.source_loader, self.config.target_loader)

    return ConversionResult(
      code=final_code,
      header_found=True,
      changed=final_code != code,
      dependencies=dependencies,
    )
