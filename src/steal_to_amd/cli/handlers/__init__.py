from .convert import handle_convert, _print_batch_summary
from .translate import handle_translate
from .audit import handle_audit

__all__ = [
  "_print_batch_summary",
  "handle_audit",
  "handle_convert",
  "handle_translate",
]
