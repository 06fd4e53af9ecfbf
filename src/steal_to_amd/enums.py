"""
Enumerations for steal-to-amd.

This module defines the small closed vocabularies used to render the
rewritten module header.
"""

from enum import Enum


class DependencyLayout(str, Enum):
  """
  Textual shape of the dependency array written into the `define()` call.
  """

  INLINE = "inline"  # ['a', 'b']
  MULTILINE = "multiline"  # one dependency per line


class QuoteStyle(str, Enum):
  """
  Quote character used when re-emitting dependency string literals.
  """

  SINGLE = "single"
  DOUBLE = "double"

  @property
  def char(self) -> str:
    """
    Returns:
        str: The literal quote character.
    """
    return "'" if self is QuoteStyle.SINGLE else '"'
