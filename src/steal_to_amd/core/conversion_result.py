"""
Data structures representing the output of the conversion pipeline.

`ConversionResult` carries the rewritten source together with what happened
to it, so callers (CLI, batch driver) can report without re-parsing.
"""

from typing import List

from pydantic import BaseModel, Field


class DependencyRewrite(BaseModel):
  """
  One dependency id before and after translation.
  """

  original: str = Field(..., description="Dependency id as written in the steal() header.")
  translated: str = Field(..., description="Dependency id written into the define() array.")
  line: int = Field(..., description="1-based source line of the dependency.")


class ConversionResult(BaseModel):
  """
  Container for the results of converting one file.
  """

  code: str = Field(default="", description="The output source (the input when nothing changed).")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="False if parsing or rewriting failed; `code` is then the untouched input.",
  )
  header_found: bool = Field(default=False, description="True if a top-level loader call was located.")
  changed: bool = Field(default=False, description="True if `code` differs from the input.")
  dependencies: List[DependencyRewrite] = Field(default_factory=list, description="Translated dependencies.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
