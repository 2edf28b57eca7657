"""
Data structure representing the outcome of a single import insertion.
"""

from typing import Optional

from pydantic import BaseModel, Field

from go_autoimports.enums import ImportShape


class InsertionResult(BaseModel):
  """
  Container for the result of rewriting one file.
  """

  code: str = Field(default="", description="The rewritten source text.")
  shape: Optional[ImportShape] = Field(
    default=None,
    description="Import shape that triggered the edit; None if nothing matched.",
  )
  line: Optional[int] = Field(default=None, description="1-based line number of the trigger line.")

  @property
  def changed(self) -> bool:
    """
    Check whether an edit was applied.

    Returns:
        True if one of the three import shapes was recognized.
    """
    return self.shape is not None
