"""
Generated file model — produced by the boilerplate generators.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GeneratedFile(BaseModel):
    """A file produced by the render phase.

    Attributes:
        path:    Absolute path the file will be written to.
        content: Full file content.
        reason:  Why this file was generated.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    reason: str = ""
