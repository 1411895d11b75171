# src/editorprefs/templates/models.py — v1
"""Content-assist template models: Template, TemplatePosition, TemplateProposal."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class TemplatePosition(BaseModel):
    """Editable region inside an inserted template, relative to its start."""

    model_config = ConfigDict(frozen=True)

    offset: int
    length: int


# A position list may group linked regions one level deep.
PositionList = list[Union[TemplatePosition, list[TemplatePosition]]]


class Template(BaseModel):
    """One template definition as served by the template source."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    trigger: str
    proposal: str
    description: str = ""
    escape_position: int | None = Field(default=None, alias="escapePosition")
    positions: PositionList | None = None


class TemplateProposal(BaseModel):
    """Completion proposal produced for an invocation offset."""

    proposal: str
    description: str
    escape_position: int | None = None
    positions: PositionList | None = None
    relevance: int = 2000
    replace: bool = True


TemplateCatalog = dict[str, list[Template]]
