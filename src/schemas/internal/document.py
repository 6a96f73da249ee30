"""Flattened document blocks produced from the editor tree."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class HeadingBlock(BaseModel):
    type: Literal["heading"] = "heading"
    level: int = 2
    text: str

    model_config = ConfigDict(frozen=True)


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    text: str = ""

    model_config = ConfigDict(frozen=True)


class ListItemBlock(BaseModel):
    type: Literal["listItem"] = "listItem"
    ordered: bool
    index: int = Field(ge=1)
    text: str

    model_config = ConfigDict(frozen=True)

    @property
    def marker(self) -> str:
        return f"{self.index}. " if self.ordered else "• "


Block = Annotated[
    Union[HeadingBlock, ParagraphBlock, ListItemBlock],
    Field(discriminator="type"),
]


__all__ = ["Block", "HeadingBlock", "ListItemBlock", "ParagraphBlock"]
