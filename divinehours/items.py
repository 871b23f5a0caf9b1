"""Pydantic value objects for an extracted prayer office."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from divinehours.settings import DEFAULT_TITLE


class Section(BaseModel):
    """A named part of an office: a psalm, a reading, a collect, ..."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    content: str = ""
    citation: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("citation", mode="before")
    @classmethod
    def empty_citation_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Document(BaseModel):
    """Canonical output of one extraction call.

    ``sections`` keeps the order in which the sections appear on the page.
    A document with no sections is a valid result, not a failure.
    """

    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_TITLE
    subtitle: str = ""
    sections: tuple[Section, ...] = ()

    @field_validator("title", "subtitle", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @property
    def is_empty(self) -> bool:
        return not self.sections
