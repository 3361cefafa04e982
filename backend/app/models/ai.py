"""Typed results returned by the AI client.

Responses are validated into these models right after the remote call, so
callers never handle untyped JSON.
"""

from pydantic import BaseModel, Field


class AdditionalResource(BaseModel):
    """Further reading attached to an explanation."""

    title: str
    description: str


class Explanation(BaseModel):
    """Explanation of a text selection."""

    explanation: str = Field(..., min_length=1)
    key_points: list[str]
    additional_resources: list[AdditionalResource] | None = None


class Source(BaseModel):
    """A suggested related source."""

    title: str
    author: str | None = None
    year: int | str | None = None
    description: str | None = None


class SourceList(BaseModel):
    """Related sources for a text."""

    sources: list[Source] = Field(default_factory=list)


class Summary(BaseModel):
    """Summary of a text."""

    summary: str = Field(..., min_length=1)
