"""Document representation: books, chapters and the annotated span tree."""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from storylinks.entity import MentionKind


class Book(BaseModel):
    """A user's book. Chapters, character profiles and notes hang off it."""

    model_config = {"frozen": True}

    id: str
    user_id: str
    title: str
    created_at: datetime


class Chapter(BaseModel):
    """A chapter of long-form markdown text.

    `content` is nullable in storage; renderers treat None as empty text.
    """

    model_config = {"frozen": True}

    id: str = Field(description="Unique identifier for this chapter.")
    book_id: str = Field(description="Book this chapter belongs to.")
    user_id: str = Field(description="Owner of the chapter.")
    title: str = Field(description="Chapter title.")
    content: str | None = Field(default=None, description="Raw markdown text of the chapter.")
    chapter_order: int | None = Field(default=None, description="Position within the book, if set.")
    created_at: datetime = Field(description="When the chapter was created.")
    updated_at: datetime | None = Field(default=None, description="Last content change.")

    @property
    def text(self) -> str:
        return self.content or ""


class PlainSpan(BaseModel):
    """A run of prose that did not match any candidate."""

    model_config = {"frozen": True}

    span_type: Literal["plain"] = "plain"
    text: str


class MentionSpan(BaseModel):
    """A run of text that resolved to a character or note.

    `text` is exactly the matched source text (equal to the candidate's
    display name); `title` is the tooltip shown by the UI.
    """

    model_config = {"frozen": True}

    span_type: Literal["mention"] = "mention"
    text: str
    target_kind: MentionKind
    target_id: str
    title: str


DocumentSpan = Annotated[Union[PlainSpan, MentionSpan], Field(discriminator="span_type")]


class ResolvedDocument(BaseModel):
    """Output of one resolution pass over a chapter's text.

    Concatenating the `text` of every span reproduces the input exactly.
    `has_mentions` is False when the scan found nothing, which lets callers
    skip splicing the result into a rendered tree.
    """

    model_config = {"frozen": True}

    spans: tuple[DocumentSpan, ...] = ()
    has_mentions: bool = False

    @property
    def mention_count(self) -> int:
        return sum(1 for span in self.spans if isinstance(span, MentionSpan))

    def mentions(self) -> list[MentionSpan]:
        return [span for span in self.spans if isinstance(span, MentionSpan)]

    def plain_text(self) -> str:
        return "".join(span.text for span in self.spans)
