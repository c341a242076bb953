"""Entity system for mention resolution.

This module defines the things a chapter can mention:

- **MentionKind**: Enum distinguishing character profiles from book notes
- **MentionCandidate**: A name the scanner searches for, tagged with the
  kind and id of the entity it links to
- **CharacterProfile** / **BookNote**: The stored rows a book's candidates
  are derived from

**Candidate Lifecycle:**

1. **Collection**: The caller (or a content source) fetches the current
   book's character profiles and notes.

2. **Conversion**: Each profile or note becomes a raw candidate via
   `to_candidate()`; the profile's name or the note's title is the text
   to search for.

3. **Indexing**: `storylinks.index.build_index` drops blank names and
   orders the rest longest-first.

4. **Scanning**: `storylinks.scanner` walks chapter text against the index.

Candidates are immutable (frozen Pydantic models) and rebuilt whenever the
book's character or note collections change.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class MentionKind(str, Enum):
    """Kind of entity a mention links to."""

    CHARACTER = "character"
    """A character profile (matched on the profile's name)."""

    NOTE = "note"
    """A free-form book note (matched on the note's title)."""


class MentionCandidate(BaseModel):
    """A named entity eligible to be mentioned in chapter text.

    `display_name` is matched literally and case-sensitively. Names that are
    empty after trimming are accepted here but never survive indexing, so
    raw candidates can be built straight from user data.

    Two candidates may share a display name; index order decides which one
    a match resolves to.
    """

    model_config = {"frozen": True}

    id: str = Field(description="Opaque identifier of the referenced character or note.")
    display_name: str = Field(description="Exact text to search for in chapter content.")
    kind: MentionKind = Field(description="Whether the candidate is a character or a note.")

    @property
    def is_blank(self) -> bool:
        """True when the name has no visible characters."""
        return not self.display_name.strip()


class BookRecord(BaseModel):
    """Common fields of rows owned by a book and a user."""

    model_config = {"frozen": True}

    id: str
    book_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime | None = None


class CharacterProfile(BookRecord):
    """A character in a book. Its name is what chapters mention."""

    name: str
    description: str | None = None
    role: str | None = None
    image_url: str | None = None

    def to_candidate(self) -> MentionCandidate:
        return MentionCandidate(id=self.id, display_name=self.name, kind=MentionKind.CHARACTER)


class BookNote(BookRecord):
    """A free-form note attached to a book. Its title is what chapters mention."""

    title: str
    content: str | None = None

    def to_candidate(self) -> MentionCandidate:
        return MentionCandidate(id=self.id, display_name=self.title, kind=MentionKind.NOTE)
