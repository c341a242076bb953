"""Test fixtures and factories for the mention resolver.

This module provides:
- Factory functions for candidates, character profiles, notes and chapters
- A recording callback for mention activation tests
- Pytest fixtures for a populated in-memory content source, a cache and a
  pipeline wired to both

The fixture book ("The Ember Road") has three characters (Elara, Elara
Vance, Thorin) and one note (The Old Map), plus two chapters.
"""

from datetime import datetime, timedelta, timezone

import pytest

from storylinks.caching import MentionCache
from storylinks.document import Book, Chapter
from storylinks.entity import BookNote, CharacterProfile, MentionCandidate, MentionKind
from storylinks.pipeline import MentionPipeline
from storylinks.storage.memory import InMemoryBookContentSource

USER_ID = "user-1"
BOOK_ID = "book-1"
BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def character(name: str, candidate_id: str | None = None) -> MentionCandidate:
    """Character candidate with an id derived from the name by default."""
    return MentionCandidate(
        id=candidate_id or f"char-{name.lower().replace(' ', '-')}",
        display_name=name,
        kind=MentionKind.CHARACTER,
    )


def note(title: str, candidate_id: str | None = None) -> MentionCandidate:
    """Note candidate with an id derived from the title by default."""
    return MentionCandidate(
        id=candidate_id or f"note-{title.lower().replace(' ', '-')}",
        display_name=title,
        kind=MentionKind.NOTE,
    )


def make_profile(name: str, profile_id: str, minutes: int = 0, book_id: str = BOOK_ID, user_id: str = USER_ID) -> CharacterProfile:
    return CharacterProfile(
        id=profile_id,
        book_id=book_id,
        user_id=user_id,
        name=name,
        role="protagonist",
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_note(title: str, note_id: str, minutes: int = 0, book_id: str = BOOK_ID, user_id: str = USER_ID) -> BookNote:
    return BookNote(
        id=note_id,
        book_id=book_id,
        user_id=user_id,
        title=title,
        content="Drawn on the back of a tavern bill.",
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_chapter(
    chapter_id: str,
    content: str | None,
    order: int | None = None,
    minutes: int = 0,
    book_id: str = BOOK_ID,
    user_id: str = USER_ID,
) -> Chapter:
    return Chapter(
        id=chapter_id,
        book_id=book_id,
        user_id=user_id,
        title=f"Chapter {chapter_id}",
        content=content,
        chapter_order=order,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


class RecordingCallback:
    """Collects every (kind, id, display_name) it is called with."""

    def __init__(self) -> None:
        self.calls: list[tuple[MentionKind, str, str]] = []

    def __call__(self, kind: MentionKind, target_id: str, display_name: str) -> None:
        self.calls.append((kind, target_id, display_name))


@pytest.fixture
def book() -> Book:
    return Book(id=BOOK_ID, user_id=USER_ID, title="The Ember Road", created_at=BASE_TIME)


@pytest.fixture
async def content_source(book: Book) -> InMemoryBookContentSource:
    """In-memory source holding the fixture book, its entities and chapters."""
    source = InMemoryBookContentSource(user_id=USER_ID)
    await source.add_book(book)
    await source.add_character_profile(make_profile("Elara", "c-elara", minutes=0))
    await source.add_character_profile(make_profile("Elara Vance", "c-vance", minutes=1))
    await source.add_character_profile(make_profile("Thorin", "c-thorin", minutes=2))
    await source.add_book_note(make_note("The Old Map", "n-map", minutes=3))
    await source.add_chapter(make_chapter("ch-2", "Thorin unrolled The Old Map.", order=2))
    await source.add_chapter(make_chapter("ch-1", "Elara Vance met Thorin at dawn.", order=1))
    return source


@pytest.fixture
def mention_cache() -> MentionCache:
    return MentionCache()


@pytest.fixture
def pipeline(content_source: InMemoryBookContentSource, mention_cache: MentionCache) -> MentionPipeline:
    return MentionPipeline(source=content_source, cache=mention_cache)
