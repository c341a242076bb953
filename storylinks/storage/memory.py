"""In-memory content source for testing and development.

Dictionary-backed implementation of `BookContentSourceInterface`, suitable
for unit tests, demos and prototyping a UI before a real datastore exists.

**Not recommended for production**: nothing is persisted and there is no
concurrency control.
"""

from storylinks.document import Book, Chapter
from storylinks.entity import BookNote, CharacterProfile
from storylinks.storage.interfaces import BookContentSourceInterface


def _chapter_sort_key(chapter: Chapter) -> tuple[int, int, object]:
    order = chapter.chapter_order
    return (0 if order is not None else 1, order if order is not None else 0, chapter.created_at)


class InMemoryBookContentSource(BookContentSourceInterface):
    """In-memory content source keyed by record id.

    If ``user_id`` is given, every read is restricted to records owned by
    that user, mirroring the row-level filtering a hosted datastore applies
    for the signed-in user.

    Example:
        ```python
        source = InMemoryBookContentSource(user_id="u1")
        await source.add_book(book)
        await source.add_character_profile(profile)
        profiles = await source.list_character_profiles(book.id)
        ```
    """

    def __init__(self, user_id: str | None = None) -> None:
        self.user_id = user_id
        self._books: dict[str, Book] = {}
        self._chapters: dict[str, Chapter] = {}
        self._profiles: dict[str, CharacterProfile] = {}
        self._notes: dict[str, BookNote] = {}

    def _visible(self, record: Book | Chapter | CharacterProfile | BookNote) -> bool:
        return self.user_id is None or record.user_id == self.user_id

    async def add_book(self, book: Book) -> str:
        """Store a book, overwriting any with the same id."""
        self._books[book.id] = book
        return book.id

    async def add_chapter(self, chapter: Chapter) -> str:
        self._chapters[chapter.id] = chapter
        return chapter.id

    async def add_character_profile(self, profile: CharacterProfile) -> str:
        self._profiles[profile.id] = profile
        return profile.id

    async def add_book_note(self, note: BookNote) -> str:
        self._notes[note.id] = note
        return note.id

    async def delete_character_profile(self, profile_id: str) -> bool:
        """Remove a profile. Returns True if it existed."""
        return self._profiles.pop(profile_id, None) is not None

    async def delete_book_note(self, note_id: str) -> bool:
        """Remove a note. Returns True if it existed."""
        return self._notes.pop(note_id, None) is not None

    async def get_book(self, book_id: str) -> Book | None:
        book = self._books.get(book_id)
        return book if book is not None and self._visible(book) else None

    async def get_chapter(self, chapter_id: str) -> Chapter | None:
        chapter = self._chapters.get(chapter_id)
        return chapter if chapter is not None and self._visible(chapter) else None

    async def list_chapters(self, book_id: str) -> list[Chapter]:
        chapters = [c for c in self._chapters.values() if c.book_id == book_id and self._visible(c)]
        return sorted(chapters, key=_chapter_sort_key)

    async def list_character_profiles(self, book_id: str) -> list[CharacterProfile]:
        profiles = [p for p in self._profiles.values() if p.book_id == book_id and self._visible(p)]
        return sorted(profiles, key=lambda p: p.created_at)

    async def list_book_notes(self, book_id: str) -> list[BookNote]:
        notes = [n for n in self._notes.values() if n.book_id == book_id and self._visible(n)]
        return sorted(notes, key=lambda n: n.created_at)
