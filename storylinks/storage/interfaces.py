"""Content source interface: where books, chapters, profiles and notes come from."""

from abc import ABC, abstractmethod

from storylinks.document import Book, Chapter
from storylinks.entity import BookNote, CharacterProfile


class BookContentSourceInterface(ABC):
    """Read-only access to a user's book content.

    The mention resolver never stores anything; it only needs to read the
    current book's candidates and a chapter's text. A hosted datastore, a
    local cache or the in-memory implementation can all sit behind this.
    """

    @abstractmethod
    async def get_book(self, book_id: str) -> Book | None:
        """Retrieve a book by ID, or None if not found."""

    @abstractmethod
    async def get_chapter(self, chapter_id: str) -> Chapter | None:
        """Retrieve a chapter by ID, or None if not found."""

    @abstractmethod
    async def list_chapters(self, book_id: str) -> list[Chapter]:
        """Chapters of a book ordered by chapter_order, then created_at.

        Chapters without an order sort after ordered ones.
        """

    @abstractmethod
    async def list_character_profiles(self, book_id: str) -> list[CharacterProfile]:
        """Character profiles of a book in creation order."""

    @abstractmethod
    async def list_book_notes(self, book_id: str) -> list[BookNote]:
        """Notes of a book in creation order."""
