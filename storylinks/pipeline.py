"""Chapter rendering pipeline.

`MentionPipeline` ties the pieces together for a UI that renders one
chapter at a time:

    1. Fetch the chapter from the content source
    2. Fetch the owning book's character profiles and notes
    3. Build (or reuse) the candidate index for that set
    4. Resolve mentions in the chapter text (or reuse a prior scan)

Example usage:
    ```python
    pipeline = MentionPipeline(source=InMemoryBookContentSource(user_id=user.id))
    rendering = await pipeline.render_chapter(chapter_id)
    if rendering.document.has_mentions:
        html_nodes = rendering.to_link_nodes()
    ```
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from storylinks.caching import MentionCache
from storylinks.config import DEFAULT_LINK_SCHEME, MentionConfig
from storylinks.document import Chapter, ResolvedDocument
from storylinks.entity import MentionCandidate
from storylinks.index import candidates_for_book
from storylinks.logging import setup_logging
from storylinks.render import to_link_nodes, to_markdown
from storylinks.storage.interfaces import BookContentSourceInterface


class ContentNotFoundError(LookupError):
    """Raised when a requested book or chapter is not visible in the source."""


class ChapterRendering(BaseModel):
    """A chapter and its resolved mention spans."""

    model_config = ConfigDict(frozen=True)

    chapter_id: str
    book_id: str
    title: str
    document: ResolvedDocument
    link_scheme: str = DEFAULT_LINK_SCHEME

    def to_markdown(self) -> str:
        """Chapter markdown with mentions rewritten as links."""
        return to_markdown(self.document.spans, scheme=self.link_scheme)

    def to_link_nodes(self) -> list[dict[str, Any]]:
        return to_link_nodes(self.document.spans, scheme=self.link_scheme)


class MentionPipeline:
    """Fetches a book's candidates and resolves mentions in its chapters."""

    def __init__(
        self,
        source: BookContentSourceInterface,
        cache: MentionCache | None = None,
        config: MentionConfig | None = None,
    ):
        """Wire a content source to a cache.

        Raises:
            ValueError: If both ``cache`` and ``config`` are given and the
                cache was built with different scanner settings.
        """
        if cache is not None and config is not None and cache.mention_config != config:
            raise ValueError("cache was built with a different MentionConfig than the one given")
        self.source = source
        self.config = config or (cache.mention_config if cache is not None else MentionConfig())
        self.cache = cache or MentionCache(mention_config=self.config)
        self.logger = setup_logging(name="storylinks.pipeline")

    async def _candidates(self, book_id: str) -> list[MentionCandidate]:
        characters = await self.source.list_character_profiles(book_id)
        notes = await self.source.list_book_notes(book_id)
        return candidates_for_book(characters, notes)

    async def build_book_index(self, book_id: str) -> list[MentionCandidate]:
        """Return the ordered candidate index for a book.

        Raises:
            ContentNotFoundError: If the book does not exist for this source.
        """
        if await self.source.get_book(book_id) is None:
            raise ContentNotFoundError(f"book {book_id!r} not found")
        return self.cache.get_index(await self._candidates(book_id))

    async def render(self, chapter: Chapter) -> ChapterRendering:
        """Resolve mentions in an already-fetched chapter."""
        candidates = await self._candidates(chapter.book_id)
        document = self.cache.resolve(chapter.text, candidates)
        self.logger.debug(
            f"Chapter {chapter.id}: {document.mention_count} mention(s) from {len(candidates)} candidate(s)",
            pprint=False,
        )
        rendering = ChapterRendering(
            chapter_id=chapter.id,
            book_id=chapter.book_id,
            title=chapter.title,
            document=document,
            link_scheme=self.config.link_scheme,
        )
        self.logger.debug(rendering)
        return rendering

    async def render_chapter(self, chapter_id: str) -> ChapterRendering:
        """Fetch a chapter by id and resolve its mentions.

        Raises:
            ContentNotFoundError: If the chapter does not exist for this source.
        """
        chapter = await self.source.get_chapter(chapter_id)
        if chapter is None:
            raise ContentNotFoundError(f"chapter {chapter_id!r} not found")
        return await self.render(chapter)

    async def render_book(self, book_id: str) -> list[ChapterRendering]:
        """Resolve mentions in every chapter of a book, in chapter order."""
        if await self.source.get_book(book_id) is None:
            raise ContentNotFoundError(f"book {book_id!r} not found")
        renderings = []
        for chapter in await self.source.list_chapters(book_id):
            renderings.append(await self.render(chapter))
        return renderings
