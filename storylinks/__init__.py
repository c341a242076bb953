"""
Story Links - Mention Resolution for Long-Form Writing.

Finds character names and note titles inside chapter markdown and splits the
text into plain and mention spans that a renderer can turn into clickable
cross-references.

    from storylinks import MentionCandidate, MentionKind, build_index, resolve_mentions

    index = build_index([MentionCandidate(id="c1", display_name="Elara", kind=MentionKind.CHARACTER)])
    spans = resolve_mentions("Elara woke early.", index)
"""

from storylinks.caching import MentionCache, MentionCacheConfig
from storylinks.config import MentionConfig, load_config
from storylinks.document import (
    Book,
    Chapter,
    DocumentSpan,
    MentionSpan,
    PlainSpan,
    ResolvedDocument,
)
from storylinks.entity import BookNote, CharacterProfile, MentionCandidate, MentionKind
from storylinks.index import build_index, candidates_for_book, index_key
from storylinks.pipeline import ChapterRendering, ContentNotFoundError, MentionPipeline
from storylinks.render import (
    MentionActivation,
    MentionDispatcher,
    parse_mention_url,
    to_link_nodes,
    to_markdown,
)
from storylinks.scanner import (
    MentionScanner,
    has_mentions,
    is_word_char,
    mention_title,
    resolve_document,
    resolve_mentions,
)

__all__ = [
    "Book",
    "BookNote",
    "Chapter",
    "ChapterRendering",
    "CharacterProfile",
    "ContentNotFoundError",
    "DocumentSpan",
    "MentionActivation",
    "MentionCache",
    "MentionCacheConfig",
    "MentionCandidate",
    "MentionConfig",
    "MentionDispatcher",
    "MentionKind",
    "MentionPipeline",
    "MentionScanner",
    "MentionSpan",
    "PlainSpan",
    "ResolvedDocument",
    "build_index",
    "candidates_for_book",
    "has_mentions",
    "index_key",
    "is_word_char",
    "load_config",
    "mention_title",
    "parse_mention_url",
    "resolve_document",
    "resolve_mentions",
    "to_link_nodes",
    "to_markdown",
]

__version__ = "0.1.0"
