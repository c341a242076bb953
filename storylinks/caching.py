"""Memoization of candidate indexes and chapter scans.

Scanning is cheap but runs on every render; rebuilding the index is cheaper
still but runs just as often. Both are pure, so their results can be cached:

- **Indexes** are keyed on the set of (kind, id, name) triples of the raw
  candidates, so reordering a book's characters does not force a rebuild.
- **Scans** are keyed on the chapter text plus that same index key.

Both caches are LRU-bounded `OrderedDict`s.

Typical usage:
    ```python
    cache = MentionCache(config=MentionCacheConfig(max_scan_entries=128))

    doc = cache.resolve(chapter.text, candidates)   # builds index, scans
    doc = cache.resolve(chapter.text, candidates)   # both served from cache
    ```

Thread safety: not thread-safe. Use one cache per render loop or guard it
externally.
"""

from collections import OrderedDict
from collections.abc import Iterable, Sequence
from typing import Generic, Hashable, TypeVar

from pydantic import BaseModel, Field

from storylinks.config import MentionConfig
from storylinks.document import ResolvedDocument
from storylinks.entity import MentionCandidate
from storylinks.index import CandidateInput, IndexKey, as_candidate, build_index, index_key
from storylinks.scanner import MentionScanner

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MentionCacheConfig(BaseModel):
    """Configuration for mention caching.

    Attributes:
        max_index_entries: Maximum number of candidate indexes kept.
        max_scan_entries: Maximum number of resolved documents kept.
    """

    model_config = {"frozen": True}

    max_index_entries: int = Field(64, gt=0, description="Maximum memoized candidate indexes")
    max_scan_entries: int = Field(256, gt=0, description="Maximum memoized chapter scans")

    @classmethod
    def from_mention_config(cls, config: MentionConfig) -> "MentionCacheConfig":
        return cls(max_index_entries=config.max_index_entries, max_scan_entries=config.max_scan_entries)


class LRUCache(Generic[K, V]):
    """Small LRU map with hit/miss/eviction counters."""

    def __init__(self, max_size: int):
        self.max_size = max_size
        self._data: OrderedDict[K, V] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: K) -> V | None:
        if key in self._data:
            self.hits += 1
            self._data.move_to_end(key)
            return self._data[key]
        self.misses += 1
        return None

    def put(self, key: K, value: V) -> None:
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        while len(self._data) > self.max_size:
            self._data.popitem(last=False)
            self.evictions += 1

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class MentionCache:
    """LRU caches for candidate indexes and resolved chapter documents."""

    def __init__(self, config: MentionCacheConfig | None = None, mention_config: MentionConfig | None = None):
        """Initialize the cache.

        Args:
            config: Cache sizes. Defaults to the sizes in ``mention_config``.
            mention_config: Scanner settings used when a scan misses.
        """
        self.mention_config = mention_config or MentionConfig()
        self.config = config or MentionCacheConfig.from_mention_config(self.mention_config)
        self._indexes: LRUCache[IndexKey, tuple[MentionCandidate, ...]] = LRUCache(self.config.max_index_entries)
        self._scans: LRUCache[tuple[str, IndexKey], ResolvedDocument] = LRUCache(self.config.max_scan_entries)

    def _index_for(self, candidates: Sequence[MentionCandidate]) -> tuple[IndexKey, tuple[MentionCandidate, ...]]:
        key = index_key(candidates)
        index = self._indexes.get(key)
        if index is None:
            index = tuple(build_index(candidates))
            self._indexes.put(key, index)
        return key, index

    def get_index(self, candidates: Iterable[CandidateInput]) -> list[MentionCandidate]:
        """Return the ordered index for ``candidates``, building it on a miss."""
        _, index = self._index_for([as_candidate(c) for c in candidates])
        return list(index)

    def resolve(self, text: str, candidates: Iterable[CandidateInput]) -> ResolvedDocument:
        """Resolve mentions in ``text``, reusing a prior result for the same inputs."""
        key, index = self._index_for([as_candidate(c) for c in candidates])
        scan_key = (text, key)
        document = self._scans.get(scan_key)
        if document is None:
            document = MentionScanner(index, self.mention_config).resolve(text)
            self._scans.put(scan_key, document)
        return document

    def clear(self) -> None:
        """Drop all cached indexes and documents. Counters are kept."""
        self._indexes.clear()
        self._scans.clear()

    def get_stats(self) -> dict[str, int]:
        """Cache statistics for both layers."""
        return {
            "index_hits": self._indexes.hits,
            "index_misses": self._indexes.misses,
            "index_size": len(self._indexes),
            "index_evictions": self._indexes.evictions,
            "scan_hits": self._scans.hits,
            "scan_misses": self._scans.misses,
            "scan_size": len(self._scans),
            "scan_evictions": self._scans.evictions,
        }
