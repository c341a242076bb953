"""Mention index builder.

Turns a book's character names and note titles into the ordered candidate
list the scanner walks. Ordering is longest display name first, so that
"Elara Vance" is tried before "Elara" at every position and the scanner
never needs to backtrack.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol, Union, runtime_checkable

from storylinks.entity import BookNote, CharacterProfile, MentionCandidate, MentionKind

logger = logging.getLogger(__name__)


@runtime_checkable
class SupportsCandidate(Protocol):
    """Anything that can describe itself as a mention candidate."""

    def to_candidate(self) -> MentionCandidate: ...


CandidateInput = Union[MentionCandidate, SupportsCandidate, Mapping[str, Any]]

IndexKey = frozenset[tuple[str, str, str]]


def as_candidate(item: CandidateInput) -> MentionCandidate:
    """Normalize one raw input into a MentionCandidate.

    Accepts a MentionCandidate, an object with ``to_candidate()``, or a
    mapping with ``id``, ``kind`` and ``name`` (``display_name`` is accepted
    as an alias for ``name``).

    Raises:
        ValueError: If a mapping names a kind other than character or note.
        TypeError: If the item is none of the supported shapes.
    """
    if isinstance(item, MentionCandidate):
        return item
    if isinstance(item, SupportsCandidate):
        return item.to_candidate()
    if isinstance(item, Mapping):
        name = item.get("name", item.get("display_name", ""))
        return MentionCandidate(
            id=str(item["id"]),
            display_name=name if name is not None else "",
            kind=MentionKind(item["kind"]),
        )
    raise TypeError(f"cannot build a mention candidate from {type(item).__name__}")


def build_index(candidates: Iterable[CandidateInput]) -> list[MentionCandidate]:
    """Build the priority-ordered candidate list for one book.

    Candidates whose name is empty or whitespace-only are dropped. The rest
    are sorted by name length, longest first; equal lengths keep their input
    order (``sorted`` is stable).

    Args:
        candidates: Raw candidates in registration order.

    Returns:
        A new list; the input is not modified.
    """
    kept: list[MentionCandidate] = []
    for item in candidates:
        candidate = as_candidate(item)
        if candidate.is_blank:
            logger.debug("Dropping %s candidate %s with blank name", candidate.kind.value, candidate.id)
            continue
        kept.append(candidate)
    return sorted(kept, key=lambda c: len(c.display_name), reverse=True)


def candidates_for_book(
    characters: Sequence[CharacterProfile],
    notes: Sequence[BookNote],
) -> list[MentionCandidate]:
    """Raw candidates for a book: character profiles first, then notes."""
    return [c.to_candidate() for c in characters] + [n.to_candidate() for n in notes]


def index_key(candidates: Iterable[CandidateInput]) -> IndexKey:
    """Cache key for a candidate set: the set of (kind, id, name) triples.

    Independent of input order, so reordering a book's characters does not
    invalidate a memoized index.
    """
    return frozenset(
        (c.kind.value, c.id, c.display_name) for c in (as_candidate(item) for item in candidates)
    )
