"""Mention scanner: split chapter text into plain and mention spans.

The scan is a single left-to-right pass. At each position every candidate is
tried in index order (longest name first) and the first one that matches
literally *and* sits on word boundaries wins. A shorter candidate is still
tried when a longer one fails its boundary check: with candidates
"Ann Lee" and "Ann", the text "Ann Leeward" resolves to "Ann".

Word characters are letters, digits and underscore (Python's ``\\w``,
Unicode-aware unless configured otherwise). A boundary check is skipped when
the candidate itself starts (or ends) with a non-word character, so names
like "(Untitled)" or "#plot" still match mid-text.

The scan never raises for string input: every position either starts a
mention or is copied into the plain-text buffer.

Example:
    ```python
    index = build_index([
        MentionCandidate(id="c1", display_name="Elara", kind=MentionKind.CHARACTER),
        MentionCandidate(id="c2", display_name="Thorin", kind=MentionKind.CHARACTER),
    ])
    spans = resolve_mentions("Elara met Thorin at dawn.", index)
    # [Plain(""), Mention(Elara), Plain(" met "), Mention(Thorin), Plain(" at dawn.")]
    ```
"""

import re
from collections.abc import Iterable, Sequence

from storylinks.config import DEFAULT_CHARACTER_TITLE, DEFAULT_NOTE_TITLE, MentionConfig
from storylinks.document import DocumentSpan, MentionSpan, PlainSpan, ResolvedDocument
from storylinks.entity import MentionCandidate, MentionKind

_UNICODE_WORD = re.compile(r"\w")
_ASCII_WORD = re.compile(r"\w", re.ASCII)


def is_word_char(ch: str, ascii_only: bool = False) -> bool:
    """True if ``ch`` is a single letter, digit or underscore."""
    if len(ch) != 1:
        return False
    pattern = _ASCII_WORD if ascii_only else _UNICODE_WORD
    return pattern.match(ch) is not None


def mention_title(
    kind: MentionKind,
    name: str,
    character_template: str = DEFAULT_CHARACTER_TITLE,
    note_template: str = DEFAULT_NOTE_TITLE,
) -> str:
    """Tooltip for a mention, e.g. ``"View character: Elara Vance"``."""
    template = character_template if kind is MentionKind.CHARACTER else note_template
    return template.replace("{name}", name)


def has_mentions(text: str, spans: Sequence[DocumentSpan]) -> bool:
    """False when the scan of ``text`` produced nothing but the text itself."""
    if len(spans) == 1 and isinstance(spans[0], PlainSpan) and spans[0].text == text:
        return False
    return any(isinstance(span, MentionSpan) for span in spans)


class MentionScanner:
    """Scanner bound to one prebuilt candidate index.

    The index must already be ordered by ``build_index``; the scanner does
    not re-sort it. Empty names are dropped, since an empty name would
    match at every position.
    """

    def __init__(self, index: Iterable[MentionCandidate], config: MentionConfig | None = None):
        self.config = config or MentionConfig()
        self._index: tuple[MentionCandidate, ...] = tuple(c for c in index if c.display_name)
        self._word = _ASCII_WORD if self.config.ascii_word_boundaries else _UNICODE_WORD
        # (candidate, needs start check, needs end check, tooltip)
        self._entries = tuple(
            (
                c,
                self._word.match(c.display_name[0]) is not None,
                self._word.match(c.display_name[-1]) is not None,
                mention_title(
                    c.kind,
                    c.display_name,
                    self.config.character_title_template,
                    self.config.note_title_template,
                ),
            )
            for c in self._index
        )

    @property
    def index(self) -> tuple[MentionCandidate, ...]:
        return self._index

    def _is_word_at(self, text: str, pos: int) -> bool:
        return 0 <= pos < len(text) and self._word.match(text, pos) is not None

    def scan(self, text: str) -> list[DocumentSpan]:
        """Split ``text`` into plain and mention spans.

        Returns ``[PlainSpan(text)]`` when the index is empty or nothing
        matches (including for empty text).
        """
        if not self._entries or not text:
            return [PlainSpan(text=text)]

        spans: list[DocumentSpan] = []
        buffer_start = 0
        i = 0
        n = len(text)
        while i < n:
            matched = None
            for candidate, check_start, check_end, title in self._entries:
                name = candidate.display_name
                if not text.startswith(name, i):
                    continue
                end = i + len(name)
                if check_start and self._is_word_at(text, i - 1):
                    continue
                if check_end and self._is_word_at(text, end):
                    continue
                matched = (candidate, end, title)
                break

            if matched is None:
                i += 1
                continue

            candidate, end, title = matched
            # output always starts with a plain span
            if i > buffer_start or not spans:
                spans.append(PlainSpan(text=text[buffer_start:i]))
            spans.append(
                MentionSpan(
                    text=text[i:end],
                    target_kind=candidate.kind,
                    target_id=candidate.id,
                    title=title,
                )
            )
            i = end
            buffer_start = end

        if buffer_start < n or not spans:
            spans.append(PlainSpan(text=text[buffer_start:]))
        return spans

    def resolve(self, text: str) -> ResolvedDocument:
        """Scan ``text`` and wrap the spans with a "found anything" flag."""
        spans = self.scan(text)
        return ResolvedDocument(spans=tuple(spans), has_mentions=has_mentions(text, spans))


def resolve_mentions(
    text: str,
    index: Iterable[MentionCandidate],
    config: MentionConfig | None = None,
) -> list[DocumentSpan]:
    """Split ``text`` into plain and mention spans using a prebuilt index."""
    return MentionScanner(index, config).scan(text)


def resolve_document(
    text: str,
    index: Iterable[MentionCandidate],
    config: MentionConfig | None = None,
) -> ResolvedDocument:
    """Like ``resolve_mentions`` but returns a ResolvedDocument."""
    return MentionScanner(index, config).resolve(text)
