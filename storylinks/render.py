"""Rendering adapters and mention activation.

The scanner's output is a flat span list. Renderers need one of two shapes:

- **Markdown text** (`to_markdown`): mention spans become inline links with
  a ``mention:`` URL (the scheme comes from ``MentionConfig.link_scheme``), ready to hand to any markdown renderer.
- **Link nodes** (`to_link_nodes`): a list of ``text``/``link`` nodes in the
  shape a markdown tree visitor splices in place of a text node.

Clicking a rendered mention comes back through `MentionDispatcher`, which
forwards ``(kind, id, display_name)`` to every registered callback.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any, NamedTuple

from storylinks.config import MentionConfig
from storylinks.document import DocumentSpan, MentionSpan, PlainSpan
from storylinks.entity import MentionKind

logger = logging.getLogger(__name__)

MentionCallback = Callable[[MentionKind, str, str], None]


class MentionActivation(NamedTuple):
    """What the UI reports when a mention is clicked."""

    kind: MentionKind
    id: str
    display_name: str

    @classmethod
    def from_span(cls, span: MentionSpan) -> "MentionActivation":
        return cls(kind=span.target_kind, id=span.target_id, display_name=span.text)


def _scheme(scheme: str | None, config: MentionConfig | None) -> str:
    if scheme is not None:
        return scheme
    return (config or MentionConfig()).link_scheme


def mention_url(span: MentionSpan, scheme: str | None = None, config: MentionConfig | None = None) -> str:
    """``mention:character/<id>`` style URL for a mention span."""
    return f"{_scheme(scheme, config)}:{span.target_kind.value}/{span.target_id}"


def parse_mention_url(
    url: str,
    scheme: str | None = None,
    config: MentionConfig | None = None,
) -> tuple[MentionKind, str] | None:
    """Inverse of ``mention_url``. Returns None for any other URL."""
    prefix = f"{_scheme(scheme, config)}:"
    if not url.startswith(prefix):
        return None
    kind_value, sep, target_id = url[len(prefix):].partition("/")
    if not sep or not target_id:
        return None
    try:
        kind = MentionKind(kind_value)
    except ValueError:
        return None
    return kind, target_id


def _escape_link_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")


def _escape_link_title(title: str) -> str:
    return title.replace("\\", "\\\\").replace('"', '\\"')


def to_markdown(
    spans: Iterable[DocumentSpan],
    scheme: str | None = None,
    config: MentionConfig | None = None,
) -> str:
    """Rewrite spans as markdown, turning mentions into inline links.

    Plain spans are emitted unchanged, so a document with no mentions comes
    back byte-for-byte identical. The link scheme is ``scheme`` if given,
    else ``config.link_scheme``.
    """
    scheme = _scheme(scheme, config)
    parts: list[str] = []
    for span in spans:
        if isinstance(span, MentionSpan):
            parts.append(
                f'[{_escape_link_text(span.text)}]({mention_url(span, scheme)} "{_escape_link_title(span.title)}")'
            )
        else:
            parts.append(span.text)
    return "".join(parts)


def to_link_nodes(
    spans: Iterable[DocumentSpan],
    scheme: str | None = None,
    config: MentionConfig | None = None,
) -> list[dict[str, Any]]:
    """Convert spans into text/link nodes for splicing into a markdown tree.

    Empty plain spans produce no node.
    """
    scheme = _scheme(scheme, config)
    nodes: list[dict[str, Any]] = []
    for span in spans:
        if isinstance(span, PlainSpan):
            if span.text:
                nodes.append({"type": "text", "value": span.text})
            continue
        nodes.append(
            {
                "type": "link",
                "url": mention_url(span, scheme),
                "title": span.title,
                "data": {"kind": span.target_kind.value, "id": span.target_id},
                "children": [{"type": "text", "value": span.text}],
            }
        )
    return nodes


class MentionDispatcher:
    """Fan out mention clicks to registered ``on_mention_activated`` callbacks.

    Callbacks are fire-and-forget: their return values are ignored and one
    callback raising does not stop the others.
    """

    def __init__(self, callbacks: Iterable[MentionCallback] = (), config: MentionConfig | None = None):
        self.config = config or MentionConfig()
        self._callbacks: list[MentionCallback] = list(callbacks)

    def subscribe(self, callback: MentionCallback) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def activate(self, kind: MentionKind, target_id: str, display_name: str) -> None:
        for callback in list(self._callbacks):
            try:
                callback(kind, target_id, display_name)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Mention callback %r failed for %s %s", callback, kind.value, target_id)

    def dispatch(self, span: DocumentSpan) -> MentionActivation:
        """Activate the mention a span refers to.

        Raises:
            TypeError: If ``span`` is a plain span.
        """
        if not isinstance(span, MentionSpan):
            raise TypeError("only mention spans can be activated")
        activation = MentionActivation.from_span(span)
        self.activate(*activation)
        return activation

    def dispatch_url(self, url: str, display_name: str, scheme: str | None = None) -> MentionActivation | None:
        """Activate from a rendered link URL; returns None for non-mention URLs."""
        parsed = parse_mention_url(url, scheme, self.config)
        if parsed is None:
            return None
        activation = MentionActivation(kind=parsed[0], id=parsed[1], display_name=display_name)
        self.activate(*activation)
        return activation
