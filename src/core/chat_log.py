"""Chat log segmentation and reassembly (core domain).

A saved chat log is laid out as:

    <preamble ending with CHAT_MARKER>
    <fragment starting with MESSAGE_MARKER>...
    TRAILER

The preamble is copied verbatim, every fragment is tested against the
matcher, and the survivors are written back in their original order followed
by the trailer. This is a marker scan over the raw text, not an HTML parser.
"""

from __future__ import annotations

import logging

from core.errors import ChatLogStructureError
from core.models import ChatLogParts, FilterResult
from core.ports import FragmentMatcher

LOGGER = logging.getLogger(__name__)

CHAT_MARKER = '<div class="Chat">'
MESSAGE_MARKER = '<div class="ChatMessage"'
TRAILER = "</div>\n</body>\n</html>"


def split_fragments(body: str) -> list[str]:
    """Split text into fragments that each begin at a message marker.

    Text before the first marker, if any, becomes a fragment of its own.
    """

    fragments: list[str] = []
    start = 0
    cursor = body.find(MESSAGE_MARKER)
    while cursor != -1:
        if cursor > start:
            fragments.append(body[start:cursor])
        start = cursor
        cursor = body.find(MESSAGE_MARKER, cursor + len(MESSAGE_MARKER))
    if start < len(body):
        fragments.append(body[start:])
    return fragments


def split_chat_log(document: str) -> ChatLogParts:
    """Split a document into its preamble and message fragments.

    Raises ChatLogStructureError unless the chat container marker occurs
    exactly once. Every trailer occurrence is removed from the body before
    splitting since it is re-appended unconditionally.
    """

    marker_count = document.count(CHAT_MARKER)
    if marker_count != 1:
        raise ChatLogStructureError(
            f'Expected 1 "{CHAT_MARKER}", but found {marker_count}',
            marker_count=marker_count,
        )

    head, marker, body = document.partition(CHAT_MARKER)
    body = body.replace(TRAILER, "")
    return ChatLogParts(preamble=head + marker, fragments=split_fragments(body))


def filter_document(document: str, matcher: FragmentMatcher) -> FilterResult:
    """Filter one document and report how many fragments survived.

    Any matcher error aborts the document; no partial output is returned.
    """

    matcher.ensure_patterns()
    parts = split_chat_log(document)

    output = [parts.preamble]
    for fragment in parts.fragments:
        if matcher.matches(fragment):
            output.append(fragment)
    output.append(TRAILER)

    kept = len(output) - 2
    LOGGER.debug("Kept %s of %s fragments", kept, len(parts.fragments))
    return FilterResult(
        text="".join(output),
        fragments_total=len(parts.fragments),
        fragments_kept=kept,
    )


def filter_chat_log(document: str, config: FragmentMatcher) -> str:
    """Return the filtered copy of a chat log document."""

    return filter_document(document, config).text
