import html
import re
from dataclasses import dataclass
from typing import Sequence

EMPHASIS_OPEN = "<b>"
EMPHASIS_CLOSE = "</b>"
_EMPHASIS_TAG = re.compile(r"(</?b>)")

# Private-use code points stand in for the tags until the text is escaped.
OPEN_MARK = "\ue000"
CLOSE_MARK = "\ue001"


@dataclass(frozen=True)
class Span:
    text: str
    emphasized: bool


def _escape(value: str) -> str:
    # Quotes stay literal, matching how the text reads.
    return html.escape(value, quote=False)


def highlight_keywords(text: str, keywords: Sequence[str]) -> str:
    """Wrap every case-insensitive keyword occurrence in ``<b>`` tags.

    Keywords are applied one after another over the growing string, so an
    earlier keyword can split a later, longer one: with ``("bleed",
    "bleeding")`` the word "bleeding" comes out as ``<b>bleed</b>ing``.
    Matching runs on the raw text with placeholder marks; escaping happens
    afterwards, so no keyword can hit an entity or a tag.
    """
    marked = text.replace(OPEN_MARK, "").replace(CLOSE_MARK, "")
    for keyword in keywords:
        if not keyword:
            continue
        pattern = re.compile(re.escape(keyword), re.IGNORECASE)
        marked = pattern.sub(lambda m: f"{OPEN_MARK}{m.group(0)}{CLOSE_MARK}", marked)
    return _escape(marked).replace(OPEN_MARK, EMPHASIS_OPEN).replace(CLOSE_MARK, EMPHASIS_CLOSE)


def markup_to_spans(markup: str) -> list[Span]:
    spans: list[Span] = []
    depth = 0
    for token in _EMPHASIS_TAG.split(markup):
        if token == EMPHASIS_OPEN:
            depth += 1
            continue
        if token == EMPHASIS_CLOSE:
            depth = max(0, depth - 1)
            continue
        if not token:
            continue
        plain = html.unescape(token)
        emphasized = depth > 0
        if spans and spans[-1].emphasized == emphasized:
            spans[-1] = Span(text=spans[-1].text + plain, emphasized=emphasized)
        else:
            spans.append(Span(text=plain, emphasized=emphasized))
    return spans


def highlight_spans(text: str, keywords: Sequence[str]) -> list[Span]:
    return markup_to_spans(highlight_keywords(text, keywords))
