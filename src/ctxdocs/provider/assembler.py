"""Assemble display-ready items from a corpus index and an optional query."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set, Union

from pydantic import BaseModel

from ctxdocs.corpus.index import CorpusIndex
from ctxdocs.corpus.models import DocID, IndexedDoc
from ctxdocs.search.base_search import BaseSearch, SearchQuery, SearchResult

logger = logging.getLogger(__name__)

PREVIEW_MAX_LENGTH = 200
TITLE_MAX_LENGTH = 50
# A title keeps at least this many characters after its common suffix is removed.
MIN_TRIMMED_TITLE_LENGTH = 10
UNTITLED = "Untitled"
ELLIPSIS = "..."

Candidate = Union[SearchResult, IndexedDoc]


class Item(BaseModel):
    """A matched document, ready for display by the host."""

    title: str
    url: Optional[str] = None
    preview: Optional[str] = None
    content: Optional[str] = None

    def to_wire(self) -> Dict[str, str]:
        """Return the host-facing dict, omitting absent fields."""
        return self.model_dump(exclude_none=True)


async def assemble(
    index: CorpusIndex,
    query: Optional[str],
    *,
    search: BaseSearch,
    log: Optional[logging.Logger] = None,
) -> List[Item]:
    """Return one item per matched document.

    Without a (non-blank) query every document in the corpus is listed in
    stored order; otherwise the search results are used in rank order.
    Items are deduplicated by document, then titles have their common
    suffix trimmed and are truncated.
    """
    log = log or logger
    text = (query or "").strip()
    candidates: Sequence[Candidate]
    if text:
        candidates = await search.search(SearchQuery(text=text))
        log.debug("Search %r matched %d chunks", text, len(candidates))
    else:
        candidates = index.docs

    items: List[Item] = []
    seen: Set[DocID] = set()
    for candidate in candidates:
        doc = index.resolve(candidate) if candidate.kind == "reference" else candidate
        if doc.id in seen:
            continue
        seen.add(doc.id)
        items.append(_to_item(doc))

    if len(items) >= 2:
        # Common suffix is often the doc site name, like " - My Doc Site".
        suffix = longest_common_suffix([i.title for i in items])
        if suffix:
            for item in items:
                if len(item.title) >= len(suffix) + MIN_TRIMMED_TITLE_LENGTH:
                    item.title = item.title[: -len(suffix)]

    # Must run after suffix trimming; truncated titles share no real suffix.
    for item in items:
        item.title = truncate(item.title, TITLE_MAX_LENGTH)

    log.debug("Assembled %d items", len(items))
    return items


def _to_item(doc: IndexedDoc) -> Item:
    text_content = doc.text_content
    return Item(
        title=doc.title or doc.url or UNTITLED,
        url=doc.url,
        preview=truncate(text_content, PREVIEW_MAX_LENGTH) if text_content else None,
        content=text_content,
    )


def longest_common_suffix(texts: Sequence[str]) -> str:
    """Return the longest string that every text ends with."""
    if not texts:
        return ""
    if len(texts) == 1:
        return texts[0]

    first = texts[0]
    n = 0
    for i in range(1, min(len(t) for t in texts) + 1):
        ch = first[-i]
        if not all(t[-i] == ch for t in texts):
            break
        n = i
    return first[len(first) - n :]


def truncate(text: str, max_length: int) -> str:
    """Clamp text to `max_length` characters, marking the cut with an ellipsis."""
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text
