"""In-memory search over a corpus index using Whoosh.

Builds a RAM index once per corpus. Each document's text is split into
paragraph chunks so a query can match several places in one document; the
results therefore may reference the same document more than once.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple

from whoosh import scoring
from whoosh.analysis import StemmingAnalyzer
from whoosh.fields import NUMERIC, TEXT, Schema
from whoosh.filedb.filestore import RamStorage
from whoosh.index import Index
from whoosh.qparser import MultifieldParser, OrGroup

from ctxdocs.corpus.index import CorpusIndex
from ctxdocs.corpus.models import IndexedDoc
from ctxdocs.exceptions import SearchError
from ctxdocs.search.base_search import BaseSearch, SearchQuery, SearchResult

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def _make_schema() -> Schema:
    analyzer = StemmingAnalyzer()
    return Schema(
        doc=NUMERIC(stored=True),
        chunk=NUMERIC(stored=True),
        title=TEXT(stored=False, analyzer=analyzer, field_boost=1.8),
        # Store content for excerpt highlighting
        content=TEXT(stored=True, analyzer=analyzer),
    )


def split_chunks(text: Optional[str]) -> List[str]:
    """Split text into non-empty paragraph chunks."""
    if not text:
        return []
    return [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def _to_index_rows(docs: Iterable[IndexedDoc]) -> Iterable[Tuple[int, int, str, str]]:
    for d in docs:
        title = (d.title or "").strip()
        chunks = split_chunks(d.text_content)
        if not chunks:
            # Still index the title so untitled-content docs are findable by name
            if title:
                yield d.id, 0, title, ""
            continue
        for i, chunk in enumerate(chunks):
            yield d.id, i, title, chunk


class CorpusSearch(BaseSearch):
    """BM25F search over the documents of a `CorpusIndex`."""

    def __init__(self, index: CorpusIndex, *, limit: int = 20) -> None:
        self.limit = max(1, int(limit))
        self._index = self._build(index)

    @staticmethod
    def _build(index: CorpusIndex) -> Index:
        try:
            storage = RamStorage()
            idx = storage.create_index(_make_schema())
            writer = idx.writer(limitmb=32)
            for doc_id, chunk, title, content in _to_index_rows(index.docs):
                writer.add_document(doc=doc_id, chunk=chunk, title=title, content=content)
            writer.commit()
        except Exception as e:
            raise SearchError(f"Failed to build search index: {e}") from e
        return idx

    async def search(self, query: SearchQuery) -> List[SearchResult]:
        text = (query.text or "").strip()
        if not text:
            return []

        with self._index.searcher(weighting=scoring.BM25F()) as searcher:
            parser = MultifieldParser(["title", "content"], schema=self._index.schema, group=OrGroup)
            try:
                q = parser.parse(text)
            except Exception:
                # On parse failure, fall back to raw string as a phrase query
                q = parser.parse('"' + text.replace('"', " ") + '"')
            hits = searcher.search(q, limit=self.limit)
            hits.fragmenter.charlimit = 300
            out: List[SearchResult] = []
            for hit in hits:
                out.append(
                    SearchResult(
                        doc=int(hit["doc"]),
                        chunk=int(hit["chunk"]),
                        score=float(hit.score or 0.0),
                        excerpt=hit.highlights("content", top=2) or None,
                    )
                )

        logger.debug("Search %r returned %d results", text, len(out))
        return out
