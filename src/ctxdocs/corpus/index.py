"""In-memory corpus index.

Loaded once and read-only afterwards. Exposes the ordered document listing
and resolves search result references to concrete documents.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, List, Sequence, Union

from pydantic import ValidationError

from ctxdocs.corpus.models import CorpusIndexData, DocID, IndexedDoc
from ctxdocs.exceptions import FormatError

if TYPE_CHECKING:
    from ctxdocs.search.base_search import SearchResult


class CorpusIndex:
    """Read-only collection of indexed documents."""

    def __init__(self, docs: Sequence[IndexedDoc]) -> None:
        self._docs: tuple[IndexedDoc, ...] = tuple(docs)
        self._by_id: Dict[DocID, IndexedDoc] = {}
        for d in self._docs:
            # First entry wins when the listing repeats an ID
            self._by_id.setdefault(d.id, d)

    @property
    def docs(self) -> tuple[IndexedDoc, ...]:
        """All documents in stored order."""
        return self._docs

    def __len__(self) -> int:
        return len(self._docs)

    def doc(self, doc_id: DocID) -> IndexedDoc:
        """Return the document with the given ID.

        Raises `KeyError` for an unknown ID.
        """
        return self._by_id[doc_id]

    def resolve(self, ref: Union["SearchResult", DocID]) -> IndexedDoc:
        """Resolve a search result reference to its document."""
        doc_id = ref if isinstance(ref, int) else ref.doc
        return self.doc(doc_id)

    @classmethod
    def from_json(cls, data: Any) -> "CorpusIndex":
        """Build an index from decoded JSON data.

        Raises `FormatError` when the data does not match the index schema.
        """
        try:
            parsed = CorpusIndexData.model_validate(data)
        except ValidationError as e:
            raise FormatError(f"Invalid corpus index: {e}") from e
        return cls(parsed.docs)

    @classmethod
    def from_text(cls, text: Union[str, bytes]) -> "CorpusIndex":
        """Parse a JSON document and build an index from it."""
        try:
            data = json.loads(text)
        except ValueError as e:
            raise FormatError(f"Corpus index is not valid JSON: {e}") from e
        return cls.from_json(data)

    def to_json(self) -> Dict[str, List[Dict[str, Any]]]:
        """Serialize the index back to its JSON shape."""
        return CorpusIndexData(docs=list(self._docs)).model_dump(
            mode="json", by_alias=True, exclude_none=True
        )
