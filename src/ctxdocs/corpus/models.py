"""Pydantic models describing the corpus index JSON.

A corpus index is a list of indexed documents. Each entry pairs the raw
document record (`doc`) with its extracted, display-oriented content
(`content`)::

    {"docs": [{"doc": {"id": 1, "url": "...", "text": "..."},
               "content": {"title": "...", "textContent": "..."}}]}
"""

from __future__ import annotations

from typing import ClassVar, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

DocID = int


class Doc(BaseModel):
    """A raw document as captured by the corpus builder."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: StrictInt
    url: Optional[str] = None
    text: Optional[str] = None


class DocContent(BaseModel):
    """Content extracted from a document for display and search."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    title: Optional[str] = None
    text_content: Optional[str] = Field(default=None, alias="textContent")


class IndexedDoc(BaseModel):
    """A fully resolved document in the corpus."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Discriminant shared with `SearchResult.kind`; not part of the payload.
    kind: ClassVar[Literal["document"]] = "document"
    doc: Doc
    content: Optional[DocContent] = None

    @property
    def id(self) -> DocID:
        return self.doc.id

    @property
    def url(self) -> Optional[str]:
        return self.doc.url

    @property
    def title(self) -> Optional[str]:
        return self.content.title if self.content else None

    @property
    def text_content(self) -> Optional[str]:
        return self.content.text_content if self.content else None


class CorpusIndexData(BaseModel):
    """Top-level shape of a serialized corpus index."""

    model_config = ConfigDict(extra="ignore")

    docs: List[IndexedDoc]
