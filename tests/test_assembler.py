from typing import List, Optional

import pytest

from ctxdocs.corpus.index import CorpusIndex
from ctxdocs.corpus.models import Doc, DocContent, IndexedDoc
from ctxdocs.provider.assembler import assemble, longest_common_suffix, truncate
from ctxdocs.search.base_search import BaseSearch, SearchQuery, SearchResult


def make_doc(
    doc_id: int,
    title: Optional[str] = None,
    url: Optional[str] = None,
    text: Optional[str] = None,
) -> IndexedDoc:
    return IndexedDoc(
        doc=Doc(id=doc_id, url=url),
        content=DocContent(title=title, text_content=text),
    )


class FakeSearch(BaseSearch):
    def __init__(self, results: Optional[List[SearchResult]] = None) -> None:
        self.results = results or []
        self.queries: List[SearchQuery] = []

    async def search(self, query: SearchQuery) -> List[SearchResult]:
        self.queries.append(query)
        return self.results


class ForbiddenSearch(BaseSearch):
    async def search(self, query: SearchQuery) -> List[SearchResult]:
        raise AssertionError("search must not be called")


def ref(doc_id: int, chunk: int = 0) -> SearchResult:
    return SearchResult(doc=doc_id, chunk=chunk, score=1.0)


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "   ", "\n\t"])
async def test_blank_query_lists_corpus_without_searching(query: Optional[str]) -> None:
    index = CorpusIndex(
        [make_doc(1, "Install"), make_doc(2, "Configure"), make_doc(3, "Upgrade")]
    )
    items = await assemble(index, query, search=ForbiddenSearch())
    assert [i.title for i in items] == ["Install", "Configure", "Upgrade"]


@pytest.mark.asyncio
async def test_query_is_trimmed_and_rank_order_kept() -> None:
    index = CorpusIndex(
        [make_doc(1, "Install"), make_doc(2, "Configure"), make_doc(3, "Upgrade")]
    )
    search = FakeSearch([ref(3), ref(1)])
    items = await assemble(index, "  install  ", search=search)
    assert search.queries == [SearchQuery(text="install")]
    assert [i.title for i in items] == ["Upgrade", "Install"]


@pytest.mark.asyncio
async def test_listing_duplicates_keep_first_occurrence() -> None:
    index = CorpusIndex(
        [make_doc(1, "Install"), make_doc(2, "Configure"), make_doc(1, "Install again")]
    )
    items = await assemble(index, None, search=ForbiddenSearch())
    assert [i.title for i in items] == ["Install", "Configure"]


@pytest.mark.asyncio
async def test_search_results_deduplicated_by_document() -> None:
    index = CorpusIndex([make_doc(1, "Install"), make_doc(2, "Configure")])
    search = FakeSearch([ref(2, 0), ref(1, 0), ref(2, 1), ref(1, 3), ref(2, 2)])
    items = await assemble(index, "setup", search=search)
    assert [i.title for i in items] == ["Configure", "Install"]


@pytest.mark.asyncio
async def test_empty_search_results_yield_no_items() -> None:
    index = CorpusIndex([make_doc(1, "Install")])
    assert await assemble(index, "nothing", search=FakeSearch([])) == []


@pytest.mark.asyncio
async def test_unknown_reference_propagates() -> None:
    index = CorpusIndex([make_doc(1, "Install")])
    with pytest.raises(KeyError):
        await assemble(index, "install", search=FakeSearch([ref(99)]))


@pytest.mark.asyncio
async def test_common_suffix_trimmed() -> None:
    index = CorpusIndex(
        [
            make_doc(1, "Installing the command line tool | Example Docs"),
            make_doc(2, "Configuring authentication | Example Docs"),
        ]
    )
    items = await assemble(index, None, search=ForbiddenSearch())
    assert [i.title for i in items] == [
        "Installing the command line tool",
        "Configuring authentication",
    ]


@pytest.mark.asyncio
async def test_short_titles_keep_common_suffix() -> None:
    index = CorpusIndex(
        [
            make_doc(1, "Short | Example Docs"),
            make_doc(2, "A much longer page title | Example Docs"),
        ]
    )
    items = await assemble(index, None, search=ForbiddenSearch())
    assert [i.title for i in items] == ["Short | Example Docs", "A much longer page title"]


@pytest.mark.asyncio
async def test_no_common_suffix_leaves_titles() -> None:
    index = CorpusIndex([make_doc(1, "Foo"), make_doc(2, "Foo Docs")])
    items = await assemble(index, None, search=ForbiddenSearch())
    assert [i.title for i in items] == ["Foo", "Foo Docs"]


@pytest.mark.asyncio
async def test_single_item_is_not_suffix_trimmed() -> None:
    index = CorpusIndex([make_doc(1, "Installing the command line tool | Example Docs")])
    items = await assemble(index, None, search=ForbiddenSearch())
    assert [i.title for i in items] == ["Installing the command line tool | Example Docs"]


@pytest.mark.asyncio
async def test_suffix_trimmed_before_truncation() -> None:
    # Truncating first would leave every title ending in "...", hiding the suffix.
    index = CorpusIndex(
        [
            make_doc(1, "Getting started with the platform - Example Documentation Site"),
            make_doc(2, "Reference for every configuration key - Example Documentation Site"),
        ]
    )
    items = await assemble(index, None, search=ForbiddenSearch())
    assert [i.title for i in items] == [
        "Getting started with the platform",
        "Reference for every configuration key",
    ]


@pytest.mark.asyncio
async def test_long_title_truncated_after_trimming() -> None:
    long_title = "x" * 75 + " Docs"
    index = CorpusIndex([make_doc(1, long_title), make_doc(2, "Short page title Docs")])
    items = await assemble(index, None, search=ForbiddenSearch())
    assert len(long_title) == 80
    assert items[0].title == "x" * 50 + "..."
    assert items[1].title == "Short page title"


@pytest.mark.asyncio
async def test_title_falls_back_to_url_then_untitled() -> None:
    by_url = await assemble(
        CorpusIndex([make_doc(1, title="", url="https://e.com/a")]), None, search=ForbiddenSearch()
    )
    untitled = await assemble(CorpusIndex([make_doc(2)]), None, search=ForbiddenSearch())
    no_content = await assemble(
        CorpusIndex([IndexedDoc(doc=Doc(id=3))]), None, search=ForbiddenSearch()
    )
    assert by_url[0].title == "https://e.com/a"
    assert by_url[0].url == "https://e.com/a"
    assert untitled[0].title == "Untitled"
    assert no_content[0].title == "Untitled"


@pytest.mark.asyncio
async def test_preview_and_content() -> None:
    text = "a" * 250
    items = await assemble(
        CorpusIndex([make_doc(1, "Install", "https://e.com/install", text)]),
        None,
        search=ForbiddenSearch(),
    )
    assert items[0].preview == "a" * 200 + "..."
    assert items[0].content == text
    assert items[0].to_wire() == {
        "title": "Install",
        "url": "https://e.com/install",
        "preview": "a" * 200 + "...",
        "content": text,
    }


@pytest.mark.asyncio
async def test_missing_text_omits_preview_and_content() -> None:
    items = await assemble(CorpusIndex([make_doc(1, "Install")]), None, search=ForbiddenSearch())
    assert items[0].preview is None
    assert items[0].content is None
    assert items[0].to_wire() == {"title": "Install"}


def test_longest_common_suffix() -> None:
    assert longest_common_suffix([]) == ""
    assert longest_common_suffix(["abc"]) == "abc"
    assert longest_common_suffix(["Install - Docs", "Configure - Docs"]) == " - Docs"
    assert longest_common_suffix(["abc", "xyz"]) == ""
    assert longest_common_suffix(["Docs", "My Docs"]) == "Docs"


def test_truncate() -> None:
    assert truncate("short", 10) == "short"
    assert truncate("exactly10!", 10) == "exactly10!"
    assert truncate("eleven char", 10) == "eleven cha..."
