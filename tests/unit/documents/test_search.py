"""
Tests for content search: case-insensitive literal substring matching.
"""

from __future__ import annotations

import pytest
import pytest_asyncio

from docstore.documents.search import normalize_term


@pytest.mark.parametrize("term", [None, ""])
def test_absent_or_empty_term_matches_everything(term):
    assert normalize_term(term) is None


@pytest.mark.parametrize("term", [" ", "a", "Hello World", "%"])
def test_other_terms_are_kept_verbatim(term):
    assert normalize_term(term) == term


class TestSubstringSearch:
    @pytest_asyncio.fixture
    async def seeded(self, store, make_input):
        docs = {
            "hello": await store.insert(make_input(name="hello.txt", content="Hello World")),
            "json": await store.insert(
                make_input(name="data.json", file_type="application/json", content='{"discount": "50%_off"}')
            ),
            "xml": await store.insert(
                make_input(name="feed.xml", file_type="application/xml", content="<root>hello there</root>")
            ),
        }
        return docs

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "term,expected",
        [
            ("world", {"hello.txt"}),
            ("WORLD", {"hello.txt"}),
            ("hello", {"hello.txt", "feed.xml"}),
            ("xyz", set()),
            ("<ROOT>", {"feed.xml"}),
        ],
    )
    async def test_matches_case_insensitively(self, store, seeded, term, expected):
        results = await store.find_by_content_substring(term)
        assert {d.name for d in results} == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "term,expected",
        [
            ("50%_off", {"data.json"}),
            ("%", {"data.json"}),
            ("_", {"data.json"}),
            ("H_llo", set()),
            ("Hel%", set()),
        ],
    )
    async def test_wildcards_are_literal(self, store, seeded, term, expected):
        results = await store.find_by_content_substring(term)
        assert {d.name for d in results} == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("term", [None, ""])
    async def test_empty_term_returns_same_set_as_list_all(self, store, seeded, term):
        everything = {d.id for d in await store.list_all()}
        found = {d.id for d in await store.find_by_content_substring(term)}
        assert found == everything
        assert len(found) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content,term",
        [
            ("Bonjour ÉCOLE", "école"),
            ("bonjour école", "ÉCOLE"),
            ("ΑΘΗΝΑ", "αθηνα"),
            ("Straße in München", "MÜNCHEN"),
        ],
    )
    async def test_non_ascii_matches_case_insensitively(self, store, make_input, content, term):
        await store.insert(make_input(name="hit.txt", content=content))
        await store.insert(make_input(name="miss.txt", content="plain ascii"))

        results = await store.find_by_content_substring(term)

        assert [d.name for d in results] == ["hit.txt"]
