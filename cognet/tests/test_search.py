"""Tests for the cognate search service."""

import pytest

from cognet.errors import ChainDiscoveryError, ErrorCode
from cognet.services.search import CognateSearchService, parse_suggestion, select_chain

from conftest import FakeCognateStore, pair


WATER = [
    pair("water", "eng", "water", "deu", "Wasser"),
    pair("water", "deu", "Wasser", "nld", "water"),
    pair("water", "rus", "вода", "ukr", "вода", translit1="voda", translit2="voda"),
]


class TestFindCognateChains:

    def setup_method(self):
        self.store = FakeCognateStore(pairs={"water": list(WATER)})
        self.service = CognateSearchService(self.store)

    async def test_unknown_concept_returns_no_chains(self):
        result = await self.service.find_cognate_chains("missing")

        assert result.concept_id == "missing"
        assert result.chains == []

    async def test_returns_all_chains_without_filter(self):
        result = await self.service.find_cognate_chains("water")

        assert result.concept_id == "water"
        assert len(result.chains) == 2
        assert [len(chain) for chain in result.chains] == [3, 2]

    async def test_filter_returns_chain_containing_word(self):
        result = await self.service.find_cognate_chains("water", word="вода", language="ukr")

        assert len(result.chains) == 1
        assert {w.language.code for w in result.chains[0]} == {"rus", "ukr"}

    async def test_filter_matches_word_and_language_together(self):
        # "water" exists in eng and nld, never in rus
        result = await self.service.find_cognate_chains("water", word="water", language="rus")

        assert result.chains == []

    async def test_filter_needs_both_arguments(self):
        result = await self.service.find_cognate_chains("water", word="вода")

        assert len(result.chains) == 2

    async def test_languages_fetched_in_one_batch(self):
        await self.service.find_cognate_chains("water")

        assert self.store.language_batches == [["deu", "eng", "nld", "rus", "ukr"]]

    async def test_missing_language_omits_only_that_word(self):
        del self.store.languages["nld"]

        result = await self.service.find_cognate_chains("water")

        assert [(w.language.code, w.word) for w in result.chains[0]] == [
            ("deu", "Wasser"),
            ("eng", "water"),
        ]

    async def test_corrupt_pair_list_fails_whole_request(self):
        self.store.corrupt_concepts.add("water")

        with pytest.raises(ChainDiscoveryError) as exc_info:
            await self.service.find_cognate_chains("water")

        assert exc_info.value.code == ErrorCode.CHAIN_DISCOVERY_FAILED
        assert exc_info.value.concept_id == "water"

    async def test_corrupt_language_record_fails_whole_request(self):
        self.store.corrupt_languages.add("deu")

        with pytest.raises(ChainDiscoveryError):
            await self.service.find_cognate_chains("water")

    async def test_store_outage_is_reported(self):
        self.store.unavailable = True

        with pytest.raises(ChainDiscoveryError) as exc_info:
            await self.service.find_cognate_chains("water")

        assert exc_info.value.status_code == 500
        assert "connection refused" in exc_info.value.message

    async def test_get_cognates_by_concept_passes_through(self):
        assert await self.service.get_cognates_by_concept("water") == WATER
        assert await self.service.get_cognates_by_concept("missing") == []


class TestSuggestWords:

    def setup_method(self):
        self.store = FakeCognateStore(prefixes={
            "wa": [
                "water|eng|water",
                "water|nld|water",
                "wasser|deu|water",
                "broken-member",
                "wax|xxx|wax",
            ],
        })
        self.service = CognateSearchService(self.store, suggestion_limit=10, min_prefix_length=2)

    async def test_short_prefix_returns_nothing(self):
        assert await self.service.suggest_words("w") == []
        assert await self.service.suggest_words("") == []

    async def test_prefix_is_case_insensitive(self):
        lower = await self.service.suggest_words("wa")
        upper = await self.service.suggest_words("WA")

        assert lower == upper
        assert lower

    async def test_deduplicates_by_word_first_wins(self):
        suggestions = await self.service.suggest_words("wa")

        # Members are sorted: wasser, water|eng, water|nld, wax
        assert [(s.word, s.language) for s in suggestions] == [
            ("wasser", "deu"),
            ("water", "eng"),
            ("wax", "xxx"),
        ]

    async def test_suggestions_carry_language_info(self):
        suggestions = await self.service.suggest_words("wa")
        by_word = {s.word: s for s in suggestions}

        assert by_word["water"].language_info.name == "English"
        assert by_word["water"].concept_id == "water"
        assert by_word["wax"].language_info is None

    async def test_capped_at_limit(self):
        self.store.prefixes["ab"] = [f"ab{i:02d}|eng|c{i}" for i in range(25)]

        suggestions = await self.service.suggest_words("ab")

        assert len(suggestions) == 10
        assert suggestions[0].word == "ab00"

    async def test_unknown_prefix(self):
        assert await self.service.suggest_words("zz") == []


class TestHelpers:

    def test_parse_suggestion(self):
        assert parse_suggestion("water|eng|42") == ("water", "eng", "42")
        assert parse_suggestion("water|eng") is None
        assert parse_suggestion("a|b|c|d") is None

    def test_select_chain_without_match(self):
        assert select_chain([], "water", "eng") == []
