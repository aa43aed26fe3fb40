"""Tests for query tokenization."""

import pytest

from verbatim.core.strategies.tokenizer import (
    SYNONYMS,
    extract_phrases,
    get_synonyms,
    normalize_plural,
    tokenize,
)


class TestTokenize:
    """Term and phrase extraction."""

    def test_stop_words_dropped_plurals_and_synonyms_added(self):
        query = tokenize("How do I configure the webhooks?")
        assert query.terms == frozenset({"configure", "setup", "webhooks", "webhook", "callback"})
        assert query.phrases == ()

    def test_quoted_phrases_removed_from_terms(self):
        query = tokenize('"Rate Limit" exceeded')
        assert query.phrases == ("rate limit",)
        assert query.terms == frozenset({"exceeded"})

    def test_phrase_order_kept(self):
        assert extract_phrases('"b side" then "a side"') == ["b side", "a side"]

    def test_empty_phrases_dropped(self):
        assert extract_phrases('"   " and "ok"') == ["ok"]

    def test_only_stop_words_is_empty(self):
        query = tokenize("what is the a ?")
        assert query.is_empty

    def test_single_characters_dropped(self):
        assert tokenize("x y z").is_empty

    def test_unicode_words_kept(self):
        assert "zahlung" in tokenize("Zahlung fehlgeschlagen").terms


class TestNormalizePlural:

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("queries", "query"),
            ("boxes", "box"),
            ("matches", "match"),
            ("wishes", "wish"),
            ("hooks", "hook"),
            ("class", "class"),
            ("as", "as"),
            ("keys", "key"),
        ],
    )
    def test_normalize_plural(self, word, expected):
        assert normalize_plural(word) == expected


class TestSynonyms:

    def test_bidirectional(self):
        assert "account" in get_synonyms("merchant")
        assert "merchant" in get_synonyms("account")

    def test_unknown_term(self):
        assert get_synonyms("zebra") == frozenset()

    def test_table_is_immutable(self):
        with pytest.raises(TypeError):
            SYNONYMS["zebra"] = frozenset({"horse"})
