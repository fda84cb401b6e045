"""Tests for completion sources."""
import pytest

from core.completion import CachingCompletionSource, NoOpCompletionSource, VocabularyCompletionSource


class CountingSource(CachingCompletionSource):
    def __init__(self, cache_size=2):
        super().__init__(cache_size)
        self.calls = []

    def do_completion(self, prefix):
        self.calls.append(prefix)
        return [prefix + "!"]


def test_noop_never_suggests():
    assert NoOpCompletionSource().complete("anything") == []


def test_vocabulary_prefix_matches_in_order():
    source = VocabularyCompletionSource(["help", "hello", "exit"])
    assert source.complete("he") == ["help", "hello"]
    assert source.complete("ex") == ["exit"]
    assert source.complete("zz") == []


def test_vocabulary_is_case_insensitive():
    source = VocabularyCompletionSource(["Help"])
    assert source.complete("HE") == ["Help"]


def test_empty_prefix_matches_everything():
    assert VocabularyCompletionSource(["a", "b"]).complete("") == ["a", "b"]


def test_results_are_memoised():
    source = CountingSource()
    source.complete("a")
    source.complete("a")
    assert source.calls == ["a"]


def test_cache_evicts_least_recently_used():
    source = CountingSource(cache_size=2)
    source.complete("a")
    source.complete("b")
    source.complete("a")
    source.complete("c")
    source.complete("a")
    source.complete("b")
    assert source.calls == ["a", "b", "c", "b"]


def test_set_terms_invalidates_cache():
    source = VocabularyCompletionSource(["cat"])
    assert source.complete("c") == ["cat"]
    source.set_terms(["cat", "cls"])
    assert source.complete("c") == ["cat", "cls"]


def test_returned_list_is_a_copy():
    source = VocabularyCompletionSource(["cat"])
    source.complete("c").append("dog")
    assert source.complete("c") == ["cat"]


def test_caching_source_requires_do_completion():
    with pytest.raises(TypeError):
        CachingCompletionSource()
