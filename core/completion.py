# core/completion.py

from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Iterable, List, Protocol, Tuple

from core.config import COMPLETION_CACHE_SIZE


class CompletionSource(Protocol):
    def complete(self, prefix: str) -> List[str]:
        ...


class NoOpCompletionSource:
    """Never suggests anything."""

    def complete(self, prefix: str) -> List[str]:
        return []


class CachingCompletionSource(ABC):
    """
    Memoises `do_completion` per prefix in a small LRU table.
    Subclasses call `invalidate()` whenever their vocabulary changes.
    """

    def __init__(self, cache_size: int = COMPLETION_CACHE_SIZE):
        self.cache_size = cache_size
        self._cache: "OrderedDict[str, Tuple[str, ...]]" = OrderedDict()

    def complete(self, prefix: str) -> List[str]:
        if prefix in self._cache:
            self._cache.move_to_end(prefix)
            return list(self._cache[prefix])

        result = tuple(self.do_completion(prefix))
        if self.cache_size > 0:
            self._cache[prefix] = result
            if len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return list(result)

    def invalidate(self) -> None:
        self._cache.clear()

    @abstractmethod
    def do_completion(self, prefix: str) -> List[str]:
        ...



class VocabularyCompletionSource(CachingCompletionSource):
    """Case-insensitive prefix matches over a fixed, ordered list of terms."""

    def __init__(self, terms: Iterable[str] = (), cache_size: int = COMPLETION_CACHE_SIZE):
        super().__init__(cache_size)
        self._terms: Tuple[str, ...] = tuple(terms)

    @property
    def terms(self) -> Tuple[str, ...]:
        return self._terms

    def set_terms(self, terms: Iterable[str]) -> None:
        self._terms = tuple(terms)
        self.invalidate()

    def do_completion(self, prefix: str) -> List[str]:
        folded = prefix.casefold()
        return [t for t in self._terms if t.casefold().startswith(folded)]
