"""WordDictionary: word-legality lookups backed by a word-list file.

The file holds one word per line; blank lines and ``#`` comments are
skipped. Lookups are case-insensitive. A dictionary is only usable after
``load()`` (or when built with ``from_words``); asking an unloaded one
is a caller error.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


class DictionaryNotLoadedError(RuntimeError):
    """Raised when a lookup happens before the word list is loaded."""


class WordDictionary:
    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._words: frozenset[str] | None = None

    @classmethod
    def from_words(cls, words: Iterable[str]) -> WordDictionary:
        d = cls()
        d._words = frozenset(w.strip().upper() for w in words if w.strip())
        return d

    @property
    def is_loaded(self) -> bool:
        return self._words is not None

    def load(self) -> WordDictionary:
        if self._path is None:
            raise DictionaryNotLoadedError("no word list path configured")
        words: set[str] = set()
        with open(self._path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                words.add(line.upper())
        self._words = frozenset(words)
        logger.info("Loaded %d words from %s", len(self._words), self._path)
        return self

    def is_valid(self, word: str) -> bool:
        if self._words is None:
            raise DictionaryNotLoadedError(
                "word list not loaded; call load() before validating placements"
            )
        return word.strip().upper() in self._words

    __call__ = is_valid

    def __len__(self) -> int:
        return len(self._words) if self._words is not None else 0
