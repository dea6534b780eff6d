"""
Dictionary oracles.

An oracle answers one question: is this word a dictionary entry? The answer
is tri-state (exists / not_found / unavailable) and arrives asynchronously.
Game code depends only on `lookup`, never on a definition payload.
"""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Set

import requests
from pydantic import BaseModel, Field

from .models import LookupResult


logger = logging.getLogger(__name__)

DICTIONARY_API_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"


class DictionaryOracle:
    """Interface for asynchronous word lookups."""

    async def lookup(self, word: str) -> LookupResult:
        raise NotImplementedError


class HttpDictionaryOracle(BaseModel, DictionaryOracle):
    """
    Oracle backed by the free dictionary API.

    The blocking HTTP call runs in a worker thread so the event loop stays
    free while the request is outstanding.

    Attributes:
        base_url: Endpoint that accepts /<word>
        timeout: Seconds before a request counts as unavailable
    """

    base_url: str = DICTIONARY_API_URL
    timeout: float = Field(default=5.0, gt=0)

    def check(self, word: str) -> LookupResult:
        """Blocking lookup of a single word."""
        word = word.strip().lower()
        if not word:
            return "not_found"

        try:
            response = requests.get(f"{self.base_url}/{word}", timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Dictionary lookup for %r failed: %s", word, e)
            return "unavailable"

        if response.ok:
            return "exists"
        if response.status_code == 404:
            return "not_found"

        logger.warning("Dictionary lookup for %r returned HTTP %s", word, response.status_code)
        return "unavailable"

    async def lookup(self, word: str) -> LookupResult:
        return await asyncio.to_thread(self.check, word)


class WordListOracle(BaseModel, DictionaryOracle):
    """Oracle backed by an in-memory word list."""

    words: Set[str] = Field(default_factory=set)

    def model_post_init(self, __context) -> None:
        """Store words lowercase so lookups are case-insensitive."""
        self.words = {w.strip().lower() for w in self.words if w.strip()}

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "WordListOracle":
        return cls(words=set(words))

    @classmethod
    def from_file(cls, path: str | Path) -> "WordListOracle":
        """
        Load a newline-separated word list.

        Lines starting with '#' are ignored.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            words = {line.strip() for line in f if line.strip() and not line.startswith("#")}
        logger.debug("Loaded %d words from %s", len(words), path)
        return cls(words=words)

    def __contains__(self, word: str) -> bool:
        return word.strip().lower() in self.words

    async def lookup(self, word: str) -> LookupResult:
        return "exists" if word in self else "not_found"
