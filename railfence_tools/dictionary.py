"""
Word-membership backends for the lexical scorer.

Two interchangeable providers answer "is this a known English word?":

  CorpusDictionary  - unions a set of word lists (files, URLs, NLTK corpora)
                      into one in-memory set, loaded once on first use.
  RemoteDictionary  - asks a dictionary web service about each word.

Both memoize verdicts per instance and treat anything shorter than
three letters as unknown.
"""

import logging
import os
import threading
from concurrent.futures import Future
from typing import Dict, FrozenSet, Iterable, Mapping, Optional
from urllib.parse import quote

from nltk import corpus as nltk_corpus
import requests

from railfence_tools.config import Settings

logger = logging.getLogger(__name__)

MIN_WORD_LEN = 3


def normalize_words(lines: Iterable[str]) -> set:
    """Trim, lower-case and drop anything shorter than MIN_WORD_LEN."""
    out = set()
    for line in lines:
        w = line.strip().lower()
        if len(w) >= MIN_WORD_LEN:
            out.add(w)
    return out


class DictionaryProvider:
    """
    Base class: memoized, de-duplicated `contains`.

    Subclasses implement `_lookup(token)` for a lower-cased token of at
    least three letters. It is called at most once per token for the
    lifetime of the instance, even with concurrent callers.
    """

    name = "abstract"

    def __init__(self):
        self._cache: Dict[str, bool] = {}
        self._pending: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def _lookup(self, token: str) -> bool:
        raise NotImplementedError

    def contains(self, token: str) -> bool:
        if not token or len(token) < MIN_WORD_LEN:
            return False
        token = token.lower()

        with self._lock:
            verdict = self._cache.get(token)
            if verdict is not None:
                return verdict
            future = self._pending.get(token)
            owner = future is None
            if owner:
                future = self._pending[token] = Future()

        if not owner:
            return future.result()

        try:
            verdict = bool(self._lookup(token))
        except BaseException as exc:
            with self._lock:
                del self._pending[token]
            future.set_exception(exc)
            raise

        with self._lock:
            self._cache[token] = verdict
            del self._pending[token]
        future.set_result(verdict)
        return verdict

    __contains__ = contains

    @property
    def cache_size(self) -> int:
        return len(self._cache)


class CorpusDictionary(DictionaryProvider):
    """Bulk backend: every configured word list unioned into one set."""

    name = "corpus"

    def __init__(self, resources: Mapping[str, str], base_dir: Optional[str] = None):
        super().__init__()
        self.resources = dict(resources)
        self.base_dir = base_dir
        self._load_lock = threading.Lock()
        self._load_future: Optional[Future] = None

    # ---------- loading ----------
    def _read_resource(self, location: str) -> Iterable[str]:
        if location.startswith(("http://", "https://")):
            resp = requests.get(location, timeout=30)
            resp.raise_for_status()
            return resp.text.splitlines()

        if location.startswith("nltk:"):
            corpus = getattr(nltk_corpus, location[len("nltk:"):])
            return corpus.words()

        path = location
        if self.base_dir and not os.path.isabs(path):
            path = os.path.join(self.base_dir, path)
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()

    def _load(self) -> FrozenSet[str]:
        combined = set()
        loaded = 0
        for name, location in self.resources.items():
            try:
                combined |= normalize_words(self._read_resource(location))
                loaded += 1
            except (OSError, ValueError, LookupError, AttributeError,
                    requests.RequestException) as e:
                logger.warning("Failed to load word list %s (%s): %s", name, location, e)

        logger.info(
            "Loaded %d words from %d/%d word list(s)", len(combined), loaded, len(self.resources)
        )
        return frozenset(combined)

    def words(self) -> FrozenSet[str]:
        """The WordSet. The first caller loads it; concurrent callers wait for that load."""
        with self._load_lock:
            future = self._load_future
            owner = future is None
            if owner:
                future = self._load_future = Future()

        if owner:
            try:
                future.set_result(self._load())
            except BaseException as exc:
                future.set_exception(exc)
                raise
        return future.result()

    preload = words

    def _lookup(self, token: str) -> bool:
        return token in self.words()


class RemoteDictionary(DictionaryProvider):
    """Per-word lookups against a dictionary service; any 2xx answer means 'known'."""

    name = "remote"

    def __init__(self, endpoint: str, session: Optional[requests.Session] = None,
                 timeout: float = 5.0):
        super().__init__()
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.timeout = timeout

    def _lookup(self, token: str) -> bool:
        url = self.endpoint.replace("{word}", quote(token))
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug("Lookup failed for %r: %s", token, e)
            return False
        if not resp.ok:
            logger.debug("Lookup for %r returned %s", token, resp.status_code)
        return resp.ok


def build_dictionary(settings: Settings) -> DictionaryProvider:
    if settings.dictionary == "corpus":
        return CorpusDictionary(settings.wordlists, base_dir=settings.assets_dir)
    if settings.dictionary == "remote":
        return RemoteDictionary(settings.lookup_url, timeout=settings.lookup_timeout)
    raise ValueError(f"Unknown dictionary backend: {settings.dictionary!r}")
