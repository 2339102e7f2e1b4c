import threading
import time

import pytest
import requests

from railfence_tools.dictionary import CorpusDictionary, DictionaryProvider
from railfence_tools.scoring import LexicalScorer

WORDS = ["hello", "world", "this", "test", "message", "the", "and",
         "are", "discovered", "flee", "once"]


@pytest.fixture
def make_corpus(tmp_path):
    def _make(words, name="words.txt"):
        path = tmp_path / name
        path.write_text("\n".join(words), encoding="utf-8")
        return CorpusDictionary({path.stem: str(path)})
    return _make


@pytest.fixture
def corpus(make_corpus):
    return make_corpus(WORDS)


@pytest.fixture
def scorer(corpus):
    return LexicalScorer(corpus)


class CountingDictionary(DictionaryProvider):
    """In-memory dictionary that records every backend lookup."""

    name = "counting"

    def __init__(self, words=(), delay=0.0):
        super().__init__()
        self.words = set(words)
        self.delay = delay
        self.lookups = []
        self._calls_lock = threading.Lock()

    def _lookup(self, token):
        with self._calls_lock:
            self.lookups.append(token)
        if self.delay:
            time.sleep(self.delay)
        return token in self.words


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400


class FakeSession:
    """Stands in for requests.Session: known words answer 200, others 404."""

    def __init__(self, known=(), fail=(), delay=0.0):
        self.known = set(known)
        self.fail = set(fail)
        self.delay = delay
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        if self.delay:
            time.sleep(self.delay)
        word = url.rsplit("/", 1)[1]
        if word in self.fail:
            raise requests.ConnectionError(f"cannot reach {url}")
        return FakeResponse(200 if word in self.known else 404)


@pytest.fixture
def counting_dictionary():
    return CountingDictionary(WORDS)


@pytest.fixture
def fake_session():
    return FakeSession(known=WORDS, fail={"boom"})
