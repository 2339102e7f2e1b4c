import re
from typing import List

from railfence_tools.dictionary import DictionaryProvider, MIN_WORD_LEN

# Common words get higher weight in scoring
COMMON_WORD_WEIGHT = {
    "the": 6, "and": 6, "hello": 6,
    "for": 5, "are": 5, "you": 5, "this": 5, "that": 5,
    "with": 5, "meet": 5, "world": 5,
    "was": 4, "have": 4,
}

MAX_SUBSTRING_LEN = 8
MAX_SUBSTRINGS = 15
DEFAULT_MAX_CHECKS = 30

COVERAGE_WEIGHT = 5.0
SPACING_WEIGHT = 0.2
ZERO_HIT_PENALTY = -10.0

_NON_LETTER = re.compile(r"[^a-z\s]")


def extract_words(text: str) -> List[str]:
    """Lower-cased letter runs of length >= 3; everything else acts as a separator."""
    return [w for w in _NON_LETTER.sub(" ", text.lower()).split() if len(w) >= MIN_WORD_LEN]


def extract_substrings(words: List[str], max_count: int = MAX_SUBSTRINGS) -> List[str]:
    """
    Substrings of length 8 down to 3 (longest first, left to right), to catch
    words the transposition glued together. Stops after `max_count` in total.
    """
    substrings = []
    if max_count <= 0:
        return substrings
    for word in words:
        for size in range(min(MAX_SUBSTRING_LEN, len(word)), MIN_WORD_LEN - 1, -1):
            for i in range(len(word) - size + 1):
                substrings.append(word[i:i + size])
                if len(substrings) >= max_count:
                    return substrings
    return substrings


def word_weight(word: str) -> int:
    return COMMON_WORD_WEIGHT.get(word, 1)


class LexicalScorer:
    """
    Rates how English-like a candidate plaintext is by looking its words
    (and, failing clean word breaks, its substrings) up in a dictionary.

    At most `max_checks` lookups are spent per call; full words first.
    """

    def __init__(self, dictionary: DictionaryProvider, max_checks: int = DEFAULT_MAX_CHECKS,
                 max_substrings: int = MAX_SUBSTRINGS):
        self.dictionary = dictionary
        self.max_checks = max_checks
        self.max_substrings = max_substrings

    def score(self, text: str) -> float:
        if not text:
            return 0.0

        words = extract_words(text)
        candidates = words + extract_substrings(words, self.max_substrings)

        hits = 0
        weighted = 0
        checked = 0
        for item in candidates[:self.max_checks]:
            if self.dictionary.contains(item):
                hits += 1
                weighted += word_weight(item) * max(len(item), MIN_WORD_LEN)
            checked += 1

        spacing = sum(1 for ch in text if ch.isspace())
        coverage = (hits / checked) * COVERAGE_WEIGHT if checked else 0.0
        penalty = ZERO_HIT_PENALTY if hits == 0 else 0.0

        return weighted + coverage + spacing * SPACING_WEIGHT + penalty

    __call__ = score
