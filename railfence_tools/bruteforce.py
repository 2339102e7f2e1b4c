"""
Rail fence brute force attack.

Every rail count from 2 up to len(ciphertext) - 1 (or a caller-supplied cap)
is tried; each candidate plaintext is scored and the attempts are returned
ranked, together with the best guess.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Callable, List, NamedTuple, Optional

from railfence_tools.config import Settings
from railfence_tools.dictionary import build_dictionary
from railfence_tools.railfence import decrypt
from railfence_tools.scoring import LexicalScorer

logger = logging.getLogger(__name__)


class Attempt(NamedTuple):
    rails: int
    plaintext: str
    score: float


class AttackResult(NamedTuple):
    best: Optional[Attempt]
    attempts: List[Attempt]

    def as_dict(self, top: Optional[int] = None) -> dict:
        shown = self.attempts if top is None else self.attempts[:top]
        return {
            "best": self.best._asdict() if self.best else None,
            "attempts": [a._asdict() for a in shown],
            "total": len(self.attempts),
        }


def rail_limit(length: int, max_rails: Optional[int] = None) -> int:
    """Highest rail count to try: the caller's cap, never above len-1, never below 2."""
    return min(max(2, max_rails or length - 1), max(length - 1, 2))


class BruteForceEngine:
    def __init__(self, scorer: Callable[[str], float], workers: int = 1):
        self.scorer = scorer
        self.workers = max(1, workers)

    def _evaluate(self, ciphertext: str, rails: int) -> Attempt:
        plaintext = decrypt(ciphertext, rails)
        return Attempt(rails, plaintext, self.scorer(plaintext))

    def _sequential(self, ciphertext, rail_range, cancel):
        for rails in rail_range:
            if cancel is not None and cancel.is_set():
                return
            yield self._evaluate(ciphertext, rails)

    def _parallel(self, ciphertext, rail_range, cancel):
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            futures = [pool.submit(self._evaluate, ciphertext, r) for r in rail_range]
            try:
                # consumed in submission order, so ranking never depends on completion order
                for fut in futures:
                    if cancel is not None and cancel.is_set():
                        return
                    yield fut.result()
            finally:
                for fut in futures:
                    fut.cancel()

    def attack(self, ciphertext: str, max_rails: Optional[int] = None,
               cancel: Optional[threading.Event] = None) -> AttackResult:
        limit = rail_limit(len(ciphertext), max_rails)
        rail_range = range(2, limit + 1)

        if self.workers > 1 and len(rail_range) > 1:
            results = self._parallel(ciphertext, rail_range, cancel)
        else:
            results = self._sequential(ciphertext, rail_range, cancel)

        attempts = []
        best = None
        for attempt in results:
            attempts.append(attempt)
            logger.debug("rails=%d score=%.2f", attempt.rails, attempt.score)
            if best is None or attempt.score > best.score:
                best = attempt

        if len(attempts) < len(rail_range):
            logger.info("Attack cancelled after %d of %d rail counts", len(attempts), len(rail_range))

        # Sort by score (descending); stable, so equal scores keep ascending rails
        attempts.sort(key=lambda a: a.score, reverse=True)

        return AttackResult(best, attempts)


@lru_cache(maxsize=None)
def default_scorer() -> LexicalScorer:
    """Process-wide scorer built once from the environment settings."""
    settings = Settings.from_env()
    return LexicalScorer(build_dictionary(settings), max_checks=settings.max_checks)


def attack(ciphertext: str, max_rails: Optional[int] = None,
           scorer: Optional[Callable[[str], float]] = None) -> AttackResult:
    return BruteForceEngine(scorer or default_scorer()).attack(ciphertext, max_rails)
