import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ASSETS_DIR = os.path.join(BASE_DIR, "assets")

BACKENDS = ("corpus", "remote")

# Bundled word lists, by category
DEFAULT_WORDLISTS = {
    "words": "words.txt",
    "nouns": "nouns.txt",
    "verbs": "verbs.txt",
    "adjs": "adjs.txt",
    "advs": "advs.txt",
    "adps": "adps.txt",
    "conjs": "conjs.txt",
    "dets": "dets.txt",
    "nums": "nums.txt",
    "prons": "prons.txt",
    "prts": "prts.txt",
}

DEFAULT_LOOKUP_URL = "https://api.dictionaryapi.dev/api/v2/entries/en/{word}"

MIN_CHECKS, MAX_CHECKS = 15, 30
DEFAULT_MAX_CHECKS = {"corpus": 30, "remote": 15}


class ConfigError(ValueError):
    pass


def parse_wordlists(raw: str) -> Dict[str, str]:
    """
    'nouns=nouns.txt, https://example.org/words.txt' ->
    {'nouns': 'nouns.txt', 'words': 'https://example.org/words.txt'}
    A bare location is named after its file stem.
    """
    out = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        if "=" in item:
            name, location = (part.strip() for part in item.split("=", 1))
        else:
            location = item
            name = os.path.splitext(os.path.basename(location.rstrip("/")))[0] or location
        if not name or not location:
            raise ConfigError(f"Bad word list entry: {item!r}")
        out[name] = location
    if not out:
        raise ConfigError("RAILFENCE_WORDLISTS is set but names no word lists.")
    return out


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    dictionary: str = "corpus"
    wordlists: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_WORDLISTS))
    assets_dir: str = ASSETS_DIR
    lookup_url: str = DEFAULT_LOOKUP_URL
    lookup_timeout: float = 5.0
    max_checks: int = DEFAULT_MAX_CHECKS["corpus"]
    workers: int = 1
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        backend = (env.get("RAILFENCE_DICTIONARY") or "corpus").strip().lower()
        if backend not in BACKENDS:
            raise ConfigError(
                f"RAILFENCE_DICTIONARY must be one of {', '.join(BACKENDS)}, got {backend!r}"
            )

        raw_lists = env.get("RAILFENCE_WORDLISTS")
        wordlists = parse_wordlists(raw_lists) if raw_lists else dict(DEFAULT_WORDLISTS)

        url = env.get("RAILFENCE_LOOKUP_URL") or DEFAULT_LOOKUP_URL
        if "{word}" not in url:
            raise ConfigError("RAILFENCE_LOOKUP_URL needs a {word} placeholder.")

        # budget is clamped into the 15..30 band
        checks = _int(env, "RAILFENCE_MAX_CHECKS", DEFAULT_MAX_CHECKS[backend])
        checks = max(MIN_CHECKS, min(MAX_CHECKS, checks))

        return cls(
            dictionary=backend,
            wordlists=wordlists,
            assets_dir=env.get("RAILFENCE_ASSETS_DIR") or ASSETS_DIR,
            lookup_url=url,
            lookup_timeout=_float(env, "RAILFENCE_LOOKUP_TIMEOUT", 5.0),
            max_checks=checks,
            workers=max(1, _int(env, "RAILFENCE_WORKERS", 1)),
            log_level=(env.get("RAILFENCE_LOG_LEVEL") or "INFO").strip().upper(),
        )
