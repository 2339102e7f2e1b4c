import pytest

from railfence_tools.config import (
    ASSETS_DIR,
    DEFAULT_LOOKUP_URL,
    DEFAULT_WORDLISTS,
    ConfigError,
    Settings,
    parse_wordlists,
)


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings.dictionary == "corpus"
    assert settings.wordlists == DEFAULT_WORDLISTS
    assert settings.assets_dir == ASSETS_DIR
    assert settings.lookup_url == DEFAULT_LOOKUP_URL
    assert settings.max_checks == 30
    assert settings.workers == 1
    assert settings.log_level == "INFO"


def test_remote_backend_uses_smaller_budget():
    settings = Settings.from_env({"RAILFENCE_DICTIONARY": "Remote"})
    assert settings.dictionary == "remote"
    assert settings.max_checks == 15


def test_values_are_read_from_environment():
    settings = Settings.from_env({
        "RAILFENCE_DICTIONARY": "remote",
        "RAILFENCE_LOOKUP_URL": "https://words.test/{word}",
        "RAILFENCE_LOOKUP_TIMEOUT": "1.5",
        "RAILFENCE_MAX_CHECKS": "20",
        "RAILFENCE_WORKERS": "4",
        "RAILFENCE_LOG_LEVEL": "debug",
        "RAILFENCE_ASSETS_DIR": "/srv/lists",
    })
    assert settings.lookup_url == "https://words.test/{word}"
    assert settings.lookup_timeout == 1.5
    assert settings.max_checks == 20
    assert settings.workers == 4
    assert settings.log_level == "DEBUG"
    assert settings.assets_dir == "/srv/lists"


@pytest.mark.parametrize("raw,expected", [("5", 15), ("100", 30), ("22", 22)])
def test_max_checks_is_clamped(raw, expected):
    assert Settings.from_env({"RAILFENCE_MAX_CHECKS": raw}).max_checks == expected


def test_workers_never_below_one():
    assert Settings.from_env({"RAILFENCE_WORKERS": "0"}).workers == 1


@pytest.mark.parametrize("env", [
    {"RAILFENCE_DICTIONARY": "carrier-pigeon"},
    {"RAILFENCE_MAX_CHECKS": "lots"},
    {"RAILFENCE_LOOKUP_TIMEOUT": "soon"},
    {"RAILFENCE_LOOKUP_URL": "https://words.test/"},
    {"RAILFENCE_WORDLISTS": " , "},
])
def test_bad_values_raise_config_error(env):
    with pytest.raises(ConfigError):
        Settings.from_env(env)


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


def test_parse_wordlists_named_and_bare():
    parsed = parse_wordlists("nouns=lists/nouns.txt, https://example.org/dwyl.txt ,nltk=nltk:words")
    assert parsed == {
        "nouns": "lists/nouns.txt",
        "dwyl": "https://example.org/dwyl.txt",
        "nltk": "nltk:words",
    }


def test_wordlists_from_environment():
    settings = Settings.from_env({"RAILFENCE_WORDLISTS": "/tmp/a.txt"})
    assert settings.wordlists == {"a": "/tmp/a.txt"}
