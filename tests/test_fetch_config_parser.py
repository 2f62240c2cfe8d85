import pytest

from pagewalk.domain.retry_policy import ExhaustionMode
from pagewalk.exceptions import ConfigError
from pagewalk.services.fetch_config_parser import FetchConfigParser


def test_parse_requires_search_section():
    parser = FetchConfigParser()
    cfg = parser.parse(config_path="configs/x.yml", data={"name": "x"})
    assert cfg is None


def test_parse_requires_base_url():
    parser = FetchConfigParser()
    cfg = parser.parse(config_path="x.yml", data={"search": {"query_param": "q"}})
    assert cfg is None


def test_parse_uses_basename_for_default_name():
    parser = FetchConfigParser()
    cfg = parser.parse(
        config_path="/tmp/some/nested/books.yml",
        data={"search": {"base_url": "https://api.example.com/search"}},
    )
    assert cfg is not None
    assert cfg.name == "books"
    assert cfg.query_param == "q"
    assert cfg.max_pages is None


def test_parse_full_config():
    parser = FetchConfigParser()
    data = {
        "name": "example-search",
        "search": {"base_url": "https://api.example.com/search", "query_param": "term"},
        "max_pages": 10,
        "retry": {
            "max_attempts": 4,
            "on_exhausted": "stop",
            "backoff": {"initial_delay": 0.25, "multiplier": 3, "max_delay": 10},
        },
    }
    cfg = parser.parse(config_path="test.yml", data=data)
    assert cfg.name == "example-search"
    assert cfg.query_param == "term"
    assert cfg.max_pages == 10
    policy = cfg.retry_policy
    assert policy.max_attempts == 4
    assert policy.on_exhausted is ExhaustionMode.STOP
    assert policy.initial_delay == 0.25
    assert policy.multiplier == 3.0
    assert policy.max_delay == 10.0


def test_parse_missing_retry_keys_fall_back_to_environment(monkeypatch):
    monkeypatch.setenv("PAGEWALK_MAX_ATTEMPTS", "6")
    monkeypatch.setenv("PAGEWALK_BACKOFF_INITIAL", "2")
    parser = FetchConfigParser()
    cfg = parser.parse(
        config_path="test.yml",
        data={"search": {"base_url": "https://api.example.com/search"}, "retry": {"on_exhausted": "stop"}},
    )
    assert cfg.retry_policy.max_attempts == 6
    assert cfg.retry_policy.initial_delay == 2.0
    assert cfg.retry_policy.on_exhausted is ExhaustionMode.STOP


@pytest.mark.parametrize(
    "data",
    [
        {"retry": {"max_attempts": 0}},
        {"retry": {"max_attempts": "lots"}},
        {"retry": {"max_attempts": True}},
        {"retry": {"on_exhausted": "explode"}},
        {"retry": {"backoff": {"multiplier": 0.5}}},
        {"retry": {"backoff": "fast"}},
        {"retry": ["max_attempts"]},
        {"max_pages": 0},
    ],
)
def test_parse_rejects_invalid_values(data):
    parser = FetchConfigParser()
    data = dict(data, search={"base_url": "https://api.example.com/search"})
    with pytest.raises(ConfigError) as excinfo:
        parser.parse(config_path="bad.yml", data=data)
    assert excinfo.value.config_path == "bad.yml"
