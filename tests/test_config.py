"""Tests for roster.config module."""

import json

from roster.config import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SAVE_DELAY,
    RosterConfig,
    load_config,
    validate_backend_url,
)


def write_config(home, data):
    (home / "config.json").write_text(json.dumps(data))


class TestValidateBackendUrl:
    def test_https_passes(self):
        assert validate_backend_url("https://saves.example.com") == "https://saves.example.com"

    def test_local_http_passes(self):
        assert validate_backend_url("http://localhost:8000") == "http://localhost:8000"
        assert validate_backend_url("http://127.0.0.1:8000") == "http://127.0.0.1:8000"

    def test_remote_http_rejected(self):
        assert validate_backend_url("http://saves.example.com") is None

    def test_local_http_rejected_when_disallowed(self):
        assert validate_backend_url("http://localhost", allow_localhost_http=False) is None

    def test_bad_scheme_and_missing_host(self):
        assert validate_backend_url("ftp://saves.example.com") is None
        assert validate_backend_url("https://") is None
        assert validate_backend_url("") is None

    def test_plaintext_host_match_is_exact(self):
        assert validate_backend_url("http://LOCALHOST:8000") == "http://LOCALHOST:8000"
        assert validate_backend_url("http://localhost.example.com") is None
        assert validate_backend_url("http://user@127.0.0.1.example.com") is None


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()
        assert config == RosterConfig()
        assert config.save_delay == DEFAULT_SAVE_DELAY
        assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT
        assert not config.has_backend

    def test_reads_file(self, roster_home):
        write_config(
            roster_home,
            {"backend_url": "https://saves.example.com/", "language": "de", "save_delay": 1},
        )
        config = load_config()
        assert config.backend_url == "https://saves.example.com"
        assert config.language == "de"
        assert config.save_delay == 1.0
        assert config.has_backend

    def test_env_overrides_file(self, roster_home, monkeypatch):
        write_config(roster_home, {"language": "de", "save_delay": 1})
        monkeypatch.setenv("ROSTER_LANGUAGE", "fr")
        monkeypatch.setenv("ROSTER_SAVE_DELAY", "0.5")
        monkeypatch.setenv("ROSTER_AUTH_TOKEN", "secret")
        config = load_config()
        assert config.language == "fr"
        assert config.save_delay == 0.5
        assert config.auth_token == "secret"

    def test_insecure_url_dropped(self, monkeypatch):
        monkeypatch.setenv("ROSTER_BACKEND_URL", "http://saves.example.com")
        assert load_config().backend_url is None

    def test_invalid_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv("ROSTER_SAVE_DELAY", "soon")
        monkeypatch.setenv("ROSTER_REQUEST_TIMEOUT", "-3")
        config = load_config()
        assert config.save_delay == DEFAULT_SAVE_DELAY
        assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT

    def test_unreadable_file_ignored(self, roster_home):
        (roster_home / "config.json").write_text("{not json")
        assert load_config() == RosterConfig()

    def test_non_object_file_ignored(self, roster_home):
        write_config(roster_home, ["https://saves.example.com"])
        assert load_config() == RosterConfig()
