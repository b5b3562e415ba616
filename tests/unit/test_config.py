"""
Unit tests for ServerConfig.
"""

import pytest

from textserver import ServerConfig


class TestDefaults:
    """Tests for the default configuration."""

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.files_root == "."
        assert config.default_file == "sample.txt"
        assert config.read_strategy == "lines"
        assert config.expose_error_details is False

    def test_defaults_validate(self):
        ServerConfig().validate()


class TestFromEnv:
    """Tests for ServerConfig.from_env()."""

    def test_empty_environment_gives_defaults(self):
        assert ServerConfig.from_env({}) == ServerConfig()

    def test_overrides(self):
        config = ServerConfig.from_env({
            "TEXTSERVER_HOST": "0.0.0.0",
            "TEXTSERVER_PORT": "9000",
            "TEXTSERVER_WORKERS": "2",
            "TEXTSERVER_TIMEOUT": "12.5",
            "TEXTSERVER_LOG_LEVEL": "debug",
            "TEXTSERVER_LOG_FORMAT": "JSON",
            "TEXTSERVER_FILES_ROOT": "/srv/notes",
            "TEXTSERVER_DEFAULT_FILE": "index.txt",
            "TEXTSERVER_READ_STRATEGY": "generic",
            "TEXTSERVER_ENCODING": "latin-1",
            "TEXTSERVER_EXPOSE_ERRORS": "yes",
        })

        assert config.host == "0.0.0.0"
        assert config.port == 9000
        assert config.max_workers == 2
        assert config.min_workers == 2  # clamped to max_workers
        assert config.timeout == 12.5
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.files_root == "/srv/notes"
        assert config.default_file == "index.txt"
        assert config.read_strategy == "generic"
        assert config.encoding == "latin-1"
        assert config.expose_error_details is True
        config.validate()

    @pytest.mark.parametrize("value, expected", [
        ("1", True), ("true", True), ("ON", True),
        ("0", False), ("no", False), ("", False),
    ])
    def test_expose_errors_flag(self, value, expected):
        config = ServerConfig.from_env({"TEXTSERVER_EXPOSE_ERRORS": value})
        assert config.expose_error_details is expected

    def test_bad_number(self):
        with pytest.raises(ValueError):
            ServerConfig.from_env({"TEXTSERVER_PORT": "http"})


class TestValidate:
    """Tests for ServerConfig.validate()."""

    @pytest.mark.parametrize("overrides, message", [
        ({"port": -1}, "Invalid port"),
        ({"port": 70000}, "Invalid port"),
        ({"min_workers": 0}, "min_workers"),
        ({"min_workers": 8, "max_workers": 4}, "max_workers"),
        ({"buffer_size": 10}, "buffer_size"),
        ({"timeout": 0}, "timeout"),
        ({"keep_alive_timeout": -1.0}, "keep_alive_timeout"),
        ({"log_level": "LOUD"}, "log_level"),
        ({"log_format": "xml"}, "log_format"),
        ({"read_strategy": "mmap"}, "read_strategy"),
        ({"default_file": "  "}, "default_file"),
        ({"encoding": "no-such-codec"}, "Unknown encoding"),
    ])
    def test_rejects(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            ServerConfig(**overrides).validate()

    def test_port_zero_allowed(self):
        ServerConfig(port=0).validate()

    def test_no_timeout_allowed(self):
        ServerConfig(timeout=None).validate()
