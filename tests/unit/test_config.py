"""Tests for configuration and the error types."""

from strata.core.config import Settings, get_logger
from strata.core.errors import (
    BackendFailure,
    PartialWriteFailure,
    StoreError,
    UnsupportedOperation,
)


class TestSettings:
    """Tests for Settings."""

    def test_env_prefix(self, monkeypatch, temp_data_dir):
        monkeypatch.setenv("STRATA_BASE_URL", "https://other.example.test")
        monkeypatch.setenv("STRATA_CACHE_DIR", str(temp_data_dir))
        monkeypatch.setenv("STRATA_HTTP_TIMEOUT", "2.5")

        config = Settings()

        assert config.base_url == "https://other.example.test"
        assert config.cache_dir == temp_data_dir
        assert config.http_timeout == 2.5
        assert config.log_sink_ref == "log"

    def test_ensure_directories(self, temp_data_dir):
        config = Settings(cache_dir=temp_data_dir / "nested" / "cache")

        config.ensure_directories()

        assert (temp_data_dir / "nested" / "cache").is_dir()

    def test_logger_namespace(self):
        assert get_logger("storage.disk").name == "strata.storage.disk"


class TestErrors:
    """Tests for the error hierarchy."""

    def test_hierarchy(self):
        for error_type in (UnsupportedOperation, BackendFailure, PartialWriteFailure):
            assert issubclass(error_type, StoreError)

    def test_unsupported_operation_message(self):
        error = UnsupportedOperation("put", "HttpStore", ref="todos/1")

        assert str(error) == "HttpStore does not support put"
        assert error.operation == "put"
        assert error.ref == "todos/1"

    def test_tagging(self):
        error = BackendFailure("boom", ref="a")

        assert error.tag("cache") is error
        assert error.layer == "cache"
        assert str(error) == "[cache] boom"

    def test_partial_write_keeps_cause(self):
        cause = BackendFailure("refused", ref="a", layer="source")
        error = PartialWriteFailure("a", cause)

        assert error.cause is cause
        assert error.layer == "source"
        assert "refused" in str(error)
