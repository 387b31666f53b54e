"""
Unit Tests for ServiceConfiguration

Environment parsing, defaults, and fail-fast validation.
"""

import pytest

from emergency_mind.core.config import ConfigDefaults, ServiceConfiguration
from emergency_mind.core.enums import ProviderType, StorageBackend
from emergency_mind.core.exceptions import ConfigurationError


ENV_VARS = [
    "EM_PROVIDER",
    "EM_SIMULATE_LATENCY",
    "EM_LATENCY_MIN_SECONDS",
    "EM_LATENCY_MAX_SECONDS",
    "EM_STORAGE_BACKEND",
    "EM_STORAGE_DIRECTORY",
    "EM_STORAGE_KEY",
    "EM_STORAGE_QUOTA_BYTES",
    "EM_STRICT_CATALOG_CHECK",
    "EM_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown also removes values loaded from .env files
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestDefaults:
    def test_from_empty_environment(self):
        config = ServiceConfiguration.from_environment()

        assert config.provider == ProviderType.TEMPLATE
        assert config.simulate_latency is False
        assert config.storage_backend == StorageBackend.MEMORY
        assert config.storage_key == "emergency-mind-reports"
        assert config.storage_quota_bytes == 5 * 1024 * 1024
        assert config.log_level == "INFO"

    def test_dataclass_defaults_match(self):
        assert ServiceConfiguration().latency_max_seconds == ConfigDefaults.DEFAULT_LATENCY_MAX_SECONDS


class TestEnvironmentParsing:
    def test_reads_all_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EM_SIMULATE_LATENCY", "yes")
        monkeypatch.setenv("EM_LATENCY_MIN_SECONDS", "0.5")
        monkeypatch.setenv("EM_LATENCY_MAX_SECONDS", "2")
        monkeypatch.setenv("EM_STORAGE_BACKEND", "FILE")
        monkeypatch.setenv("EM_STORAGE_DIRECTORY", str(tmp_path))
        monkeypatch.setenv("EM_STORAGE_KEY", "custom-key")
        monkeypatch.setenv("EM_STORAGE_QUOTA_BYTES", "unlimited")
        monkeypatch.setenv("EM_STRICT_CATALOG_CHECK", "true")
        monkeypatch.setenv("EM_LOG_LEVEL", "debug")

        config = ServiceConfiguration.from_environment()

        assert config.simulate_latency is True
        assert config.latency_min_seconds == 0.5
        assert config.latency_max_seconds == 2.0
        assert config.storage_backend == StorageBackend.FILE
        assert config.storage_directory == str(tmp_path)
        assert config.storage_key == "custom-key"
        assert config.storage_quota_bytes is None
        assert config.strict_catalog_check is True
        assert config.log_level == "DEBUG"

    def test_env_file_loaded(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("EM_STORAGE_KEY=from-dotenv\n")

        config = ServiceConfiguration.from_environment(env_file=str(env_file))

        assert config.storage_key == "from-dotenv"

    @pytest.mark.parametrize(
        "name, value",
        [
            ("EM_PROVIDER", "gemini"),
            ("EM_STORAGE_BACKEND", "redis"),
            ("EM_LATENCY_MIN_SECONDS", "fast"),
            ("EM_STORAGE_QUOTA_BYTES", "lots"),
        ],
    )
    def test_unparseable_value_is_configuration_error(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigurationError):
            ServiceConfiguration.from_environment()


class TestValidate:
    def test_inverted_latency_range(self):
        with pytest.raises(ConfigurationError):
            ServiceConfiguration(latency_min_seconds=3.0, latency_max_seconds=1.0).validate()

    def test_negative_latency(self):
        with pytest.raises(ConfigurationError):
            ServiceConfiguration(latency_min_seconds=-1.0).validate()

    def test_empty_storage_key(self):
        with pytest.raises(ConfigurationError):
            ServiceConfiguration(storage_key="").validate()

    def test_non_positive_quota(self):
        with pytest.raises(ConfigurationError):
            ServiceConfiguration(storage_quota_bytes=0).validate()

    def test_file_backend_needs_directory(self):
        with pytest.raises(ConfigurationError):
            ServiceConfiguration(storage_backend=StorageBackend.FILE, storage_directory="").validate()

    def test_validation_can_be_deferred(self, monkeypatch):
        monkeypatch.setenv("EM_LATENCY_MIN_SECONDS", "5")
        config = ServiceConfiguration.from_environment(validate_on_load=False)
        assert config.latency_min_seconds == 5.0

    def test_to_dict_uses_plain_values(self):
        data = ServiceConfiguration().to_dict()
        assert data["provider"] == "template"
        assert data["storage_backend"] == "memory"
