"""
Configuration for the Medico-Legal Document Service

Configuration is:
    1. Loaded from environment variables (with .env support)
    2. Validated at startup to fail fast on misconfiguration
    3. Read once; the provider and storage medium are fixed for the
       lifetime of a DocumentService

Configuration Hierarchy:
    ServiceConfiguration
    ├── Provider Settings (provider type, simulated latency)
    ├── Storage Settings (backend, directory, key, quota)
    └── Catalog / Logging Settings

Usage:
    from emergency_mind.core.config import ServiceConfiguration

    config = ServiceConfiguration.from_environment()

    # Or configure programmatically
    config = ServiceConfiguration(storage_backend=StorageBackend.FILE,
                                  storage_directory="/var/lib/emergency-mind")

Author: Emergency-Mind Team
Date: October 2026
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from emergency_mind.core.constants import STORAGE_KEY
from emergency_mind.core.enums import ProviderType, StorageBackend
from emergency_mind.core.exceptions import ConfigurationError


# =============================================================================
# STAGE 1: DEFAULT VALUES
# =============================================================================


class ConfigDefaults:
    """Default configuration values."""

    # -------------------------------------------------------------------------
    # 1.1 Provider Defaults
    # -------------------------------------------------------------------------
    DEFAULT_PROVIDER = ProviderType.TEMPLATE
    DEFAULT_SIMULATE_LATENCY = False
    DEFAULT_LATENCY_MIN_SECONDS = 1.0
    DEFAULT_LATENCY_MAX_SECONDS = 3.0

    # -------------------------------------------------------------------------
    # 1.2 Storage Defaults
    # -------------------------------------------------------------------------
    DEFAULT_STORAGE_BACKEND = StorageBackend.MEMORY
    DEFAULT_STORAGE_DIRECTORY = ".emergency_mind"
    DEFAULT_STORAGE_KEY = STORAGE_KEY
    DEFAULT_STORAGE_QUOTA_BYTES = 5 * 1024 * 1024  # browser local storage budget

    # -------------------------------------------------------------------------
    # 1.3 Misc Defaults
    # -------------------------------------------------------------------------
    DEFAULT_STRICT_CATALOG_CHECK = False
    DEFAULT_LOG_LEVEL = "INFO"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_optional_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    if value.strip().lower() in {"none", "unlimited"}:
        return None
    return int(value)


# =============================================================================
# STAGE 2: CONFIGURATION DATACLASS
# =============================================================================


@dataclass
class ServiceConfiguration:
    """
    Configuration for the document service.

    What it does:
        Encapsulates every setting needed to wire the validator, dispatcher,
        provider, and report store together.

    Example:
        >>> config = ServiceConfiguration.from_environment()
        >>> config.storage_backend
        <StorageBackend.MEMORY: 'memory'>
    """

    # -------------------------------------------------------------------------
    # 2.1 Provider Configuration
    # -------------------------------------------------------------------------
    provider: ProviderType = ConfigDefaults.DEFAULT_PROVIDER
    """Which document provider renders text."""

    simulate_latency: bool = ConfigDefaults.DEFAULT_SIMULATE_LATENCY
    """Wrap the provider with an artificial delay (demo mode)."""

    latency_min_seconds: float = ConfigDefaults.DEFAULT_LATENCY_MIN_SECONDS
    """Lower bound of the simulated delay."""

    latency_max_seconds: float = ConfigDefaults.DEFAULT_LATENCY_MAX_SECONDS
    """Upper bound of the simulated delay."""

    # -------------------------------------------------------------------------
    # 2.2 Storage Configuration
    # -------------------------------------------------------------------------
    storage_backend: StorageBackend = ConfigDefaults.DEFAULT_STORAGE_BACKEND
    """Key-value medium for reports."""

    storage_directory: str = ConfigDefaults.DEFAULT_STORAGE_DIRECTORY
    """Directory for the file backend."""

    storage_key: str = ConfigDefaults.DEFAULT_STORAGE_KEY
    """Key holding the serialized report collection."""

    storage_quota_bytes: Optional[int] = ConfigDefaults.DEFAULT_STORAGE_QUOTA_BYTES
    """Capacity of the medium in bytes; None for unlimited."""

    # -------------------------------------------------------------------------
    # 2.3 Catalog and Logging
    # -------------------------------------------------------------------------
    strict_catalog_check: bool = ConfigDefaults.DEFAULT_STRICT_CATALOG_CHECK
    """Fail at startup if the catalog exposes services the validator rejects."""

    log_level: str = ConfigDefaults.DEFAULT_LOG_LEVEL
    """Loguru level for the CLI sink."""

    # -------------------------------------------------------------------------
    # 2.4 Validation Methods
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.latency_min_seconds < 0 or self.latency_max_seconds < 0:
            raise ConfigurationError(
                "Latency bounds must be non-negative",
                context={"min": self.latency_min_seconds, "max": self.latency_max_seconds},
            )

        if self.latency_min_seconds > self.latency_max_seconds:
            raise ConfigurationError(
                f"Invalid latency range: min={self.latency_min_seconds}, "
                f"max={self.latency_max_seconds}",
                context={"min": self.latency_min_seconds, "max": self.latency_max_seconds},
            )

        if not self.storage_key:
            raise ConfigurationError(
                "Storage key must not be empty", context={"setting": "EM_STORAGE_KEY"}
            )

        if self.storage_quota_bytes is not None and self.storage_quota_bytes <= 0:
            raise ConfigurationError(
                f"Storage quota must be positive, got {self.storage_quota_bytes}",
                context={"setting": "EM_STORAGE_QUOTA_BYTES"},
            )

        if self.storage_backend == StorageBackend.FILE and not self.storage_directory:
            raise ConfigurationError(
                "File storage requires a directory",
                context={"setting": "EM_STORAGE_DIRECTORY"},
            )

    # -------------------------------------------------------------------------
    # 2.5 Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_environment(
        cls, env_file: Optional[str] = None, validate_on_load: bool = True
    ) -> "ServiceConfiguration":
        """
        Load configuration from environment variables.

        STAGE 1: Load .env file (if specified or found)
        STAGE 2: Read and convert environment variables
        STAGE 3: Validate configuration (optional)

        Args:
            env_file: Path to .env file (optional, auto-detected if not provided)
            validate_on_load: Whether to validate after loading

        Raises:
            ConfigurationError: If a setting cannot be parsed or is invalid
        """
        # STAGE 1: Load .env file
        if env_file:
            load_dotenv(env_file)
        else:
            possible_locations = [
                Path.cwd() / ".env",
                Path(__file__).parent.parent / ".env",
            ]
            for location in possible_locations:
                if location.exists():
                    load_dotenv(location)
                    break

        # STAGE 2: Read environment variables
        try:
            config = cls(
                provider=ProviderType(
                    os.getenv("EM_PROVIDER", ConfigDefaults.DEFAULT_PROVIDER.value).lower()
                ),
                simulate_latency=_env_bool(
                    "EM_SIMULATE_LATENCY", ConfigDefaults.DEFAULT_SIMULATE_LATENCY
                ),
                latency_min_seconds=float(
                    os.getenv("EM_LATENCY_MIN_SECONDS", ConfigDefaults.DEFAULT_LATENCY_MIN_SECONDS)
                ),
                latency_max_seconds=float(
                    os.getenv("EM_LATENCY_MAX_SECONDS", ConfigDefaults.DEFAULT_LATENCY_MAX_SECONDS)
                ),
                storage_backend=StorageBackend(
                    os.getenv(
                        "EM_STORAGE_BACKEND", ConfigDefaults.DEFAULT_STORAGE_BACKEND.value
                    ).lower()
                ),
                storage_directory=os.getenv(
                    "EM_STORAGE_DIRECTORY", ConfigDefaults.DEFAULT_STORAGE_DIRECTORY
                ),
                storage_key=os.getenv("EM_STORAGE_KEY", ConfigDefaults.DEFAULT_STORAGE_KEY),
                storage_quota_bytes=_env_optional_int(
                    "EM_STORAGE_QUOTA_BYTES", ConfigDefaults.DEFAULT_STORAGE_QUOTA_BYTES
                ),
                strict_catalog_check=_env_bool(
                    "EM_STRICT_CATALOG_CHECK", ConfigDefaults.DEFAULT_STRICT_CATALOG_CHECK
                ),
                log_level=os.getenv("EM_LOG_LEVEL", ConfigDefaults.DEFAULT_LOG_LEVEL).upper(),
            )
        except ValueError as e:
            raise ConfigurationError(
                "Invalid environment configuration", context={"error": str(e)}
            ) from e

        # STAGE 3: Validate
        if validate_on_load:
            config.validate()

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary (for logging/debugging)."""
        return {
            "provider": self.provider.value,
            "simulate_latency": self.simulate_latency,
            "latency_min_seconds": self.latency_min_seconds,
            "latency_max_seconds": self.latency_max_seconds,
            "storage_backend": self.storage_backend.value,
            "storage_directory": self.storage_directory,
            "storage_key": self.storage_key,
            "storage_quota_bytes": self.storage_quota_bytes,
            "strict_catalog_check": self.strict_catalog_check,
            "log_level": self.log_level,
        }
