"""Tests for settings validation and the startup security checks."""

import pytest
from pydantic import ValidationError

from garage.core.config import ConfigurationError, Environment, Settings, StorageBackend


class TestSettings:

    def test_defaults(self):
        s = Settings(_env_file=None, storage_backend="memory", upload_dir="uploads")
        assert s.storage_backend == StorageBackend.MEMORY
        assert s.max_upload_bytes == 100 * 1024 * 1024
        assert s.default_username == "admin"
        assert s.default_role == "road_captain"

    def test_log_level_is_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_invalid_default_role_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_role="mechanic")

    def test_upload_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_upload_bytes=0)


class TestCorsOrigins:

    def test_comma_separated_origins(self):
        s = Settings(_env_file=None, cors_allowed_origins="https://a.example, https://b.example")
        assert s.get_cors_origins() == ["https://a.example", "https://b.example"]

    def test_wildcard_rejected(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, cors_allowed_origins="*").get_cors_origins()


class TestProductionConfig:

    def test_development_tolerates_defaults(self):
        Settings(_env_file=None, environment=Environment.DEVELOPMENT).validate_production_config()

    def test_production_rejects_placeholder_password(self):
        s = Settings(
            _env_file=None,
            environment=Environment.PRODUCTION,
            cors_allowed_origins="https://garage.example",
        )
        with pytest.raises(ConfigurationError, match="DEFAULT_PASSWORD"):
            s.validate_production_config()

    def test_production_rejects_localhost_cors(self):
        s = Settings(
            _env_file=None,
            environment=Environment.PRODUCTION,
            default_password="a-real-secret",
            cors_allowed_origins="http://localhost:5173",
        )
        with pytest.raises(ConfigurationError, match="localhost"):
            s.validate_production_config()

    def test_production_accepts_real_config(self):
        Settings(
            _env_file=None,
            environment=Environment.PRODUCTION,
            default_password="a-real-secret",
            cors_allowed_origins="https://garage.example",
        ).validate_production_config()
