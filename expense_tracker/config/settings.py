"""
Configuration settings for the expense tracker.

This module provides centralized configuration management
with environment variable support and validation.
"""

import os
from typing import Optional, Dict, Any


class Settings:
    """
    Configuration settings for the expense tracker.

    Supports environment variables and provides sensible defaults.
    """

    def __init__(self):
        """Initialize settings from environment variables."""
        # Server configuration
        self.rest_host = os.getenv("REST_HOST", "127.0.0.1")
        self.rest_port = int(os.getenv("REST_PORT", "5000"))

        # Logging configuration
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_file = os.getenv("LOG_FILE") or None
        self.enable_audit_log = os.getenv("ENABLE_AUDIT_LOG", "true").lower() == "true"
        self.audit_log_file = os.getenv("AUDIT_LOG_FILE", "logs/audit.log")

        # Security
        self.enable_cors = os.getenv("ENABLE_CORS", "true").lower() == "true"
        self.cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")

        # Debug mode
        self.debug = os.getenv("DEBUG", "false").lower() == "true"

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            "rest_host": self.rest_host,
            "rest_port": self.rest_port,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "enable_audit_log": self.enable_audit_log,
            "audit_log_file": self.audit_log_file,
            "enable_cors": self.enable_cors,
            "cors_origins": self.cors_origins,
            "debug": self.debug,
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = []

        if not (1 <= self.rest_port <= 65535):
            errors.append(f"Invalid REST port: {self.rest_port}")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Invalid log level: {self.log_level}")

        if self.enable_audit_log and not self.audit_log_file:
            errors.append("Audit log file is required when audit logging is enabled")

        if self.enable_cors and not any(origin.strip() for origin in self.cors_origins):
            errors.append("At least one CORS origin is required when CORS is enabled")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.validate()
    return _settings


def reload_settings() -> Settings:
    """
    Reload settings from environment variables.

    Returns:
        New settings instance
    """
    global _settings
    _settings = Settings()
    _settings.validate()
    return _settings
