"""
Logging Configuration Structures

Provides structured configuration for the logging system using msgspec.Struct
for type safety.
"""

from typing import Optional, Dict, Any, List
from msgspec import Struct

_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class BackendConfig(Struct, frozen=True):
    """
    Base configuration for all logging backends.

    Attributes:
        enabled: Whether this backend is active
        min_level: Minimum log level to process (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    enabled: bool = True
    min_level: str = "INFO"

    def validate(self) -> None:
        """Validate backend configuration."""
        if self.min_level not in _VALID_LEVELS:
            raise ValueError(f"Invalid log level: {self.min_level}")


class ConsoleBackendConfig(BackendConfig):
    """
    Console backend configuration.

    Attributes:
        include_context: Render structured context after the message
        max_message_length: Maximum message length before truncation
    """
    include_context: bool = True
    max_message_length: int = 1000


class FileBackendConfig(BackendConfig):
    """
    File backend configuration.

    Attributes:
        path: Log file path
        max_size_mb: Maximum file size in MB before rotation
        backup_count: Number of backup files to keep
    """
    path: str = "logs/nominex.log"
    max_size_mb: int = 100
    backup_count: int = 5

    def validate(self) -> None:
        """Validate file backend configuration."""
        super().validate()
        if self.max_size_mb <= 0:
            raise ValueError("max_size_mb must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count cannot be negative")


class LoggingConfig(Struct, frozen=True):
    """
    Complete logging configuration.

    Attributes:
        environment: Environment name (dev, prod, test)
        console: Console backend configuration
        file: File backend configuration
        metrics_enabled: Emit metric records (rendered at DEBUG level)
        default_context: Default context for all log messages
    """
    environment: str = "dev"
    console: Optional[ConsoleBackendConfig] = None
    file: Optional[FileBackendConfig] = None
    metrics_enabled: bool = True
    default_context: Optional[Dict[str, Any]] = None

    def validate(self) -> None:
        """Validate complete configuration."""
        if self.environment not in {"dev", "prod", "test", "staging"}:
            raise ValueError(f"Invalid environment: {self.environment}")
        if self.console:
            self.console.validate()
        if self.file:
            self.file.validate()

    def get_enabled_backends(self) -> List[str]:
        """Get list of enabled backend names."""
        enabled = []
        if self.console and self.console.enabled:
            enabled.append("console")
        if self.file and self.file.enabled:
            enabled.append("file")
        return enabled

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        """Create from dictionary (e.g. the ``logging`` section of config.yaml)."""
        data = dict(data)
        if isinstance(data.get("console"), dict):
            data["console"] = ConsoleBackendConfig(**data["console"])
        if isinstance(data.get("file"), dict):
            data["file"] = FileBackendConfig(**data["file"])
        return cls(**data)

    @classmethod
    def default_development(cls) -> "LoggingConfig":
        """Get default development configuration."""
        return cls(
            environment="dev",
            console=ConsoleBackendConfig(enabled=True, min_level="DEBUG")
        )

    @classmethod
    def default_production(cls) -> "LoggingConfig":
        """Get default production configuration."""
        return cls(
            environment="prod",
            console=ConsoleBackendConfig(enabled=True, min_level="WARNING"),
            file=FileBackendConfig(
                enabled=True,
                min_level="INFO",
                path="logs/production.log",
                max_size_mb=500,
                backup_count=10
            ),
            metrics_enabled=False
        )

    @classmethod
    def default_test(cls) -> "LoggingConfig":
        """Quiet configuration used by the test-suite."""
        return cls(
            environment="test",
            console=ConsoleBackendConfig(enabled=True, min_level="WARNING", include_context=False)
        )
