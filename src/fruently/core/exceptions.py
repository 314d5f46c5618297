"""Fruently Exception Hierarchy.

All custom exceptions inherit from FruentlyError, enabling consistent
error handling across the package.

The retry policy itself never raises: failures originate in the
collaborators around it (configuration loading, the record store).

Usage:
    from fruently.core.exceptions import StoreError

    raise StoreError(path="/var/log/fruently.log", reason="Permission denied")
"""

from typing import Any, Optional


class FruentlyError(Exception):
    """Base exception for all fruently errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        """Initialize FruentlyError.

        Args:
            message: Optional custom message. Defaults to a generic message.
        """
        self.message = message or "A fruently error occurred."
        super().__init__(self.message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context dictionary for structured logging.

        Returns:
            dict: Key-value pairs of exception context.
        """
        return {}

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(FruentlyError):
    """Configuration file or value is invalid.

    Raised when YAML configuration cannot be parsed or
    contains invalid values.

    Attributes:
        config_path: Path to the configuration file.
        key: The configuration key that caused the error.
        expected_type: The expected type for the value.
    """

    def __init__(
        self,
        config_path: str,
        key: Optional[str] = None,
        expected_type: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            config_path: Path to the config file.
            key: Optional key that caused the error.
            expected_type: Optional expected type.
            message: Optional custom message.
        """
        self.config_path = config_path
        self.key = key
        self.expected_type = expected_type

        if message is None:
            key_info = f" key '{key}'" if key else ""
            type_info = f" (expected {expected_type})" if expected_type else ""
            message = f"Configuration error in '{config_path}'{key_info}{type_info}."

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for configuration error."""
        return {
            "config_path": self.config_path,
            "key": self.key,
            "expected_type": self.expected_type,
        }

    def __repr__(self) -> str:
        return (
            f"ConfigurationError(config_path={self.config_path!r}, "
            f"key={self.key!r}, expected_type={self.expected_type!r})"
        )


class StoreError(FruentlyError):
    """Undelivered records could not be written to or read from the store file.

    A misconfigured store path only surfaces here, when the store
    actually touches the file.

    Attributes:
        path: The store file path.
        reason: Underlying failure description.
    """

    def __init__(
        self,
        path: str,
        reason: str,
        message: Optional[str] = None,
    ) -> None:
        self.path = path
        self.reason = reason

        if message is None:
            message = f"Record store '{path}' failed: {reason}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for store error."""
        return {
            "path": self.path,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        return f"StoreError(path={self.path!r}, reason={self.reason!r})"
