"""Core module for fruently.

Exports the core components: exceptions, data models, and configuration.
"""

from fruently.core.exceptions import (
    FruentlyError,
    ConfigurationError,
    StoreError,
)
from fruently.core.models import Record
from fruently.core.config import (
    get_settings,
    reset_settings,
    Settings,
    RetryConfig,
    LoggingConfig,
)

__all__ = [
    # Exceptions
    "FruentlyError",
    "ConfigurationError",
    "StoreError",
    # Data Models
    "Record",
    # Configuration
    "get_settings",
    "reset_settings",
    "Settings",
    "RetryConfig",
    "LoggingConfig",
]
