"""
FILE: taskbeacon/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TaskBeaconError (base exception)
  - ConfigError
  - ProviderError
  - StoreError
  - UserAbort
  - InvalidInputError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from TaskBeaconError for easy catching
  - Core and llm layers raise these, the CLI catches and displays them
  - ProviderError and StoreError become failure events inside the flows
"""

from typing import Optional


class TaskBeaconError(Exception):
    """Base exception for all taskbeacon errors."""
    pass


class ConfigError(TaskBeaconError):
    """Configuration file could not be read or has the wrong shape."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} ({path})"
        super().__init__(message)


class ProviderError(TaskBeaconError):
    """Suggestion service failed: transport, API error, or unusable response."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.provider = provider
        super().__init__(message)


class StoreError(TaskBeaconError):
    """Task store command (export, add, modify) failed."""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr.strip()
        if self.stderr:
            message = f"{message}\nstderr: {self.stderr}"
        super().__init__(message)


class UserAbort(TaskBeaconError):
    """User cancelled an interactive workflow."""

    def __init__(self, message: str = "Cancelled"):
        super().__init__(message)


class InvalidInputError(TaskBeaconError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)
