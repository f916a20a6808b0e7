"""Custom exceptions for lucidlog."""

from typing import Any, Dict, Optional


class LucidLogException(Exception):
    """Base exception for all lucidlog errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationException(LucidLogException):
    """Raised when configuration is invalid."""
    pass


class LoggerAlreadyInitializedError(ConfigurationException):
    """Raised when a setter runs after the logger was built and the
    reconfigure policy is ``raise``."""
    pass
