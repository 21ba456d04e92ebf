"""Application-level exception types for MAIK."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class MaikError(Exception):
    """Base exception for MAIK."""


class ConfigurationError(MaikError):
    """Base exception for configuration and startup validation errors."""


class PromptDirectoryNotFoundError(ConfigurationError):
    """Raised when the configured prompt directory does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Prompt directory not found: {path}")
        self.path = path


class PromptFileNotFoundError(ConfigurationError):
    """Raised when a step template is missing from the prompt directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Prompt file not found: {path}")
        self.path = path


class ApiKeyNotConfiguredError(ConfigurationError):
    """Raised when an API key is required but missing."""


class ProviderErrorKind(str, Enum):
    """Coarse classification of chat-completion failures."""

    NETWORK = "network"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    MALFORMED_REQUEST = "malformed_request"
    MALFORMED_RESPONSE = "malformed_response"
    SERVER = "server"
    UNKNOWN = "unknown"


class ProviderError(MaikError):
    """Raised when the chat-completion provider call fails."""

    def __init__(self, message: str, *, kind: ProviderErrorKind, status_code: int | None = None) -> None:
        super().__init__(f"Provider API error: {message}")
        self.kind = kind
        self.status_code = status_code


class ContractNotReadyError(MaikError):
    """Raised when saving is attempted before a final contract exists."""


class ProcessStateError(MaikError):
    """Raised when a workflow stage is run out of order."""
