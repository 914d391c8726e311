"""Error types raised by the provider client, the tool handlers and the dispatcher."""

import copy
from typing import Any, Dict, List, Optional


class AmadeusMCPError(Exception):
    """Base class for every error raised inside the server."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def with_prefix(self, prefix: str) -> "AmadeusMCPError":
        """Return a copy of this error, same class and attributes, with a prefixed message."""
        # Subclass __init__ signatures differ, so copy without calling it
        prefixed = self.__class__.__new__(self.__class__)
        prefixed.__dict__.update(copy.copy(self.__dict__))
        prefixed.message = f"{prefix}: {self.message}"
        prefixed.args = (prefixed.message,)
        return prefixed

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AmadeusMCPError):
    """Amadeus credentials are missing and mock mode is not allowed."""


class AuthenticationError(AmadeusMCPError):
    """The client-credentials token exchange did not succeed."""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status = status
        self.body = body


class UpstreamError(AmadeusMCPError):
    """Non-2xx answer (or transport failure) from the Amadeus API."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: str = "",
        body: Any = None,
    ):
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.body = body


class RateLimitError(UpstreamError):
    """HTTP 429 from the Amadeus API."""


class EmptyResultError(UpstreamError):
    """A provider step answered successfully but without any data."""


class MaxRetriesExceededError(AmadeusMCPError):
    def __init__(self, message: str, attempts: int, last_error: Optional[Exception] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class UnknownToolError(AmadeusMCPError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class UnknownMethodError(AmadeusMCPError):
    def __init__(self, method: str):
        super().__init__(f"Unknown method: {method}")
        self.method = method


class InvalidArgumentsError(AmadeusMCPError):
    """Tool arguments did not match the tool's input schema."""

    def __init__(self, name: str, errors: List[Dict[str, Any]]):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ())) or 'arguments'}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(f"Invalid arguments for {name}: {details}")
        self.name = name
        self.errors = errors
