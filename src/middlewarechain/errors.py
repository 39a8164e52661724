"""
Errors raised by middlewarechain itself.

Composition never raises: these cover misuse detected while building
middlewares and missing context values. Exceptions raised by handlers and
middlewares travel through a chain untouched.
"""

from typing import Any, Dict, List, Optional


class MiddlewareError(Exception):
    """Base exception for middlewarechain, with a readable multi-part message."""

    def __init__(self, message: str, **metadata: Any) -> None:
        super().__init__(message)
        self.message = message
        self.metadata = metadata
        self.suggestions: List[str] = []
        self.debug_info: Dict[str, Any] = {}

    def add_suggestion(self, suggestion: str) -> "MiddlewareError":
        self.suggestions.append(suggestion)
        return self

    def add_debug_info(self, key: str, value: Any) -> "MiddlewareError":
        self.debug_info[key] = value
        return self

    def __str__(self) -> str:
        parts = [f"{type(self).__name__}: {self.message}"]

        context = {k: v for k, v in self.metadata.items() if v is not None}
        if context:
            parts.append("\nError Context:")
            for key, value in context.items():
                parts.append(f"  {key}: {value}")

        if self.debug_info:
            parts.append("\nDebug Information:")
            for key, value in self.debug_info.items():
                parts.append(f"  {key}: {value}")

        if self.suggestions:
            parts.append("\nDid you mean?")
            for suggestion in self.suggestions:
                parts.append(f"  → {suggestion}")

        return "\n".join(parts)


class ConfigurationError(MiddlewareError):
    """Raised when a middleware is built from something unusable."""

    def __init__(self, message: str, field: Optional[str] = None, **metadata: Any) -> None:
        super().__init__(message, field=field, **metadata)
        if field:
            self.add_debug_info("configuration_field", field)


class ContextError(MiddlewareError, KeyError):
    """Raised when a required context value is missing."""

    def __init__(self, message: str, key: Optional[str] = None, **metadata: Any) -> None:
        super().__init__(message, key=key, **metadata)
        self.key = key
