"""Exception hierarchy for configuration, input, and provider failures."""

from __future__ import annotations

from typing import Any


class PolyfetchError(Exception):
    """Base class for all polyfetch errors."""


class ConfigurationError(PolyfetchError):
    """Required configuration (the provider API key) is missing."""


class ValidationError(PolyfetchError):
    """Invocation input failed schema validation.

    ``issues`` holds the structured per-field problems as plain dicts.
    """

    def __init__(self, issues: list[dict[str, Any]]):
        self.issues = issues
        super().__init__(f"Validation failed: {self._summary()}")

    def _summary(self) -> str:
        parts = []
        for issue in self.issues:
            loc = ".".join(str(p) for p in issue.get("loc", ())) or "<input>"
            parts.append(f"{loc}: {issue.get('msg', 'invalid value')}")
        return "; ".join(parts) or "invalid input"


class RemoteCallError(PolyfetchError):
    """A single provider lookup failed.

    ``status_code`` and ``body`` are set when the provider answered with a
    non-success status; both are None when the request never reached it.
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.status_code = status_code
        self.body = body
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        if self.status_code is not None:
            return f"Request failed with status {self.status_code}"
        return "Request to data provider failed"
