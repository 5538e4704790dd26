"""
Error taxonomy for the opportunity analytics core.

Unknown protocol/chain names are NOT errors by default: lookups fall back to
documented defaults and flag the substitution. Errors are reserved for:

1. Invalid numeric input (non-positive amounts or periods, NaN/inf values)
2. Malformed reference tables (weights not summing to 1, ratings out of range)
3. Lookup misses when a caller explicitly asks for strict lookups
"""


class AnalyticsError(Exception):
    """Base class for all analytics errors."""


class InvalidArgumentError(AnalyticsError, ValueError):
    """Numeric input rejected before any computation."""


class ConfigError(AnalyticsError):
    """Reference table or configuration object is malformed."""


class UnknownReferenceError(AnalyticsError, KeyError):
    """Protocol or chain missing from a table during a strict lookup."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Unknown {kind}: {name!r}")

    def __str__(self) -> str:
        return self.args[0]
