"""Sprint tracker exception types."""

from __future__ import annotations


class InvalidConfigurationError(ValueError):
    """Raised when a sprint configuration value breaks its invariant."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class ArithmeticOverflowError(OverflowError):
    """Raised when sprint date arithmetic leaves the representable date range."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        message = f"Date arithmetic overflow while {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
