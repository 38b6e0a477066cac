"""Custom exception types for the cloth simulation."""

from __future__ import annotations

from typing import Any


class ClothSimulationError(Exception):
    """Base class for domain-specific errors."""


class InvalidConfigurationError(ClothSimulationError, ValueError):
    """Raised when a parameter or topology setting is out of range."""

    def __init__(self, field: str, value: Any, message: str | None = None) -> None:
        if message is None:
            message = f"Invalid value for '{field}': {value!r}"
        super().__init__(message)
        self.field = field
        self.value = value


class SimulationStateError(ClothSimulationError):
    """Raised when the point/constraint bookkeeping is found inconsistent."""

    def __init__(self, message: str, *, point_index: int | None = None) -> None:
        super().__init__(message)
        self.point_index = point_index


__all__ = [
    "ClothSimulationError",
    "InvalidConfigurationError",
    "SimulationStateError",
]
