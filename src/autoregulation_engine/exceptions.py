"""Custom exception hierarchy for the autoregulation engine.

The engine's own computations never raise. These are used by the
configuration helpers that callers run before handing a rule to the engine.
"""

from __future__ import annotations


class AutoregulationError(Exception):
    """Base exception for all autoregulation_engine errors."""


class ConfigurationError(AutoregulationError):
    """Configuration could not be read or parsed."""


class InvalidProgressionRule(ConfigurationError):
    """A ProgressionRule field holds a value outside its legal range."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
