"""
Errors raised while synthesizing a manifest.

All of them signal a programming error in the caller (or, for
InvalidPathError, in the engine itself) and are meant to abort synthesis.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence


class SynthesisError(Exception):
    pass


class InvalidKeyError(SynthesisError):
    """A root-level call used a name outside the synthesizer's vocabulary."""

    def __init__(self, method: str, keys: Iterable[str]) -> None:
        self.method = method
        self.keys = tuple(keys)
        expected = ", ".join(str(key) for key in self.keys)
        super().__init__(
            f"Invalid synthesizer key '{method}'; expected one of: {expected}"
        )


class TooManyValuesError(SynthesisError):
    """A call carried more than one trailing value."""

    def __init__(self, method: str, values: Sequence[Any]) -> None:
        self.method = method
        self.values = list(values)
        self.count = len(self.values)
        super().__init__(
            f"Too many values for '{method}': expected at most 1, got {self.count} {self.values!r}"
        )


class InvalidPathError(SynthesisError, ValueError):
    pass
