"""
Construction of synthesizers bound to a fixed vocabulary.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

from tfsynth.core.abstract_synthesizer import AbstractSynthesizer, Block


def _normalise_keys(keys: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(keys, str):
        raise TypeError("Synthesizer keys must be an iterable of names, not a single string.")
    normalised = []
    for key in keys:
        if not isinstance(key, str):
            raise TypeError(f"Synthesizer keys must be strings, got {type(key).__name__}.")
        if not key:
            raise ValueError("Synthesizer keys must be non-empty strings.")
        normalised.append(key)
    if not normalised:
        raise ValueError("A synthesizer needs at least one key.")
    return tuple(dict.fromkeys(normalised))


class BoundSynthesizer(AbstractSynthesizer):
    """Synthesizer whose unknown calls are dispatched against `keys`."""

    def __init__(self, name: Optional[str], keys: Iterable[str]) -> None:
        super().__init__(name=name)
        self.keys = _normalise_keys(keys)

    def method_missing(self, method: str, *values: Any, block: Optional[Block] = None) -> Any:
        return self.abstract_method_missing(method, self.keys, *values, block=block)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} keys={list(self.keys)!r}>"


class SynthesizerFactory:
    """
    Builds synthesizers for a given vocabulary.

    Example:
        synth = SynthesizerFactory.create_synthesizer("app_config", ["service", "database"])
        synth.synthesize(lambda s: s.service("api", lambda s: s.port(8080)))
    """

    @staticmethod
    def create_synthesizer(name: Optional[str], keys: Iterable[str]) -> BoundSynthesizer:
        return BoundSynthesizer(name, keys)


def create_synthesizer(name: Optional[str], keys: Iterable[str]) -> BoundSynthesizer:
    return SynthesizerFactory.create_synthesizer(name, keys)
