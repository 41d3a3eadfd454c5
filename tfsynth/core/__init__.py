"""Generic attribute-synthesis engine."""

from __future__ import annotations

from tfsynth.core.abstract_synthesizer import (
    AbstractSynthesizer,
    SynthesisScope,
    Translation,
)
from tfsynth.core.bury import RepeatedValues, bury, unwrap
from tfsynth.core.errors import (
    InvalidKeyError,
    InvalidPathError,
    SynthesisError,
    TooManyValuesError,
)
from tfsynth.core.factory import BoundSynthesizer, SynthesizerFactory, create_synthesizer

__all__ = [
    "AbstractSynthesizer",
    "BoundSynthesizer",
    "InvalidKeyError",
    "InvalidPathError",
    "RepeatedValues",
    "SynthesisError",
    "SynthesisScope",
    "SynthesizerFactory",
    "TooManyValuesError",
    "Translation",
    "bury",
    "create_synthesizer",
    "unwrap",
]
