"""
Attribute-synthesis engine.

A synthesizer turns a sequence of dynamically named calls into a nested
manifest. Calls are issued against a `SynthesisScope`, which forwards every
attribute access to the engine's dispatch rule:

    synth.synthesize(
        lambda s: s.resource("aws_vpc", "main", lambda s: s.cidr_block("10.0.0.0/16"))
    )
    synth.synthesis
    # {"resource": {"aws_vpc": {"main": {"cidr_block": "10.0.0.0/16"}}}}

At the root only vocabulary keys are accepted. Once a vocabulary key has been
entered (the "context"), any name is accepted and written relative to the
current ancestor path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from tfsynth.core.bury import bury
from tfsynth.core.errors import InvalidKeyError, TooManyValuesError

LOGGER = logging.getLogger(__name__)

Block = Callable[["SynthesisScope"], Any]


@dataclass
class Translation:
    """
    Mutable state of one synthesizer.

    - manifest: nested mapping built so far.
    - ancestors: path where the next write lands.
    - context: vocabulary key currently being populated, None at the root.
    """

    manifest: Dict[Any, Any] = field(default_factory=dict)
    ancestors: List[Any] = field(default_factory=list)
    context: Optional[str] = None


class SynthesisScope:
    """
    Implicit receiver handed to synthesis blocks.

    `scope.cidr_block("10.0.0.0/16")` and `scope["cidr_block"]("10.0.0.0/16")`
    are equivalent; the item form covers names that are Python keywords
    (`scope["from"](...)`).
    """

    __slots__ = ("_synthesizer",)

    def __init__(self, synthesizer: "AbstractSynthesizer") -> None:
        self._synthesizer = synthesizer

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("__"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, name: str) -> Callable[..., Any]:
        synthesizer = self._synthesizer

        def dispatch(*values: Any, block: Optional[Block] = None) -> Any:
            return synthesizer.method_missing(name, *values, block=block)

        dispatch.__name__ = name
        return dispatch

    def __repr__(self) -> str:
        return f"<SynthesisScope of {self._synthesizer!r}>"


class AbstractSynthesizer:
    """
    Base synthesizer. Subclasses provide the vocabulary by implementing
    `method_missing`; see `tfsynth.core.factory.SynthesizerFactory`.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name
        self.translation = Translation()
        self.scope = SynthesisScope(self)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def synthesize(self, source: Block) -> "AbstractSynthesizer":
        """Evaluate `source` against this synthesizer and return it."""
        try:
            source(self.scope)
        except Exception:
            self._reset_traversal()
            raise
        return self

    def clear(self) -> None:
        self.translation.manifest = {}

    @property
    def synthesis(self) -> Dict[Any, Any]:
        return self.translation.manifest

    @property
    def manifest(self) -> Dict[Any, Any]:
        return self.translation.manifest

    @property
    def ancestors(self) -> Tuple[Any, ...]:
        return tuple(self.translation.ancestors)

    @property
    def context(self) -> Optional[str]:
        return self.translation.context

    def method_missing(self, method: str, *values: Any, block: Optional[Block] = None) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} has no vocabulary; build it with SynthesizerFactory."
        )

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def abstract_method_missing(
        self,
        method: str,
        keys: Sequence[str],
        *values: Any,
        block: Optional[Block] = None,
    ) -> None:
        """
        Route one call through the dispatch rule.

        Args:
            method: Name of the call.
            keys: Vocabulary of names accepted at the root.
            values: Trailing values. A trailing callable is taken as `block`.
            block: Nested block evaluated against the same scope.
        """
        if block is None and values and callable(values[-1]):
            block = values[-1]
            values = values[:-1]

        state = self.translation
        if state.context is None and method not in keys:
            raise InvalidKeyError(method, keys)

        writes_value = state.context is not None and (
            method == state.context or method not in keys
        )
        if writes_value and len(values) > 1:
            raise TooManyValuesError(method, values)

        # A vocabulary key equal to the active context fires both branches.
        if method == state.context:
            self._write(method, values, block)
        if method in keys:
            self._enter(method, values, block)
        elif method != state.context:
            self._write(method, values, block)

    def _enter(self, method: str, values: Sequence[Any], block: Optional[Block]) -> None:
        state = self.translation
        state.ancestors.append(method)
        state.ancestors.extend(values)
        state.context = method
        LOGGER.debug("Entering context %s at %s", method, state.ancestors)
        if block is not None:
            block(self.scope)
        self._reset_traversal()

    def _write(self, method: str, values: Sequence[Any], block: Optional[Block]) -> None:
        state = self.translation
        state.ancestors.append(method)
        if block is not None:
            block(self.scope)
        if len(values) == 1:
            LOGGER.debug("Burying %r at %s", values[0], state.ancestors)
            bury(state.manifest, state.ancestors, values[0])
        # A nested vocabulary call may already have reset the path.
        if state.ancestors:
            state.ancestors.pop()

    def _reset_traversal(self) -> None:
        self.translation.ancestors = []
        self.translation.context = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
