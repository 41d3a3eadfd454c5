"""
Deep insertion into nested manifests.

`bury` writes a value at an arbitrary path, creating intermediate mappings on
demand. Writing twice to the same path never drops the earlier value: the
values are gathered in a `RepeatedValues` list instead.
"""

from __future__ import annotations

from typing import Any, Dict, MutableMapping, Sequence

from tfsynth.core.errors import InvalidPathError


class RepeatedValues(list):
    """Values written more than once under the same key, in write order."""

    def __repr__(self) -> str:
        return f"RepeatedValues({list.__repr__(self)})"


def bury(target: MutableMapping[Any, Any], path: Sequence[Any], value: Any) -> MutableMapping[Any, Any]:
    """
    Insert `value` into `target` at `path`.

    Args:
        target: Mapping mutated in place.
        path: Non-empty sequence of keys, outermost first.
        value: Value stored under the last key.

    Returns:
        The same `target` object.
    """
    if not path:
        raise InvalidPathError("Cannot bury a value at an empty path.")

    *parents, leaf = path
    node = target
    for segment in parents:
        node = _descend(node, segment)
    _accumulate(node, leaf, value)
    return target


def _descend(node: MutableMapping[Any, Any], segment: Any) -> MutableMapping[Any, Any]:
    if segment not in node:
        child: Dict[Any, Any] = {}
        node[segment] = child
        return child

    existing = node[segment]
    if isinstance(existing, dict):
        return existing
    if isinstance(existing, RepeatedValues) and existing and isinstance(existing[-1], dict):
        return existing[-1]

    # A scalar already lives here; keep it and open a mapping beside it.
    fresh: Dict[Any, Any] = {}
    if isinstance(existing, RepeatedValues):
        existing.append(fresh)
    else:
        node[segment] = RepeatedValues([existing, fresh])
    return fresh


def _accumulate(node: MutableMapping[Any, Any], key: Any, value: Any) -> None:
    if key not in node:
        node[key] = value
        return
    existing = node[key]
    if isinstance(existing, RepeatedValues):
        existing.append(value)
    else:
        node[key] = RepeatedValues([existing, value])


def unwrap(value: Any) -> Any:
    """Return a copy of `value` built only from plain dicts and lists."""
    if isinstance(value, dict):
        return {key: unwrap(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [unwrap(item) for item in value]
    return value
