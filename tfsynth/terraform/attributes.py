"""
Translation of attribute mappings into synthesis calls.
"""

from __future__ import annotations

from typing import Any, Mapping

from tfsynth.core.abstract_synthesizer import SynthesisScope
from tfsynth.core.bury import unwrap


def apply_attributes(scope: SynthesisScope, attributes: Mapping[str, Any]) -> None:
    """
    Write `attributes` through `scope`.

    None values are skipped. Mappings and lists (including lists of mappings,
    Terraform's repeated blocks) are written as a single value, so their keys
    never reach the dispatch rule: a tag named `data` or `terraform` is data,
    not a vocabulary call.
    """
    for key, value in attributes.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            scope[key](unwrap(dict(value)))
        else:
            scope[key](value)
