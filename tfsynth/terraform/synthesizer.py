"""
Terraform flavour of the synthesizer.

The vocabulary is Terraform's top-level block names; the manifest is emitted
as Terraform JSON (`*.tf.json`).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from tfsynth.core.bury import unwrap
from tfsynth.core.factory import BoundSynthesizer

TERRAFORM_KEYS = (
    "terraform",
    "provider",
    "resource",
    "variable",
    "locals",
    "output",
    "data",
)


class TerraformSynthesizer(BoundSynthesizer):
    """
    Example:
        synth = TerraformSynthesizer()
        synth.synthesize(lambda s: s.provider("aws", lambda s: s.region("us-east-1")))
        synth.to_json(indent=2)
    """

    def __init__(
        self,
        name: Optional[str] = "terraform",
        extra_keys: Iterable[str] = (),
    ) -> None:
        super().__init__(name, TERRAFORM_KEYS + tuple(extra_keys))

    def to_dict(self) -> Dict[str, Any]:
        return unwrap(self.synthesis)

    def to_json(self, **json_kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **json_kwargs)

    def write(self, path: str | Path, indent: int = 2, sort_keys: bool = False) -> Path:
        """Write the manifest as Terraform JSON and return the file path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(self.to_json(indent=indent, sort_keys=sort_keys))
            f.write("\n")
        return target
