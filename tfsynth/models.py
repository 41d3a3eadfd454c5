"""
Shared dataclasses for tfsynth.

These models stay lightweight so the CLI, the pipeline and resource
templates can exchange them without depending on the synthesis engine.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from tfsynth.core.bury import unwrap


@dataclass
class ResourceReference:
    """
    Handle returned when a resource is declared.

    - type / name: Terraform address parts, e.g. ("aws_vpc", "main").
    - attributes: validated attributes that were written to the manifest.
    - outputs: interpolation strings for the attributes other resources may use.
    """

    type: str
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    outputs: Dict[str, str] = field(default_factory=dict)

    @property
    def address(self) -> str:
        return f"{self.type}.{self.name}"

    @property
    def id(self) -> str:
        return self.ref("id")

    def ref(self, attribute: str) -> str:
        """Interpolation string pointing at `attribute` of this resource."""
        return "${" + f"{self.address}.{attribute}" + "}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "attributes": unwrap(self.attributes),
            "outputs": dict(self.outputs),
        }


@dataclass
class StackArtifact:
    """
    Result of synthesizing one stack.

    - manifest: Terraform JSON document.
    - resources: references declared through the resource registry.
    """

    name: str
    manifest: Dict[str, Any]
    resources: List[ResourceReference] = field(default_factory=list)
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def metadata(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "created_at": self.created_at,
            "resources": [reference.to_dict() for reference in self.resources],
        }

    def to_dict(self) -> Dict[str, Any]:
        payload = self.metadata()
        payload["manifest"] = unwrap(self.manifest)
        return payload

    def to_json(self, **json_kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **json_kwargs)
