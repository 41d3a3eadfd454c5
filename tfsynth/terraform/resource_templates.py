"""
Generic resource template plumbing.

A template pairs a Terraform resource type with a pydantic model describing
its attributes. Calling the template validates the attributes, writes a
`resource` block through the synthesis scope and returns a reference other
resources can interpolate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict

from tfsynth.core.abstract_synthesizer import SynthesisScope
from tfsynth.models import ResourceReference
from tfsynth.terraform.attributes import apply_attributes


class ResourceAttributes(BaseModel):
    """Base model for resource attributes; unknown attributes are rejected."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_terraform(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, by_alias=True)


@dataclass(frozen=True)
class ResourceTemplate:
    """
    Declarative description of a Terraform resource.

    - key: Terraform resource type, e.g. "aws_vpc".
    - kind: natural language description used in listings.
    - attributes_model: pydantic model validating the attributes.
    - outputs: attributes exposed as interpolation strings on the reference.
    """

    key: str
    kind: str
    attributes_model: Type[ResourceAttributes]
    outputs: Tuple[str, ...] = ("id",)
    description: str = ""

    def validate(self, attributes: Optional[Mapping[str, Any]] = None) -> ResourceAttributes:
        return self.attributes_model.model_validate(dict(attributes or {}))

    def __call__(
        self,
        scope: SynthesisScope,
        name: str,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> ResourceReference:
        validated = self.validate(attributes).to_terraform()

        def body(s: SynthesisScope) -> None:
            apply_attributes(s, validated)

        scope.resource(self.key, name, body)

        reference = ResourceReference(type=self.key, name=name, attributes=validated)
        reference.outputs = {output: reference.ref(output) for output in self.outputs}
        return reference
