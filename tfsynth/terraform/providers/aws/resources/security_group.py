from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from tfsynth.terraform.providers.aws import helpers
from tfsynth.terraform.resource_templates import ResourceAttributes, ResourceTemplate


class SecurityGroupRule(BaseModel):
    """Inline ingress/egress rule."""

    model_config = ConfigDict(extra="forbid")

    from_port: int
    to_port: int
    protocol: str
    cidr_blocks: List[str] = []
    security_groups: Optional[List[str]] = None
    description: Optional[str] = None

    @field_validator("from_port", "to_port")
    @classmethod
    def _check_port(cls, value: int) -> int:
        return helpers.validate_port(value)

    @field_validator("protocol")
    @classmethod
    def _check_protocol(cls, value: str) -> str:
        return helpers.validate_protocol(value)

    @field_validator("cidr_blocks")
    @classmethod
    def _check_cidrs(cls, value: List[str]) -> List[str]:
        return [helpers.validate_cidr(cidr) for cidr in value]

    @model_validator(mode="after")
    def _check_range(self) -> "SecurityGroupRule":
        if self.from_port > self.to_port:
            raise ValueError(
                f"from_port ({self.from_port}) must not exceed to_port ({self.to_port})."
            )
        return self


class SecurityGroupAttributes(ResourceAttributes):
    name: Optional[str] = None
    description: str = "Managed by Terraform"
    vpc_id: Optional[str] = None
    ingress: List[SecurityGroupRule] = []
    egress: List[SecurityGroupRule] = []
    tags: Optional[Dict[str, str]] = None


def get_templates() -> list[ResourceTemplate]:
    return [
        ResourceTemplate(
            key="aws_security_group",
            kind="security group",
            attributes_model=SecurityGroupAttributes,
            outputs=("id", "arn", "name", "owner_id"),
        )
    ]
