from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from tfsynth.terraform.providers.aws import helpers
from tfsynth.terraform.resource_templates import ResourceAttributes, ResourceTemplate


class Route(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cidr_block: str
    gateway_id: Optional[str] = None
    nat_gateway_id: Optional[str] = None

    @field_validator("cidr_block")
    @classmethod
    def _check_cidr(cls, value: str) -> str:
        return helpers.validate_ipv4_cidr(value)

    @model_validator(mode="after")
    def _one_target(self) -> "Route":
        targets = [t for t in (self.gateway_id, self.nat_gateway_id) if t]
        if len(targets) != 1:
            raise ValueError("A route needs exactly one of gateway_id or nat_gateway_id.")
        return self


class RouteTableAttributes(ResourceAttributes):
    vpc_id: str
    route: List[Route] = []
    tags: Optional[Dict[str, str]] = None


def get_templates() -> list[ResourceTemplate]:
    return [
        ResourceTemplate(
            key="aws_route_table",
            kind="route table",
            attributes_model=RouteTableAttributes,
            outputs=("id", "arn", "owner_id"),
        )
    ]
