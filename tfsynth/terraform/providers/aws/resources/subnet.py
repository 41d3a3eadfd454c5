from __future__ import annotations

from typing import Dict, Optional

from pydantic import field_validator

from tfsynth.terraform.providers.aws import helpers
from tfsynth.terraform.resource_templates import ResourceAttributes, ResourceTemplate


class SubnetAttributes(ResourceAttributes):
    vpc_id: str
    cidr_block: str
    availability_zone: Optional[str] = None
    map_public_ip_on_launch: bool = False
    tags: Optional[Dict[str, str]] = None

    @field_validator("cidr_block")
    @classmethod
    def _check_cidr(cls, value: str) -> str:
        return helpers.validate_ipv4_cidr(value)

    @field_validator("availability_zone")
    @classmethod
    def _check_zone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return helpers.validate_availability_zone(value)


def get_templates() -> list[ResourceTemplate]:
    return [
        ResourceTemplate(
            key="aws_subnet",
            kind="subnet",
            attributes_model=SubnetAttributes,
            outputs=("id", "arn", "availability_zone", "cidr_block"),
            description="Address range inside a VPC.",
        )
    ]
