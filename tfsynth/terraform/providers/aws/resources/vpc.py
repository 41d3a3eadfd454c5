from __future__ import annotations

from typing import Dict, Optional

from pydantic import field_validator

from tfsynth.terraform.providers.aws import helpers
from tfsynth.terraform.resource_templates import ResourceAttributes, ResourceTemplate


class VpcAttributes(ResourceAttributes):
    cidr_block: str
    enable_dns_hostnames: bool = True
    enable_dns_support: bool = True
    instance_tenancy: str = "default"
    tags: Optional[Dict[str, str]] = None

    @field_validator("cidr_block")
    @classmethod
    def _check_cidr(cls, value: str) -> str:
        return helpers.validate_vpc_cidr(value)

    @field_validator("instance_tenancy")
    @classmethod
    def _check_tenancy(cls, value: str) -> str:
        if value not in helpers.INSTANCE_TENANCIES:
            raise ValueError(
                f"instance_tenancy must be one of {', '.join(helpers.INSTANCE_TENANCIES)}."
            )
        return value


def get_templates() -> list[ResourceTemplate]:
    return [
        ResourceTemplate(
            key="aws_vpc",
            kind="virtual private cloud",
            attributes_model=VpcAttributes,
            outputs=("id", "arn", "cidr_block", "default_security_group_id", "main_route_table_id"),
            description="Isolated IPv4 network.",
        )
    ]
