from __future__ import annotations

from typing import Dict, Optional

from tfsynth.terraform.resource_templates import ResourceAttributes, ResourceTemplate


class InternetGatewayAttributes(ResourceAttributes):
    vpc_id: Optional[str] = None
    tags: Optional[Dict[str, str]] = None


def get_templates() -> list[ResourceTemplate]:
    return [
        ResourceTemplate(
            key="aws_internet_gateway",
            kind="internet gateway",
            attributes_model=InternetGatewayAttributes,
            outputs=("id", "arn", "owner_id"),
        )
    ]
