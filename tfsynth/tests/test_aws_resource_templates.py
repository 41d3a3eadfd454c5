"""
Test suite for individual AWS resource templates.

Tests each template in isolation, including:
- Manifest output
- Defaults
- Attribute validation
- References
"""

import pytest
from pydantic import ValidationError

from tfsynth.terraform.providers.aws.resources import (
    internet_gateway,
    route_table,
    security_group,
    subnet,
    vpc,
)
from tfsynth.terraform.synthesizer import TerraformSynthesizer


def declare(module, name, attributes):
    """Declare a resource from `module` and return (manifest body, reference)."""
    template = module.get_templates()[0]
    synth = TerraformSynthesizer()
    refs = []
    synth.synthesize(lambda s: refs.append(template(s, name, attributes)))
    body = synth.to_dict()["resource"][template.key][name]
    return body, refs[0]


# ============================================================================
# 1. VPC
# ============================================================================

class TestVpc:
    """Test aws_vpc template."""

    def test_defaults(self):
        body, _ = declare(vpc, "main", {"cidr_block": "10.0.0.0/16"})

        assert body == {
            "cidr_block": "10.0.0.0/16",
            "enable_dns_hostnames": True,
            "enable_dns_support": True,
            "instance_tenancy": "default",
        }

    def test_tags_written_as_map(self):
        body, _ = declare(
            vpc, "main", {"cidr_block": "10.0.0.0/16", "tags": {"Name": "main", "Env": "test"}}
        )
        assert body["tags"] == {"Name": "main", "Env": "test"}

    def test_tags_named_like_vocabulary(self):
        tags = {"terraform": "true", "data": "x", "module": "network"}
        body, _ = declare(
            vpc,
            "main",
            {"cidr_block": "10.0.0.0/16", "tags": tags, "instance_tenancy": "dedicated"},
        )

        assert body["tags"] == tags
        assert body["instance_tenancy"] == "dedicated"
        assert body["enable_dns_support"] is True

    def test_reference(self):
        _, ref = declare(vpc, "main", {"cidr_block": "10.0.0.0/16"})

        assert ref.type == "aws_vpc"
        assert ref.name == "main"
        assert ref.address == "aws_vpc.main"
        assert ref.id == "${aws_vpc.main.id}"
        assert ref.outputs["arn"] == "${aws_vpc.main.arn}"
        assert ref.ref("owner_id") == "${aws_vpc.main.owner_id}"
        assert ref.attributes["cidr_block"] == "10.0.0.0/16"

    def test_invalid_cidr(self):
        with pytest.raises(ValidationError, match="Invalid CIDR"):
            declare(vpc, "main", {"cidr_block": "10.0.0.300/16"})

    def test_host_bits_rejected(self):
        with pytest.raises(ValidationError):
            declare(vpc, "main", {"cidr_block": "10.0.0.1/16"})

    def test_netmask_range(self):
        with pytest.raises(ValidationError, match="netmask"):
            declare(vpc, "main", {"cidr_block": "10.0.0.0/8"})

    def test_tenancy(self):
        with pytest.raises(ValidationError, match="instance_tenancy"):
            declare(vpc, "main", {"cidr_block": "10.0.0.0/16", "instance_tenancy": "shared"})

    def test_unknown_attribute_rejected(self):
        with pytest.raises(ValidationError):
            declare(vpc, "main", {"cidr_block": "10.0.0.0/16", "cidr": "10.0.0.0/16"})

    def test_missing_required(self):
        with pytest.raises(ValidationError):
            declare(vpc, "main", {})

    def test_nothing_written_on_validation_error(self):
        template = vpc.get_templates()[0]
        synth = TerraformSynthesizer()

        with pytest.raises(ValidationError):
            synth.synthesize(lambda s: template(s, "main", {"cidr_block": "bogus"}))

        assert synth.synthesis == {}
        assert synth.context is None


# ============================================================================
# 2. SUBNET / GATEWAY / ROUTE TABLE
# ============================================================================

class TestSubnet:
    """Test aws_subnet template."""

    def test_interpolated_vpc(self):
        body, _ = declare(
            subnet,
            "public",
            {
                "vpc_id": "${aws_vpc.main.id}",
                "cidr_block": "10.0.1.0/24",
                "availability_zone": "us-east-1a",
                "map_public_ip_on_launch": True,
            },
        )

        assert body == {
            "vpc_id": "${aws_vpc.main.id}",
            "cidr_block": "10.0.1.0/24",
            "availability_zone": "us-east-1a",
            "map_public_ip_on_launch": True,
        }

    def test_ipv6_rejected(self):
        with pytest.raises(ValidationError, match="IPv4"):
            declare(subnet, "public", {"vpc_id": "vpc-1", "cidr_block": "2001:db8::/64"})

    def test_bad_zone(self):
        with pytest.raises(ValidationError, match="availability zone"):
            declare(
                subnet,
                "public",
                {"vpc_id": "vpc-1", "cidr_block": "10.0.1.0/24", "availability_zone": "east"},
            )

    def test_interpolated_zone(self):
        body, _ = declare(
            subnet,
            "public",
            {
                "vpc_id": "vpc-1",
                "cidr_block": "10.0.1.0/24",
                "availability_zone": "${data.aws_availability_zones.available.names[0]}",
            },
        )
        assert body["availability_zone"].startswith("${data.")


class TestInternetGateway:
    """Test aws_internet_gateway template."""

    def test_empty_attributes(self):
        template = internet_gateway.get_templates()[0]
        synth = TerraformSynthesizer()
        synth.synthesize(lambda s: template(s, "igw"))

        # No attributes means nothing is buried for the resource.
        assert synth.synthesis == {}

    def test_vpc_id(self):
        body, ref = declare(internet_gateway, "igw", {"vpc_id": "${aws_vpc.main.id}"})

        assert body == {"vpc_id": "${aws_vpc.main.id}"}
        assert ref.outputs == {
            "id": "${aws_internet_gateway.igw.id}",
            "arn": "${aws_internet_gateway.igw.arn}",
            "owner_id": "${aws_internet_gateway.igw.owner_id}",
        }


class TestRouteTable:
    """Test aws_route_table template."""

    def test_routes(self):
        body, _ = declare(
            route_table,
            "public",
            {
                "vpc_id": "${aws_vpc.main.id}",
                "route": [{"cidr_block": "0.0.0.0/0", "gateway_id": "${aws_internet_gateway.igw.id}"}],
            },
        )

        assert body["route"] == [
            {"cidr_block": "0.0.0.0/0", "gateway_id": "${aws_internet_gateway.igw.id}"}
        ]

    def test_route_needs_one_target(self):
        with pytest.raises(ValidationError, match="exactly one"):
            declare(
                route_table,
                "public",
                {
                    "vpc_id": "vpc-1",
                    "route": [{"cidr_block": "0.0.0.0/0", "gateway_id": "igw-1", "nat_gateway_id": "nat-1"}],
                },
            )


# ============================================================================
# 3. SECURITY GROUP
# ============================================================================

class TestSecurityGroup:
    """Test aws_security_group template."""

    def test_rules(self):
        body, _ = declare(
            security_group,
            "web",
            {
                "name": "web",
                "vpc_id": "${aws_vpc.main.id}",
                "ingress": [
                    {"from_port": 80, "to_port": 80, "protocol": "TCP", "cidr_blocks": ["0.0.0.0/0"], "description": "HTTP"},
                    {"from_port": 443, "to_port": 443, "protocol": "tcp", "cidr_blocks": ["0.0.0.0/0"], "description": "HTTPS"},
                ],
                "egress": [
                    {"from_port": 0, "to_port": 0, "protocol": "-1", "cidr_blocks": ["0.0.0.0/0"]},
                ],
            },
        )

        assert body["name"] == "web"
        assert body["description"] == "Managed by Terraform"
        assert [rule["from_port"] for rule in body["ingress"]] == [80, 443]
        assert body["ingress"][0]["protocol"] == "tcp"
        assert body["egress"] == [
            {"from_port": 0, "to_port": 0, "protocol": "-1", "cidr_blocks": ["0.0.0.0/0"]}
        ]

    def test_port_range_order(self):
        with pytest.raises(ValidationError, match="must not exceed"):
            declare(
                security_group,
                "web",
                {"ingress": [{"from_port": 443, "to_port": 80, "protocol": "tcp"}]},
            )

    def test_port_bounds(self):
        with pytest.raises(ValidationError, match="outside"):
            declare(
                security_group,
                "web",
                {"ingress": [{"from_port": 0, "to_port": 70000, "protocol": "tcp"}]},
            )

    def test_protocol(self):
        with pytest.raises(ValidationError, match="Unsupported protocol"):
            declare(
                security_group,
                "web",
                {"ingress": [{"from_port": 0, "to_port": 0, "protocol": "sctp"}]},
            )

    def test_protocol_number(self):
        body, _ = declare(
            security_group,
            "web",
            {"ingress": [{"from_port": 0, "to_port": 0, "protocol": "50"}]},
        )
        assert body["ingress"][0]["protocol"] == "50"
