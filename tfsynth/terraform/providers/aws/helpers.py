"""
Shared validators and constants for AWS resource templates.
"""

from __future__ import annotations

import ipaddress
import re

# Protocols accepted by security group and NACL rules ("-1" means all).
RULE_PROTOCOLS = ("tcp", "udp", "icmp", "icmpv6", "-1", "all")
INSTANCE_TENANCIES = ("default", "dedicated", "host")

_INTERPOLATION = re.compile(r"^\$\{.+\}$")
_AVAILABILITY_ZONE = re.compile(r"^[a-z]{2}(-gov)?-[a-z]+-\d[a-z]$")


def is_interpolation(value: str) -> bool:
    """True for Terraform interpolation strings such as ${aws_vpc.main.id}."""
    return bool(_INTERPOLATION.match(value))


def validate_cidr(value: str) -> str:
    if is_interpolation(value):
        return value
    try:
        network = ipaddress.ip_network(value, strict=True)
    except ValueError as exc:
        raise ValueError(f"Invalid CIDR block '{value}': {exc}") from exc
    return str(network)


def validate_ipv4_cidr(value: str) -> str:
    value = validate_cidr(value)
    if not is_interpolation(value) and ipaddress.ip_network(value).version != 4:
        raise ValueError(f"Expected an IPv4 CIDR block, got '{value}'.")
    return value


def validate_vpc_cidr(value: str) -> str:
    """AWS VPCs accept netmasks between /16 and /28."""
    value = validate_ipv4_cidr(value)
    if not is_interpolation(value):
        prefix = ipaddress.ip_network(value).prefixlen
        if not 16 <= prefix <= 28:
            raise ValueError(f"VPC CIDR block '{value}' must use a /16 to /28 netmask.")
    return value


def validate_availability_zone(value: str) -> str:
    if is_interpolation(value) or _AVAILABILITY_ZONE.match(value):
        return value
    raise ValueError(f"Invalid availability zone '{value}'.")


def validate_port(value: int) -> int:
    if not 0 <= value <= 65535:
        raise ValueError(f"Port {value} is outside 0-65535.")
    return value


def validate_protocol(value: str) -> str:
    protocol = value.lower()
    if protocol not in RULE_PROTOCOLS and not protocol.isdigit():
        raise ValueError(
            f"Unsupported protocol '{value}'. Expected one of {', '.join(RULE_PROTOCOLS)} or a protocol number."
        )
    return protocol


__all__ = [
    "INSTANCE_TENANCIES",
    "RULE_PROTOCOLS",
    "is_interpolation",
    "validate_availability_zone",
    "validate_cidr",
    "validate_ipv4_cidr",
    "validate_port",
    "validate_protocol",
    "validate_vpc_cidr",
]
