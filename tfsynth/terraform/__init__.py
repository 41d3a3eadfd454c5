"""Terraform vocabulary, resource templates and their registry."""

from __future__ import annotations

from tfsynth.terraform.attributes import apply_attributes
from tfsynth.terraform.registry import ResourceBinder, ResourceRegistry
from tfsynth.terraform.resource_templates import ResourceAttributes, ResourceTemplate
from tfsynth.terraform.synthesizer import TERRAFORM_KEYS, TerraformSynthesizer

__all__ = [
    "TERRAFORM_KEYS",
    "ResourceAttributes",
    "ResourceBinder",
    "ResourceRegistry",
    "ResourceTemplate",
    "TerraformSynthesizer",
    "apply_attributes",
]
