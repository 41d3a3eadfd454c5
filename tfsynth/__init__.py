"""Attribute synthesis of Terraform manifests.

The engine lives in `tfsynth.core` and has no runtime dependencies beyond the
standard library. Configuration, resource templates and persistence pull in
PyYAML and pydantic, so public symbols are exposed via lazy attribute access.
"""

from __future__ import annotations

from typing import Any

__all__ = (
    "AbstractSynthesizer",
    "SynthesizerFactory",
    "TerraformSynthesizer",
    "ResourceRegistry",
    "StackPipeline",
    "FileManifestRepository",
)


def __getattr__(name: str) -> Any:  # pragma: no cover
    if name == "AbstractSynthesizer":
        from .core.abstract_synthesizer import AbstractSynthesizer

        return AbstractSynthesizer
    if name == "SynthesizerFactory":
        from .core.factory import SynthesizerFactory

        return SynthesizerFactory
    if name == "TerraformSynthesizer":
        from .terraform.synthesizer import TerraformSynthesizer

        return TerraformSynthesizer
    if name == "ResourceRegistry":
        from .terraform.registry import ResourceRegistry

        return ResourceRegistry
    if name == "StackPipeline":
        from .pipeline import StackPipeline

        return StackPipeline
    if name == "FileManifestRepository":
        from .file_repository import FileManifestRepository

        return FileManifestRepository
    raise AttributeError(name)


def __dir__() -> list[str]:  # pragma: no cover
    return sorted(list(globals().keys()) + list(__all__))
