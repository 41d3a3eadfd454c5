"""
Stack pipeline: build function -> Terraform JSON manifest -> repository.

A stack is any callable `build(scope, resources)`. `scope` is the synthesis
scope of a fresh TerraformSynthesizer and `resources` a registry binder:

    def build(s, resources):
        s.provider("aws", lambda s: s.region("us-east-1"))
        vpc = resources.aws_vpc("main", {"cidr_block": "10.0.0.0/16"})
        resources.aws_subnet("public", {"vpc_id": vpc.id, "cidr_block": "10.0.1.0/24"})

Stack files are plain Python modules that define such a `build` function.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from tfsynth.core.abstract_synthesizer import SynthesisScope
from tfsynth.file_repository import FileManifestRepository
from tfsynth.models import StackArtifact
from tfsynth.terraform.registry import ResourceBinder, ResourceRegistry
from tfsynth.terraform.synthesizer import TerraformSynthesizer
from tfsynth.yaml_config import SynthConfig, get_yaml_config

LOGGER = logging.getLogger(__name__)

StackBuilder = Callable[[SynthesisScope, ResourceBinder], Any]


class StackPipeline:
    """
    High-level orchestrator that turns stack definitions into manifests.
    """

    def __init__(
        self,
        config: Optional[SynthConfig] = None,
        registry: Optional[ResourceRegistry] = None,
        repository: Optional[FileManifestRepository] = None,
    ) -> None:
        self.config = config or get_yaml_config()
        if registry is None:
            registry = ResourceRegistry(self.config)
            registry.load_enabled_providers()
        self.registry = registry
        if repository is None:
            output = self.config.settings.output
            repository = FileManifestRepository(
                output.path, indent=output.indent, sort_keys=output.sort_keys
            )
        self.repository = repository

    def new_synthesizer(self, name: str) -> TerraformSynthesizer:
        return TerraformSynthesizer(
            name=name, extra_keys=self.config.settings.vocabulary.extra_keys
        )

    def run(self, build: StackBuilder, name: str) -> StackArtifact:
        """
        Synthesize one stack.

        Errors raised by the engine, the templates or `build` itself propagate
        unchanged.
        """
        synthesizer = self.new_synthesizer(name)
        binder = self.registry.bind(synthesizer.scope)
        LOGGER.info("Synthesizing stack %s", name)
        synthesizer.synthesize(lambda scope: build(scope, binder))
        return StackArtifact(
            name=name,
            manifest=synthesizer.to_dict(),
            resources=list(binder.declared),
        )

    def run_file(self, path: str | Path, name: Optional[str] = None) -> StackArtifact:
        """Load a stack file exposing `build` and synthesize it."""
        stack_path = Path(path)
        build = load_stack_builder(stack_path)
        return self.run(build, name or stack_path.stem)

    def persist(self, artifact: StackArtifact) -> Path:
        return self.repository.save(artifact)


def load_stack_builder(path: Path) -> StackBuilder:
    if not path.exists():
        raise FileNotFoundError(f"Stack file not found: {path}")
    spec = importlib.util.spec_from_file_location(f"tfsynth_stack_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load stack file: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    build = getattr(module, "build", None)
    if not callable(build):
        raise AttributeError(f"Stack file {path} does not define a callable 'build'.")
    return build
