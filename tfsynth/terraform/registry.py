"""
Registry for Terraform resource templates.

Provider template files live under:
tfsynth/terraform/providers/<provider>/resources/*.py

Nothing is registered at import time: application start-up code calls
`register`, `load_provider` or `load_enabled_providers` on a registry it owns.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from tfsynth.core.abstract_synthesizer import SynthesisScope
from tfsynth.models import ResourceReference
from tfsynth.terraform.resource_templates import ResourceTemplate
from tfsynth.yaml_config import SynthConfig

LOGGER = logging.getLogger(__name__)

PROVIDERS_PACKAGE = "tfsynth.terraform.providers"


class ResourceRegistry:
    def __init__(self, config: Optional[SynthConfig] = None) -> None:
        self.config = config
        self.providers: Dict[str, Dict[str, ResourceTemplate]] = {}

    def register(self, template: ResourceTemplate, provider: str = "custom") -> ResourceTemplate:
        existing = self._find(template.key)
        if existing is not None and existing is not template:
            raise ValueError(f"Resource template '{template.key}' is already registered.")
        self.providers.setdefault(provider, {})[template.key] = template
        return template

    def load_provider(self, provider: str) -> List[str]:
        """
        Import every module of `provider` that exposes `get_templates()` and
        register the templates it returns. Honours the YAML resource filter.

        Returns:
            Keys of the templates registered by this call.
        """
        if self.config is not None and not self.config.is_provider_enabled(provider):
            LOGGER.info("Provider %s is disabled; skipping.", provider)
            return []

        package_name = f"{PROVIDERS_PACKAGE}.{provider}.resources"
        package = importlib.import_module(package_name)

        registered: List[str] = []
        for base in getattr(package, "__path__", []):
            base_path = Path(base)
            for module_file in sorted(base_path.glob("*.py")):
                if module_file.stem.startswith("_"):
                    continue
                module = importlib.import_module(f"{package_name}.{module_file.stem}")
                get_templates = getattr(module, "get_templates", None)
                if not callable(get_templates):
                    continue
                for template in get_templates():
                    if self.config is not None and not self.config.is_resource_enabled(
                        provider, template.key
                    ):
                        continue
                    self.register(template, provider=provider)
                    registered.append(template.key)

        LOGGER.debug("Loaded %d templates for provider %s", len(registered), provider)
        return registered

    def load_enabled_providers(self) -> List[str]:
        if self.config is None:
            raise RuntimeError("load_enabled_providers requires a SynthConfig.")
        loaded: List[str] = []
        for provider in self.config.get_enabled_providers():
            loaded.extend(self.load_provider(provider))
        return loaded

    def get(self, key: str) -> ResourceTemplate:
        template = self._find(key)
        if template is None:
            known = ", ".join(self.keys()) or "<none>"
            raise KeyError(f"Unknown resource template '{key}'. Registered: {known}")
        return template

    def keys(self) -> List[str]:
        return sorted(key for templates in self.providers.values() for key in templates)

    def get_provider_templates(self, provider: str) -> Dict[str, ResourceTemplate]:
        return self.providers.get(provider, {})

    def get_all_providers(self) -> List[str]:
        return list(self.providers.keys())

    def declare(
        self,
        scope: SynthesisScope,
        key: str,
        name: str,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> ResourceReference:
        return self.get(key)(scope, name, attributes)

    def bind(self, scope: SynthesisScope) -> "ResourceBinder":
        return ResourceBinder(self, scope)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _find(self, key: str) -> Optional[ResourceTemplate]:
        for templates in self.providers.values():
            if key in templates:
                return templates[key]
        return None


class ResourceBinder:
    """
    Registry view bound to one synthesis scope.

    `resources.aws_vpc("main", {...})` declares the resource and records the
    returned reference in `resources.declared`.
    """

    def __init__(self, registry: ResourceRegistry, scope: SynthesisScope) -> None:
        self._registry = registry
        self._scope = scope
        self.declared: List[ResourceReference] = []

    def __getattr__(self, key: str) -> Callable[..., ResourceReference]:
        if key.startswith("_"):
            raise AttributeError(key)
        try:
            template = self._registry.get(key)
        except KeyError as exc:
            raise AttributeError(exc.args[0]) from exc

        def declare(name: str, attributes: Optional[Mapping[str, Any]] = None) -> ResourceReference:
            reference = template(self._scope, name, attributes)
            self.declared.append(reference)
            return reference

        return declare
