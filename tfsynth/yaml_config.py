"""
YAML-based synthesis configuration.

Controls which resource providers are loaded into the registry, extra
top-level vocabulary keys, how manifests are written, and the log level.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

CONFIG_ENV_VAR = "TFSYNTH_CONFIG"
CONFIG_FILENAME = "synth_config.yaml"


@dataclass
class ProviderConfig:
    """Configuration for a resource provider."""
    enabled: bool = True
    resources: List[str] = field(default_factory=list)


@dataclass
class VocabularyConfig:
    """Top-level keys accepted in addition to Terraform's built-in ones."""
    extra_keys: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """Where and how synthesized stacks are written."""
    path: str = "./stacks"
    indent: int = 2
    sort_keys: bool = False


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class SettingsConfig:
    """Global settings."""
    vocabulary: VocabularyConfig = field(default_factory=VocabularyConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass
class SynthConfig:
    """
    Configuration loaded from YAML.

    Structure:
        providers -> <name> -> enabled / resources
        settings  -> vocabulary / output / logging
    """
    providers: Dict[str, ProviderConfig] = field(default_factory=dict)
    settings: SettingsConfig = field(default_factory=SettingsConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> SynthConfig:
        """Load configuration from YAML file."""
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {yaml_path} must contain a mapping.")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict) -> SynthConfig:
        """Parse configuration dictionary."""
        providers = {}
        for provider_name, provider_data in (data.get('providers') or {}).items():
            if not isinstance(provider_data, dict):
                continue
            providers[provider_name] = ProviderConfig(
                enabled=provider_data.get('enabled', True),
                resources=list(provider_data.get('resources') or []),
            )

        settings_data = data.get('settings') or {}

        vocabulary_data = settings_data.get('vocabulary') or {}
        vocabulary = VocabularyConfig(
            extra_keys=[str(key) for key in vocabulary_data.get('extra_keys') or []]
        )

        output_data = settings_data.get('output') or {}
        output = OutputConfig(
            path=output_data.get('path', './stacks'),
            indent=int(output_data.get('indent', 2)),
            sort_keys=bool(output_data.get('sort_keys', False)),
        )

        logging_data = settings_data.get('logging') or {}
        logging_config = LoggingConfig(
            level=str(logging_data.get('level', 'INFO')).upper()
        )

        settings = SettingsConfig(
            vocabulary=vocabulary, output=output, logging=logging_config
        )
        return cls(providers=providers, settings=settings)

    # =============================================================================
    # Query Methods
    # =============================================================================

    def is_provider_enabled(self, provider: str) -> bool:
        """Check if a provider is enabled."""
        if provider not in self.providers:
            return False
        return self.providers[provider].enabled

    def get_enabled_providers(self) -> List[str]:
        """Get list of enabled providers."""
        return [name for name, config in self.providers.items() if config.enabled]

    def get_enabled_resources(self, provider: str) -> Optional[List[str]]:
        """
        Get enabled resources for a provider.

        Returns:
            List of enabled resources, or None if all resources are enabled
        """
        if not self.is_provider_enabled(provider):
            return []
        resources = self.providers[provider].resources
        if not resources:
            return None  # All resources enabled
        return resources

    def is_resource_enabled(self, provider: str, resource: str) -> bool:
        """Check if a specific resource is enabled."""
        enabled_resources = self.get_enabled_resources(provider)
        if enabled_resources is None:
            return True
        return resource in enabled_resources


# Global configuration instance
_yaml_config: Optional[SynthConfig] = None


def get_yaml_config(config_path: Optional[str | Path] = None) -> SynthConfig:
    """
    Get the global YAML configuration.

    Args:
        config_path: Path to YAML config file. If None, uses default locations:
                    1. TFSYNTH_CONFIG environment variable
                    2. ./synth_config.yaml (current directory)
                    3. the default config shipped with the package
                    4. ~/.tfsynth/synth_config.yaml (home directory)

    Returns:
        SynthConfig instance
    """
    global _yaml_config

    if _yaml_config is not None and config_path is None:
        return _yaml_config

    if config_path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            config_path = Path(env_path)
        else:
            candidates = [
                Path.cwd() / CONFIG_FILENAME,
                Path(__file__).resolve().parent / CONFIG_FILENAME,
                Path.home() / '.tfsynth' / CONFIG_FILENAME,
            ]
            for candidate in candidates:
                if candidate.exists():
                    config_path = candidate
                    break

    if config_path is None:
        raise FileNotFoundError(
            f"No config file found. Create {CONFIG_FILENAME} or set {CONFIG_ENV_VAR} environment variable."
        )

    _yaml_config = SynthConfig.from_yaml(config_path)
    return _yaml_config


def reset_yaml_config() -> None:
    """Reset the global YAML configuration cache."""
    global _yaml_config
    _yaml_config = None


def set_yaml_config(config: SynthConfig) -> None:
    """Set a custom YAML configuration."""
    global _yaml_config
    _yaml_config = config
