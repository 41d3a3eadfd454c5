"""
Pytest configuration and shared fixtures for all tests.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure the repo root is on `sys.path` so top-level imports work.
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

# Point configuration discovery at the packaged defaults so tests do not pick
# up a synth_config.yaml from the invoking directory.
default_config = repo_root / "tfsynth" / "synth_config.yaml"
if not os.getenv("TFSYNTH_CONFIG") and default_config.exists():
    os.environ["TFSYNTH_CONFIG"] = str(default_config)

from tfsynth.yaml_config import reset_yaml_config


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Reset the cached configuration between tests."""
    reset_yaml_config()
    yield
    reset_yaml_config()


@pytest.fixture
def config_file(tmp_path):
    """Write a config file with output under tmp_path and return its path."""
    path = tmp_path / "synth_config.yaml"
    path.write_text(
        "providers:\n"
        "  aws:\n"
        "    enabled: true\n"
        "    resources: []\n"
        "settings:\n"
        "  vocabulary:\n"
        "    extra_keys: [module]\n"
        "  output:\n"
        f"    path: \"{tmp_path / 'stacks'}\"\n"
        "    indent: 2\n"
        "  logging:\n"
        "    level: WARNING\n",
        encoding="utf-8",
    )
    return path
