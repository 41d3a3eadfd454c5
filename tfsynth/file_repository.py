"""
File-based repository for synthesized stacks.

Each stack gets its own directory:
- main.tf.json: the Terraform JSON manifest, ready for `terraform plan`
- stack.json: metadata (creation time, declared resources)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from tfsynth.core.bury import unwrap
from tfsynth.models import StackArtifact

LOGGER = logging.getLogger(__name__)

MANIFEST_FILENAME = "main.tf.json"
METADATA_FILENAME = "stack.json"


class FileManifestRepository:
    """
    File-based repository for synthesized stacks.

    Directory structure:
        <base_path>/
            <stack_1>/
                main.tf.json    # Terraform JSON
                stack.json      # Metadata
            <stack_2>/
                main.tf.json
                stack.json
    """

    def __init__(self, base_path: str | Path = ".", indent: int = 2, sort_keys: bool = False):
        """
        Initialize file-based manifest repository.

        Args:
            base_path: Root directory for storing stacks. Defaults to current directory.
            indent: JSON indentation used for written files.
            sort_keys: Whether manifest keys are sorted on write.
        """
        self.base_path = Path(base_path).resolve()
        self.indent = indent
        self.sort_keys = sort_keys

    def save(self, artifact: StackArtifact) -> Path:
        """
        Save a stack to the filesystem.

        Returns:
            Path of the written main.tf.json

        Raises:
            ValueError: If the stack name resolves outside base_path.
        """
        stack_dir = self._stack_dir(artifact.name)
        stack_dir.mkdir(parents=True, exist_ok=True)

        manifest_file = stack_dir / MANIFEST_FILENAME
        with open(manifest_file, 'w', encoding='utf-8') as f:
            json.dump(unwrap(artifact.manifest), f, indent=self.indent, sort_keys=self.sort_keys)
            f.write("\n")

        metadata_file = stack_dir / METADATA_FILENAME
        with open(metadata_file, 'w', encoding='utf-8') as f:
            json.dump(artifact.metadata(), f, indent=self.indent)

        LOGGER.info("Wrote stack %s to %s", artifact.name, manifest_file)
        return manifest_file

    def get(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve the Terraform JSON manifest of a stack.

        Returns:
            Manifest dictionary if found, None otherwise
        """
        manifest_file = self._stack_dir(name) / MANIFEST_FILENAME
        if not manifest_file.exists():
            return None
        with open(manifest_file, 'r', encoding='utf-8') as f:
            return json.load(f)

    def get_metadata(self, name: str) -> Optional[Dict[str, Any]]:
        metadata_file = self._stack_dir(name) / METADATA_FILENAME
        if not metadata_file.exists():
            return None
        with open(metadata_file, 'r', encoding='utf-8') as f:
            return json.load(f)

    def delete(self, name: str) -> bool:
        """
        Delete a stack and its directory.

        Returns:
            True if the stack was deleted, False if not found
        """
        stack_dir = self._stack_dir(name)

        if not stack_dir.exists():
            return False

        for file in stack_dir.iterdir():
            file.unlink()
        stack_dir.rmdir()

        return True

    def exists(self, name: str) -> bool:
        return (self._stack_dir(name) / MANIFEST_FILENAME).exists()

    def _stack_dir(self, name: str) -> Path:
        """Directory of stack `name`; it must stay inside `base_path`."""
        stack_dir = (self.base_path / name).resolve()
        if stack_dir == self.base_path or not stack_dir.is_relative_to(self.base_path):
            raise ValueError(f"Invalid stack name {name!r}: must resolve inside {self.base_path}")
        return stack_dir
