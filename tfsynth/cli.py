"""
Command line entry point.

    tfsynth synth stacks/network.py --out ./build
    tfsynth synth stacks/network.py --stdout
    tfsynth resources --provider aws
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import yaml
from pydantic import ValidationError

from tfsynth.core.errors import SynthesisError
from tfsynth.file_repository import FileManifestRepository
from tfsynth.pipeline import StackPipeline
from tfsynth.terraform.registry import ResourceRegistry
from tfsynth.yaml_config import SynthConfig, get_yaml_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tfsynth", description="Synthesize Terraform JSON from Python stack files."
    )
    parser.add_argument("--config", help="Path to synth_config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    synth = subparsers.add_parser("synth", help="Synthesize a stack file")
    synth.add_argument("stack_file", help="Python file defining build(scope, resources)")
    synth.add_argument("--name", help="Stack name (defaults to the file name)")
    synth.add_argument("--out", help="Output directory (overrides settings.output.path)")
    synth.add_argument(
        "--stdout", action="store_true", help="Print the manifest instead of writing it"
    )

    resources = subparsers.add_parser("resources", help="List registered resource templates")
    resources.add_argument("--provider", help="Only list templates of this provider")
    return parser


def _configure_logging(config: SynthConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.settings.logging.level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _run_synth(args: argparse.Namespace, config: SynthConfig) -> int:
    repository = None
    if args.out:
        output = config.settings.output
        repository = FileManifestRepository(args.out, indent=output.indent, sort_keys=output.sort_keys)
    pipeline = StackPipeline(config=config, repository=repository)

    try:
        artifact = pipeline.run_file(args.stack_file, name=args.name)
        if args.stdout:
            print(artifact.to_json(indent=config.settings.output.indent))
            return 0
        path = pipeline.persist(artifact)
    except (SynthesisError, ValidationError, ValueError, KeyError, AttributeError) as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1

    print(f"Wrote {path}")
    return 0


def _run_resources(args: argparse.Namespace, config: SynthConfig) -> int:
    registry = ResourceRegistry(config)
    registry.load_enabled_providers()
    providers = [args.provider] if args.provider else registry.get_all_providers()
    for provider in providers:
        for key, template in sorted(registry.get_provider_templates(provider).items()):
            print(f"{provider}\t{key}\t{template.kind}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_yaml_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as ex:
        print(f"Configuration error: {ex}", file=sys.stderr)
        return 2
    _configure_logging(config, args.verbose)

    if args.command == "synth":
        try:
            return _run_synth(args, config)
        except FileNotFoundError as ex:
            print(f"Error: {ex}", file=sys.stderr)
            return 1
    return _run_resources(args, config)


if __name__ == "__main__":
    sys.exit(main())
