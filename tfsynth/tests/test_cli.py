"""
Tests for the tfsynth command.
"""

import json

import pytest

from tfsynth.cli import main

STACK_SOURCE = '''
def build(s, resources):
    s.provider("aws", lambda s: s.region("us-east-1"))
    vpc = resources.aws_vpc("main", {"cidr_block": "10.0.0.0/16"})
    s.output("vpc_id", lambda s: s.value(vpc.id))
'''

BROKEN_STACK_SOURCE = '''
def build(s, resources):
    s.cidr_block("10.0.0.0/16")
'''


@pytest.fixture
def stack_file(tmp_path):
    path = tmp_path / "network.py"
    path.write_text(STACK_SOURCE, encoding="utf-8")
    return path


class TestCli:
    """Test the tfsynth command."""

    def test_synth_stdout(self, config_file, stack_file, capsys):
        code = main(["--config", str(config_file), "synth", str(stack_file), "--stdout"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["manifest"]["resource"]["aws_vpc"]["main"]["cidr_block"] == "10.0.0.0/16"

    def test_synth_writes_to_out(self, config_file, stack_file, tmp_path, capsys):
        out_dir = tmp_path / "build"
        code = main(["--config", str(config_file), "synth", str(stack_file), "--out", str(out_dir)])

        assert code == 0
        assert (out_dir / "network" / "main.tf.json").exists()
        assert "Wrote" in capsys.readouterr().out

    def test_synth_uses_configured_output(self, config_file, stack_file, tmp_path):
        code = main(["--config", str(config_file), "synth", str(stack_file)])

        assert code == 0
        assert (tmp_path / "stacks" / "network" / "main.tf.json").exists()

    def test_synth_error(self, config_file, tmp_path, capsys):
        path = tmp_path / "broken.py"
        path.write_text(BROKEN_STACK_SOURCE, encoding="utf-8")

        code = main(["--config", str(config_file), "synth", str(path), "--stdout"])

        assert code == 1
        assert "cidr_block" in capsys.readouterr().err

    def test_synth_name_outside_output_rejected(self, config_file, stack_file, tmp_path, capsys):
        out_dir = tmp_path / "build"
        code = main(
            ["--config", str(config_file), "synth", str(stack_file), "--out", str(out_dir), "--name", "../escaped"]
        )

        assert code == 1
        assert "Invalid stack name" in capsys.readouterr().err
        assert not (tmp_path / "escaped").exists()

    def test_missing_stack_file(self, config_file, tmp_path, capsys):
        code = main(["--config", str(config_file), "synth", str(tmp_path / "missing.py")])

        assert code == 1
        assert "Stack file not found" in capsys.readouterr().err

    def test_missing_config(self, tmp_path, stack_file, capsys):
        code = main(["--config", str(tmp_path / "absent.yaml"), "synth", str(stack_file)])

        assert code == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_resources(self, config_file, capsys):
        code = main(["--config", str(config_file), "resources", "--provider", "aws"])

        assert code == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert "aws\taws_vpc\tvirtual private cloud" in lines
        assert len(lines) == 5
