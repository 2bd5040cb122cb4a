# tests/test_cli.py
"""Tests for the artcert command line."""

import json
import tempfile
from pathlib import Path

import pytest

from artcert.cli import main


@pytest.fixture
def state_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield str(Path(tmpdir) / "worldstate.json")


def run(state_file, *args):
    main(["--state-file", state_file, *args])


CREATE_ARGS = [
    "--photo", "photo_uri",
    "--title", "title",
    "--owner", "owner1",
    "--year", "1962",
    "--artist-id", "id-13894047849",
    "--artist-name", "Tomoko Janra",
    "--artist-dob", "20.11.1980",
]


class TestCommands:
    """Test CLI subcommands against a state file."""

    def test_init_and_list(self, state_file, capsys):
        """Test seeding then listing from the command line."""
        run(state_file, "init")
        capsys.readouterr()

        run(state_file, "list")
        listed = json.loads(capsys.readouterr().out)
        assert len(listed) == 4

    def test_create_transfer_read(self, state_file, capsys):
        """Test create, transfer and read across invocations."""
        run(state_file, "create", "A", *CREATE_ARGS)
        run(state_file, "transfer", "A", "owner2")
        capsys.readouterr()

        run(state_file, "read", "A")
        cert = json.loads(capsys.readouterr().out)
        assert cert["owner"] == "owner2"
        assert cert["appraisedValue"] == 1962

    def test_exists_and_delete(self, state_file, capsys):
        """Test a deleted certificate no longer exists."""
        run(state_file, "create", "A", *CREATE_ARGS)
        run(state_file, "delete", "A")
        capsys.readouterr()

        run(state_file, "exists", "A")
        assert json.loads(capsys.readouterr().out) is False

    def test_error_exit(self, state_file, capsys):
        """Test registry errors print a message and exit 1."""
        with pytest.raises(SystemExit) as exc_info:
            run(state_file, "read", "missing")
        assert exc_info.value.code == 1
        assert "Error: the asset missing does not exist" in capsys.readouterr().err

    def test_invoke(self, state_file, capsys):
        """Test raw invocations go through the dispatcher."""
        ctor = {
            "function": "CreateAsset",
            "Args": [
                "A", "photo_uri", "title",
                {"id": "id-13894047849", "name": "Tomoko Janra", "dateOfBirth": "20.11.1980"},
                "owner1", 1962,
            ],
        }
        run(state_file, "invoke", json.dumps(ctor))
        assert json.loads(capsys.readouterr().out)["status"] == 200

        run(state_file, "invoke", json.dumps({"function": "ReadAsset", "Args": ["A"]}))
        response = json.loads(capsys.readouterr().out)
        assert response["payload"]["title"] == "title"

    def test_invoke_failure_exit(self, state_file, capsys):
        """Test a failed invocation exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            run(state_file, "invoke", json.dumps({"function": "ReadAsset", "Args": ["A"]}))
        assert exc_info.value.code == 1
        assert json.loads(capsys.readouterr().out)["status"] == 500

    def test_custom_seeds(self, state_file, capsys, tmp_path):
        """Test seeding from an alternate seed file."""
        seeds = tmp_path / "seeds.yaml"
        seeds.write_text(
            "certificates:\n"
            "  - ID: S1\n"
            "    URI: uri\n"
            "    title: t\n"
            "    owner: o\n"
            "    appraisedValue: 2000\n"
            "    artist: {id: a, name: n, dateOfBirth: '01.01.1970'}\n"
        )
        run(state_file, "init", "--seeds", str(seeds))
        capsys.readouterr()
        run(state_file, "list")
        assert [c["ID"] for c in json.loads(capsys.readouterr().out)] == ["S1"]

    def test_malformed_seed_file(self, state_file, capsys, tmp_path):
        """Test a malformed seed file prints an error and exits 1."""
        seeds = tmp_path / "seeds.yaml"
        seeds.write_text("certificates: [\n")
        with pytest.raises(SystemExit) as exc_info:
            run(state_file, "init", "--seeds", str(seeds))
        assert exc_info.value.code == 1
        assert "Error: Seed file is not valid YAML" in capsys.readouterr().err

    def test_corrupt_state_file(self, state_file, capsys):
        """Test a corrupt state file prints an error and exits 1."""
        Path(state_file).write_text(json.dumps({"version": "1.0", "state": {"A": 5}}))
        with pytest.raises(SystemExit) as exc_info:
            run(state_file, "list")
        assert exc_info.value.code == 1
        assert "Error: cannot load world state" in capsys.readouterr().err
