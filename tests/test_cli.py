"""Tests for the command-line interface."""

import json

import pytest

from vnquote.cli.commands import get_command, list_commands
from vnquote.cli.main import main


@pytest.fixture
def state_file(tmp_path, state_data: dict):
    """Write the serialized quotation to a temporary file."""
    path = tmp_path / "state.json"
    path.write_text(json.dumps(state_data, ensure_ascii=False), encoding="utf-8")
    return str(path)


def _run_json(capsys, *argv: str) -> tuple[int, object]:
    code = main(list(argv) + ["--format", "json"])
    return code, json.loads(capsys.readouterr().out)


class TestCommandRegistry:
    """Tests for command registration."""

    def test_all_commands_registered(self):
        """Test that every subcommand has a handler."""
        assert set(list_commands()) == {"quote", "validate", "illustrate", "project", "inspect-products"}
        assert get_command("missing") is None


class TestCommands:
    """Tests for each CLI command."""

    def test_quote_json(self, capsys, state_file: str):
        """Test the fee breakdown output."""
        code, data = _run_json(capsys, "quote", state_file, "--reference-date", "01/01/2025")
        assert code == 0
        assert data["fees"]["total"] == 10_704_000
        assert data["allowed_frequencies"] == ["year", "half"]

    def test_quote_table(self, capsys, state_file: str):
        """Test that table output renders the totals."""
        assert main(["quote", state_file, "--reference-date", "01/01/2025"]) == 0
        assert "10.704.000" in capsys.readouterr().out

    def test_validate_valid_quote(self, capsys, state_file: str):
        """Test exit code 0 for a valid quotation."""
        code, data = _run_json(capsys, "validate", state_file, "-d", "01/01/2025")
        assert code == 0
        assert data == {"valid": True, "issues": []}

    def test_validate_invalid_quote(self, capsys, tmp_path, state_data: dict):
        """Test exit code 1 and issues for an invalid quotation."""
        state_data["main_product"]["stbh"] = 50_000_000
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(state_data), encoding="utf-8")

        code, data = _run_json(capsys, "validate", str(path), "-d", "01/01/2025")
        assert code == 1
        assert data["valid"] is False
        assert "main_product.stbh" in {issue["field"] for issue in data["issues"]}

    def test_illustrate_json(self, capsys, state_file: str):
        """Test the schedule output."""
        code, data = _run_json(capsys, "illustrate", state_file, "-d", "01/01/2025")
        assert code == 0
        assert len(data["rows"]) == 31
        assert data["target_age"] == 60

    def test_illustrate_error(self, capsys, tmp_path, state_data: dict):
        """Test that illustration errors exit 1 with a message."""
        del state_data["target_age"]
        path = tmp_path / "no_target.json"
        path.write_text(json.dumps(state_data), encoding="utf-8")

        code, data = _run_json(capsys, "illustrate", str(path), "-d", "01/01/2025")
        assert code == 1
        assert data == {"error": "Invalid illustration end age."}

    def test_project_json(self, capsys, state_file: str):
        """Test the projection output."""
        code, data = _run_json(capsys, "project", state_file, "-d", "01/01/2025")
        assert code == 0
        assert len(data["guaranteed"]) == 31

    def test_inspect_products_json(self, capsys):
        """Test the catalog listing."""
        code, data = _run_json(capsys, "inspect-products")
        assert code == 0
        assert "PUL_TRON_DOI" in {p["id"] for p in data}

    def test_unreadable_state(self, capsys, tmp_path):
        """Test that a missing file exits 1."""
        code, data = _run_json(capsys, "quote", str(tmp_path / "missing.json"))
        assert code == 1
        assert "Cannot read" in data["error"]

    def test_bad_reference_date(self, capsys, state_file: str):
        """Test that a malformed reference date exits 1."""
        code, _ = _run_json(capsys, "quote", state_file, "-d", "2025-01-01")
        assert code == 1

    def test_no_command_prints_help(self, capsys):
        """Test running without a subcommand."""
        assert main([]) == 0
        assert "vnquote" in capsys.readouterr().out
