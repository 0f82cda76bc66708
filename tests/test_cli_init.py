from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from cvbuilder.cli import app


def test_init_scaffolds_project_directory(tmp_path: Path) -> None:
    runner = CliRunner()
    target = tmp_path / "cvproj"
    result = runner.invoke(app, ["init", str(target), "--name", "Jane Doe"])
    assert result.exit_code == 0, result.output

    assert (target / "cvbuilder.yml").exists()
    data = json.loads((target / "data.json").read_text(encoding="utf-8"))
    header = data["blocks"][0]
    assert header["type"] == "header"
    assert header["name"] == "Jane Doe"
    assert {block["type"] for block in data["blocks"]} >= {"header", "divider", "section"}


def test_init_refuses_to_overwrite_without_force(tmp_path: Path) -> None:
    runner = CliRunner()
    target = tmp_path / "cvproj"
    assert runner.invoke(app, ["init", str(target)]).exit_code == 0

    again = runner.invoke(app, ["init", str(target)])
    assert again.exit_code == 1
    assert "Cannot scaffold" in again.output

    forced = runner.invoke(app, ["init", str(target), "--force"])
    assert forced.exit_code == 0, forced.output
    assert "updated" in forced.output
