"""Unit tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from sql_parse_tree.cli import app
from sql_parse_tree.parser import parse_sql

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Run each command from an empty directory without settings overrides."""
    monkeypatch.chdir(tmp_path)
    for name in ["OUTPUT_FORMAT", "DIALECT", "PRETTY_TEXT", "LOG_DESTINATION"]:
        monkeypatch.delenv(f"SQL_PARSE_TREE_{name}", raising=False)


def test_json_is_the_default_format():
    result = runner.invoke(app, [], input="SELECT a FROM t")

    assert result.exit_code == 0
    document = json.loads(result.stdout)
    assert document["TypeName"] == "Select"
    assert document["Text"] == parse_sql("SELECT a FROM t").sql(pretty=True)
    assert "\n" in document["Text"]


def test_yaml_format():
    result = runner.invoke(app, ["--format", "yaml"], input="SELECT 1")

    assert result.exit_code == 0
    assert yaml.safe_load(result.stdout)["TypeName"] == "Select"


def test_markdown_is_displayed():
    result = runner.invoke(app, ["-f", "md"], input="SELECT 1")

    assert result.exit_code == 0
    assert "Select" in result.stdout


def test_dialect_option():
    result = runner.invoke(app, ["--dialect", "tsql"], input="SELECT TOP 5 a FROM t")

    assert result.exit_code == 0
    assert "TOP" in json.loads(result.stdout)["Text"]


def test_syntax_error_exits_with_code_2():
    result = runner.invoke(app, [], input="SELECT * FROM t WHERE (a = 1")

    assert result.exit_code == 2


def test_input_must_be_redirected():
    with patch("sql_parse_tree.cli._input_is_redirected", return_value=False):
        result = runner.invoke(app, [])

    assert result.exit_code == 1


def test_to_file_uses_default_name(tmp_path):
    result = runner.invoke(app, ["--format", "html", "--to-file"], input="SELECT 1")

    assert result.exit_code == 0
    written = tmp_path / "out.html"
    assert written.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
    assert "out.html" in result.stdout


def test_output_path_implies_file(tmp_path):
    target = tmp_path / "tree.json"

    result = runner.invoke(app, ["-o", str(target)], input="SELECT 1")

    assert result.exit_code == 0
    assert json.loads(target.read_text(encoding="utf-8"))["TypeName"] == "Select"


def test_log_is_appended_to_output_file(tmp_path):
    target = tmp_path / "tree.md"

    result = runner.invoke(
        app, ["-f", "md", "-o", str(target), "--log-destination", "output"], input="SELECT 1"
    )

    assert result.exit_code == 0
    content = target.read_text(encoding="utf-8")
    assert content.startswith("1. **Select**")
    assert "Visitor time:" in content
    assert "Render MD:" in content


def test_log_is_not_emitted_by_default():
    result = runner.invoke(app, [], input="SELECT 1")

    assert result.exit_code == 0
    assert "Render JSON" not in result.stdout


def test_long_or_chain_is_rendered():
    condition = " OR ".join(f"a = {i}" for i in range(301))

    result = runner.invoke(app, [], input=f"SELECT * FROM t WHERE {condition}")

    assert result.exit_code == 0
    assert json.loads(result.stdout)["TypeName"] == "Select"


def test_depth_failure_exits_with_code_1():
    condition = " OR ".join(f"a = {i}" for i in range(301))

    result = runner.invoke(app, ["-f", "yaml"], input=f"SELECT * FROM t WHERE {condition}")

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
