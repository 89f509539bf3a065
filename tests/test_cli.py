#!/usr/bin/env python3
"""
Tests for the hdrkit command line interface.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from hdrkit.cli import cli
from hdrkit.config import CONFIG_FILENAME
from hdrkit.resolver import canonical_path


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path):
    root = Path(canonical_path(tmp_path))
    (root / "a.h").write_text('#include "b.h"\nint a(int x);\n')
    (root / "b.h").write_text("#define B_LIMIT 8\nint b(void);\n")
    (root / CONFIG_FILENAME).write_text(
        json.dumps({"header_files": ["a.h"], "system_include_paths": []})
    )
    return root


def invoke(runner, project, *args):
    return runner.invoke(cli, ["--config", str(project / CONFIG_FILENAME), *args])


def test_analyze_json(runner, project):
    result = invoke(runner, project, "analyze", str(project / "b.h"), "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [f["name"] for f in data["functions"]] == ["b"]
    assert data["constants"] == {"B_LIMIT": 8}


def test_analyze_table(runner, project):
    result = invoke(runner, project, "analyze", str(project / "a.h"))

    assert result.exit_code == 0, result.output
    assert "Functions (1)" in result.output
    assert "b.h" in result.output


def test_analyze_missing_header(runner, project):
    result = invoke(runner, project, "analyze", str(project / "missing.h"))

    assert result.exit_code == 1
    assert "Header file not found" in result.output


def test_deps_json(runner, project):
    result = invoke(runner, project, "deps", str(project / "a.h"), "--json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [str(project / "b.h")]


def test_order_uses_configured_headers(runner, project):
    result = invoke(runner, project, "order", "--json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [str(project / "b.h"), str(project / "a.h")]


def test_order_with_include_dir(runner, project):
    include = project / "include"
    include.mkdir()
    (include / "extra.h").write_text("int extra(void);\n")
    (project / "c.h").write_text('#include "extra.h"\n')

    result = invoke(runner, project, "order", str(project / "c.h"), "-I", str(include), "--json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [str(include / "extra.h"), str(project / "c.h")]


def test_order_reports_cycle(runner, project):
    (project / "b.h").write_text('#include "a.h"\n')

    result = invoke(runner, project, "order", str(project / "a.h"))

    assert result.exit_code == 1
    assert "Circular dependency detected" in result.output


def test_graph_all(runner, project):
    result = invoke(runner, project, "graph", "--all", "--json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        str(project / "a.h"): [str(project / "b.h")],
        str(project / "b.h"): [],
    }


def test_tree_sitter_extractor_option(runner, project):
    result = invoke(runner, project, "--extractor", "tree-sitter", "analyze", str(project / "a.h"), "--json")

    assert result.exit_code == 0, result.output
    assert [f["name"] for f in json.loads(result.output)["functions"]] == ["a"]


def test_bad_config(runner, tmp_path):
    config_path = tmp_path / CONFIG_FILENAME
    config_path.write_text("[]")

    result = runner.invoke(cli, ["--config", str(config_path), "order"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
