#!/usr/bin/env python3
"""
Tests for whole-header analysis against the fixture headers.
"""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from hdrkit.analyzer import HeaderAnalyzer, get_extractor, read_header
from hdrkit.errors import AnalysisError, HeaderNotFoundError, HeaderNotReadableError
from hdrkit.extractors import RegexExtractor
from hdrkit.models import AnalysisResult, Parameter, RawExpression


@pytest.fixture
def fixtures_dir():
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def analyzer():
    return HeaderAnalyzer()


def test_analyze_sample_header(fixtures_dir, analyzer):
    result = analyzer.analyze(fixtures_dir / "sample.h")

    assert isinstance(result, AnalysisResult)
    assert [f.name for f in result.functions] == ["add", "process_array"]

    add = result.function("add")
    assert add.return_type == "int"
    assert add.parameters == [Parameter(name="a", type="int"), Parameter(name="b", type="int")]

    process = result.function("process_array")
    assert process.return_type == "void"
    assert process.parameters == [
        Parameter(name="arr", type="int*"),
        Parameter(name="length", type="size_t"),
    ]

    point = result.structure("Point")
    assert point is not None
    assert point.is_union is False
    assert [(f.name, f.type) for f in point.fields] == [("x", "int"), ("y", "int")]

    assert result.constants == {"MAX_SIZE": 1024, "PI": 3.14159}
    assert "SAMPLE_H" not in result.constants
    assert result.dependencies == []


def test_analyze_complex_header(fixtures_dir, analyzer):
    result = analyzer.analyze(fixtures_dir / "complex.h")

    assert [f.name for f in result.functions] == [
        "calculate",
        "allocate_memory",
        "process_string",
        "callback_function",
        "process_data",
    ]
    assert result.function("allocate_memory").return_type == "void*"
    assert len(result.function("calculate").parameters) == 3

    callback = result.function("callback_function")
    assert callback.return_type == "void"
    assert callback.parameters == [
        Parameter(name="callback", type="void (*callback)(int, const char*)")
    ]

    assert [s.name for s in result.structures] == ["DataRecord", "ValueUnion", "DataCollection"]
    union = result.structure("ValueUnion")
    assert union.is_union
    assert len(union.fields) == 3

    assert result.constants["MAX_BUFFER_SIZE"] == 4096
    assert result.constants["PI"] == 3.14159265359
    assert result.constants["VERSION_STRING"] == "1.0.0"
    assert result.constants["DEBUG_MODE"] == 1
    assert result.constants["PAGE_BYTES"] == RawExpression(text="(1024 * 4)")
    assert "SQUARE" not in result.constants
    assert "COMPLEX_H" not in result.constants

    assert result.dependencies == ["stdio.h", "stdlib.h", "sample.h"]


def test_analyze_malformed_header_is_best_effort(fixtures_dir, analyzer):
    result = analyzer.analyze(fixtures_dir / "malformed.h")

    assert [f.name for f in result.functions] == ["another_function"]
    assert result.structures == []
    assert result.constants == {}


def test_analyze_missing_file(tmp_path, analyzer):
    missing = tmp_path / "missing.h"

    with pytest.raises(HeaderNotFoundError, match="Header file not found") as exc_info:
        analyzer.analyze(missing)

    assert exc_info.value.path == str(missing)
    assert isinstance(exc_info.value, FileNotFoundError)
    assert isinstance(exc_info.value, AnalysisError)


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root can read any file"
)
def test_analyze_unreadable_file(tmp_path, analyzer):
    header = tmp_path / "locked.h"
    header.write_text("int f(void);")
    header.chmod(0o000)
    try:
        with pytest.raises(HeaderNotReadableError, match="not readable"):
            analyzer.analyze(header)
    finally:
        header.chmod(0o644)


def test_directory_is_not_a_header(tmp_path):
    with pytest.raises(HeaderNotFoundError):
        read_header(tmp_path)


def test_result_is_immutable(fixtures_dir, analyzer):
    result = analyzer.analyze(fixtures_dir / "sample.h")
    with pytest.raises(ValidationError):
        result.functions = []


def test_analyze_text_uses_injected_extractor():
    class FunctionsOnly(RegexExtractor):
        def extract_constants(self, content):
            return {}

    result = HeaderAnalyzer(FunctionsOnly()).analyze_text("#define A 1\nint f(int x);")

    assert result.constants == {}
    assert [f.name for f in result.functions] == ["f"]


def test_get_extractor_rejects_unknown_name():
    with pytest.raises(ValueError, match="Unknown extractor"):
        get_extractor("clang")
