#!/usr/bin/env python3
"""
Pattern-based declaration extraction for C headers.

Functions and structures are matched against the flattened, comment-free
text produced by `normalize_content`; constants and includes are read from
the raw text. Nothing here raises on malformed input: text that does not
have the expected shape is simply absent from the result.
"""

import re
from decimal import Decimal
from typing import Protocol

from hdrkit.models import ConstantValue, FunctionSignature, Parameter, RawExpression, StructureDefinition
from hdrkit.normalize import NormalizedContent, strip_comments

FUNCTION_DECL = re.compile(
    r"\b(?P<return_type>\w+(?:\s*\*)*)\s*(?<!\w)(?P<name>\w+)\s*\((?P<params>[^;]*?)\)\s*;"
)
STRUCTURE_DEF = re.compile(
    r"\btypedef\s+(?P<kind>struct|union)\s*(?:\w+\s*)?\{(?P<body>[^{}]*)\}\s*(?P<name>\w+)\s*;"
    r"|\b(?P<tag_kind>struct|union)\s+(?P<tag>\w+)\s*\{(?P<tag_body>[^{}]*)\}\s*;"
)
FUNCTION_POINTER = re.compile(
    r"^(?P<return_type>.+?)\s*\(\s*\*\s*(?P<name>\w+)\s*\)\s*\((?P<params>.*)\)$"
)
NAMED_DECL = re.compile(r"^(?P<type>.*?[\s*])(?P<name>\w+)\s*(?P<dims>(?:\[[^\]]*\]\s*)*)$")
DEFINE = re.compile(r"^#\s*define\s+(\w+)\s+(.+)$")
NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
STRING_LITERAL = re.compile(r'^"(.*)"$')
INCLUDE = re.compile(r'#\s*include\s*[<"]([^>"]+)[>"]')
LINE_CONTINUATION = re.compile(r"\\\r?\n")

# Words that can end a type but never name a parameter or field.
TYPE_WORDS = {
    "void",
    "char",
    "short",
    "int",
    "long",
    "float",
    "double",
    "signed",
    "unsigned",
    "const",
    "volatile",
    "restrict",
    "_Bool",
    "bool",
}
TAG_KEYWORDS = {"struct", "union", "enum"}
# Statement and storage keywords that show a match is not a prototype.
NON_DECL_KEYWORDS = {
    "typedef",
    "return",
    "if",
    "else",
    "while",
    "for",
    "do",
    "switch",
    "case",
    "goto",
    "sizeof",
    "extern",
    "static",
    "inline",
    "register",
    "auto",
} | TAG_KEYWORDS


class Extractor(Protocol):
    """Capability interface for declaration extraction."""

    def extract_functions(self, content: NormalizedContent) -> list[FunctionSignature]: ...

    def extract_structures(self, content: NormalizedContent) -> list[StructureDefinition]: ...

    def extract_constants(self, content: NormalizedContent) -> dict[str, ConstantValue]: ...

    def extract_includes(self, content: NormalizedContent) -> list[str]: ...


def split_parameters(params: str) -> list[str]:
    """Split a parameter list on top-level commas.

    Commas nested inside parentheses (function pointer argument lists) do not
    split.
    """
    parts = []
    current = []
    depth = 0
    for char in params:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


def parse_parameter(text: str) -> Parameter:
    """Classify one parameter or field declaration."""
    text = text.strip()

    match = FUNCTION_POINTER.match(text)
    if match:
        return_type = match.group("return_type").strip()
        name = match.group("name")
        params = match.group("params").strip()
        return Parameter(name=name, type=f"{return_type} (*{name})({params})")

    match = NAMED_DECL.match(text)
    if match:
        base_type = match.group("type").strip()
        name = match.group("name")
        if base_type and name not in TYPE_WORDS and base_type not in TAG_KEYWORDS:
            dims = re.sub(r"\s+", "", match.group("dims"))
            return Parameter(name=name, type=base_type + dims)

    return Parameter(name="", type=text)


def parse_parameters(params: str) -> list[Parameter]:
    params = params.strip()
    if not params or params == "void":
        return []
    return [parse_parameter(part) for part in split_parameters(params) if part]


def parse_fields(body: str) -> list[Parameter]:
    """Parse the text between a structure's braces into fields.

    Declarations without a recognizable field name are skipped. A
    comma-separated declarator list yields one field per name.
    """
    fields = []
    for declaration in body.split(";"):
        declaration = declaration.strip()
        if not declaration:
            continue

        parts = split_parameters(declaration)
        first = parse_parameter(parts[0])
        if not first.name:
            continue
        fields.append(first)

        if len(parts) > 1 and "(" not in parts[0]:
            base_type = re.sub(r"\[.*\]$", "", first.type).rstrip(" *")
            for part in parts[1:]:
                field = parse_parameter(f"{base_type} {part}")
                if field.name:
                    fields.append(field)
    return fields


def extract_functions(flat: str) -> list[FunctionSignature]:
    functions = []
    for match in FUNCTION_DECL.finditer(flat):
        return_type = match.group("return_type").strip()
        name = match.group("name")
        base_return = return_type.rstrip(" *")
        if name in TYPE_WORDS or name in NON_DECL_KEYWORDS or base_return in NON_DECL_KEYWORDS:
            continue

        functions.append(
            FunctionSignature(
                name=name,
                return_type=return_type,
                parameters=parse_parameters(match.group("params")),
            )
        )
    return functions


def extract_structures(flat: str) -> list[StructureDefinition]:
    structures = []
    for match in STRUCTURE_DEF.finditer(flat):
        if match.group("kind"):
            kind, name, body = match.group("kind", "name", "body")
        else:
            kind, name, body = match.group("tag_kind", "tag", "tag_body")

        structures.append(
            StructureDefinition(name=name, fields=parse_fields(body), is_union=kind == "union")
        )
    return structures


def parse_constant_value(value: str) -> ConstantValue:
    """Convert a #define value into an int, float, string or raw expression."""
    value = strip_comments(value).strip()

    if NUMBER.match(value):
        if "." in value:
            return float(value)
        if "e" in value or "E" in value:
            # Decimal keeps 1e30 exact and 1e400 finite
            return int(Decimal(value))
        return int(value)

    match = STRING_LITERAL.match(value)
    if match:
        return match.group(1)

    return RawExpression(text=value)


def extract_constants(raw: str) -> dict[str, ConstantValue]:
    """Collect object-like #define constants, skipping header guards."""
    constants: dict[str, ConstantValue] = {}
    for line in LINE_CONTINUATION.sub(" ", raw).splitlines():
        match = DEFINE.match(line.strip())
        if not match:
            continue

        name, value = match.group(1), match.group(2).strip()
        if not value or value == name:
            continue

        # Comment remnants can leave nothing but the guard behind.
        stripped = strip_comments(value).strip()
        if not stripped or stripped == name:
            continue

        constants[name] = parse_constant_value(stripped)
    return constants


def extract_includes(raw: str) -> list[str]:
    """Return include targets in first-occurrence order, without duplicates."""
    return list(dict.fromkeys(INCLUDE.findall(raw)))


class RegexExtractor:
    """Default extractor: regular expressions over normalized text."""

    def extract_functions(self, content: NormalizedContent) -> list[FunctionSignature]:
        return extract_functions(content.flat)

    def extract_structures(self, content: NormalizedContent) -> list[StructureDefinition]:
        return extract_structures(content.flat)

    def extract_constants(self, content: NormalizedContent) -> dict[str, ConstantValue]:
        return extract_constants(content.raw)

    def extract_includes(self, content: NormalizedContent) -> list[str]:
        return extract_includes(content.raw)
