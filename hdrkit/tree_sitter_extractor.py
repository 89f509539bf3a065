#!/usr/bin/env python3
"""
Declaration extraction backed by the tree-sitter C grammar.

Functions and structures come from the syntax tree instead of regular
expressions; parameters and fields are still classified with the same rules
as the regex extractor so both produce the same shapes. Constants and
includes are line-oriented and shared with the regex extractor.
"""

import logging
from collections.abc import Iterator

import tree_sitter_c as tsc
from tree_sitter import Language, Node, Parser

from hdrkit.extractors import extract_constants, extract_includes, parse_fields, parse_parameters
from hdrkit.models import ConstantValue, FunctionSignature, StructureDefinition
from hdrkit.normalize import NormalizedContent, collapse_whitespace, strip_comments

logger = logging.getLogger(__name__)

STORAGE_WORDS = {"extern", "static", "inline", "__inline", "__inline__", "register"}
RECORD_SPECIFIERS = {"struct_specifier", "union_specifier"}
# A tagged record under one of these parents is part of a larger declaration.
NESTED_RECORD_PARENTS = {
    "type_definition",
    "field_declaration",
    "declaration",
    "parameter_declaration",
}


def _node_text(node: Node) -> str:
    assert node.text is not None
    return node.text.decode().strip()


def _flatten(text: str) -> str:
    return collapse_whitespace(strip_comments(text))


def _walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal that does not descend into function bodies."""
    yield node
    for child in node.children:
        if child.type == "compound_statement":
            continue
        yield from _walk(child)


class TreeSitterExtractor:
    """Extractor that reads declarations from a tree-sitter parse."""

    def __init__(self):
        self.language = Language(tsc.language())
        self.parser = Parser(self.language)

    def _parse(self, content: NormalizedContent) -> Node:
        return self.parser.parse(content.raw.encode()).root_node

    def extract_functions(self, content: NormalizedContent) -> list[FunctionSignature]:
        functions = []
        for node in _walk(self._parse(content)):
            if node.type == "declaration":
                functions.extend(self._function_signatures(node))
        return functions

    def _function_signatures(self, node: Node) -> list[FunctionSignature]:
        type_node = node.child_by_field_name("type")
        if type_node is None:
            return []

        source = node.text
        prefix = source[: type_node.end_byte - node.start_byte].decode()
        base_type = " ".join(word for word in _flatten(prefix).split() if word not in STORAGE_WORDS)

        signatures = []
        for declarator in node.children_by_field_name("declarator"):
            stars = 0
            while declarator is not None and declarator.type == "pointer_declarator":
                stars += 1
                declarator = declarator.child_by_field_name("declarator")
            if declarator is None or declarator.type != "function_declarator":
                continue

            name_node = declarator.child_by_field_name("declarator")
            params_node = declarator.child_by_field_name("parameters")
            if name_node is None or name_node.type != "identifier" or params_node is None:
                continue

            params_text = _node_text(params_node)[1:-1]
            signatures.append(
                FunctionSignature(
                    name=_node_text(name_node),
                    return_type=base_type + "*" * stars,
                    parameters=parse_parameters(_flatten(params_text)),
                )
            )
        return signatures

    def extract_structures(self, content: NormalizedContent) -> list[StructureDefinition]:
        structures = []
        for node in _walk(self._parse(content)):
            structure = None
            if node.type == "type_definition":
                structure = self._typedef_structure(node)
            elif node.type in RECORD_SPECIFIERS and node.parent is not None:
                if node.parent.type not in NESTED_RECORD_PARENTS:
                    structure = self._tagged_structure(node)
            if structure:
                structures.append(structure)
        return structures

    def _typedef_structure(self, node: Node) -> StructureDefinition | None:
        record = node.child_by_field_name("type")
        if record is None or record.type not in RECORD_SPECIFIERS:
            return None
        body = record.child_by_field_name("body")
        names = [
            d for d in node.children_by_field_name("declarator") if d.type == "type_identifier"
        ]
        if body is None or not names:
            return None
        return self._structure(_node_text(names[-1]), record, body)

    def _tagged_structure(self, record: Node) -> StructureDefinition | None:
        name = record.child_by_field_name("name")
        body = record.child_by_field_name("body")
        if name is None or body is None:
            return None
        return self._structure(_node_text(name), record, body)

    def _structure(self, name: str, record: Node, body: Node) -> StructureDefinition:
        fields = []
        for child in body.named_children:
            if child.type != "field_declaration":
                continue
            field_type = child.child_by_field_name("type")
            if field_type is not None and field_type.child_by_field_name("body") is not None:
                logger.debug("Skipping nested record field in %s", name)
                continue
            fields.extend(parse_fields(_flatten(_node_text(child))))

        return StructureDefinition(
            name=name, fields=fields, is_union=record.type == "union_specifier"
        )

    def extract_constants(self, content: NormalizedContent) -> dict[str, ConstantValue]:
        return extract_constants(content.raw)

    def extract_includes(self, content: NormalizedContent) -> list[str]:
        return extract_includes(content.raw)
