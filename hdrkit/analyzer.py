"""Single-header analysis: read a file and extract its declarations."""

import logging
import os
from pathlib import Path

from hdrkit.errors import HeaderNotFoundError, HeaderNotReadableError
from hdrkit.extractors import Extractor, RegexExtractor
from hdrkit.models import AnalysisResult
from hdrkit.normalize import normalize_content

logger = logging.getLogger(__name__)

EXTRACTORS = ("regex", "tree-sitter")


def get_extractor(name: str = "regex") -> Extractor:
    """Return the extractor registered under `name`."""
    if name == "regex":
        return RegexExtractor()
    if name == "tree-sitter":
        from hdrkit.tree_sitter_extractor import TreeSitterExtractor

        return TreeSitterExtractor()
    raise ValueError(f"Unknown extractor: {name} (expected one of {', '.join(EXTRACTORS)})")


def read_header(path: str | Path) -> str:
    """Read a header, raising typed errors for missing or unreadable files."""
    path = Path(path)
    if not path.is_file():
        raise HeaderNotFoundError(path)
    if not os.access(path, os.R_OK):
        raise HeaderNotReadableError(path)

    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except PermissionError as e:
        raise HeaderNotReadableError(path, str(e)) from e


class HeaderAnalyzer:
    """Extracts functions, structures, constants and includes from a header."""

    def __init__(self, extractor: Extractor | None = None):
        self.extractor = extractor or RegexExtractor()

    def analyze(self, path: str | Path) -> AnalysisResult:
        result = self.analyze_text(read_header(path))
        logger.debug(
            "Analyzed %s: %d functions, %d structures, %d constants, %d includes",
            path,
            len(result.functions),
            len(result.structures),
            len(result.constants),
            len(result.dependencies),
        )
        return result

    def analyze_text(self, text: str) -> AnalysisResult:
        content = normalize_content(text)
        return AnalysisResult(
            functions=self.extractor.extract_functions(content),
            structures=self.extractor.extract_structures(content),
            constants=self.extractor.extract_constants(content),
            dependencies=self.extractor.extract_includes(content),
        )
