"""hdrkit - C header declaration extraction and include-dependency resolution."""

from hdrkit.analyzer import HeaderAnalyzer, get_extractor
from hdrkit.errors import (
    AnalysisError,
    CircularDependencyError,
    ConfigError,
    HeaderNotFoundError,
    HeaderNotReadableError,
)
from hdrkit.extractors import Extractor, RegexExtractor
from hdrkit.models import (
    AnalysisResult,
    ConstantValue,
    FunctionSignature,
    Parameter,
    RawExpression,
    StructureDefinition,
)
from hdrkit.resolver import DependencyCache, DependencyResolver

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "CircularDependencyError",
    "ConfigError",
    "ConstantValue",
    "DependencyCache",
    "DependencyResolver",
    "Extractor",
    "FunctionSignature",
    "HeaderAnalyzer",
    "HeaderNotFoundError",
    "HeaderNotReadableError",
    "Parameter",
    "RawExpression",
    "RegexExtractor",
    "StructureDefinition",
    "get_extractor",
]
