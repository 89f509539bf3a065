#!/usr/bin/env python3
"""
Include-dependency resolution and compilation ordering for C headers.

`DependencyResolver.resolve_dependencies` follows `#include` directives
recursively and tolerates cycles by truncating the recursion.
`create_compilation_order` needs a total order, so there a cycle is fatal.
"""

import logging
import os
from collections import deque
from collections.abc import Iterable
from pathlib import Path

from hdrkit.analyzer import read_header
from hdrkit.errors import AnalysisError, CircularDependencyError
from hdrkit.extractors import Extractor, RegexExtractor
from hdrkit.normalize import normalize_content

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_INCLUDE_PATHS = (
    "/usr/include",
    "/usr/local/include",
    "/opt/homebrew/include",  # macOS Homebrew
)

DependencyGraph = dict[str, list[str]]


def canonical_path(path: str | Path) -> str:
    return os.path.realpath(path)


class DependencyCache:
    """Resolved dependency lists keyed by canonical header path.

    Entries are also keyed by the search paths used, since the same header
    can resolve differently against different search paths.
    """

    def __init__(self):
        self._entries: dict[tuple[str, tuple[str, ...]], list[str]] = {}

    @staticmethod
    def _key(header_path: str, search_paths: Iterable[str]) -> tuple[str, tuple[str, ...]]:
        return canonical_path(header_path), tuple(str(p) for p in search_paths)

    def get(self, header_path: str, search_paths: Iterable[str] = ()) -> list[str] | None:
        entry = self._entries.get(self._key(header_path, search_paths))
        return list(entry) if entry is not None else None

    def put(self, header_path: str, search_paths: Iterable[str], dependencies: list[str]) -> None:
        self._entries[self._key(header_path, search_paths)] = list(dependencies)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, header_path: object) -> bool:
        if not isinstance(header_path, (str, Path)):
            return False
        path = canonical_path(header_path)
        return any(key[0] == path for key in self._entries)


def topological_sort(graph: DependencyGraph) -> list[str]:
    """Order nodes so each one follows everything it depends on.

    Raises CircularDependencyError naming the first node found on a cycle.
    """
    in_progress: set[str] = set()
    done: set[str] = set()
    order: list[str] = []

    def visit(node: str):
        if node in done:
            return
        if node in in_progress:
            raise CircularDependencyError(node)

        in_progress.add(node)
        for dependency in graph.get(node, []):
            visit(dependency)
        in_progress.discard(node)

        done.add(node)
        order.append(node)

    for node in graph:
        visit(node)

    return order


class DependencyResolver:
    """Resolves header includes to files and orders headers for compilation."""

    def __init__(
        self,
        system_include_paths: Iterable[str | Path] = DEFAULT_SYSTEM_INCLUDE_PATHS,
        cache: DependencyCache | None = None,
        extractor: Extractor | None = None,
    ):
        self.system_include_paths = [str(p) for p in system_include_paths]
        self.cache = cache if cache is not None else DependencyCache()
        self.extractor = extractor or RegexExtractor()

    def resolve_dependencies(
        self, header_path: str | Path, search_paths: Iterable[str | Path] = ()
    ) -> list[str]:
        """Return every header reachable from `header_path` through includes.

        Includes that cannot be found are dropped. Each dependency appears
        once, in discovery order.
        """
        path = canonical_path(header_path)
        search_paths = tuple(str(p) for p in search_paths)

        cached = self.cache.get(path, search_paths)
        if cached is not None:
            logger.debug("Dependency cache hit for %s", path)
            return cached

        found: dict[str, None] = {}
        self._discover(path, search_paths, found, visiting=set(), is_root=True)

        dependencies = list(found)
        self.cache.put(path, search_paths, dependencies)
        return dependencies

    def _discover(
        self,
        path: str,
        search_paths: tuple[str, ...],
        found: dict[str, None],
        visiting: set[str],
        is_root: bool = False,
    ):
        if path in visiting:
            return

        if is_root:
            content = read_header(path)
        else:
            try:
                content = read_header(path)
            except AnalysisError as e:
                logger.warning("Not following includes of %s: %s", path, e)
                return

        visiting.add(path)
        current_dir = os.path.dirname(path)
        for include in self.extractor.extract_includes(normalize_content(content)):
            include_path = self.resolve_include_path(include, current_dir, search_paths)
            if include_path is None:
                logger.debug("Include %s from %s not found, skipping", include, path)
                continue
            if include_path in found:
                continue

            found[include_path] = None
            self._discover(include_path, search_paths, found, visiting)

        # Leave the chain so the header can appear in other branches.
        visiting.discard(path)

    def resolve_include_path(
        self, include: str, current_dir: str | Path, search_paths: Iterable[str | Path] = ()
    ) -> str | None:
        """Locate `include` next to the including header, then on the search
        paths, then in the system include directories."""
        for directory in [current_dir, *search_paths, *self.system_include_paths]:
            candidate = Path(directory) / include
            if candidate.is_file():
                return canonical_path(candidate)
        return None

    def get_dependency_graph(
        self,
        header_paths: Iterable[str | Path],
        search_paths: Iterable[str | Path] = (),
        include_discovered: bool = False,
    ) -> DependencyGraph:
        """Map each header to its resolved dependencies.

        With `include_discovered`, headers found along the way get their own
        entries as well, so the graph is closed over every node it mentions.
        """
        search_paths = tuple(str(p) for p in search_paths)

        graph: DependencyGraph = {}
        for header_path in header_paths:
            root = canonical_path(header_path)
            graph[root] = self.resolve_dependencies(root, search_paths)

        if not include_discovered:
            return graph

        full: DependencyGraph = {}
        pending = deque(node for root, deps in graph.items() for node in (root, *deps))
        while pending:
            node = pending.popleft()
            if node in full:
                continue
            if node in graph:
                full[node] = graph[node]
            else:
                full[node] = self._resolve_discovered(node, search_paths)
            pending.extend(dep for dep in full[node] if dep not in full)

        return full

    def _resolve_discovered(self, path: str, search_paths: tuple[str, ...]) -> list[str]:
        try:
            return self.resolve_dependencies(path, search_paths)
        except AnalysisError as e:
            logger.warning("Treating %s as a leaf: %s", path, e)
            return []

    def create_compilation_order(
        self, header_paths: Iterable[str | Path], search_paths: Iterable[str | Path] = ()
    ) -> list[str]:
        """Return the requested headers and their dependencies, dependencies first.

        Raises CircularDependencyError if the includes form a cycle.
        """
        graph = self.get_dependency_graph(header_paths, search_paths, include_discovered=True)
        order = topological_sort(graph)
        logger.debug("Compilation order for %d headers: %s", len(order), order)
        return order
