#!/usr/bin/env python3

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table

from hdrkit.models import AnalysisResult, RawExpression


class Console:
    """Console wrapper that renders analysis output with Rich."""

    def __init__(self, **kwargs):
        self._rich = RichConsole(**kwargs)

    def print(self, *args, **kwargs):
        return self._rich.print(*args, **kwargs)

    def show_analysis(self, header: str, result: AnalysisResult):
        self._rich.print(f"[bold]{escape(header)}[/bold]")

        functions = Table(title=f"Functions ({len(result.functions)})")
        functions.add_column("Name")
        functions.add_column("Returns")
        functions.add_column("Parameters")
        for function in result.functions:
            params = ", ".join(
                f"{p.type} {p.name}".strip() if "(*" not in p.type else p.type
                for p in function.parameters
            )
            functions.add_row(function.name, escape(function.return_type), escape(params or "void"))
        self._rich.print(functions)

        structures = Table(title=f"Structures ({len(result.structures)})")
        structures.add_column("Name")
        structures.add_column("Kind")
        structures.add_column("Fields")
        for structure in result.structures:
            fields = "; ".join(f"{f.type} {f.name}" for f in structure.fields)
            structures.add_row(structure.name, "union" if structure.is_union else "struct", escape(fields))
        self._rich.print(structures)

        constants = Table(title=f"Constants ({len(result.constants)})")
        constants.add_column("Name")
        constants.add_column("Value")
        constants.add_column("Kind")
        for name, value in result.constants.items():
            kind = "expression" if isinstance(value, RawExpression) else type(value).__name__
            constants.add_row(name, escape(str(value)), kind)
        self._rich.print(constants)

        if result.dependencies:
            self._rich.print(escape("Includes: " + ", ".join(result.dependencies)))

    def show_paths(self, title: str, paths: list[str]):
        self._rich.print(f"[bold]{title}[/bold]")
        for i, path in enumerate(paths, 1):
            self._rich.print(f"{i:3d}. {escape(path)}", highlight=False, soft_wrap=True)

    def show_graph(self, graph: dict[str, list[str]]):
        for header, dependencies in graph.items():
            self._rich.print(f"[bold]{escape(header)}[/bold]", highlight=False, soft_wrap=True)
            for dependency in dependencies or ["(none)"]:
                self._rich.print(f"    -> {escape(dependency)}", highlight=False, soft_wrap=True)
