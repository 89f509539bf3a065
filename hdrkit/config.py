#!/usr/bin/env python3

import json
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from hdrkit.analyzer import HeaderAnalyzer, get_extractor
from hdrkit.errors import ConfigError
from hdrkit.resolver import DEFAULT_SYSTEM_INCLUDE_PATHS, DependencyResolver

CONFIG_FILENAME = "hdrkit_config.json"


class AnalyzerConfig(BaseModel):
    """Configuration for analyzing a set of C headers."""

    project_root: Path = Field(default_factory=Path.cwd)

    # Inputs, relative to project root
    header_files: list[str] = Field(default_factory=list)
    search_paths: list[str] = Field(default_factory=list)
    system_include_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SYSTEM_INCLUDE_PATHS)
    )

    extractor: Literal["regex", "tree-sitter"] = "regex"

    def header_paths(self) -> list[Path]:
        """Get the full paths of the configured headers."""
        return [self.project_root / header for header in self.header_files]

    def search_path_dirs(self) -> list[Path]:
        """Get the full paths of the extra include directories."""
        return [self.project_root / path for path in self.search_paths]

    def analyzer(self) -> HeaderAnalyzer:
        return HeaderAnalyzer(get_extractor(self.extractor))

    def resolver(self) -> DependencyResolver:
        return DependencyResolver(
            system_include_paths=self.system_include_paths,
            extractor=get_extractor(self.extractor),
        )

    @classmethod
    def load_from_file(cls, config_path: Path) -> "AnalyzerConfig":
        """Load configuration from a JSON file."""
        if not config_path.is_file():
            raise ConfigError(f"Configuration file not found: {config_path}", path=config_path)
        try:
            args = json.loads(config_path.read_text())
            args["project_root"] = config_path.parent.resolve()
            return cls.model_validate(args)
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}", path=config_path) from e

    def save_to_file(self, config_path: Path) -> None:
        """Write header lists, include dirs and extractor choice as JSON.

        Paths stay relative; loading re-anchors them at the file's directory.
        """
        data = self.model_dump(exclude={"project_root"})
        config_path.write_text(json.dumps(data, indent=2) + "\n")

    @classmethod
    def find_project_config(cls, start_path: Path) -> Optional["AnalyzerConfig"]:
        """Load the nearest hdrkit_config.json at or above `start_path`, if any."""
        start = start_path.resolve()
        for directory in (start, *start.parents):
            config_file = directory / CONFIG_FILENAME
            if config_file.is_file():
                return cls.load_from_file(config_file)
        return None
