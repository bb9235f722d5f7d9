"""Programmatic entry points: scan a directory and write its env file.

The CLI drives the same steps (``scan_directory`` -> ``build_env`` ->
``write_env``) so library and command line output never diverge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from autoenv.configs import AutoEnvConfig

from .aggregator import aggregate, filter_ignored
from .discovery import find_source_files, read_sources
from .envfile import read_existing_env, write_env_file
from .render import HEADER, render, render_text
from .types import VariableSet

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class ScanResult:
    root: Path
    files: list[Path]
    variables: VariableSet


@dataclass
class RenderedEnv:
    path: Path
    lines: list[str]
    existing: Optional[dict[str, str]] = None

    @property
    def text(self) -> str:
        return render_text(self.lines)

    @property
    def keys(self) -> int:
        return len(self.lines) - len(HEADER)


def scan_directory(path: PathLike, config: Optional[AutoEnvConfig] = None) -> ScanResult:
    """Discover env var names under ``path`` with the ignore set already applied."""
    config = config or AutoEnvConfig()
    root = Path(path)
    files = find_source_files(root)
    variables = aggregate(read_sources(files), workers=config.workers)
    if config.ignore:
        variables = filter_ignored(variables, config.ignore)
    logger.info("Found %d variables in %d files under %s", len(variables), len(files), root)
    return ScanResult(root=root, files=files, variables=variables)


def scan_for_env_vars(path: PathLike, config: Optional[AutoEnvConfig] = None) -> VariableSet:
    return scan_directory(path, config).variables


def build_env(variables: VariableSet, output_path: Path, merge: bool) -> RenderedEnv:
    existing = read_existing_env(output_path) if merge else None
    return RenderedEnv(path=output_path, lines=render(variables, existing, merge), existing=existing)


def write_env(rendered: RenderedEnv) -> str:
    text = rendered.text
    write_env_file(rendered.path, text)
    return text


def generate_env_file_to(
    scan_path: PathLike, output_path: PathLike, config: Optional[AutoEnvConfig] = None
) -> Path:
    config = config or AutoEnvConfig()
    out = Path(output_path)
    variables = scan_for_env_vars(scan_path, config)
    # Render fully before touching the output so a failed read leaves it intact.
    write_env(build_env(variables, out, config.merge_existing))
    return out


def generate_env_file(path: PathLike, config: Optional[AutoEnvConfig] = None) -> Path:
    """Write ``<path>/<config.output>`` and return its path."""
    config = config or AutoEnvConfig()
    return generate_env_file_to(path, Path(path) / config.output, config)
