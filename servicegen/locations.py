"""Decide where generated sources go.

A declaration living at ``<module>/src/commonMain/kotlin/...`` gets its
artifacts under ``<module>/build/generated-src/{common,frontend}/<package>``.
Nested ``src`` segments are climbed until one has an existing build
directory next to it; if none does, the outermost one wins.
"""

from __future__ import annotations

from pathlib import Path

from . import config, naming
from .model import ServiceDeclaration


def find_build_dir(source_path: Path) -> Path:
    """Build directory for the module that owns ``source_path``."""
    current = Path(source_path).parent
    while True:
        parts = current.parts
        if config.SOURCES_DIR not in parts:
            return current / config.BUILD_DIR
        index = len(parts) - 1 - parts[::-1].index(config.SOURCES_DIR)
        root = Path(*parts[:index]) if index else Path(current.anchor or ".")
        candidate = root / config.BUILD_DIR
        if candidate.is_dir():
            return candidate
        current = root


def generated_root(build_dir: Path) -> Path:
    return build_dir / config.GENERATED_DIR


def resolve(declaration: ServiceDeclaration, output_root: Path | None = None) -> tuple[Path, Path]:
    """Return ``(common_dir, client_dir)`` for a declaration.

    Declarations with no known source file use ``output_root`` (or
    ``./build``) as their build directory.
    """
    if declaration.source_path is not None:
        build_dir = find_build_dir(declaration.source_path)
    else:
        build_dir = output_root if output_root is not None else Path.cwd() / config.BUILD_DIR
    root = generated_root(build_dir)
    package_dir = naming.package_to_path(declaration.package_name)
    return root / config.COMMON_DIR / package_dir, root / config.CLIENT_DIR / package_dir
