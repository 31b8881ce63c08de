"""One generation pass over a declaration dump.

The pass is a no-op unless the target platform is on the allow-list and
every source root of the pass is a common one. Each matching
``I<Base>Service`` declaration is then processed to completion (resolve,
collect, render, write) before the next one starts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from . import codegen, config, locations, naming
from .context_builder import build_context
from .loader import DeclarationDump, iter_services, parse_declaration
from .model import ArtifactKind, GeneratedArtifact, ServiceDeclaration, WriteOutcome

_logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Writing a declaration's artifacts failed; the pass is aborted."""

    def __init__(self, interface_name: str, path: Path, reason: str) -> None:
        super().__init__(f"{interface_name}: cannot write {path}: {reason}")
        self.interface_name = interface_name
        self.path = path


@dataclass(frozen=True)
class GenerationResult:
    interface_name: str
    outcomes: dict[ArtifactKind, WriteOutcome]


def is_platform_supported(platform: str) -> bool:
    """Check the static platform allow-list, logging names it doesn't know."""
    if platform not in config.PLATFORMS:
        _logger.warning("Unknown target platform %r, not supported", platform)
        return False
    return config.PLATFORMS[platform]


def render_artifacts(
    declaration: ServiceDeclaration, output_root: Path | None = None
) -> tuple[GeneratedArtifact, GeneratedArtifact]:
    """Render the common and client artifacts without touching the disk."""
    common_dir, client_dir = locations.resolve(declaration, output_root)
    context = build_context(declaration)
    iname = declaration.interface_name
    common = codegen.build_artifact(ArtifactKind.COMMON, common_dir, naming.common_file_name(iname), context)
    client = codegen.build_artifact(ArtifactKind.CLIENT, client_dir, naming.client_file_name(iname), context)
    return common, client


def _failure(declaration: ServiceDeclaration, artifact: GeneratedArtifact, e: Exception) -> GenerationError:
    reason = (e.strerror if isinstance(e, OSError) else None) or str(e)
    return GenerationError(declaration.interface_name, artifact.path, reason)


def process_declaration(declaration: ServiceDeclaration, output_root: Path | None = None) -> GenerationResult:
    """Generate and persist both artifacts for one declaration.

    Both artifacts are staged next to their targets before either is
    moved into place. If any step fails, committed artifacts are rolled
    back so the common and client files always match each other.
    """
    artifacts = render_artifacts(declaration, output_root)
    staged: list[codegen.StagedArtifact] = []
    committed: list[codegen.StagedArtifact] = []
    current = artifacts[0]
    try:
        for current in artifacts:
            staged.append(codegen.stage_artifact(current))
        for item in staged:
            current = item.artifact
            codegen.commit(item)
            committed.append(item)
    except (OSError, UnicodeError) as e:
        for item in staged:
            codegen.discard(item)
        for item in reversed(committed):
            codegen.rollback(item)
        raise _failure(declaration, current, e) from e
    return GenerationResult(declaration.interface_name, {item.artifact.kind: item.outcome for item in staged})


def run(dump: DeclarationDump, platform: str, output_root: Path | None = None) -> list[GenerationResult]:
    """Run the pass; returns one result per generated declaration."""
    if not is_platform_supported(platform):
        _logger.debug("Platform %s not supported, skipping pass", platform)
        return []
    if not dump.is_common:
        _logger.debug("Source roots are not all common, skipping pass")
        return []

    results: list[GenerationResult] = []
    for entry in iter_services(dump):
        name = entry.get("name", "")
        if not naming.is_service_name(name):
            _logger.debug("Skipping %s: not an I...Service interface", name)
            continue
        results.append(process_declaration(parse_declaration(entry), output_root))

    changed = sum(
        1 for r in results for outcome in r.outcomes.values() if outcome is not WriteOutcome.UNCHANGED
    )
    _logger.info(
        "Generated %d services (%d files changed, %s platform)", len(results), changed, platform
    )
    return results
