"""Render templates and write generated output.

Takes the context from context_builder and produces the common
``<Base>Manager.kt`` and the client ``<Base>.kt``. Files are only
rewritten when their bytes change, so unchanged declarations never
trigger a downstream recompile.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import jinja2

from . import config
from .model import ArtifactKind, GeneratedArtifact, WriteOutcome

_logger = logging.getLogger(__name__)

_TEMPLATES: dict[ArtifactKind, str] = {
    ArtifactKind.COMMON: "common.kt.j2",
    ArtifactKind.CLIENT: "client.kt.j2",
}


@lru_cache(maxsize=None)
def _environment(template_dir: Path = config.TEMPLATE_DIR) -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render(kind: ArtifactKind, context: dict[str, Any]) -> str:
    """Render one artifact's text from the declaration context."""
    template = _environment().get_template(_TEMPLATES[kind])
    return template.render(**context)


def build_artifact(kind: ArtifactKind, directory: Path, file_name: str, context: dict[str, Any]) -> GeneratedArtifact:
    return GeneratedArtifact(path=directory / file_name, content=render(kind, context), kind=kind)


@dataclass
class StagedArtifact:
    """An artifact written to a temp sibling, waiting to replace its target.

    ``previous`` holds the target's bytes before the commit so a set of
    artifacts can be rolled back together.
    """

    artifact: GeneratedArtifact
    outcome: WriteOutcome
    temp_path: Path | None = None
    previous: bytes | None = None


def stage_artifact(artifact: GeneratedArtifact) -> StagedArtifact:
    """Compare against the existing file and stage the new bytes if needed.

    Raises OSError on any filesystem failure; nothing at the target path
    is modified.
    """
    path = artifact.path
    data = artifact.content.encode("utf-8")
    previous = None
    mode = 0o644
    if path.exists():
        previous = path.read_bytes()
        if previous == data:
            return StagedArtifact(artifact, WriteOutcome.UNCHANGED)
        mode = stat.S_IMODE(path.stat().st_mode)
        outcome = WriteOutcome.WRITTEN
    else:
        path.parent.mkdir(parents=True, exist_ok=True)
        outcome = WriteOutcome.CREATED

    with tempfile.NamedTemporaryFile(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False) as f:
        temp_path = Path(f.name)
        try:
            f.write(data)
            os.chmod(temp_path, mode)
        except OSError:
            f.close()
            temp_path.unlink(missing_ok=True)
            raise
    return StagedArtifact(artifact, outcome, temp_path, previous)


def commit(staged: StagedArtifact) -> WriteOutcome:
    """Move a staged artifact into place."""
    if staged.temp_path is None:
        _logger.debug("Unchanged %s", staged.artifact.path)
        return staged.outcome
    os.replace(staged.temp_path, staged.artifact.path)
    staged.temp_path = None
    _logger.info("%s %s (%s)", staged.outcome.value.capitalize(), staged.artifact.path, staged.artifact.kind.value)
    return staged.outcome


def discard(staged: StagedArtifact) -> None:
    """Drop an uncommitted temp file."""
    if staged.temp_path is not None:
        staged.temp_path.unlink(missing_ok=True)
        staged.temp_path = None


def rollback(staged: StagedArtifact) -> None:
    """Restore the target of a committed artifact to its earlier state."""
    path = staged.artifact.path
    if staged.outcome is WriteOutcome.UNCHANGED:
        return
    if staged.previous is None:
        path.unlink(missing_ok=True)
    else:
        path.write_bytes(staged.previous)
    _logger.warning("Rolled back %s", path)


def write_artifact(artifact: GeneratedArtifact) -> WriteOutcome:
    """Write an artifact unless the file already holds the same bytes.

    Raises OSError on any filesystem failure; the caller decides how to
    report it.
    """
    staged = stage_artifact(artifact)
    try:
        return commit(staged)
    finally:
        discard(staged)
