"""Detect destination paths a template would overwrite."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from . import paths
from .services.errors import DestinationConflictError


def candidate_paths(destination: Path, template_dir: Path) -> list[Path]:
    """Return every destination path the init run may create or overwrite.

    Fixed manifest/compiler/ignore files come first, followed by the
    template's top-level entries. Duplicates are dropped.
    """
    names = list(paths.ALWAYS_WRITTEN)
    names.extend(sorted(entry.name for entry in template_dir.iterdir()))
    seen: set[str] = set()
    candidates: list[Path] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        candidates.append(destination / name)
    return candidates


def is_conflict(path: Path) -> bool:
    """Return whether ``path`` holds something init would clobber.

    Files and symlinks (including dangling ones) conflict. Directories only
    conflict when they are not empty.
    """
    if path.is_symlink():
        return True
    if not path.exists():
        return False
    if path.is_dir():
        return any(path.iterdir())
    return True


def find_conflicts(candidates: Iterable[Path], *, relative_to: Path) -> list[str]:
    """Return conflicting candidates as paths relative to ``relative_to``."""
    return [os.path.relpath(path, relative_to) for path in candidates if is_conflict(path)]


def ensure_no_conflicts(destination: Path, template_dir: Path, *, invocation_dir: Path) -> None:
    """Raise ``DestinationConflictError`` if anything would be overwritten.

    Args:
        destination: Project root the template is copied into.
        template_dir: Template being materialized.
        invocation_dir: Directory the user ran the command from; conflict
            paths are reported relative to it.
    """
    conflicts = find_conflicts(
        candidate_paths(destination, template_dir), relative_to=invocation_dir
    )
    if conflicts:
        raise DestinationConflictError(
            conflicts,
            recovery_hint="Choose an empty directory or remove the listed paths.",
        )
