"""Bundled project templates and their materialization."""

import shutil
from pathlib import Path

from . import paths
from .models import TEMPLATE_MODES, InitMode
from .services.errors import IoFailedError


def available_templates() -> tuple[InitMode, ...]:
    """Return the template modes whose directories are bundled.

    Example:
        >>> InitMode.GAME in available_templates()
        True
    """
    return tuple(mode for mode in TEMPLATE_MODES if paths.template_dir(mode).is_dir())


def resolve_template_dir(mode: InitMode) -> Path:
    """Return the template directory for ``mode`` or fail if it is missing."""
    template_dir = paths.template_dir(mode)
    if not template_dir.is_dir():
        raise IoFailedError(
            f"template not found: {mode.value} ({template_dir})",
            recovery_hint="Reinstall rbxts-init; the package data looks incomplete.",
        )
    return template_dir


def materialize_template(template_dir: Path, destination: Path) -> None:
    """Copy the template tree into ``destination``.

    Relative structure and permission bits are preserved. Existing empty
    directories are reused. A failure leaves whatever was already copied in
    place.

    Args:
        template_dir: Template root to copy from.
        destination: Project root to copy into.
    """
    try:
        shutil.copytree(template_dir, destination, dirs_exist_ok=True, symlinks=True)
    except (OSError, shutil.Error) as exc:
        raise IoFailedError(
            f"failed to copy template files into {destination}: {exc}",
            recovery_hint="Check that the destination directory is writable.",
        ) from exc
