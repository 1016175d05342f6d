"""Path helpers and fixed names used by rbxts-init."""

import os
from importlib import resources
from pathlib import Path

from platformdirs import user_config_dir

from .models import InitMode

APP_NAME = "rbxts-init"
PACKAGE_NAME = "rbxts_init"
TEMPLATES_DIRNAME = "templates"
REPOSITORIES_FILENAME = "repositories.json"
REPOSITORIES_ENV_VAR = "RBXTS_INIT_REPOSITORIES"

PACKAGE_JSON = "package.json"
PACKAGE_LOCK_JSON = "package-lock.json"
TSCONFIG_JSON = "tsconfig.json"
GITIGNORE = ".gitignore"
PROJECT_DESCRIPTOR = "default.project.json"

# Files the project always ends up with, whatever the template ships.
ALWAYS_WRITTEN = (PACKAGE_JSON, PACKAGE_LOCK_JSON, TSCONFIG_JSON, GITIGNORE)


def package_root() -> Path:
    """Return the installed package directory.

    Example:
        >>> package_root().name
        'rbxts_init'
    """
    return Path(str(resources.files(PACKAGE_NAME)))


def templates_dir() -> Path:
    """Return the directory holding the bundled templates.

    Example:
        >>> templates_dir().name == TEMPLATES_DIRNAME
        True
    """
    return package_root() / TEMPLATES_DIRNAME


def template_dir(mode: InitMode) -> Path:
    """Return the bundled template directory for ``mode``.

    Example:
        >>> template_dir(InitMode.GAME).name
        'game'
    """
    if mode is InitMode.NONE:
        raise ValueError("no template selected")
    return templates_dir() / mode.value


def user_config_path() -> Path:
    return Path(user_config_dir(APP_NAME))


def repositories_config_candidates() -> tuple[Path, ...]:
    """Return repository descriptor locations in lookup order.

    The ``RBXTS_INIT_REPOSITORIES`` override comes first, then the file
    shipped next to the package, then the per-user config directory.
    """
    candidates: list[Path] = []
    override = os.environ.get(REPOSITORIES_ENV_VAR, "").strip()
    if override:
        candidates.append(Path(override).expanduser())
    candidates.append(package_root() / REPOSITORIES_FILENAME)
    candidates.append(user_config_path() / REPOSITORIES_FILENAME)
    return tuple(candidates)
