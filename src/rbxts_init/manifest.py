"""Patch the generated package manifest and Rojo project descriptor."""

from __future__ import annotations

import re
from pathlib import Path

from . import config, log
from .models import InitMode
from .services.errors import IoFailedError

PROJECT_SCOPE = "@white-dragon-bevy"
GITHUB_ORG = "white-dragon-bevy"
GITHUB_REPO_RE = re.compile(r"github\.com/[^/]+/[^/]+")
# Rojo reserves "$"-prefixed keys ($path, $className, ...) for itself.
ROJO_SPECIAL_PREFIX = "$"
SCOPED_PACKAGES_NODE = ("tree", "ReplicatedStorage", "rbxts_include", "node_modules", PROJECT_SCOPE)


def scoped_package_name(project_dir: Path) -> str:
    """Return the package name for a project directory.

    Example:
        >>> scoped_package_name(Path("/work/my_plugin"))
        '@white-dragon-bevy/my_plugin'
    """
    return f"{PROJECT_SCOPE}/{project_dir.name}"


def unscoped_name(package_name: str) -> str:
    """Strip the scope from a package name.

    Example:
        >>> unscoped_name("@white-dragon-bevy/my_plugin")
        'my_plugin'
    """
    return package_name.rsplit("/", 1)[-1]


def rewrite_repository_url(url: str, repo_name: str) -> str:
    """Point the first ``github.com/<org>/<repo>`` segment at the new repo.

    Example:
        >>> rewrite_repository_url("git+https://github.com/acme/template.git", "game")
        'git+https://github.com/white-dragon-bevy/game'
    """
    return GITHUB_REPO_RE.sub(f"github.com/{GITHUB_ORG}/{repo_name}", url, count=1)


def patch_manifest_payload(payload: dict, project_dir: Path) -> dict:
    """Set the package name and repository URL for ``project_dir``."""
    dir_name = project_dir.name
    payload["name"] = scoped_package_name(project_dir)
    repository = payload.get("repository")
    if isinstance(repository, str):
        payload["repository"] = rewrite_repository_url(repository, dir_name)
    elif isinstance(repository, dict) and isinstance(repository.get("url"), str):
        repository["url"] = rewrite_repository_url(repository["url"], dir_name)
    return payload


def patch_manifest(manifest_path: Path, project_dir: Path) -> str:
    """Rewrite the manifest on disk and return the new package name."""
    payload = config.load_json(manifest_path)
    if payload is None:
        raise IoFailedError(f"{manifest_path} was not created by the template")
    patch_manifest_payload(payload, project_dir)
    config.write_json(manifest_path, payload, indent=2)
    return str(payload["name"])


def _find_node(payload: dict, keys: tuple[str, ...]) -> dict | None:
    node: object = payload
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, dict) else None


def rename_package_node(payload: dict, package_name: str) -> bool:
    """Rename the template's placeholder package node to ``package_name``.

    Only a single non-``$`` child is renamed; its position among siblings
    and its value are kept. With several candidates the node is left alone
    and a warning is logged.

    Returns:
        ``True`` when a key was renamed.
    """
    node = _find_node(payload, SCOPED_PACKAGES_NODE)
    new_key = unscoped_name(package_name)
    if node is None or not new_key:
        return False
    candidates = [key for key in node if not key.startswith(ROJO_SPECIAL_PREFIX)]
    if not candidates:
        return False
    if len(candidates) > 1:
        log.warning(
            "default.project.json lists several packages under "
            f"{PROJECT_SCOPE} ({', '.join(candidates)}); leaving them unchanged"
        )
        return False
    old_key = candidates[0]
    if old_key == new_key:
        return False
    renamed = {(new_key if key == old_key else key): value for key, value in node.items()}
    node.clear()
    node.update(renamed)
    return True


def patch_project_descriptor(
    descriptor_path: Path, package_name: str, template: InitMode
) -> None:
    """Rewrite the Rojo project descriptor for the new package."""
    payload = config.load_json(descriptor_path)
    if payload is None:
        return
    payload["name"] = package_name
    if template is InitMode.PACKAGE and rename_package_node(payload, package_name):
        log.debug(f"Renamed scoped package node to {unscoped_name(package_name)}")
    config.write_json(descriptor_path, payload, indent="\t")
