"""Detect which external tools are installed."""

from __future__ import annotations

import concurrent.futures
import shutil
from dataclasses import dataclass
from typing import Callable

from . import log
from .models import PackageManager
from .services.errors import DependencyMissingError

Which = Callable[[str], "str | None"]

GIT_INSTALL_MESSAGE = (
    "Git is required but not found. "
    "Please install Git from https://git-scm.com/ and try again."
)
_PROBED_TOOLS = ("npm", "pnpm", "yarn", "git")


@dataclass(frozen=True)
class ToolAvailability:
    """Installed state of the tools rbxts-init drives."""

    npm: bool
    pnpm: bool
    yarn: bool
    git: bool

    def has_package_manager(self, manager: PackageManager) -> bool:
        return bool(getattr(self, manager.value))

    @property
    def package_managers(self) -> tuple[PackageManager, ...]:
        """Installed package managers in display order."""
        return tuple(manager for manager in PackageManager if self.has_package_manager(manager))


def probe_tools(which: Which = shutil.which) -> ToolAvailability:
    """Look up every tool on ``PATH`` and wait for all lookups to settle.

    A lookup that raises counts as installed for package managers and as
    missing for git.

    Args:
        which: ``shutil.which``-compatible lookup.

    Returns:
        Availability of npm, pnpm, yarn and git.
    """
    found: dict[str, bool] = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(_PROBED_TOOLS)) as pool:
        futures = {name: pool.submit(which, name) for name in _PROBED_TOOLS}
        concurrent.futures.wait(futures.values())
    for name, future in futures.items():
        exc = future.exception()
        if exc is not None:
            log.debug(f"Probe for {name} failed: {exc}")
            found[name] = name != "git"
            continue
        found[name] = future.result() is not None
    availability = ToolAvailability(**found)
    log.trace(f"Detected tools: {availability}")
    return availability


def require_git(availability: ToolAvailability) -> None:
    """Raise ``DependencyMissingError`` when git is not installed."""
    if not availability.git:
        raise DependencyMissingError(
            GIT_INSTALL_MESSAGE,
            recovery_hint="Install Git and make sure it is on your PATH.",
        )
