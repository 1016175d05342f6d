"""Resolve init options that were not given on the command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from pydantic import BaseModel, ConfigDict

from ...io import prompt, select
from ...models import (
    DEFAULT_GIT_PROTOCOL,
    DEFAULT_PACKAGE_MANAGER,
    GitProtocol,
    InitMode,
    InitOptions,
    PackageManager,
)
from ...templates import available_templates
from ...tools import ToolAvailability
from ..base import BaseService
from ..errors import IoFailedError


class TextPrompt(Protocol):
    """Typed free-text prompt dependency."""

    def __call__(self, text: str, default: str | None = None, required: bool = False) -> str:
        """Return the entered text."""
        ...


class Chooser(Protocol):
    """Typed single-choice prompt dependency."""

    def __call__(self, text: str, choices: Sequence[str], default: str | None = None) -> str:
        """Return one of ``choices``."""
        ...


class ResolveInitOptionsRequest(BaseModel):
    """Input contract for option resolution.

    Attributes:
        options: Options parsed from the command line.
        mode: Template preselected by the subcommand, or ``NONE``.
        tools: Installed tools, used to decide whether to ask for a
            package manager.
        has_repositories: Whether auxiliary repositories are configured,
            used to decide whether to ask for a git protocol.
    """

    options: InitOptions
    mode: InitMode = InitMode.NONE
    tools: ToolAvailability
    has_repositories: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True)


@dataclass(frozen=True)
class ResolveInitOptionsOutcome:
    directory: str
    template: InitMode
    package_manager: PackageManager
    git_protocol: GitProtocol


class ResolveInitOptionsService(BaseService[ResolveInitOptionsRequest, ResolveInitOptionsOutcome]):
    """Ask, in a fixed order, only the questions whose answers are unknown.

    Order: project directory, template, package manager, git protocol.
    """

    def __init__(
        self,
        *,
        ask_text: TextPrompt = prompt,
        choose: Chooser = select,
        list_templates: Callable[[], Sequence[InitMode]] = available_templates,
    ) -> None:
        self._ask_text = ask_text
        self._choose = choose
        self._list_templates = list_templates

    def _run(self, request: ResolveInitOptionsRequest) -> ResolveInitOptionsOutcome:
        options = request.options

        directory = options.dir
        if directory is None:
            directory = self._ask_text("Project directory", required=True)

        template = request.mode
        if template is InitMode.NONE:
            bundled = [mode.value for mode in self._list_templates()]
            if not bundled:
                raise IoFailedError(
                    "no bundled templates found",
                    recovery_hint="Reinstall rbxts-init; the package data looks incomplete.",
                )
            choice = self._choose("Select template", bundled, bundled[0])
            template = InitMode(choice)

        package_manager = options.package_manager or DEFAULT_PACKAGE_MANAGER
        installed = request.tools.package_managers
        if options.package_manager is None and len(installed) > 1 and not options.yes:
            choice = self._choose(
                "Multiple package managers detected. Select package manager:",
                [manager.value for manager in installed],
                installed[0].value,
            )
            package_manager = PackageManager(choice)

        git_protocol = options.git_protocol or DEFAULT_GIT_PROTOCOL
        if options.git_protocol is None and request.has_repositories and not options.yes:
            choice = self._choose(
                "Select Git protocol for cloning repositories:",
                [GitProtocol.SSH.value, GitProtocol.HTTPS.value],
                DEFAULT_GIT_PROTOCOL.value,
            )
            git_protocol = GitProtocol(choice)

        return ResolveInitOptionsOutcome(
            directory=directory,
            template=template,
            package_manager=package_manager,
            git_protocol=git_protocol,
        )
