"""Orchestrate ``rbxts-init``: from tool detection to the first build."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict

from ... import config, conflicts, git, log, manifest, package_manager, paths, templates, tools
from ...models import (
    GitProtocol,
    InitMode,
    InitOptions,
    PackageManager,
    RepositoriesConfig,
    RepositoryConfig,
    ResolvedInitOptions,
)
from ..base import BaseService
from ..errors import ValidationFailedError
from .resolve_init_options import (
    ResolveInitOptionsOutcome,
    ResolveInitOptionsRequest,
    ResolveInitOptionsService,
)


@dataclass(frozen=True)
class InitializeProjectDependencies:
    """Side-effecting collaborators of the init flow.

    Every step is a plain callable so tests can replace any of them.
    """

    probe_tools: Callable[[], tools.ToolAvailability] = tools.probe_tools
    load_repositories_config: Callable[[], RepositoriesConfig | None] = (
        config.load_repositories_config
    )
    resolve_options: Callable[[ResolveInitOptionsRequest], ResolveInitOptionsOutcome] = field(
        default_factory=ResolveInitOptionsService
    )
    resolve_template_dir: Callable[[InitMode], Path] = templates.resolve_template_dir
    ensure_no_conflicts: Callable[..., None] = conflicts.ensure_no_conflicts
    materialize_template: Callable[[Path, Path], None] = templates.materialize_template
    patch_manifest: Callable[[Path, Path], str] = manifest.patch_manifest
    initialize_repository: Callable[[Path, Path], list[str]] = git.initialize_repository
    install_dependencies: Callable[[PackageManager, Path], None] = (
        package_manager.install_dependencies
    )
    pin_compiler_version: Callable[[PackageManager, Path, str], None] = (
        package_manager.pin_compiler_version
    )
    patch_project_descriptor: Callable[[Path, str, InitMode], None] = (
        manifest.patch_project_descriptor
    )
    clone_repositories: Callable[[list[RepositoryConfig], Path, GitProtocol], list[str]] = (
        git.clone_repositories
    )
    build_project: Callable[[PackageManager, Path], None] = package_manager.build_project


class InitializeProjectRequest(BaseModel):
    """Input contract for project initialization.

    Attributes:
        options: Options parsed from the command line.
        mode: Template preselected by the subcommand, or ``NONE``.
        invocation_dir: Directory the command was run from; relative
            ``--dir`` values and conflict paths are based on it.
    """

    options: InitOptions
    mode: InitMode = InitMode.NONE
    invocation_dir: Path

    model_config = ConfigDict(arbitrary_types_allowed=True)


@dataclass(frozen=True)
class InitializeProjectOutcome:
    resolved: ResolvedInitOptions
    package_name: str
    cloned_repositories: tuple[str, ...]
    built: bool


def prepare_destination(directory: str, invocation_dir: Path) -> Path:
    """Resolve the project directory and create it when missing.

    Raises:
        ValidationFailedError: The path exists but is not a directory.
    """
    destination = (invocation_dir / Path(directory).expanduser()).resolve()
    if destination.exists() and not destination.is_dir():
        raise ValidationFailedError(f"{destination} is not a directory!")
    if not destination.exists():
        destination.mkdir(parents=True)
    return destination


class InitializeProjectService(BaseService[InitializeProjectRequest, InitializeProjectOutcome]):
    """Scaffold a new project; each step runs only after the previous succeeded."""

    def __init__(self, dependencies: InitializeProjectDependencies | None = None) -> None:
        self._deps = dependencies or InitializeProjectDependencies()

    def _run(self, request: InitializeProjectRequest) -> InitializeProjectOutcome:
        deps = self._deps
        options = request.options

        availability = deps.probe_tools()
        tools.require_git(availability)

        repo_config = deps.load_repositories_config()
        answers = deps.resolve_options(
            ResolveInitOptionsRequest(
                options=options,
                mode=request.mode,
                tools=availability,
                has_repositories=config.has_repositories(repo_config),
            )
        )

        destination = prepare_destination(answers.directory, request.invocation_dir)
        resolved = ResolvedInitOptions(
            destination=destination,
            template=answers.template,
            package_manager=answers.package_manager,
            git_protocol=answers.git_protocol,
            skip_build=options.skip_build,
            compiler_version=options.compiler_version,
        )
        template_dir = deps.resolve_template_dir(resolved.template)
        deps.ensure_no_conflicts(
            destination, template_dir, invocation_dir=request.invocation_dir
        )

        manifest_path = destination / paths.PACKAGE_JSON
        with log.step("Copying template files.."):
            deps.materialize_template(template_dir, destination)

        with log.step("Updating package.json.."):
            package_name = deps.patch_manifest(manifest_path, destination)

        with log.step("Initializing Git.."):
            deps.initialize_repository(destination, destination / paths.GITIGNORE)

        with log.step("Installing dependencies.."):
            deps.install_dependencies(resolved.package_manager, destination)

        if resolved.compiler_version is not None:
            with log.step(f"Installing roblox-ts@{resolved.compiler_version}.."):
                deps.pin_compiler_version(
                    resolved.package_manager, destination, resolved.compiler_version
                )

        descriptor_path = destination / paths.PROJECT_DESCRIPTOR
        if descriptor_path.exists():
            with log.step("Updating project name.."):
                deps.patch_project_descriptor(descriptor_path, package_name, resolved.template)

        cloned: list[str] = []
        repos = git.repositories_to_clone(repo_config, resolved.template)
        if repos:
            with log.step("Cloning repositories.."):
                cloned = deps.clone_repositories(repos, destination, resolved.git_protocol)

        if not resolved.skip_build:
            with log.step("Compiling.."):
                deps.build_project(resolved.package_manager, destination)

        return InitializeProjectOutcome(
            resolved=resolved,
            package_name=package_name,
            cloned_repositories=tuple(cloned),
            built=not resolved.skip_build,
        )
