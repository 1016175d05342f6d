from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import pytest

from rbxts_init.models import (
    GitProtocol,
    InitMode,
    InitOptions,
    PackageManager,
    RepositoriesConfig,
    RepositoryConfig,
)
from rbxts_init.services import (
    DependencyMissingError,
    DestinationConflictError,
    ExternalCommandFailedError,
    ValidationFailedError,
)
from rbxts_init.services.project import (
    InitializeProjectDependencies,
    InitializeProjectRequest,
    InitializeProjectService,
    ResolveInitOptionsOutcome,
    prepare_destination,
)
from rbxts_init.tools import ToolAvailability
from tests.rbxts_init.helpers import write_template

ALL_TOOLS = ToolAvailability(npm=True, pnpm=False, yarn=False, git=True)

REPOSITORIES = RepositoriesConfig(
    repositories=[
        RepositoryConfig(
            name="bevy_framework",
            https="https://github.com/white-dragon-bevy/bevy_framework.git",
            ssh="git@github.com:white-dragon-bevy/bevy_framework.git",
            destination="vendor/bevy_framework",
            templates=["game"],
        )
    ]
)


class Recorder:
    """Fake side-effecting steps that log what they were asked to do."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def initialize_repository(self, repo_dir: Path, gitignore_path: Path) -> list[str]:
        self.calls.append(("git_init", repo_dir, gitignore_path.name))
        return []

    def install_dependencies(self, manager: PackageManager, project_dir: Path) -> None:
        self.calls.append(("install", manager))

    def pin_compiler_version(
        self, manager: PackageManager, project_dir: Path, version: str
    ) -> None:
        self.calls.append(("pin", manager, version))

    def clone_repositories(
        self, repos: list[RepositoryConfig], project_dir: Path, protocol: GitProtocol
    ) -> list[str]:
        self.calls.append(("clone", [repo.name for repo in repos], protocol))
        return [repo.name for repo in repos]

    def build_project(self, manager: PackageManager, project_dir: Path) -> None:
        self.calls.append(("build", manager))

    @property
    def steps(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    return tmp_path / "templates"


def _deps(
    recorder: Recorder,
    template_root: Path,
    *,
    directory: str = "my_project",
    template: InitMode = InitMode.GAME,
    protocol: GitProtocol = GitProtocol.SSH,
    tools: ToolAvailability = ALL_TOOLS,
    repositories: RepositoriesConfig | None = None,
) -> InitializeProjectDependencies:
    write_template(template_root / "game")
    write_template(template_root / "package", package_node=True)

    def resolve_options(request) -> ResolveInitOptionsOutcome:
        return ResolveInitOptionsOutcome(
            directory=request.options.dir or directory,
            template=request.mode if request.mode is not InitMode.NONE else template,
            package_manager=request.options.package_manager or PackageManager.NPM,
            git_protocol=request.options.git_protocol or protocol,
        )

    return InitializeProjectDependencies(
        probe_tools=lambda: tools,
        load_repositories_config=lambda: repositories,
        resolve_options=resolve_options,
        resolve_template_dir=lambda mode: template_root / mode.value,
        initialize_repository=recorder.initialize_repository,
        install_dependencies=recorder.install_dependencies,
        pin_compiler_version=recorder.pin_compiler_version,
        clone_repositories=recorder.clone_repositories,
        build_project=recorder.build_project,
    )


def _request(workdir: Path, mode: InitMode = InitMode.GAME, **options: object):
    return InitializeProjectRequest(
        options=InitOptions(**options), mode=mode, invocation_dir=workdir
    )


def test_game_project_runs_every_step_in_order(tmp_path: Path, template_root: Path) -> None:
    workdir = tmp_path / "work"
    workdir.mkdir()
    recorder = Recorder()
    service = InitializeProjectService(
        _deps(recorder, template_root, repositories=REPOSITORIES)
    )

    outcome = service(_request(workdir, dir="my_game", compiler_version="2.3.0"))

    project = workdir / "my_game"
    assert recorder.steps == ["git_init", "install", "pin", "clone", "build"]
    assert recorder.calls[0] == ("git_init", project, ".gitignore")
    assert recorder.calls[2] == ("pin", PackageManager.NPM, "2.3.0")
    assert recorder.calls[3] == ("clone", ["bevy_framework"], GitProtocol.SSH)
    assert outcome.package_name == "@white-dragon-bevy/my_game"
    assert outcome.cloned_repositories == ("bevy_framework",)
    assert outcome.built is True
    assert outcome.resolved.destination == project
    manifest = json.loads((project / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "@white-dragon-bevy/my_game"
    assert manifest["repository"] == "https://github.com/white-dragon-bevy/my_game"
    descriptor = json.loads((project / "default.project.json").read_text(encoding="utf-8"))
    assert descriptor["name"] == "@white-dragon-bevy/my_game"
    assert (project / "src" / "index.ts").is_file()


def test_package_project_renames_descriptor_node_and_skips_game_repos(
    tmp_path: Path, template_root: Path
) -> None:
    recorder = Recorder()
    service = InitializeProjectService(
        _deps(recorder, template_root, repositories=REPOSITORIES)
    )

    outcome = service(_request(tmp_path, mode=InitMode.PACKAGE, dir="my_plugin"))

    assert recorder.steps == ["git_init", "install", "build"]
    assert outcome.cloned_repositories == ()
    descriptor = json.loads(
        (tmp_path / "my_plugin" / "default.project.json").read_text(encoding="utf-8")
    )
    packages = descriptor["tree"]["ReplicatedStorage"]["rbxts_include"]["node_modules"][
        "@white-dragon-bevy"
    ]
    assert list(packages) == ["$path", "my_plugin"]


def test_skip_build_and_https_protocol(tmp_path: Path, template_root: Path) -> None:
    recorder = Recorder()
    service = InitializeProjectService(
        _deps(recorder, template_root, repositories=REPOSITORIES)
    )

    outcome = service(
        _request(tmp_path, dir="game", skip_build=True, git_protocol=GitProtocol.HTTPS)
    )

    assert recorder.steps == ["git_init", "install", "clone"]
    assert recorder.calls[-1] == ("clone", ["bevy_framework"], GitProtocol.HTTPS)
    assert outcome.built is False


def test_conflicts_abort_before_anything_is_written(tmp_path: Path, template_root: Path) -> None:
    project = tmp_path / "taken"
    project.mkdir()
    (project / "package.json").write_text('{"name": "mine"}', encoding="utf-8")
    recorder = Recorder()
    service = InitializeProjectService(_deps(recorder, template_root))

    with pytest.raises(DestinationConflictError) as excinfo:
        service(_request(tmp_path, dir="taken"))

    assert excinfo.value.paths == ("taken/package.json",)
    assert recorder.calls == []
    assert (project / "package.json").read_text(encoding="utf-8") == '{"name": "mine"}'
    assert not (project / "src").exists()


def test_missing_git_stops_before_prompting(tmp_path: Path, template_root: Path) -> None:
    recorder = Recorder()
    deps = _deps(
        recorder,
        template_root,
        tools=ToolAvailability(npm=True, pnpm=False, yarn=False, git=False),
    )

    def fail_resolve(request):
        raise AssertionError("options resolved without git")

    service = InitializeProjectService(replace(deps, resolve_options=fail_resolve))

    with pytest.raises(DependencyMissingError):
        service(_request(tmp_path, dir="game"))

    assert not (tmp_path / "game").exists()


def test_failed_install_leaves_earlier_steps_in_place(tmp_path: Path, template_root: Path) -> None:
    recorder = Recorder()

    def failing_install(manager: PackageManager, project_dir: Path) -> None:
        raise ExternalCommandFailedError('Command "npm install --silent" exited with code 1')

    deps = replace(_deps(recorder, template_root), install_dependencies=failing_install)

    with pytest.raises(ExternalCommandFailedError):
        InitializeProjectService(deps)(_request(tmp_path, dir="game"))

    assert recorder.steps == ["git_init"]
    assert (tmp_path / "game" / "package.json").is_file()


def test_descriptor_step_is_skipped_without_a_descriptor(
    tmp_path: Path, template_root: Path
) -> None:
    recorder = Recorder()
    deps = _deps(recorder, template_root)
    (template_root / "game" / "default.project.json").unlink()
    patched: list[Path] = []
    deps = replace(
        deps, patch_project_descriptor=lambda path, name, template: patched.append(path)
    )

    InitializeProjectService(deps)(_request(tmp_path, dir="game"))

    assert patched == []


class TestPrepareDestination:
    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        destination = prepare_destination("nested/game", tmp_path)

        assert destination == tmp_path / "nested" / "game"
        assert destination.is_dir()

    def test_rejects_a_file(self, tmp_path: Path) -> None:
        (tmp_path / "game").write_text("", encoding="utf-8")

        with pytest.raises(ValidationFailedError) as excinfo:
            prepare_destination("game", tmp_path)

        assert str(excinfo.value).endswith("game is not a directory!")

    def test_absolute_directory_ignores_invocation_dir(self, tmp_path: Path) -> None:
        target = tmp_path / "abs"

        assert prepare_destination(str(target), tmp_path / "elsewhere") == target
