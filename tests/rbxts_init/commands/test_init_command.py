from pathlib import Path
from unittest.mock import patch

import pytest

import rbxts_init.commands.init as init_cmd
from rbxts_init.models import GitProtocol, InitMode, PackageManager, ResolvedInitOptions
from rbxts_init.services import DestinationConflictError, ExternalCommandFailedError
from rbxts_init.services.project import InitializeProjectOutcome
from tests.rbxts_init.helpers import make_init_args


class FakeService:
    def __init__(self, outcome=None, error=None) -> None:
        self.requests = []
        self._outcome = outcome
        self._error = error

    def __call__(self, request):
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._outcome


def _outcome(tmp_path: Path, *, built: bool = True) -> InitializeProjectOutcome:
    return InitializeProjectOutcome(
        resolved=ResolvedInitOptions(
            destination=tmp_path / "my_game",
            template=InitMode.GAME,
            package_manager=PackageManager.PNPM,
            git_protocol=GitProtocol.SSH,
            skip_build=not built,
        ),
        package_name="@white-dragon-bevy/my_game",
        cloned_repositories=("bevy_framework",),
        built=built,
    )


def test_init_project_builds_request_from_args(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    service = FakeService(outcome=_outcome(tmp_path, built=False))
    args = make_init_args(dir="my_game", compiler_version="1.2.3", yes=True, skip_build=True)

    with patch("rbxts_init.commands.init.InitializeProjectService", return_value=service):
        init_cmd.init_project(args, InitMode.GAME)

    (request,) = service.requests
    assert request.mode is InitMode.GAME
    assert request.invocation_dir == tmp_path
    assert request.options.dir == "my_game"
    assert request.options.compiler_version == "1.2.3"
    assert request.options.yes is True
    assert request.options.skip_build is True
    out = capsys.readouterr().out
    assert "Created @white-dragon-bevy/my_game from the game template" in out
    assert "Cloned bevy_framework" in out
    assert "pnpm run build" in out
    assert "Project ready in my_game" in out


def test_service_failure_exits_with_status_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    error = DestinationConflictError(
        ["my_game/package.json"], recovery_hint="Choose an empty directory."
    )
    service = FakeService(error=error)

    with patch("rbxts_init.commands.init.InitializeProjectService", return_value=service):
        with pytest.raises(SystemExit) as excinfo:
            init_cmd.init_project(make_init_args(dir="my_game"), InitMode.GAME)

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "Cannot initialize project, process could overwrite:" in err
    assert "  - my_game/package.json" in err
    assert "Choose an empty directory." in err


def test_command_failure_output_is_shown(capsys: pytest.CaptureFixture[str]) -> None:
    error = ExternalCommandFailedError(
        'Command "npm run build" exited with code 2\n\nerror TS2304: Cannot find name'
    )

    with patch(
        "rbxts_init.commands.init.InitializeProjectService", return_value=FakeService(error=error)
    ):
        with pytest.raises(SystemExit):
            init_cmd.init_project(make_init_args(dir="my_game"))

    err = capsys.readouterr().err
    assert 'Command "npm run build" exited with code 2' in err
    assert "error TS2304: Cannot find name" in err


def test_conflicting_paths_are_highlighted() -> None:
    error = DestinationConflictError(
        ["my_game/package.json", "my_game/src"], recovery_hint="Choose an empty directory."
    )
    logged: list[tuple[str, str | None]] = []

    def record(message: str, *, style: str | None = None) -> None:
        logged.append((message, style))

    with (
        patch(
            "rbxts_init.commands.init.InitializeProjectService",
            return_value=FakeService(error=error),
        ),
        patch("rbxts_init.commands.init.log.error", record),
    ):
        with pytest.raises(SystemExit):
            init_cmd.init_project(make_init_args(dir="my_game"), InitMode.GAME)

    assert logged == [
        ("Cannot initialize project, process could overwrite:", None),
        ("  - my_game/package.json", "yellow"),
        ("  - my_game/src", "yellow"),
        ("Choose an empty directory.", "yellow"),
    ]
