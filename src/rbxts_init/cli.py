"""Command-line entry point for rbxts-init."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Annotated, Optional

import typer

from . import __version__
from . import log as rbxts_log
from .commands.init import init_project as init_cmd
from .models import (
    COMPILER_VERSION_ERROR,
    GitProtocol,
    InitMode,
    PackageManager,
    is_valid_compiler_version,
)

GAME_DESCRIPTION = "Generate a Roblox place"
PACKAGE_DESCRIPTION = "Generate a roblox-ts npm package"

app = typer.Typer(
    name="rbxts-init",
    help="Create a roblox-ts project from a template.",
    add_completion=False,
    no_args_is_help=False,
)


def _validate_compiler_version(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_compiler_version(value):
        raise typer.BadParameter(COMPILER_VERSION_ERROR)
    return value


def _validate_log_level(value: Optional[str]) -> Optional[str]:
    if value is not None and not rbxts_log.is_level_name(value):
        raise typer.BadParameter(f"expected one of: {', '.join(rbxts_log.LEVEL_NAMES)}")
    return value


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


CompilerVersionOption = Annotated[
    Optional[str],
    typer.Option(
        "--compilerVersion",
        "--compiler-version",
        help="roblox-ts compiler version (X.Y.Z)",
        callback=_validate_compiler_version,
    ),
]
DirOption = Annotated[Optional[str], typer.Option("--dir", help="Project directory")]
YesOption = Annotated[bool, typer.Option("--yes", "-y", help="Use recommended options")]
PackageManagerOption = Annotated[
    Optional[PackageManager],
    typer.Option(
        "--packageManager",
        "--package-manager",
        case_sensitive=False,
        help="Choose an alternative package manager",
    ),
]
SkipBuildOption = Annotated[
    bool, typer.Option("--skipBuild", "--skip-build", help="Do not run build script")
]
GitProtocolOption = Annotated[
    Optional[GitProtocol],
    typer.Option(
        "--gitProtocol",
        "--git-protocol",
        case_sensitive=False,
        help="Choose Git protocol for cloning repositories",
    ),
]


def _init_args(
    compiler_version: Optional[str] = None,
    dir: Optional[str] = None,
    yes: bool = False,
    package_manager: Optional[PackageManager] = None,
    skip_build: bool = False,
    git_protocol: Optional[GitProtocol] = None,
) -> SimpleNamespace:
    return SimpleNamespace(
        compiler_version=compiler_version,
        dir=dir,
        yes=yes,
        package_manager=package_manager,
        skip_build=skip_build,
        git_protocol=git_protocol,
    )


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Log level: trace, debug, info, success, warning, error",
            callback=_validate_log_level,
        ),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colored output")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_show_version, is_eager=True, help="Show version"),
    ] = False,
    compiler_version: CompilerVersionOption = None,
    dir: DirOption = None,
    yes: YesOption = False,
    package_manager: PackageManagerOption = None,
    skip_build: SkipBuildOption = False,
    git_protocol: GitProtocolOption = None,
) -> None:
    """Create a project from a template.

    Init options given here apply only when no subcommand follows.
    """
    if log_level is not None:
        rbxts_log.set_level(log_level)
    if no_color:
        rbxts_log.set_no_color(True)
    if ctx.invoked_subcommand is None:
        init_cmd(
            _init_args(compiler_version, dir, yes, package_manager, skip_build, git_protocol),
            InitMode.NONE,
        )


@app.command("init")
def init_command(
    compiler_version: CompilerVersionOption = None,
    dir: DirOption = None,
    yes: YesOption = False,
    package_manager: PackageManagerOption = None,
    skip_build: SkipBuildOption = False,
    git_protocol: GitProtocolOption = None,
) -> None:
    """Create a project from a template."""
    init_cmd(
        _init_args(compiler_version, dir, yes, package_manager, skip_build, git_protocol),
        InitMode.NONE,
    )


@app.command("game", help=GAME_DESCRIPTION)
def game_command(
    compiler_version: CompilerVersionOption = None,
    dir: DirOption = None,
    yes: YesOption = False,
    package_manager: PackageManagerOption = None,
    skip_build: SkipBuildOption = False,
    git_protocol: GitProtocolOption = None,
) -> None:
    init_cmd(
        _init_args(compiler_version, dir, yes, package_manager, skip_build, git_protocol),
        InitMode.GAME,
    )


@app.command("package", help=PACKAGE_DESCRIPTION)
def package_command(
    compiler_version: CompilerVersionOption = None,
    dir: DirOption = None,
    yes: YesOption = False,
    package_manager: PackageManagerOption = None,
    skip_build: SkipBuildOption = False,
    git_protocol: GitProtocolOption = None,
) -> None:
    init_cmd(
        _init_args(compiler_version, dir, yes, package_manager, skip_build, git_protocol),
        InitMode.PACKAGE,
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
