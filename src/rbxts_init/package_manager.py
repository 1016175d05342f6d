"""Run package-manager commands inside a generated project."""

from pathlib import Path

from . import exec as exec_util
from . import log
from .models import PACKAGE_MANAGER_COMMANDS, PackageManager, PackageManagerCommands
from .services.errors import DependencyMissingError, ExternalCommandFailedError

COMPILER_PACKAGE = "roblox-ts"


def commands_for(manager: PackageManager) -> PackageManagerCommands:
    """Return the command table for ``manager``.

    Example:
        >>> commands_for(PackageManager.YARN).build
        'yarn run build'
    """
    return PACKAGE_MANAGER_COMMANDS[manager]


def run_shell_command(
    command: str,
    cwd: Path,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> exec_util.CommandResult:
    """Run ``command`` through the shell and require a zero exit status.

    Returns:
        The result, whose ``combined_output`` holds stdout and stderr.

    Raises:
        ExternalCommandFailedError: Non-zero exit; the message includes the
            combined output.
    """
    request = exec_util.shell_request(command, cwd)
    log.trace(f"$ {command}")
    result = exec_util.run_with_runner(request, runner=runner)
    if result is None:
        raise DependencyMissingError(exec_util.missing_command_detail(request))
    if not result.ok:
        raise ExternalCommandFailedError(exec_util.command_failure_detail(request, result))
    return result


def install_dependencies(
    manager: PackageManager,
    project_dir: Path,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    run_shell_command(commands_for(manager).install, project_dir, runner=runner)


def pin_compiler_version(
    manager: PackageManager,
    project_dir: Path,
    version: str,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    """Install ``roblox-ts@<version>`` as a development dependency."""
    command = f"{commands_for(manager).dev_install} {COMPILER_PACKAGE}@{version}"
    run_shell_command(command, project_dir, runner=runner)


def build_project(
    manager: PackageManager,
    project_dir: Path,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    run_shell_command(commands_for(manager).build, project_dir, runner=runner)
