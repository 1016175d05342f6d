"""Subprocess helpers for running external commands."""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class CommandRequest:
    """Typed command invocation request.

    With ``shell`` set, ``argv`` holds a single command string that is
    interpreted by the system shell.
    """

    argv: tuple[str, ...]
    cwd: Path | None = None
    shell: bool = False
    merge_stderr: bool = False

    @property
    def display(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    """Typed command execution result."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def combined_output(self) -> str:
        """Stdout followed by stderr.

        When the request merged stderr into stdout, ``stderr`` is empty and
        this is simply the interleaved output.
        """
        return f"{self.stdout}{self.stderr}"

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Runtime command-execution interface."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Default command-runner adapter backed by subprocess."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        run_kwargs: dict[str, object] = {
            "cwd": request.cwd,
            "check": False,
            "stdout": subprocess.PIPE,
            "stderr": subprocess.STDOUT if request.merge_stderr else subprocess.PIPE,
            "text": True,
        }
        args: str | list[str]
        if request.shell:
            run_kwargs["shell"] = True
            args = request.display
        else:
            args = list(request.argv)
        try:
            completed = subprocess.run(args, **run_kwargs)
        except FileNotFoundError:
            return None

        stdout = completed.stdout if isinstance(completed.stdout, str) else ""
        stderr = completed.stderr if isinstance(completed.stderr, str) else ""
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=stdout,
            stderr=stderr,
        )


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


def run_with_runner(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    """Execute a typed command request with the given runner."""
    active_runner = runner or _DEFAULT_COMMAND_RUNNER
    return active_runner.run(request)


def shell_request(command: str, cwd: Path) -> CommandRequest:
    """Build a shell request that captures stdout and stderr together.

    Example:
        >>> shell_request("npm run build", Path("/tmp")).argv
        ('npm run build',)
    """
    return CommandRequest(argv=(command,), cwd=cwd, shell=True, merge_stderr=True)


def missing_command_detail(request: CommandRequest) -> str:
    argv = request.argv
    if not argv:
        return "missing required command"
    return f"missing required command: {argv[0].split()[0]}"


def command_failure_detail(request: CommandRequest, result: CommandResult) -> str:
    """Describe a failed command together with everything it printed.

    Example:
        >>> request = CommandRequest(argv=("git", "init"))
        >>> result = CommandResult(argv=request.argv, returncode=128, stdout="", stderr="boom")
        >>> print(command_failure_detail(request, result))
        Command "git init" exited with code 128
        <BLANKLINE>
        boom
    """
    header = f'Command "{request.display}" exited with code {result.returncode}'
    output = result.combined_output.strip()
    if output:
        return f"{header}\n\n{output}"
    return header
