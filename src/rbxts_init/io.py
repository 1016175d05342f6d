"""Console I/O helpers for user-facing messages and prompts."""

from __future__ import annotations

import sys
from collections.abc import Sequence

import questionary


def _use_questionary() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def say(message: str) -> None:
    """Print a normal message to stdout.

    Args:
        message: Text to print.

    Returns:
        None.

    Example:
        >>> say("Hello")
        Hello
    """
    print(message)


def warn(message: str) -> None:
    """Print a warning message to stderr.

    Args:
        message: Warning text.

    Returns:
        None.
    """
    print(f"warning: {message}", file=sys.stderr)


def die(message: str, code: int = 1) -> None:
    """Print an error message and exit.

    Args:
        message: Error message to display.
        code: Exit code to use.

    Returns:
        None. Exits the process via ``sys.exit``.
    """
    print(f"error: {message}", file=sys.stderr)
    sys.exit(code)


def _read_line(text: str) -> str:
    try:
        return input(text)
    except (EOFError, KeyboardInterrupt):
        die("aborted")
        return ""


def prompt(
    text: str,
    default: str | None = None,
    required: bool = False,
) -> str:
    """Prompt the user for input, optionally enforcing a default or requirement.

    Cancelling the prompt (Ctrl-C or end of input) exits with status 1.

    Args:
        text: Prompt label shown to the user.
        default: Default value used when the user enters an empty string.
        required: When true, keep prompting until a non-empty value is provided.

    Returns:
        The user-provided or default string.

    Example:
        Project directory [my-game]:
    """
    while True:
        if _use_questionary():
            value = questionary.text(text, default=default or "").ask()
            if value is None:
                die("aborted")
            value = str(value).strip()
        else:
            if default is not None and default != "":
                value = _read_line(f"{text} [{default}]: ").strip()
                if value == "":
                    value = default
            else:
                value = _read_line(f"{text}: ").strip()
        if required and value == "":
            continue
        return value


def select(text: str, choices: Sequence[str], default: str | None = None) -> str:
    """Prompt the user to pick one of ``choices``.

    Without a TTY the choices are listed by number and the user may answer
    with either the number or the choice itself. An empty answer picks
    ``default`` (or the first choice).

    Args:
        text: Prompt label shown to the user.
        choices: Allowed values, in display order.
        default: Value preselected when the user just presses enter.

    Returns:
        The selected choice.
    """
    if not choices:
        raise ValueError("select() requires at least one choice")
    fallback = default if default in choices else choices[0]
    if _use_questionary():
        value = questionary.select(text, choices=list(choices), default=fallback).ask()
        if value is None:
            die("aborted")
        return str(value)
    lines = [f"  {index}) {choice}" for index, choice in enumerate(choices, start=1)]
    print(text, *lines, sep="\n")
    while True:
        answer = _read_line(f"Choice [{fallback}]: ").strip()
        if answer == "":
            return fallback
        if answer in choices:
            return answer
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]
        warn(f"invalid choice: {answer}")
