"""Implementation for the ``rbxts-init`` command.

``rbxts-init`` copies a bundled template into the project directory, patches
its manifests, initializes Git, installs dependencies, clones configured
auxiliary repositories, and runs the first build.
"""

import os
from pathlib import Path

from .. import log
from ..io import say
from ..models import InitMode, InitOptions
from ..services import DestinationConflictError, ServiceFailure
from ..services.project import (
    InitializeProjectOutcome,
    InitializeProjectRequest,
    InitializeProjectService,
)


def _options_from_args(args: object) -> InitOptions:
    return InitOptions(
        dir=getattr(args, "dir", None),
        compiler_version=getattr(args, "compiler_version", None),
        yes=bool(getattr(args, "yes", False)),
        package_manager=getattr(args, "package_manager", None),
        skip_build=bool(getattr(args, "skip_build", False)),
        git_protocol=getattr(args, "git_protocol", None),
    )


def _render_outcome(outcome: InitializeProjectOutcome) -> None:
    resolved = outcome.resolved
    relative = os.path.relpath(resolved.destination, Path.cwd())
    log.success(f"Created {outcome.package_name} from the {resolved.template.value} template")
    for name in outcome.cloned_repositories:
        say(f"Cloned {name}")
    if not outcome.built:
        say(f"Skipped build; run `{resolved.package_manager.value} run build` when ready")
    say(f"Project ready in {relative}")


def init_project(args: object, mode: InitMode = InitMode.NONE) -> None:
    """Create a project from a bundled template.

    Args:
        args: CLI argument object with optional fields ``dir``,
            ``compiler_version``, ``yes``, ``package_manager``,
            ``skip_build``, and ``git_protocol``.
        mode: Template preselected by the subcommand; ``NONE`` prompts.

    Returns:
        None.

    Example:
        $ rbxts-init package --dir my_plugin --yes
    """
    options = _options_from_args(args)
    service = InitializeProjectService()
    try:
        outcome = service(
            InitializeProjectRequest(options=options, mode=mode, invocation_dir=Path.cwd())
        )
    except ServiceFailure as exc:
        _render_failure(exc)
        raise SystemExit(1) from exc
    _render_outcome(outcome)


def _render_failure(exc: ServiceFailure) -> None:
    if isinstance(exc, DestinationConflictError):
        log.error(exc.HEADLINE)
        for path in exc.paths:
            log.error(f"  - {path}", style="yellow")
    else:
        log.error(exc.message.rstrip())
    if exc.recovery_hint:
        log.error(exc.recovery_hint, style="yellow")
