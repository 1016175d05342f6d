"""Git helper functions used by rbxts-init."""

from collections.abc import Iterable, Sequence
from pathlib import Path

from . import exec as exec_util
from . import log
from .models import GitProtocol, InitMode, RepositoriesConfig, RepositoryConfig
from .services.errors import DependencyMissingError, ExternalCommandFailedError

REQUIRED_GITIGNORE_RULES = ("/node_modules", "/out", "/include", "*.tsbuildinfo")
CLONE_RECOVERY_HINT = "Please check your Git configuration and network connection."


def _run_git(
    args: Sequence[str],
    *,
    cwd: Path,
    runner: exec_util.CommandRunner | None = None,
) -> exec_util.CommandResult:
    request = exec_util.CommandRequest(argv=("git", *args), cwd=cwd, merge_stderr=True)
    result = exec_util.run_with_runner(request, runner=runner)
    if result is None:
        raise DependencyMissingError(exec_util.missing_command_detail(request))
    if not result.ok:
        raise ExternalCommandFailedError(exec_util.command_failure_detail(request, result))
    return result


def git_init(repo_dir: Path, *, runner: exec_util.CommandRunner | None = None) -> None:
    """Run ``git init`` in ``repo_dir``."""
    _run_git(["init"], cwd=repo_dir, runner=runner)


def missing_gitignore_rules(
    existing: str, rules: Iterable[str] = REQUIRED_GITIGNORE_RULES
) -> list[str]:
    """Return the rules that do not already appear in ``existing``.

    Example:
        >>> missing_gitignore_rules("/node_modules\\n/out\\n")
        ['/include', '*.tsbuildinfo']
    """
    return [rule for rule in rules if rule not in existing]


def merge_gitignore(
    gitignore_path: Path, rules: Iterable[str] = REQUIRED_GITIGNORE_RULES
) -> list[str]:
    """Append the missing required rules to ``gitignore_path``.

    A missing file is treated as empty. Rules already present (as a
    substring of the file) are not repeated.

    Returns:
        The rules that were appended.
    """
    try:
        existing = gitignore_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        existing = ""
    missing = missing_gitignore_rules(existing, rules)
    if not missing:
        return []
    separator = "\n" if existing and not existing.endswith("\n") else ""
    with gitignore_path.open("a", encoding="utf-8") as fh:
        fh.write(separator + "\n".join(missing) + "\n")
    return missing


def initialize_repository(
    repo_dir: Path,
    gitignore_path: Path,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> list[str]:
    """Create the git repository and ensure the required ignore rules."""
    git_init(repo_dir, runner=runner)
    return merge_gitignore(gitignore_path)


def repositories_to_clone(
    config: RepositoriesConfig | None, template: InitMode
) -> list[RepositoryConfig]:
    """Return the configured repositories that apply to ``template``."""
    if config is None:
        return []
    return config.for_template(template)


def clone_repository(
    repo: RepositoryConfig,
    project_dir: Path,
    protocol: GitProtocol,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> Path:
    """Shallow-clone ``repo`` into its destination under ``project_dir``.

    Returns:
        The clone destination.

    Raises:
        ExternalCommandFailedError: The clone failed; the message names the
            repository and carries the git output.
    """
    destination = project_dir / repo.destination
    destination.parent.mkdir(parents=True, exist_ok=True)
    url = repo.url_for(protocol)
    log.debug(f"Cloning {repo.name} from {url}")
    try:
        _run_git(
            ["clone", "--depth", "1", url, str(destination)],
            cwd=project_dir,
            runner=runner,
        )
    except (ExternalCommandFailedError, DependencyMissingError) as exc:
        raise ExternalCommandFailedError(
            f"Failed to clone repository {repo.name}:\n{exc.message}",
            recovery_hint=CLONE_RECOVERY_HINT,
        ) from exc
    return destination


def clone_repositories(
    repos: Iterable[RepositoryConfig],
    project_dir: Path,
    protocol: GitProtocol,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> list[str]:
    """Clone ``repos`` one after another; the first failure stops the rest.

    Returns:
        Names of the repositories that were cloned.
    """
    cloned: list[str] = []
    for repo in repos:
        clone_repository(repo, project_dir, protocol, runner=runner)
        cloned.append(repo.name)
    return cloned
