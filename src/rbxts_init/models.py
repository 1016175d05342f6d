"""Pydantic models for rbxts-init options and configuration data."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

COMPILER_VERSION_RE = re.compile(r"\d+\.\d+\.\d+")
COMPILER_VERSION_ERROR = (
    "Invalid --compilerVersion. You must specify a version in the form of X.X.X. "
    "(i.e. --compilerVersion 1.2.3)"
)


class InitMode(str, Enum):
    """Template selector.

    ``NONE`` means the template is still to be chosen interactively.
    """

    NONE = "none"
    GAME = "game"
    PACKAGE = "package"


TEMPLATE_MODES = (InitMode.GAME, InitMode.PACKAGE)


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


class GitProtocol(str, Enum):
    HTTPS = "https"
    SSH = "ssh"


DEFAULT_PACKAGE_MANAGER = PackageManager.NPM
DEFAULT_GIT_PROTOCOL = GitProtocol.SSH


def is_valid_compiler_version(value: str) -> bool:
    """Return whether ``value`` is a ``MAJOR.MINOR.PATCH`` version.

    Example:
        >>> is_valid_compiler_version("1.2.3")
        True
        >>> is_valid_compiler_version("1.2")
        False
    """
    return COMPILER_VERSION_RE.fullmatch(value) is not None


class PackageManagerCommands(BaseModel):
    """Shell command strings for one package manager.

    Attributes:
        init: Creates an empty manifest.
        install: Installs every dependency declared by the manifest.
        dev_install: Adds development dependencies (packages are appended).
        build: Runs the manifest's build script.
    """

    model_config = ConfigDict(frozen=True)

    init: str
    install: str
    dev_install: str
    build: str


PACKAGE_MANAGER_COMMANDS: dict[PackageManager, PackageManagerCommands] = {
    PackageManager.NPM: PackageManagerCommands(
        init="npm init -y",
        install="npm install --silent",
        dev_install="npm install --silent -D",
        build="npm run build",
    ),
    PackageManager.YARN: PackageManagerCommands(
        init="yarn init -y",
        install="yarn install --silent",
        dev_install="yarn add --silent -D",
        build="yarn run build",
    ),
    PackageManager.PNPM: PackageManagerCommands(
        init="pnpm init",
        install="pnpm install --silent",
        dev_install="pnpm install --silent -D",
        build="pnpm run build",
    ),
}


class InitOptions(BaseModel):
    """Options collected from the command line.

    Unset options are ``None`` and may be filled in by prompts.

    Example:
        >>> InitOptions(compiler_version="1.2.3").compiler_version
        '1.2.3'
    """

    model_config = ConfigDict(frozen=True)

    dir: str | None = None
    compiler_version: str | None = None
    yes: bool = False
    package_manager: PackageManager | None = None
    skip_build: bool = False
    git_protocol: GitProtocol | None = None

    @field_validator("compiler_version")
    @classmethod
    def validate_compiler_version(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_compiler_version(value):
            raise ValueError(COMPILER_VERSION_ERROR)
        return value


class ResolvedInitOptions(BaseModel):
    """Options after prompting; every choice is settled."""

    model_config = ConfigDict(frozen=True)

    destination: Path
    template: InitMode
    package_manager: PackageManager = DEFAULT_PACKAGE_MANAGER
    git_protocol: GitProtocol = DEFAULT_GIT_PROTOCOL
    skip_build: bool = False
    compiler_version: str | None = None

    @field_validator("template")
    @classmethod
    def require_template(cls, value: InitMode) -> InitMode:
        if value is InitMode.NONE:
            raise ValueError("template must be resolved before init runs")
        return value


class RepositoryConfig(BaseModel):
    """Auxiliary repository cloned into a new project.

    Attributes:
        name: Display name used in progress and error messages.
        https: Clone URL used with the HTTPS protocol.
        ssh: Clone URL used with the SSH protocol.
        destination: Clone path relative to the project root.
        templates: Templates the entry applies to; empty means all.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    https: str
    ssh: str
    destination: str
    templates: list[str] = Field(default_factory=list)

    @field_validator("templates", mode="before")
    @classmethod
    def normalize_templates(cls, value: object) -> object:
        if value is None:
            return []
        return value

    def applies_to(self, template: InitMode) -> bool:
        return not self.templates or template.value in self.templates

    def url_for(self, protocol: GitProtocol) -> str:
        return self.ssh if protocol is GitProtocol.SSH else self.https


class RepositoriesConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    repositories: list[RepositoryConfig] = Field(default_factory=list)

    def for_template(self, template: InitMode) -> list[RepositoryConfig]:
        return [repo for repo in self.repositories if repo.applies_to(template)]
