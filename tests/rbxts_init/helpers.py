from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace

from rbxts_init import exec as exec_util


class RecordingRunner:
    """Command runner that records requests and replays canned results."""

    def __init__(
        self,
        responses: Callable[[exec_util.CommandRequest], tuple[int, str] | None] | None = None,
    ) -> None:
        self.requests: list[exec_util.CommandRequest] = []
        self._responses = responses

    def run(self, request: exec_util.CommandRequest) -> exec_util.CommandResult | None:
        self.requests.append(request)
        response = (0, "") if self._responses is None else self._responses(request)
        if response is None:
            return None
        returncode, output = response
        return exec_util.CommandResult(
            argv=request.argv, returncode=returncode, stdout=output, stderr=""
        )

    @property
    def argvs(self) -> list[tuple[str, ...]]:
        return [request.argv for request in self.requests]


def make_init_args(**overrides: object) -> SimpleNamespace:
    data: dict[str, object] = {
        "dir": None,
        "compiler_version": None,
        "yes": False,
        "package_manager": None,
        "skip_build": False,
        "git_protocol": None,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def write_template(root: Path, *, package_node: bool = False) -> Path:
    """Write a minimal template tree under ``root`` and return it."""
    (root / "src").mkdir(parents=True, exist_ok=True)
    (root / "src" / "index.ts").write_text("export {};\n", encoding="utf-8")
    (root / ".gitignore").write_text("/node_modules\n/out\n", encoding="utf-8")
    (root / "tsconfig.json").write_text("{}\n", encoding="utf-8")
    manifest = {
        "name": "@white-dragon-bevy/template",
        "repository": "https://github.com/white-dragon-bevy/template.git",
        "scripts": {"build": "rbxtsc"},
    }
    (root / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    packages: dict[str, object] = {"$path": "node_modules/@white-dragon-bevy"}
    if package_node:
        packages["template"] = {"$path": "out"}
    descriptor = {
        "name": "template",
        "tree": {
            "ReplicatedStorage": {
                "rbxts_include": {"node_modules": {"@white-dragon-bevy": packages}}
            }
        },
    }
    (root / "default.project.json").write_text(json.dumps(descriptor), encoding="utf-8")
    return root
