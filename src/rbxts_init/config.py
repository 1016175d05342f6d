"""JSON file helpers and auxiliary-repository configuration loading.

Example:
    >>> from pathlib import Path
    >>> load_json(Path("missing.json")) is None
    True
"""

import json
from pathlib import Path

from pydantic import ValidationError

from . import log, paths
from .models import RepositoriesConfig


def load_json(path: Path) -> dict | None:
    """Load a JSON object from ``path``.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed payload as a dict, or ``None`` if the file does not exist.

    Raises:
        json.JSONDecodeError: The file is not valid JSON.
        ValueError: The file holds JSON that is not an object.
    """
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return payload


def write_json(path: Path, payload: dict, *, indent: int | str = 2) -> None:
    """Write ``payload`` as pretty-printed JSON, creating parent directories.

    Args:
        path: Destination file.
        payload: JSON-serialisable mapping.
        indent: Indentation passed to ``json.dumps`` (``"\\t"`` for tabs).
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=indent, ensure_ascii=False), encoding="utf-8")


def resolve_repositories_path() -> Path | None:
    for candidate in paths.repositories_config_candidates():
        if candidate.is_file():
            return candidate
    return None


def load_repositories_config(path: Path | None = None) -> RepositoriesConfig | None:
    """Load the auxiliary-repository descriptor.

    Missing and malformed descriptors are both reported as ``None``; a run
    without auxiliary repositories is always valid.

    Args:
        path: Explicit descriptor path. Defaults to the first existing
            candidate from ``paths.repositories_config_candidates()``.

    Returns:
        Validated configuration, or ``None``.
    """
    target = path if path is not None else resolve_repositories_path()
    if target is None:
        log.debug("No repositories.json found")
        return None
    try:
        payload = load_json(target)
    except (OSError, ValueError) as exc:
        log.debug(f"Ignoring unreadable {target}: {exc}")
        return None
    if payload is None:
        return None
    try:
        return RepositoriesConfig.model_validate(payload)
    except ValidationError as exc:
        log.debug(f"Ignoring invalid {target}: {exc}")
        return None


def has_repositories(config: RepositoriesConfig | None) -> bool:
    return config is not None and len(config.repositories) > 0
