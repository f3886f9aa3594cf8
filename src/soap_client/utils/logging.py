import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

DEFAULT_PROJECT_NAME = "soap-client-errors"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    """Walk up from `start` looking for pyproject.toml (at most `max_up` levels)."""
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


def load_pyproject_data(pyproject_path: Path) -> dict:
    # tomllib expects a binary file object.
    with pyproject_path.open("rb") as f:
        return tomllib.load(f)


def get_pyproject_value(
    key: str,
    start: str | Path | None = None,
    max_up: int = 5,
    default: Any = None,
) -> Any:
    """
    Return the value for a dot-separated `key` (e.g. "project.version") from the nearest
    pyproject.toml, or `default` if the file is missing, unreadable, or lacks the key.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent

    pyproject = find_pyproject(start=start_path, max_up=max_up)
    if not pyproject or not key:
        return default

    try:
        data = load_pyproject_data(pyproject)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    cur = data
    for part in key.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        else:
            return default
    return cur


def get_project_name(
    start: Path | str | None = None,
    max_up: int = 5,
    default: str | None = DEFAULT_PROJECT_NAME,
) -> str | None:
    return get_pyproject_value("project.name", start=start, max_up=max_up, default=default)


def get_project_version(
    start: Path | str | None = None,
    max_up: int = 5,
    default: str = "unknown",
    prefer_installed: bool = True,
) -> str:
    """
    Version for log records.

    Installed distribution metadata wins (containers ship without pyproject.toml);
    otherwise fall back to project.version from the source tree.
    """
    name = get_project_name(start=start, max_up=max_up)
    if prefer_installed and name:
        try:
            return importlib_metadata.version(name)
        except importlib_metadata.PackageNotFoundError:
            pass

    val = get_pyproject_value("project.version", start=start, max_up=max_up, default=None)
    return val if val is not None else default


__all__ = [
    "find_pyproject",
    "load_pyproject_data",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
