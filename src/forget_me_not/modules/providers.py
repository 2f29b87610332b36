"""
Providers for enabled modules and pending update-status projects.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from forget_me_not.modules.schemas import ProjectUpdateStatus
from forget_me_not.shared.exceptions import ConfigurationError
from forget_me_not.shared.logging import get_logger

logger = get_logger(__name__)

_PROJECT_LIST = TypeAdapter(list[ProjectUpdateStatus])
_PROJECT_MAPPING = TypeAdapter(dict[str, dict[str, Any] | None])


class CandidateProvider(Protocol):
    """Source of the modules that are currently enabled."""

    def list_enabled(self) -> list[str]: ...


class UpdateStatusProvider(Protocol):
    """Source of the projects pending update-check presentation."""

    def pending_projects(self) -> dict[str, ProjectUpdateStatus]: ...


class StaticCandidateProvider:
    """Enabled modules from a fixed list (typically the ``enabled_modules`` setting)."""

    def __init__(self, modules: Iterable[str]) -> None:
        self._modules = list(dict.fromkeys(m for m in modules if m))

    def list_enabled(self) -> list[str]:
        return list(self._modules)


class InMemoryUpdateStatusProvider:
    """Projects registered in process."""

    def __init__(self, projects: Iterable[ProjectUpdateStatus] = ()) -> None:
        self._projects: dict[str, ProjectUpdateStatus] = {}
        for project in projects:
            self.register(project)

    def register(self, project: ProjectUpdateStatus) -> None:
        self._projects[project.name] = project

    def pending_projects(self) -> dict[str, ProjectUpdateStatus]:
        return dict(self._projects)


class JsonFileUpdateStatusProvider:
    """Projects read from a JSON document.

    The document is either a list of project objects or an object keyed by
    project name. A missing file yields no projects.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def pending_projects(self) -> dict[str, ProjectUpdateStatus]:
        if not self._path.exists():
            logger.warning(
                "Update status file not found",
                extra={"path": str(self._path)},
            )
            return {}

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            if isinstance(raw, dict):
                entries = _PROJECT_MAPPING.validate_python(raw)
                raw = [{**(data or {}), "name": name} for name, data in entries.items()]
            projects = _PROJECT_LIST.validate_python(raw)
        except (UnicodeDecodeError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.error(
                "Update status file is malformed",
                extra={"path": str(self._path), "error": str(e)},
            )
            raise ConfigurationError(
                f"Malformed update status file: {self._path}",
                details={"path": str(self._path)},
            ) from e

        return {project.name: project for project in projects}


def eligible_candidates(provider: CandidateProvider, excluded: set[str]) -> list[str]:
    """Enabled modules not yet excluded, sorted by name."""
    return sorted(name for name in provider.list_enabled() if name not in excluded)
